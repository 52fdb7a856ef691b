"""Project configuration.

Reading the configuration file is the caller's job; this module validates
an already-parsed mapping (camelCase keys, as in a JSON config file) and
exposes it as frozen dataclasses.

Example mapping:
    {
        "sourceLocale": "en",
        "targetLocales": ["es-419", "zh_CN"],
        "interchange": {"format": "xliff", "xliffDir": "./xliff/"},
        "output": {"mode": "transform", "outputDir": "./out/"}
    }

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from localeweaver.diagnostics import ConfigurationError, ErrorTemplate
from localeweaver.enums import InterchangeFormat, OutputMode
from localeweaver.locales import is_known_locale, validate_locale_code

__all__ = [
    "Config",
    "InterchangeConfig",
    "TransformOutputConfig",
    "XlbConfig",
    "XliffConfig",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class XlbConfig:
    """XLB interchange settings.

    Attributes:
        output_file: Where the source-locale XLB file is written
        translations_glob: Glob (relative to the base directory) matching
            translated XLB files, one locale per file
    """

    output_file: str
    translations_glob: str
    format: InterchangeFormat = field(default=InterchangeFormat.XLB, init=False)


@dataclass(frozen=True, slots=True)
class XliffConfig:
    """XLIFF interchange settings.

    Attributes:
        xliff_dir: Directory holding one <locale>.xlf file per target locale
    """

    xliff_dir: str
    format: InterchangeFormat = field(default=InterchangeFormat.XLIFF, init=False)


type InterchangeConfig = XlbConfig | XliffConfig


@dataclass(frozen=True, slots=True)
class TransformOutputConfig:
    """Transform-mode output settings.

    Attributes:
        output_dir: Root under which <locale>/ directories are emitted
        locale_codes_module: Optional path of a generated module exporting
            sourceLocale, targetLocales and allLocales
    """

    output_dir: str
    locale_codes_module: str | None = None
    mode: OutputMode = field(default=OutputMode.TRANSFORM, init=False)


@dataclass(frozen=True, slots=True)
class Config:
    """Validated project configuration.

    Attributes:
        source_locale: Locale the application's templates are written in
        target_locales: Locales to translate into, in configured order
        interchange: XLB or XLIFF settings
        output: Transform-mode output settings
        base_dir: Directory relative paths are resolved against
    """

    source_locale: str
    target_locales: tuple[str, ...]
    interchange: InterchangeConfig
    output: TransformOutputConfig
    base_dir: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        validate_locale_code(self.source_locale)
        seen: set[str] = set()
        for locale in self.target_locales:
            validate_locale_code(locale)
            if locale == self.source_locale:
                raise ConfigurationError(
                    ErrorTemplate.config_invalid(
                        f"source locale '{locale}' is also listed as a target locale"
                    )
                )
            if locale in seen:
                raise ConfigurationError(
                    ErrorTemplate.config_invalid(f"target locale '{locale}' is listed twice")
                )
            seen.add(locale)
        for locale in (self.source_locale, *self.target_locales):
            if is_known_locale(locale) is False:
                logger.warning("Locale '%s' is not a known CLDR locale", locale)

    @property
    def all_locales(self) -> tuple[str, ...]:
        """Source locale followed by every target locale."""
        return (self.source_locale, *self.target_locales)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a configured path against base_dir."""
        return self.base_dir / path

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], *, base_dir: Path | None = None) -> Config:
        """Build a Config from a parsed configuration mapping.

        Raises:
            ConfigurationError: On missing keys, wrong types, unknown
                interchange format or output mode, or invalid locales
        """
        source_locale = _require_str(data, "sourceLocale")
        targets = data.get("targetLocales", [])
        if not isinstance(targets, list | tuple) or not all(isinstance(t, str) for t in targets):
            raise ConfigurationError(
                ErrorTemplate.config_invalid("'targetLocales' must be a list of strings")
            )
        return cls(
            source_locale=source_locale,
            target_locales=tuple(targets),
            interchange=_interchange_from_mapping(_require_mapping(data, "interchange")),
            output=_output_from_mapping(_require_mapping(data, "output")),
            base_dir=base_dir if base_dir is not None else Path.cwd(),
        )


def _require_str(data: Mapping[str, object], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(ErrorTemplate.config_invalid(f"'{key}' must be a non-empty string"))
    return value


def _require_mapping(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise ConfigurationError(ErrorTemplate.config_invalid(f"'{key}' must be an object"))
    return value


def _interchange_from_mapping(data: Mapping[str, object]) -> InterchangeConfig:
    raw_format = _require_str(data, "format")
    try:
        interchange_format = InterchangeFormat(raw_format)
    except ValueError:
        raise ConfigurationError(
            ErrorTemplate.config_invalid(f"unknown interchange format '{raw_format}'")
        ) from None
    match interchange_format:
        case InterchangeFormat.XLB:
            return XlbConfig(
                output_file=_require_str(data, "outputFile"),
                translations_glob=_require_str(data, "translationsGlob"),
            )
        case InterchangeFormat.XLIFF:
            return XliffConfig(xliff_dir=_require_str(data, "xliffDir"))


def _output_from_mapping(data: Mapping[str, object]) -> TransformOutputConfig:
    raw_mode = _require_str(data, "mode")
    if raw_mode != OutputMode.TRANSFORM:
        raise ConfigurationError(ErrorTemplate.config_invalid(f"unsupported output mode '{raw_mode}'"))
    module = data.get("localeCodesModule")
    if module is not None and not isinstance(module, str):
        raise ConfigurationError(
            ErrorTemplate.config_invalid("'localeCodesModule' must be a string")
        )
    output_dir = data.get("outputDir", ".")
    if not isinstance(output_dir, str):
        raise ConfigurationError(ErrorTemplate.config_invalid("'outputDir' must be a string"))
    return TransformOutputConfig(output_dir=output_dir, locale_codes_module=module)
