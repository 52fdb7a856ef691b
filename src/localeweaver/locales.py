"""Locale codes: validation and the generated locale-codes module.

Locale codes are opaque strings compared exactly; nothing here folds case
or canonicalizes BCP-47. Validation only rejects strings that cannot be
locale codes (and would be unsafe as file and directory names).

With the optional Babel extra installed, is_known_locale() checks a code
against CLDR so configuration can warn about likely typos.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from localeweaver.core.babel_compat import (
    get_locale_class,
    get_unknown_locale_error,
    is_babel_available,
)
from localeweaver.core.files import write_text_file
from localeweaver.diagnostics import ConfigurationError, ErrorTemplate

__all__ = [
    "is_known_locale",
    "is_valid_locale_code",
    "normalize_locale",
    "render_locale_codes_module",
    "validate_locale_code",
    "write_locale_codes_module",
]

logger = logging.getLogger(__name__)

# Language subtag followed by hyphen- or underscore-separated subtags
# (es-419, zh_CN, sr-Latn-RS).
_LOCALE_CODE_RE = re.compile(r"^[a-zA-Z]{2,3}(?:[-_][a-zA-Z0-9]{1,8})*$")


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 separators to POSIX form for Babel lookups.

    Example:
        >>> normalize_locale("es-419")
        'es_419'
    """
    return locale_code.replace("-", "_")


def is_valid_locale_code(locale_code: str) -> bool:
    """True when locale_code is syntactically a locale code."""
    return bool(_LOCALE_CODE_RE.match(locale_code))


def validate_locale_code(locale_code: str) -> str:
    """Return locale_code unchanged, or raise if it is malformed.

    Raises:
        ConfigurationError: When the code is not a locale code
    """
    if not isinstance(locale_code, str) or not is_valid_locale_code(locale_code):
        raise ConfigurationError(ErrorTemplate.locale_invalid(str(locale_code)))
    return locale_code


@functools.lru_cache(maxsize=128)
def is_known_locale(locale_code: str) -> bool | None:
    """Check a locale code against CLDR.

    Returns:
        True or False when Babel is installed, None when it is not
    """
    if not is_babel_available():
        return None
    locale_class = get_locale_class()
    unknown_locale_error = get_unknown_locale_error()
    try:
        locale_class.parse(normalize_locale(locale_code))
    except (unknown_locale_error, ValueError):
        return False
    return True


def _locale_list(name: str, locales: Iterable[str], doc: str) -> str:
    items = "".join(f"  `{locale}`,\n" for locale in locales)
    return f"/**\n * {doc}\n */\nexport const {name} = [\n{items}] as const;\n"


def render_locale_codes_module(source_locale: str, target_locales: Iterable[str]) -> str:
    """Source text of the generated locale-codes module.

    Exports sourceLocale, targetLocales and allLocales. Both lists are
    sorted so regenerating with reordered configuration is a no-op.
    """
    targets = sorted(set(target_locales))
    all_locales = sorted({source_locale, *targets})
    return (
        "// Do not modify this file by hand!\n"
        "// Re-generate this file by running localeweaver.\n"
        "\n"
        "/**\n"
        " * The locale code that templates in this source code are written in.\n"
        " */\n"
        f"export const sourceLocale = `{source_locale}`;\n"
        "\n"
        + _locale_list(
            "targetLocales",
            targets,
            "The other locale codes that this application is localized into. Sorted\n"
            " * lexicographically.",
        )
        + "\n"
        + _locale_list(
            "allLocales", all_locales, "All valid project locale codes. Sorted lexicographically."
        )
    )


def write_locale_codes_module(
    source_locale: str,
    target_locales: Iterable[str],
    path: Path,
) -> None:
    """Write the generated locale-codes module to path.

    Raises:
        LocalizeFileError: When the file cannot be written
    """
    text = render_locale_codes_module(source_locale, target_locales)
    write_text_file(path, text, kind="locale codes module")
    logger.info("Wrote locale codes module %s", path)
