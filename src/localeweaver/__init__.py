"""LocaleWeaver - build-time localization of TypeScript/JavaScript programs.

Extracts msg() call sites into interchange files for translators (XLB or
XLIFF 1.2) and, in transform mode, emits one copy of the program per locale
with every message inlined and the localization runtime compiled away.

Public API:
    Config - Project configuration (locales, interchange, output)
    Message / ProgramMessage / Bundle - Message model
    generate_message_id - Stable id of a message template
    make_formatter - XLB or XLIFF formatter for a configuration
    transform_output - Emit the localized program for every locale

Exceptions:
    LocalizeError - Base exception class
    ConfigurationError - Invalid configuration or API misuse
    InterchangeEncodeError - Message text XML cannot carry
    InterchangeParseError - Malformed translation files
    TranslationShapeError - Translations whose placeholders diverge
    TransformContractError - Call sites the transform cannot rewrite

Submodules:
    localeweaver.syntax - Program AST, serializer and symbol tables
    localeweaver.messages - Message model, ids and validation
    localeweaver.formatters - XLB and XLIFF codecs
    localeweaver.transform - The per-locale rewrite
    localeweaver.diagnostics - Error types and diagnostic formatting
"""

from .config import Config, TransformOutputConfig, XlbConfig, XliffConfig
from .diagnostics import (
    ConfigurationError,
    InterchangeEncodeError,
    InterchangeParseError,
    LocalizeError,
    LocalizeFileError,
    TransformContractError,
    TranslationShapeError,
)
from .formatters import make_formatter
from .messages import Bundle, Message, Placeholder, ProgramMessage, generate_message_id
from .transform import transform_output

# Version information - auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("localeweaver")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__recommended_encoding__ = "UTF-8"

__all__ = [
    "Bundle",
    "Config",
    "ConfigurationError",
    "InterchangeEncodeError",
    "InterchangeParseError",
    "LocalizeError",
    "LocalizeFileError",
    "Message",
    "Placeholder",
    "ProgramMessage",
    "TransformContractError",
    "TransformOutputConfig",
    "TranslationShapeError",
    "XlbConfig",
    "XliffConfig",
    "__recommended_encoding__",
    "__version__",
    "generate_message_id",
    "make_formatter",
    "transform_output",
]
