"""Shared constants for LocaleWeaver.

Centralizes values used across the message model, interchange codecs and
the transform engine. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for AST traversal and flattening
- Message identifiers: Hash prefixes and delimiter for shape-derived ids
- Interchange: Separators, namespaces and fixed attribute values
- Localization API surface: Tagged export names and literal values

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Message identifiers
    "HASH_DELIMITER",
    "RICH_ID_PREFIX",
    "STRING_ID_PREFIX",
    # Interchange
    "DESC_SEPARATOR",
    "XML_DECLARATION",
    "XML_INDENT_UNIT",
    "XLIFF_VERSION",
    "XLIFF_NAMESPACE",
    "XSI_NAMESPACE",
    "XLIFF_SCHEMA_LOCATION",
    "XLIFF_ORIGINAL",
    "XLIFF_DATATYPE",
    "XLIFF_EXTENSION",
    # Localization API surface
    "RICH_TEMPLATE_TAG",
    "LOCALE_STATUS_EVENT_NAME",
    "LOCALE_STATUS_EVENT_VALUE",
    "GET_LOCALE_PROPERTY",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: visitor/transformer traversal, serializer, template flattening.
# Application templates rarely nest more than a handful of levels.
MAX_DEPTH: int = 100

# ============================================================================
# MESSAGE IDENTIFIERS
# ============================================================================

# ASCII record separator. Cannot appear in ordinary template text, so joining
# static strings with it keeps ["ab", "c"] and ["a", "bc"] distinct.
HASH_DELIMITER: str = "\x1e"

# Prefix distinguishes rich (markup) templates from plain strings so that
# html`Hello` and `Hello` never share an identifier.
RICH_ID_PREFIX: str = "h"
STRING_ID_PREFIX: str = "s"

# ============================================================================
# INTERCHANGE
# ============================================================================

# Joins nested description labels into one translator note.
DESC_SEPARATOR: str = " / "

XML_DECLARATION: str = '<?xml version="1.0" encoding="UTF-8"?>'

# One nesting level of interchange-file indentation.
XML_INDENT_UNIT: str = "  "

# https://docs.oasis-open.org/xliff/v1.2/os/xliff-core.html
XLIFF_VERSION: str = "1.2"
XLIFF_NAMESPACE: str = "urn:oasis:names:tc:xliff:document:1.2"
XSI_NAMESPACE: str = "http://www.w3.org/2001/XMLSchema-instance"
XLIFF_SCHEMA_LOCATION: str = (
    "urn:oasis:names:tc:xliff:document:1.2 xliff-core-1.2-strict.xsd"
)
# Source filenames are not tracked per message, so a fixed value stands in.
XLIFF_ORIGINAL: str = "localeweaver-inputs"
# Markup is carried in <ph> elements, leaving only plain text in units.
XLIFF_DATATYPE: str = "plaintext"
XLIFF_EXTENSION: str = ".xlf"

# ============================================================================
# LOCALIZATION API SURFACE
# ============================================================================

# Identifier tagging rich (markup) template literals.
RICH_TEMPLATE_TAG: str = "html"

# Runtime status event constant exported by the localization library and
# the literal it is inlined as.
LOCALE_STATUS_EVENT_NAME: str = "LOCALE_STATUS_EVENT"
LOCALE_STATUS_EVENT_VALUE: str = "localeweaver-status"

# Accessor exposed by the compile-time configuration replacement object.
GET_LOCALE_PROPERTY: str = "getLocale"
