"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

_WRITE_PERMISSION_HINT = "Do you have write permission?"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Interchange parse errors
    # ------------------------------------------------------------------

    @staticmethod
    def xml_malformed(detail: str, location: str | None = None) -> Diagnostic:
        """Interchange document is not well-formed XML.

        Args:
            detail: Parser error text
            location: Source file path, if known

        Returns:
            Diagnostic for XML_MALFORMED
        """
        return Diagnostic(
            code=DiagnosticCode.XML_MALFORMED,
            message=f"Interchange file is not well-formed XML: {detail}",
            hint="Check the file for unescaped '<' or '&' characters",
            location=location,
        )

    @staticmethod
    def element_missing(tag: str) -> Diagnostic:
        """Required top-level element absent."""
        return Diagnostic(
            code=DiagnosticCode.XML_ELEMENT_MISSING,
            message=f"Expected exactly one <{tag}> element, found none",
            hint="Check that the file is a complete interchange document",
        )

    @staticmethod
    def element_ambiguous(tag: str, count: int) -> Diagnostic:
        """More than one candidate top-level element."""
        return Diagnostic(
            code=DiagnosticCode.XML_ELEMENT_AMBIGUOUS,
            message=f"Expected exactly one <{tag}> element, found {count}",
            hint="Split multi-bundle documents into one file per locale",
        )

    @staticmethod
    def attribute_missing(tag: str, attribute: str) -> Diagnostic:
        """Required attribute absent or empty."""
        return Diagnostic(
            code=DiagnosticCode.XML_ATTRIBUTE_MISSING,
            message=f"Expected <{tag}> to have a non-empty '{attribute}' attribute",
        )

    @staticmethod
    def placeholder_shape(unit_tag: str, unit_name: str) -> Diagnostic:
        """A <ph> element does not hold exactly one text node.

        Args:
            unit_tag: Element name of the enclosing unit (msg, trans-unit)
            unit_name: Identifier of the enclosing unit

        Returns:
            Diagnostic for XML_PLACEHOLDER_SHAPE
        """
        return Diagnostic(
            code=DiagnosticCode.XML_PLACEHOLDER_SHAPE,
            message="Expected <ph> to have exactly one text node",
            hint="Restore the placeholder content exactly as it appears in the source",
            location=f"{unit_tag} '{unit_name}'",
        )

    @staticmethod
    def unexpected_node(unit_tag: str, unit_name: str, node: str) -> Diagnostic:
        """Node kind other than text or <ph> inside a unit."""
        return Diagnostic(
            code=DiagnosticCode.XML_UNEXPECTED_NODE,
            message=f"Unexpected node in <{unit_tag}>: {node}",
            hint="Only text and <ph> elements are allowed in translated content",
            location=f"{unit_tag} '{unit_name}'",
        )

    @staticmethod
    def target_ambiguous(unit_name: str, count: int) -> Diagnostic:
        """More than one <target> inside a <trans-unit>."""
        return Diagnostic(
            code=DiagnosticCode.XML_TARGET_AMBIGUOUS,
            message=f"Expected 0 or 1 <target> in <trans-unit>, got {count}",
            location=f"trans-unit '{unit_name}'",
        )

    @staticmethod
    def character_invalid(unit_tag: str, unit_name: str, detail: str) -> Diagnostic:
        """Message text or placeholder that XML 1.0 cannot carry."""
        return Diagnostic(
            code=DiagnosticCode.XML_CHARACTER_INVALID,
            message=f"Message cannot be written as XML: {detail}",
            hint=(
                "Remove control characters other than tab, newline and carriage"
                " return from the message"
            ),
            location=f"{unit_tag} '{unit_name}'",
        )

    # ------------------------------------------------------------------
    # File system errors
    # ------------------------------------------------------------------

    @staticmethod
    def file_read_failed(path: str, detail: str) -> Diagnostic:
        """Reading a translation file failed for a reason other than absence."""
        return Diagnostic(
            code=DiagnosticCode.FILE_READ_FAILED,
            message=f"Error reading file: {path}\n{detail}",
            hint="Do you have read permission?",
            location=path,
        )

    @staticmethod
    def directory_create_failed(kind: str, path: str, detail: str) -> Diagnostic:
        """Creating an output directory failed.

        Args:
            kind: What the directory holds (e.g. "XLIFF", "output")
            path: Directory path
            detail: Underlying OS error text

        Returns:
            Diagnostic for DIRECTORY_CREATE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.DIRECTORY_CREATE_FAILED,
            message=f"Error creating {kind} directory: {path}\n{_WRITE_PERMISSION_HINT}\n{detail}",
            location=path,
        )

    @staticmethod
    def file_write_failed(kind: str, path: str, detail: str) -> Diagnostic:
        """Writing an output file failed."""
        return Diagnostic(
            code=DiagnosticCode.FILE_WRITE_FAILED,
            message=f"Error creating {kind} file: {path}\n{_WRITE_PERMISSION_HINT}\n{detail}",
            location=path,
        )

    # ------------------------------------------------------------------
    # Configuration errors
    # ------------------------------------------------------------------

    @staticmethod
    def config_invalid(detail: str) -> Diagnostic:
        """Configuration value missing or of the wrong shape."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID,
            message=f"Invalid configuration: {detail}",
        )

    @staticmethod
    def locale_invalid(locale: str) -> Diagnostic:
        """Locale code fails syntactic validation."""
        return Diagnostic(
            code=DiagnosticCode.LOCALE_INVALID,
            message=f"Invalid locale code: {locale!r}",
            hint="Use a code such as 'en', 'es-419' or 'zh_CN'",
        )

    @staticmethod
    def runtime_config_in_transform(file_name: str) -> Diagnostic:
        """Run-time configuration API used in a compile-time build."""
        return Diagnostic(
            code=DiagnosticCode.RUNTIME_CONFIG_IN_TRANSFORM,
            message=(
                "Cannot use configureLocalization in transform mode. "
                "Use configureTransformLocalization instead."
            ),
            location=file_name or None,
        )

    # ------------------------------------------------------------------
    # Translation shape errors
    # ------------------------------------------------------------------

    @staticmethod
    def placeholder_mismatch(
        locale: str,
        name: str,
        missing: tuple[str, ...],
        extra: tuple[str, ...],
    ) -> Diagnostic:
        """Translated placeholders differ from the source message's.

        Args:
            locale: Locale of the offending bundle
            name: Message identifier
            missing: Source placeholders absent from the translation
            extra: Translation placeholders absent from the source

        Returns:
            Diagnostic for PLACEHOLDER_MISMATCH
        """
        parts = []
        if missing:
            parts.append(f"missing {list(missing)!r}")
        if extra:
            parts.append(f"unexpected {list(extra)!r}")
        return Diagnostic(
            code=DiagnosticCode.PLACEHOLDER_MISMATCH,
            message=f"Placeholders in translation differ from source: {', '.join(parts)}",
            hint="Placeholders may be reordered but never edited, added or removed",
            location=f"{locale}: '{name}'",
        )

    @staticmethod
    def translation_unknown_id(locale: str, name: str) -> Diagnostic:
        """Translated message has no counterpart in the source."""
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_UNKNOWN_ID,
            message=f"Translation '{name}' does not match any source message",
            location=locale,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Internal errors
    # ------------------------------------------------------------------

    @staticmethod
    def slot_not_parameter(description: str) -> Diagnostic:
        """Parameterized template slot is not a bare parameter reference."""
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_SLOT_NOT_PARAMETER,
            message=f"Internal error: expected template expression to be a parameter, got {description}",
        )

    @staticmethod
    def parameter_unbound(name: str) -> Diagnostic:
        """Parameter has no supplied argument."""
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_PARAMETER_UNBOUND,
            message=f"Internal error: no value provided for template parameter '{name}'",
        )

    @staticmethod
    def rich_template_is_string() -> Diagnostic:
        """Plain string produced for a rich template call site."""
        return Diagnostic(
            code=DiagnosticCode.RICH_TEMPLATE_IS_STRING,
            message="Internal error: string literal cannot be html-tagged",
        )

    @staticmethod
    def localized_arity(count: int) -> Diagnostic:
        """Localized helper called with the wrong number of arguments."""
        return Diagnostic(
            code=DiagnosticCode.LOCALIZED_ARITY,
            message=f"Internal error: expected Localized mixin call to have one argument, got {count}",
        )

    @staticmethod
    def template_argument_invalid(detail: str) -> Diagnostic:
        """msg() template argument has an unsupported shape."""
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_ARGUMENT_INVALID,
            message=f"Internal error: invalid msg template argument: {detail}",
        )

    @staticmethod
    def options_argument_invalid(detail: str) -> Diagnostic:
        """msg() options argument has an unsupported shape."""
        return Diagnostic(
            code=DiagnosticCode.OPTIONS_ARGUMENT_INVALID,
            message=f"Internal error: invalid msg options argument: {detail}",
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Nesting deeper than the traversal limit."""
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth exceeded (max: {max_depth})",
            hint="Check for programmatically constructed, deeply nested templates",
        )
