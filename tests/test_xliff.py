"""Tests for the XLIFF 1.2 interchange format."""

from __future__ import annotations

from pathlib import Path

import pytest

from localeweaver.config import Config, TransformOutputConfig, XlbConfig, XliffConfig
from localeweaver.diagnostics import (
    ConfigurationError,
    DiagnosticCode,
    InterchangeEncodeError,
    InterchangeParseError,
    LocalizeFileError,
)
from localeweaver.formatters import XliffFormatter, encode_xliff, make_formatter, parse_xliff
from localeweaver.formatters.xlb import XlbFormatter
from localeweaver.messages import Message, Placeholder, ProgramMessage

GREETING = ProgramMessage(
    name="greeting",
    contents=("Hello ", Placeholder("<b>"), "World", Placeholder("</b>")),
)
HOLA = Message("greeting", ("Hola ", Placeholder("<b>"), "Mundo", Placeholder("</b>")))


def _wrap(units: str, *, file_attrs: str = 'target-language="es"') -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">\n'
        f'<file {file_attrs} source-language="en" original="x" datatype="plaintext">\n'
        f"<body>\n{units}\n</body>\n</file>\n</xliff>\n"
    )


class TestEncodeXliff:
    """Writing one locale's XLIFF document."""

    def test_document_layout(self) -> None:
        lines = encode_xliff("en", "es", [GREETING], [HOLA]).split("\n")

        assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
        assert lines[1].startswith("<xliff ")
        assert 'xmlns="urn:oasis:names:tc:xliff:document:1.2"' in lines[1]
        assert 'version="1.2"' in lines[1]
        assert "xsi:schemaLocation=" in lines[1]
        assert lines[2:] == [
            '<file target-language="es" source-language="en" original="localeweaver-inputs" datatype="plaintext">',
            "<body>",
            '<trans-unit id="greeting">',
            '  <source>Hello <ph id="0">&lt;b&gt;</ph>World<ph id="1">&lt;/b&gt;</ph></source>',
            '  <target>Hola <ph id="0">&lt;b&gt;</ph>Mundo<ph id="1">&lt;/b&gt;</ph></target>',
            "</trans-unit>",
            "</body>",
            "</file>",
            "</xliff>",
            "",
        ]

    def test_note_from_description_stack(self) -> None:
        message = ProgramMessage(name="x", contents=("Hi",), desc_stack=("Page", "Header"))
        text = encode_xliff("en", "es", [message])
        assert '<trans-unit id="x">\n  <note>Page / Header</note>\n  <source>Hi</source>\n</trans-unit>' in text

    def test_untranslated_unit_has_no_target(self) -> None:
        text = encode_xliff("en", "es", [GREETING], [])
        assert "<target>" not in text

    def test_placeholder_ids_restart_per_element(self) -> None:
        text = encode_xliff("en", "es", [GREETING], [HOLA])
        assert text.count('<ph id="0">') == 2
        assert text.count('<ph id="1">') == 2

    def test_deterministic(self) -> None:
        assert encode_xliff("en", "es", [GREETING], [HOLA]) == encode_xliff(
            "en", "es", [GREETING], [HOLA]
        )

    def test_control_character_in_translation_is_encode_error(self) -> None:
        broken = Message("greeting", ("Hola\x0c",))
        with pytest.raises(InterchangeEncodeError) as exc_info:
            encode_xliff("en", "es", [GREETING], [broken])
        diagnostic = exc_info.value.diagnostic
        assert diagnostic.code is DiagnosticCode.XML_CHARACTER_INVALID
        assert diagnostic.location == "trans-unit 'greeting'"

    def test_control_character_in_note_is_encode_error(self) -> None:
        message = ProgramMessage(name="x", contents=("Hi",), desc_stack=("Page\x07",))
        with pytest.raises(InterchangeEncodeError, match="cannot be written as XML"):
            encode_xliff("en", "es", [message])


class TestParseXliff:
    """Reading translated XLIFF documents."""

    def test_round_trip_scenario(self) -> None:
        """Source serialized with a Spanish target parses back to the translation."""
        bundle = parse_xliff(encode_xliff("en", "es", [GREETING], [HOLA]))
        assert bundle.locale == "es"
        assert bundle.messages == (HOLA,)

    def test_units_without_target_skipped(self) -> None:
        bundle = parse_xliff(
            _wrap(
                '<trans-unit id="a"><source>A</source></trans-unit>\n'
                '<trans-unit id="b"><source>B</source><target>Be</target></trans-unit>'
            )
        )
        assert bundle.names == ("b",)

    def test_namespace_optional(self) -> None:
        bundle = parse_xliff(
            '<xliff version="1.2"><file target-language="fr"><body>'
            '<trans-unit id="a"><source>A</source><target>Ah</target></trans-unit>'
            "</body></file></xliff>"
        )
        assert bundle.get("a") == Message("a", ("Ah",))

    def test_multiple_targets(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xliff(_wrap('<trans-unit id="a"><target>1</target><target>2</target></trans-unit>'))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.XML_TARGET_AMBIGUOUS
        assert "trans-unit 'a'" in str(exc_info.value)

    def test_missing_target_language(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xliff(_wrap("", file_attrs='id="f"'))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.XML_ATTRIBUTE_MISSING

    def test_multiple_files(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xliff(
                '<xliff><file target-language="es"/><file target-language="fr"/></xliff>'
            )
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.XML_ELEMENT_AMBIGUOUS

    def test_missing_unit_id(self) -> None:
        with pytest.raises(InterchangeParseError):
            parse_xliff(_wrap("<trans-unit><target>x</target></trans-unit>"))

    def test_bad_placeholder_in_target(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xliff(
                _wrap('<trans-unit id="a"><target>x <ph id="0"></ph></target></trans-unit>'),
                source_path="xliff/es.xlf",
            )
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.XML_PLACEHOLDER_SHAPE
        assert exc_info.value.diagnostic.location == "xliff/es.xlf: trans-unit 'a'"

    def test_entities_not_expanded(self) -> None:
        """Internal entity declarations are not substituted into content."""
        xml = (
            '<?xml version="1.0"?>\n'
            '<!DOCTYPE xliff [<!ENTITY boom "BOOM">]>\n'
            '<xliff><file target-language="es"><body>'
            '<trans-unit id="a"><target>&boom;</target></trans-unit>'
            "</body></file></xliff>"
        )
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xliff(xml)
        assert "entity reference &boom;" in str(exc_info.value)


def _xliff_config(tmp_path: Path, targets: tuple[str, ...] = ("es", "fr")) -> Config:
    return Config(
        source_locale="en",
        target_locales=targets,
        interchange=XliffConfig(xliff_dir="xliff"),
        output=TransformOutputConfig(output_dir="out"),
        base_dir=tmp_path,
    )


class TestXliffFormatter:
    """Per-locale files."""

    def test_factory(self, tmp_path: Path) -> None:
        assert isinstance(make_formatter(_xliff_config(tmp_path)), XliffFormatter)
        xlb = Config(
            source_locale="en",
            target_locales=("es",),
            interchange=XlbConfig(output_file="en.xlb", translations_glob="*.xlb"),
            output=TransformOutputConfig(output_dir="out"),
            base_dir=tmp_path,
        )
        assert isinstance(make_formatter(xlb), XlbFormatter)
        with pytest.raises(ConfigurationError):
            XliffFormatter(xlb)

    def test_write_then_read(self, tmp_path: Path) -> None:
        formatter = XliffFormatter(_xliff_config(tmp_path))
        formatter.write_output([GREETING], {"es": [HOLA]})

        assert (tmp_path / "xliff" / "es.xlf").is_file()
        assert (tmp_path / "xliff" / "fr.xlf").is_file()

        bundles = formatter.read_translations()
        assert [b.locale for b in bundles] == ["es", "fr"]
        assert bundles[0].messages == (HOLA,)
        assert bundles[1].messages == ()

    def test_missing_locale_file_skipped(self, tmp_path: Path) -> None:
        xliff_dir = tmp_path / "xliff"
        xliff_dir.mkdir()
        (xliff_dir / "fr.xlf").write_text(encode_xliff("en", "fr", [GREETING], []), encoding="utf-8")

        bundles = XliffFormatter(_xliff_config(tmp_path)).read_translations()

        assert [b.locale for b in bundles] == ["fr"]

    def test_no_files_at_all(self, tmp_path: Path) -> None:
        assert XliffFormatter(_xliff_config(tmp_path)).read_translations() == []

    def test_unreadable_path_is_an_error(self, tmp_path: Path) -> None:
        (tmp_path / "xliff" / "es.xlf").mkdir(parents=True)
        with pytest.raises(LocalizeFileError) as exc_info:
            XliffFormatter(_xliff_config(tmp_path)).read_translations()
        assert exc_info.value.path.endswith("es.xlf")

    def test_write_failure_does_not_stop_other_locales(self, tmp_path: Path) -> None:
        xliff_dir = tmp_path / "xliff"
        xliff_dir.mkdir()
        (xliff_dir / "es.xlf").mkdir()

        with pytest.raises(LocalizeFileError) as exc_info:
            XliffFormatter(_xliff_config(tmp_path)).write_output([GREETING])

        assert exc_info.value.path.endswith("es.xlf")
        assert (xliff_dir / "fr.xlf").is_file()

    def test_locale_path(self, tmp_path: Path) -> None:
        formatter = XliffFormatter(_xliff_config(tmp_path))
        assert formatter.locale_path("es") == tmp_path / "xliff" / "es.xlf"
