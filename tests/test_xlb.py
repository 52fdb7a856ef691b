"""Tests for the XLB interchange format."""

from __future__ import annotations

from pathlib import Path

import pytest

from localeweaver.config import Config, TransformOutputConfig, XlbConfig, XliffConfig
from localeweaver.diagnostics import (
    ConfigurationError,
    DiagnosticCode,
    InterchangeEncodeError,
    InterchangeParseError,
)
from localeweaver.formatters import XlbFormatter, encode_xlb, parse_xlb
from localeweaver.messages import Message, Placeholder, ProgramMessage

GREETING = ProgramMessage(
    name="greeting",
    contents=("Hello ", Placeholder("<b>"), "World", Placeholder("</b>")),
    desc_stack=("Home page",),
)
FAREWELL = ProgramMessage(name="farewell", contents=("Bye",), desc_stack=("Home page", "Footer"))


def _code(exc_info: pytest.ExceptionInfo[InterchangeParseError]) -> DiagnosticCode:
    assert exc_info.value.diagnostic is not None
    return exc_info.value.diagnostic.code


class TestEncodeXlb:
    """Writing the source-locale bundle."""

    def test_document_layout(self) -> None:
        assert encode_xlb("en", [GREETING, FAREWELL]) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<localizationbundle locale="en">\n'
            "  <messages>\n"
            '    <msg name="greeting" desc="Home page">Hello <ph>&lt;b&gt;</ph>World<ph>&lt;/b&gt;</ph></msg>\n'
            '    <msg name="farewell" desc="Home page / Footer">Bye</msg>\n'
            "  </messages>\n"
            "</localizationbundle>\n"
        )

    def test_desc_omitted_when_empty(self) -> None:
        text = encode_xlb("en", [ProgramMessage(name="x", contents=("Hi",))])
        assert '<msg name="x">Hi</msg>' in text

    def test_deterministic(self) -> None:
        assert encode_xlb("en", [GREETING]) == encode_xlb("en", [GREETING])

    @pytest.mark.parametrize("text", ["a\x0bb", "nul\x00", "esc\x1b"])
    def test_control_character_is_encode_error(self, text: str) -> None:
        with pytest.raises(InterchangeEncodeError) as exc_info:
            encode_xlb("en", [GREETING, ProgramMessage(name="m1", contents=(text,))])
        diagnostic = exc_info.value.diagnostic
        assert diagnostic.code is DiagnosticCode.XML_CHARACTER_INVALID
        assert diagnostic.location == "msg 'm1'"

    def test_control_character_in_placeholder_is_encode_error(self) -> None:
        message = ProgramMessage(name="m2", contents=(Placeholder("<b\x01>"),))
        with pytest.raises(InterchangeEncodeError, match="cannot be written as XML"):
            encode_xlb("en", [message])

    def test_tab_and_newline_allowed(self) -> None:
        text = encode_xlb("en", [ProgramMessage(name="x", contents=("a\tb\nc",))])
        assert '<msg name="x">a\tb\nc</msg>' in text


class TestParseXlb:
    """Reading translated bundles."""

    def test_parses_messages(self) -> None:
        bundle = parse_xlb(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<localizationbundle locale="es">\n'
            "  <messages>\n"
            '    <msg name="greeting">Hola <ph>&lt;b&gt;</ph>Mundo<ph>&lt;/b&gt;</ph></msg>\n'
            '    <msg name="farewell">Adiós</msg>\n'
            "  </messages>\n"
            "</localizationbundle>\n"
        )
        assert bundle.locale == "es"
        assert bundle.messages == (
            Message("greeting", ("Hola ", Placeholder("<b>"), "Mundo", Placeholder("</b>"))),
            Message("farewell", ("Adiós",)),
        )

    def test_duplicate_names_first_wins(self) -> None:
        bundle = parse_xlb(
            '<localizationbundle locale="es"><messages>'
            '<msg name="a">uno</msg><msg name="a">dos</msg>'
            "</messages></localizationbundle>"
        )
        assert bundle.messages == (Message("a", ("uno",)),)

    def test_missing_locale(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb("<localizationbundle><messages/></localizationbundle>")
        assert _code(exc_info) is DiagnosticCode.XML_ATTRIBUTE_MISSING

    def test_missing_bundle_element(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb("<messages/>")
        assert _code(exc_info) is DiagnosticCode.XML_ELEMENT_MISSING

    def test_multiple_bundles(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb(
                '<root><localizationbundle locale="es"/><localizationbundle locale="fr"/></root>'
            )
        assert _code(exc_info) is DiagnosticCode.XML_ELEMENT_AMBIGUOUS

    def test_missing_message_name(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb('<localizationbundle locale="es"><messages><msg>x</msg></messages></localizationbundle>')
        assert _code(exc_info) is DiagnosticCode.XML_ATTRIBUTE_MISSING

    @pytest.mark.parametrize(
        ("content", "code", "detail"),
        [
            ("Hi <b>there</b>", DiagnosticCode.XML_UNEXPECTED_NODE, "element <b>"),
            ("Hi <!-- note -->", DiagnosticCode.XML_UNEXPECTED_NODE, "comment"),
            ("Hi <?pi data?>", DiagnosticCode.XML_UNEXPECTED_NODE, "processing instruction"),
            ("<ph/>", DiagnosticCode.XML_PLACEHOLDER_SHAPE, "exactly one text node"),
            ("<ph><x/></ph>", DiagnosticCode.XML_PLACEHOLDER_SHAPE, "exactly one text node"),
        ],
    )
    def test_bad_unit_content(self, content: str, code: DiagnosticCode, detail: str) -> None:
        xml = f'<localizationbundle locale="es"><messages><msg name="m1">{content}</msg></messages></localizationbundle>'
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb(xml)
        assert _code(exc_info) is code
        assert detail in str(exc_info.value)
        assert "msg 'm1'" in str(exc_info.value)

    def test_malformed_xml(self) -> None:
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb("<localizationbundle locale='es'>", source_path="es.xlb")
        assert _code(exc_info) is DiagnosticCode.XML_MALFORMED
        assert exc_info.value.source_path == "es.xlb"

    def test_source_path_prefixes_location(self) -> None:
        xml = '<localizationbundle locale="es"><messages><msg name="m1"><ph/></msg></messages></localizationbundle>'
        with pytest.raises(InterchangeParseError) as exc_info:
            parse_xlb(xml, source_path="translations/es.xlb")
        assert exc_info.value.source_path == "translations/es.xlb"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.location == "translations/es.xlb: msg 'm1'"


def _xlb_config(tmp_path: Path) -> Config:
    return Config(
        source_locale="en",
        target_locales=("es", "fr"),
        interchange=XlbConfig(output_file="xlb/en.xlb", translations_glob="translations/*.xlb"),
        output=TransformOutputConfig(output_dir="out"),
        base_dir=tmp_path,
    )


class TestXlbFormatter:
    """File-level reading and writing."""

    def test_rejects_xliff_config(self, tmp_path: Path) -> None:
        config = Config(
            source_locale="en",
            target_locales=("es",),
            interchange=XliffConfig(xliff_dir="xliff"),
            output=TransformOutputConfig(output_dir="out"),
            base_dir=tmp_path,
        )
        with pytest.raises(ConfigurationError, match="expected interchange format 'xlb'"):
            XlbFormatter(config)

    def test_write_output_creates_directories(self, tmp_path: Path) -> None:
        XlbFormatter(_xlb_config(tmp_path)).write_output([GREETING])
        written = (tmp_path / "xlb" / "en.xlb").read_text(encoding="utf-8")
        assert written == encode_xlb("en", [GREETING])

    def test_read_translations_by_glob(self, tmp_path: Path) -> None:
        translations = tmp_path / "translations"
        translations.mkdir()
        (translations / "fr.xlb").write_text(
            '<localizationbundle locale="fr"><messages><msg name="a">Salut</msg></messages></localizationbundle>',
            encoding="utf-8",
        )
        (translations / "es.xlb").write_text(
            '<localizationbundle locale="es"><messages><msg name="a">Hola</msg></messages></localizationbundle>',
            encoding="utf-8",
        )
        (translations / "notes.txt").write_text("ignored", encoding="utf-8")

        bundles = XlbFormatter(_xlb_config(tmp_path)).read_translations()

        assert [b.locale for b in bundles] == ["es", "fr"]
        assert bundles[0].get("a") == Message("a", ("Hola",))

    def test_read_translations_reports_file(self, tmp_path: Path) -> None:
        translations = tmp_path / "translations"
        translations.mkdir()
        (translations / "bad.xlb").write_text("<not-closed>", encoding="utf-8")
        with pytest.raises(InterchangeParseError) as exc_info:
            XlbFormatter(_xlb_config(tmp_path)).read_translations()
        assert exc_info.value.source_path == str(translations / "bad.xlb")

    def test_no_translation_files(self, tmp_path: Path) -> None:
        assert XlbFormatter(_xlb_config(tmp_path)).read_translations() == []

    def test_absolute_translations_glob(self, tmp_path: Path) -> None:
        translations = tmp_path / "shared" / "translations"
        translations.mkdir(parents=True)
        for locale, text in (("fr", "Salut"), ("es", "Hola")):
            (translations / f"{locale}.xlb").write_text(
                f'<localizationbundle locale="{locale}"><messages>'
                f'<msg name="a">{text}</msg></messages></localizationbundle>',
                encoding="utf-8",
            )
        project = tmp_path / "project"
        project.mkdir()
        config = Config(
            source_locale="en",
            target_locales=("es", "fr"),
            interchange=XlbConfig(
                output_file="xlb/en.xlb", translations_glob=str(translations / "*.xlb")
            ),
            output=TransformOutputConfig(output_dir="out"),
            base_dir=project,
        )

        bundles = XlbFormatter(config).read_translations()

        assert [b.locale for b in bundles] == ["es", "fr"]
        assert bundles[1].get("a") == Message("a", ("Salut",))
