"""Tests for the message and bundle data model."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given

from localeweaver.messages import (
    Bundle,
    Message,
    Placeholder,
    ProgramMessage,
    make_message_id_map,
    placeholders_of,
    render_template_body,
    rendered_text,
)
from tests.strategies import message_contents


class TestPlaceholder:
    """Placeholder value semantics."""

    def test_equality_is_by_payload(self) -> None:
        """Two placeholders with the same payload are equal."""
        assert Placeholder("<b>") == Placeholder("<b>")
        assert Placeholder("<b>") != Placeholder("</b>")

    def test_guard(self) -> None:
        """guard() distinguishes placeholders from text runs."""
        assert Placeholder.guard(Placeholder("x"))
        assert not Placeholder.guard("x")


class TestMessages:
    """Name validation on message types."""

    def test_message_rejects_empty_name(self) -> None:
        """Message requires a non-empty name."""
        with pytest.raises(ValueError, match="non-empty"):
            Message(name="", contents=("Hi",))

    def test_program_message_rejects_empty_name(self) -> None:
        """ProgramMessage requires a non-empty name."""
        with pytest.raises(ValueError, match="non-empty"):
            ProgramMessage(name="", contents=("Hi",))

    def test_program_message_defaults(self) -> None:
        """Optional fields default to a plain, unparameterized message."""
        message = ProgramMessage(name="greeting", contents=("Hi",))
        assert message.desc_stack == ()
        assert message.is_rich is False
        assert message.params is None


class TestBundle:
    """Bundle invariants and the duplicate policy."""

    def test_direct_construction_rejects_duplicates(self) -> None:
        """Constructing a Bundle with a repeated name is an error."""
        with pytest.raises(ValueError, match="Duplicate message 'a'"):
            Bundle(locale="es", messages=(Message("a", ("1",)), Message("a", ("2",))))

    def test_rejects_empty_locale(self) -> None:
        """A bundle always has a locale."""
        with pytest.raises(ValueError, match="locale"):
            Bundle(locale="", messages=())

    def test_from_messages_first_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        """Later duplicates are dropped with a warning naming the id."""
        with caplog.at_level(logging.WARNING):
            bundle = Bundle.from_messages(
                "es", [Message("a", ("first",)), Message("b", ("x",)), Message("a", ("second",))]
            )

        assert bundle.names == ("a", "b")
        assert bundle.get("a") == Message("a", ("first",))
        assert "Duplicate message 'a'" in caplog.text
        assert "es" in caplog.text

    def test_lookup_and_container_protocol(self) -> None:
        """Bundles support get, in, len and iteration in document order."""
        messages = (Message("a", ("1",)), Message("b", ("2",)))
        bundle = Bundle(locale="fr", messages=messages)

        assert "a" in bundle
        assert "missing" not in bundle
        assert bundle.get("missing") is None
        assert len(bundle) == 2
        assert tuple(bundle) == messages
        assert dict(bundle.as_mapping()) == {"a": messages[0], "b": messages[1]}


class TestMakeMessageIdMap:
    """Index construction for O(1) lookup during re-injection."""

    def test_preserves_order(self) -> None:
        """Mapping keeps document order."""
        by_id = make_message_id_map([Message("z", ("1",)), Message("a", ("2",))])
        assert list(by_id) == ["z", "a"]

    def test_first_occurrence_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        """Same duplicate policy as Bundle.from_messages."""
        with caplog.at_level(logging.WARNING):
            by_id = make_message_id_map([Message("a", ("1",)), Message("a", ("2",))])
        assert by_id["a"].contents == ("1",)
        assert "keeping the first occurrence" in caplog.text

    def test_empty(self) -> None:
        """No messages, empty mapping."""
        assert make_message_id_map([]) == {}


class TestContentHelpers:
    """Rendering helpers over message content."""

    def test_render_template_body_escapes_text_only(self) -> None:
        """Text runs are escaped; placeholder payloads are kept verbatim."""
        contents = ("cost `${x}` ", Placeholder("${price}"), " \\ ")
        assert render_template_body(contents) == "cost \\`\\${x}\\` ${price} \\\\ "

    def test_rendered_text(self) -> None:
        """What a translator reads: plain concatenation."""
        contents = ("Hello ", Placeholder("<b>"), "World", Placeholder("</b>"))
        assert rendered_text(contents) == "Hello <b>World</b>"

    def test_placeholders_of(self) -> None:
        """Payloads in order of appearance."""
        contents = ("a", Placeholder("<i>"), "b", Placeholder("</i>"), Placeholder("<br/>"))
        assert placeholders_of(contents) == ("<i>", "</i>", "<br/>")

    @given(message_contents())
    def test_rendered_text_contains_every_placeholder(self, contents: tuple) -> None:
        """Every placeholder payload appears in the rendered text."""
        text = rendered_text(contents)
        for payload in placeholders_of(contents):
            assert payload in text
