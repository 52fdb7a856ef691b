"""Property tests: interchange files carry message content unchanged."""

from __future__ import annotations

from hypothesis import given, settings

from localeweaver.formatters import encode_xlb, encode_xliff, parse_xlb, parse_xliff
from localeweaver.messages import Message, ProgramMessage, placeholders_of, rendered_text
from tests.strategies import program_message_lists


def _as_translations(messages: list[ProgramMessage]) -> list[Message]:
    return [Message(m.name, m.contents) for m in messages]


@given(program_message_lists())
@settings(deadline=None)
def test_xlb_preserves_content(messages: list[ProgramMessage]) -> None:
    bundle = parse_xlb(encode_xlb("en", messages))

    assert bundle.locale == "en"
    assert bundle.names == tuple(m.name for m in messages)
    for source, parsed in zip(messages, bundle.messages, strict=True):
        assert parsed.contents == source.contents
        assert placeholders_of(parsed.contents) == placeholders_of(source.contents)
        assert rendered_text(parsed.contents) == rendered_text(source.contents)


@given(program_message_lists())
@settings(deadline=None)
def test_xliff_targets_preserve_content(messages: list[ProgramMessage]) -> None:
    bundle = parse_xliff(encode_xliff("en", "de", messages, _as_translations(messages)))

    assert bundle.locale == "de"
    assert bundle.messages == tuple(_as_translations(messages))


@given(program_message_lists())
@settings(deadline=None)
def test_xliff_without_targets_is_empty(messages: list[ProgramMessage]) -> None:
    assert len(parse_xliff(encode_xliff("en", "de", messages))) == 0


@given(program_message_lists())
@settings(deadline=None)
def test_encoding_is_stable_under_reparse(messages: list[ProgramMessage]) -> None:
    """Rewriting a file from its own parse yields identical bytes."""
    first = encode_xliff("en", "de", messages, _as_translations(messages))
    second = encode_xliff("en", "de", messages, parse_xliff(first).messages)
    assert first == second
