"""Hypothesis strategies for LocaleWeaver property-based testing.

Strategies are organized by domain:

- messages: message names, text runs, placeholders and message content
- syntax: template fragments and nested rich templates

Usage:
    from tests.strategies import message_contents, program_messages
    from tests.strategies.syntax import template_texts
"""

from .messages import (
    MARKUP_PLACEHOLDERS,
    markup_payloads,
    message_contents,
    message_names,
    placeholder_payloads,
    program_message_lists,
    program_messages,
    text_runs,
)
from .syntax import nested_rich_templates, template_texts

__all__ = [
    "MARKUP_PLACEHOLDERS",
    "markup_payloads",
    "message_contents",
    "message_names",
    "nested_rich_templates",
    "placeholder_payloads",
    "program_message_lists",
    "program_messages",
    "template_texts",
    "text_runs",
]
