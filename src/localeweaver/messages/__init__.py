"""Message and bundle model shared by the codecs and the transform engine.

Submodules:
    model      - Placeholder, ProgramMessage, Message, Bundle
    ids        - Shape-derived message identifiers
    validation - Placeholder-preservation checks for translations

Python 3.13+.
"""

from .ids import fnv1a64, generate_message_id, message_template_strings, program_message_id
from .model import (
    Bundle,
    ContentElement,
    Message,
    MessageContent,
    Placeholder,
    ProgramMessage,
    make_message_id_map,
    placeholders_of,
    render_template_body,
    rendered_text,
)
from .validation import ValidationResult, ensure_valid_translations, validate_translations

__all__ = [
    "Bundle",
    "ContentElement",
    "Message",
    "MessageContent",
    "Placeholder",
    "ProgramMessage",
    "ValidationResult",
    "ensure_valid_translations",
    "fnv1a64",
    "generate_message_id",
    "make_message_id_map",
    "message_template_strings",
    "placeholders_of",
    "program_message_id",
    "render_template_body",
    "rendered_text",
    "validate_translations",
]
