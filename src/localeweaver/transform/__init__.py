"""Per-locale transform of application source.

Submodules:
    analysis    - Shape of msg() call sites
    transformer - LocalizeTransformer, the per-file rewrite
    output      - Emitting the localized program for every locale

Python 3.13+.
"""

from .analysis import (
    MsgOptions,
    TemplateInfo,
    extract_options,
    extract_template,
    is_msg_call,
    is_rich_template,
    template_message_id,
)
from .output import bundles_by_locale, localize_program, transform_output
from .transformer import (
    Dynamic,
    Inlined,
    LocalizeTransformer,
    TransformContext,
    transform_source_file,
)

__all__ = [
    "Dynamic",
    "Inlined",
    "LocalizeTransformer",
    "MsgOptions",
    "TemplateInfo",
    "TransformContext",
    "bundles_by_locale",
    "extract_options",
    "extract_template",
    "is_msg_call",
    "is_rich_template",
    "localize_program",
    "template_message_id",
    "transform_output",
    "transform_source_file",
]
