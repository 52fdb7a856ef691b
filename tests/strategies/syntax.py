"""Hypothesis strategies for template syntax."""

from __future__ import annotations

from hypothesis import strategies as st

from localeweaver.syntax import (
    Identifier,
    StringLiteral,
    TaggedTemplate,
    TemplateLiteral,
    TemplateSpan,
)


def template_texts() -> st.SearchStrategy[str]:
    """Cooked template text, including characters that need escaping."""
    return st.text(
        alphabet=st.one_of(
            st.characters(categories=("L", "N", "P", "S", "Zs")),
            st.sampled_from(["\\", "`", "$", "{", "}", "\r", "\n", "\t"]),
        ),
        max_size=30,
    )


_LEAF_SLOTS = st.one_of(
    st.sampled_from(["name", "count", "user"]).map(Identifier),
    st.text(alphabet="abc <>/", max_size=5).map(StringLiteral),
)


def _rich(children: st.SearchStrategy[object]) -> st.SearchStrategy[TaggedTemplate]:
    text = st.text(alphabet="abc <>/", max_size=5)
    return st.builds(
        lambda head, spans: TaggedTemplate(Identifier("html"), TemplateLiteral(head, tuple(spans))),
        text,
        st.lists(st.builds(TemplateSpan, children, text), max_size=3),
    )


def nested_rich_templates() -> st.SearchStrategy[TaggedTemplate]:
    """html templates nesting identifiers, string literals and other html templates."""
    return _rich(st.recursive(_LEAF_SLOTS, _rich, max_leaves=8))
