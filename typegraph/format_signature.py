"""Logic for rendering a method signature as display markup."""

from collections.abc import Sequence
from html import escape

from typegraph.member_descriptor import MemberDescriptor

PLACEHOLDER = "???"


def format_signature(
    return_type: str,
    name: str,
    params: Sequence[MemberDescriptor | None],
) -> str:
    """Render the return type, name and parameter list of a method."""
    args = ", ".join(_format_param(p) for p in params)
    return (
        '<div class="cm-signature">'
        f'<span class="type">{escape(return_type)}</span> '
        f'<span class="name">{escape(name)}</span>'
        f'(<span class="args">{args}</span>)'
        "</div>"
    )


def _format_param(param: MemberDescriptor | None) -> str:
    """Render one parameter; a parameter that failed to build is a placeholder."""
    if param is None:
        return PLACEHOLDER

    css = "arg hint" if param.has_hint() else "arg"
    types = "|".join(param.declared_types) + " " if param.has_types() else ""
    return (
        f'<span class="{css}" title="{escape(param.summary)}">'
        f'<span class="type">{escape(types)}</span>{escape(param.name)}</span>'
    )
