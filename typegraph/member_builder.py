"""Logic for turning docstring tags and introspected members into descriptors."""

import re
from collections.abc import Callable, Iterable
from typing import Any

from typegraph.doc_block import DocBlock
from typegraph.format_signature import format_signature
from typegraph.member_descriptor import MemberDescriptor
from typegraph.structural_member import (
    StructuralMethod,
    StructuralParameter,
    StructuralProperty,
)
from typegraph.type_introspector import TypeIntrospector

# <types> $<name> <rest of line>, e.g. "int|null $count Number of items"
_TAG_LINE_RE = re.compile(r"^([\w|\\.]+)\s+\$(\w+)\s*(.*)$")

MemberSource = str | StructuralProperty | StructuralMethod | StructuralParameter


class MemberBuilder:
    """Builds member descriptors, taking types from exactly one source each.

    A docstring tag always wins over structural annotations. Every declared
    type goes through `handle_type`, which normalizes it and, during a deep
    crawl, analyses it.
    """

    def __init__(
        self,
        introspector: TypeIntrospector,
        handle_type: Callable[[str], str],
        *,
        structural_types: bool = True,
        magic_prefix: str = "__",
    ) -> None:
        """Initialize the builder.

        `structural_types` is the capability flag for reading annotations;
        when off, only docstrings supply types.
        """
        self.introspector = introspector
        self.handle_type = handle_type
        self.structural_types = structural_types
        self.magic_prefix = magic_prefix

    def build(self, source: MemberSource) -> MemberDescriptor | None:
        """Build a descriptor from any supported member source."""
        if isinstance(source, str):
            return self.from_tag_line(source)
        if isinstance(source, StructuralProperty):
            return self.from_property(source)
        if isinstance(source, StructuralMethod):
            return self.from_method(source)
        if isinstance(source, StructuralParameter):
            return self.from_parameter(source)
        msg = f"Unsupported member source: {type(source).__name__}"
        raise TypeError(msg)

    def from_tag_line(self, line: str) -> MemberDescriptor | None:
        """Parse a `@property` or `@param` tag value; None if it doesn't match."""
        match = _TAG_LINE_RE.match(line.strip())
        if not match:
            return None
        types, name, rest = match.groups()
        return MemberDescriptor(name, self._declared(types.split("|")), rest)

    def from_property(self, prop: StructuralProperty) -> MemberDescriptor:
        """Describe a structural property, preferring its `@var` tag."""
        doc = prop.doc
        if doc.tag_exists("var"):
            types = self._declared(_first_token(doc.get_tag("var", "")).split("|"))
        else:
            types = self._declared_structural(prop.annotation)
        return MemberDescriptor(prop.name, types, doc.comment, _link(doc))

    def from_parameter(self, param: StructuralParameter) -> MemberDescriptor:
        """Describe a method parameter from its annotation."""
        types = self._declared_structural(param.annotation)
        return MemberDescriptor(param.name, types)

    def from_method(self, method: StructuralMethod) -> MemberDescriptor | None:
        """Describe a method; magic methods yield None."""
        if method.name.startswith(self.magic_prefix):
            return None

        doc = method.doc
        params: list[MemberDescriptor | None]
        if doc.tag_exists("param"):
            returns = self._declared(
                _first_token(doc.get_tag("return", "void") or "void").split("|")
            )
            params = [
                self.from_tag_line(line)
                for line in doc.get_tag("param", multiple=True)
            ]
        else:
            returns = self._declared_structural(method.return_annotation)
            params = [self.from_parameter(p) for p in method.parameters]

        signature = format_signature("|".join(returns), method.name, params)
        return MemberDescriptor(
            method.name, ("method",), signature + doc.comment, _link(doc)
        )

    def _declared(self, raw_types: Iterable[str]) -> tuple[str, ...]:
        """Handle each raw type and keep the non-empty ones, first occurrence wins."""
        handled = (self.handle_type(t) for t in raw_types)
        return tuple(dict.fromkeys(t for t in handled if t))

    def _declared_structural(self, annotation: Any) -> tuple[str, ...]:
        if not self.structural_types:
            return ()
        names, nullable = self.introspector.annotation_names(annotation)
        if nullable:
            names.append("null")
        declared = self._declared(names)
        # Type arguments are reachable but not declared: list[Leaf] is an array
        for arg in self.introspector.type_arguments(annotation):
            self.handle_type(arg)
        return declared


def _first_token(value: str) -> str:
    parts = value.split(maxsplit=1)
    return parts[0] if parts else ""


def _link(doc: DocBlock) -> str:
    return doc.get_tag("link", "") or ""
