"""Logic for crawling the graph of types reachable from given root types."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from typegraph.doc_block import DocBlock
from typegraph.is_simple_type import is_simple_type
from typegraph.load_config import load_config
from typegraph.member_builder import MemberBuilder, MemberSource
from typegraph.normalize_type import TYPE_ALIASES, collapse_aliases, normalize_type
from typegraph.type_descriptor import TypeDescriptor
from typegraph.type_introspector import TypeIntrospector
from typegraph.type_registry import TypeRegistry
from typegraph.unsupported_type_error import UnsupportedTypeError

logger = logging.getLogger(__name__)


class TypeAnalyser:
    """Discovers classes transitively referenced by members and parameters.

    Each class is analysed at most once per instance. A class is marked
    pending before its members are read, so a reference back to it stops
    there and cyclic graphs terminate. Instances are not thread-safe.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        classes: Mapping[str, type] | None = None,
        introspector: TypeIntrospector | None = None,
    ) -> None:
        """Initialize the analyser with config and optional known classes."""
        self.config = config or load_config()
        analysis = self.config.get("analysis", {})

        self.aliases = collapse_aliases(
            {**TYPE_ALIASES, **self.config.get("aliases", {})}
        )
        self.passthrough_types = set(self.config.get("passthrough_types", []))
        self.default_deep = bool(analysis.get("deep", True))

        self.introspector = introspector or TypeIntrospector(
            classes=classes, namespace=self.config.get("namespace", {})
        )
        self.builder = MemberBuilder(
            self.introspector,
            self._handle_type,
            structural_types=bool(analysis.get("structural_types", True)),
            magic_prefix=analysis.get("magic_prefix", "__"),
        )
        self.registry = TypeRegistry()
        self._deep = self.default_deep

    def normalize(self, name: str) -> str:
        """Canonicalize a raw type name with this analyser's alias table."""
        return normalize_type(name, self.aliases)

    def analyse(
        self,
        type_name: str | Iterable[str],
        deep: bool | None = None,
    ) -> None:
        """Analyse one type name or each name of a collection, in order.

        With `deep` off, types met while building members are recorded by
        name only. The flag holds for the whole crawl.
        """
        if not isinstance(type_name, str):
            for name in type_name:
                self.analyse(name, deep)
            return

        previous = self._deep
        self._deep = self.default_deep if deep is None else deep
        try:
            self._analyse(type_name)
        finally:
            self._deep = previous

    def get_types(self) -> dict[str, TypeDescriptor]:
        """Return every fully analysed type, keyed by canonical name."""
        return self.registry.resolved()

    def pending_types(self) -> list[str]:
        """Return names left unresolved by a crawl that raised."""
        return self.registry.pending()

    def canonical(self, raw_name: str) -> str:
        """Return the registry key a type name refers to, without analysing it.

        Every spelling of a class (registered short name, dotted path,
        backslash path) maps to the one name the introspector reports for it.
        """
        name = self.normalize(raw_name)
        if self._is_terminal(name):
            return name
        cls = self.introspector.resolve_class(name)
        return name if cls is None else self._class_key(cls)

    def _analyse(self, raw_name: str) -> str:
        name = self.normalize(raw_name)
        if self._is_terminal(name):
            return name

        cls = self.introspector.resolve_class(name)
        if cls is None:
            if name not in self.passthrough_types:
                raise UnsupportedTypeError(name)
            logger.debug("Accepting opaque type %s", name)
            return name

        key = self._class_key(cls)
        if not self._is_terminal(key) and key not in self.passthrough_types:
            self._analyse_class(key, cls)
        return key

    def _is_terminal(self, name: str) -> bool:
        """Check if a name needs no lookup: empty, primitive or already seen."""
        return not name or is_simple_type(name) or name in self.registry

    def _class_key(self, cls: type) -> str:
        return self.normalize(self.introspector.type_name(cls))

    def _analyse_class(self, name: str, cls: type) -> None:
        self.registry.mark_pending(name)
        logger.debug("Analysing class %s (deep=%s)", name, self._deep)

        doc = DocBlock.of(cls)
        sources: list[MemberSource] = [
            *doc.get_tag("property", multiple=True),
            *self.introspector.public_properties(cls),
            *self.introspector.public_methods(cls),
        ]
        members = (self.builder.build(s) for s in sources)

        self.registry.resolve(
            TypeDescriptor(
                name,
                tuple(m for m in members if m is not None),
                doc.comment,
                doc.get_tag("link", "") or "",
            )
        )

    def _handle_type(self, raw_name: str) -> str:
        """Canonicalize a member's type and analyse it during a deep crawl."""
        if self._deep:
            return self._analyse(raw_name)
        return self.canonical(raw_name)
