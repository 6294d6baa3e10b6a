"""Registry of discovered type descriptors keyed by canonical name."""

from dataclasses import dataclass

from typegraph.type_descriptor import TypeDescriptor


@dataclass(frozen=True)
class Pending:
    """Marks a type whose analysis has started but not finished."""


@dataclass(frozen=True)
class Resolved:
    """Holds the final descriptor of a fully analysed type."""

    descriptor: TypeDescriptor


RegistryEntry = Pending | Resolved


class TypeRegistry:
    """Maps canonical type names to pending or resolved entries.

    Entries are created pending, resolved exactly once, and never removed.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def mark_pending(self, name: str) -> None:
        """Record that analysis of the named type has started."""
        if name in self._entries:
            msg = f"Type {name} is already registered"
            raise KeyError(msg)
        self._entries[name] = Pending()

    def resolve(self, descriptor: TypeDescriptor) -> None:
        """Replace the pending entry for the descriptor's name."""
        if not isinstance(self._entries.get(descriptor.name), Pending):
            msg = f"Type {descriptor.name} is not pending analysis"
            raise KeyError(msg)
        self._entries[descriptor.name] = Resolved(descriptor)

    def resolved(self) -> dict[str, TypeDescriptor]:
        """Return every resolved descriptor in discovery order."""
        return {
            name: entry.descriptor
            for name, entry in self._entries.items()
            if isinstance(entry, Resolved)
        }

    def pending(self) -> list[str]:
        """Return names whose analysis never completed."""
        return [
            name for name, entry in self._entries.items() if isinstance(entry, Pending)
        ]
