"""Data model for a property, method or parameter of a type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MemberDescriptor:
    """Represents one member of a type, or one parameter of a method."""

    name: str
    declared_types: tuple[str, ...] = ()  # ordered set, declaration order
    summary: str = ""
    reference_link: str = ""

    def has_types(self) -> bool:
        """Check if any type is declared for the member."""
        return bool(self.declared_types)

    def has_hint(self) -> bool:
        """Check if the member carries a descriptive summary."""
        return bool(self.summary)
