"""Data model for a discovered class."""

from dataclasses import dataclass

from typegraph.member_descriptor import MemberDescriptor


@dataclass(frozen=True)
class TypeDescriptor:
    """Represents one analysed class and its public members."""

    name: str  # canonical name, unique registry key
    members: tuple[MemberDescriptor, ...] = ()
    summary: str = ""
    reference_link: str = ""

    def member(self, name: str) -> MemberDescriptor | None:
        """Return the first member with the given name, if any."""
        for m in self.members:
            if m.name == name:
                return m
        return None
