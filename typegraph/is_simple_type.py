"""Predicate for checking if a canonical type name is a primitive kind."""

SIMPLE_TYPES = frozenset({"object", "array", "string", "boolean", "integer", "double"})


def is_simple_type(name: str) -> bool:
    """Check if the name is a built-in primitive kind that needs no analysis."""
    return name in SIMPLE_TYPES
