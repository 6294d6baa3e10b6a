"""Logic for canonicalizing raw type names from docstrings and annotations."""

TYPE_ALIASES: dict[str, str] = {
    "int": "integer",
    "float": "double",
    "decimal": "double",
    "Decimal": "double",
    "bool": "boolean",
    "stdClass": "object",
    "mixed": "",
    "resource": "",
    "Any": "",
    "str": "string",
    "bytes": "string",
    "list": "array",
    "tuple": "array",
    "dict": "array",
    "set": "array",
    "frozenset": "array",
    "None": "null",
    "NoneType": "null",
    "Callable": "callable",
}


def normalize_type(raw: str, aliases: dict[str, str] | None = None) -> str:
    """Return the canonical name for a raw type token.

    Leading namespace separators are stripped and aliases resolved. Unknown
    names are assumed to be class names and pass through unchanged; an empty
    result means "no constraint".
    """
    table = TYPE_ALIASES if aliases is None else aliases
    name = raw.strip().lstrip("\\")
    return table.get(name, name)


def collapse_aliases(aliases: dict[str, str]) -> dict[str, str]:
    """Point every alias straight at its final target.

    `{"A": "B", "B": "C"}` becomes `{"A": "C", "B": "C"}`, so normalizing
    stays idempotent. A chain that loops back on itself raises ValueError.
    """
    collapsed: dict[str, str] = {}
    for key in aliases:
        target = aliases[key]
        seen = {key}
        while target in aliases and target != key:
            if target in seen:
                msg = f"Alias cycle through {target!r}"
                raise ValueError(msg)
            seen.add(target)
            target = aliases[target]
        if target == key and aliases[key] != key:
            msg = f"Alias cycle through {key!r}"
            raise ValueError(msg)
        collapsed[key] = target
    return collapsed
