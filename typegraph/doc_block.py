"""Logic for reading the comment body and tagged lines of a docstring."""

import dataclasses
import inspect
import re
from typing import Any

_TAG_RE = re.compile(r"^@([\w-]+)\s*(.*)$")


class DocBlock:
    """Splits a docstring into its free-text comment and `@tag value` lines.

    Everything before the first tag line is the comment. A tag value may wrap
    onto following lines until a blank line or the next tag. Repeated tags keep
    their order.
    """

    def __init__(self, text: str | None = None) -> None:
        """Parse the given docstring text (may be empty or None)."""
        self.tags: dict[str, list[str]] = {}
        comment_lines: list[str] = []
        in_tags = False
        current: list[str] | None = None  # values of the tag being continued

        for line in inspect.cleandoc(text or "").splitlines():
            stripped = line.strip()
            match = _TAG_RE.match(stripped)
            if match:
                in_tags = True
                current = self.tags.setdefault(match.group(1), [])
                current.append(match.group(2).strip())
            elif not in_tags:
                comment_lines.append(line)
            elif not stripped:
                current = None
            elif current is not None:
                current[-1] = f"{current[-1]} {stripped}".strip()

        self.comment = "\n".join(comment_lines).strip()

    @classmethod
    def of(cls, obj: Any) -> "DocBlock":
        """Build a doc block from the docstring an object itself declares.

        Instances have none of their own, and the signature text that
        `@dataclass` generates for undocumented classes is not a docstring.
        """
        doc = None
        if inspect.isclass(obj):
            doc = vars(obj).get("__doc__")
            if isinstance(doc, str) and _is_generated_dataclass_doc(obj, doc):
                doc = None
        elif inspect.isroutine(obj):
            doc = obj.__doc__
        return cls(doc if isinstance(doc, str) else None)

    def tag_exists(self, name: str) -> bool:
        """Check if at least one tag with the given name is present."""
        return name in self.tags

    def get_tag(self, name: str, default: Any = None, multiple: bool = False) -> Any:
        """Return the first value of a tag, or every value when `multiple` is set."""
        values = self.tags.get(name)
        if not values:
            return [] if multiple and default is None else default
        return list(values) if multiple else values[0]


def _is_generated_dataclass_doc(klass: type, doc: str) -> bool:
    """Check if a docstring is the `Name(field: type, ...)` text of @dataclass."""
    if not dataclasses.is_dataclass(klass):
        return False
    try:
        signature = str(inspect.signature(klass)).replace(" -> None", "")
    except (TypeError, ValueError):
        signature = ""
    return doc == klass.__name__ + signature
