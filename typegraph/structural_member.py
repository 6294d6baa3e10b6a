"""Data models for members obtained through structural introspection."""

import inspect
from dataclasses import dataclass, field
from typing import Any

from typegraph.doc_block import DocBlock

# Marks an annotation that was never written.
MISSING: Any = inspect.Parameter.empty


@dataclass(frozen=True)
class StructuralParameter:
    """A method parameter as seen by introspection."""

    name: str
    annotation: Any = MISSING


@dataclass(frozen=True)
class StructuralProperty:
    """A public data attribute or property of a class."""

    name: str
    annotation: Any = MISSING
    doc: DocBlock = field(default_factory=DocBlock, compare=False)


@dataclass(frozen=True)
class StructuralMethod:
    """A public method of a class."""

    name: str
    parameters: tuple[StructuralParameter, ...] = ()
    return_annotation: Any = MISSING
    doc: DocBlock = field(default_factory=DocBlock, compare=False)
