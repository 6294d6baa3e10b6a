"""Logic for discovering classes and their public members at runtime."""

import builtins
import collections.abc
import importlib
import inspect
import logging
import sys
import types
import typing
from collections.abc import Mapping
from typing import Any

from typegraph.attribute_docs import attribute_docs
from typegraph.doc_block import DocBlock
from typegraph.structural_member import (
    MISSING,
    StructuralMethod,
    StructuralParameter,
    StructuralProperty,
)

logger = logging.getLogger(__name__)


class TypeIntrospector:
    """Resolves type names to live classes and lists their public members.

    Names are looked up in order: classes registered by name, configured
    namespace short names, dotted import paths (a backslash is accepted as
    separator), and builtins for bare names.
    """

    def __init__(
        self,
        classes: Mapping[str, type] | None = None,
        namespace: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize with optional name-to-class and name-to-import-path maps."""
        self.classes = dict(classes or {})
        self.namespace = dict(namespace or {})
        self._names = {cls: name for name, cls in self.classes.items()}
        self._short_names = {
            path.replace("\\", "."): name for name, path in self.namespace.items()
        }
        self._localns: dict[str, type] | None = None

    def resolve_class(self, name: str) -> type | None:
        """Return the class a name refers to, or None if it names no class."""
        if name in self.classes:
            return self.classes[name]

        path = self.namespace.get(name, name).replace("\\", ".")
        parts = path.split(".")
        if len(parts) == 1:
            found = getattr(builtins, path, None)
            return found if inspect.isclass(found) else None
        if not all(parts):
            return None

        for i in range(len(parts) - 1, 0, -1):
            try:
                obj: Any = importlib.import_module(".".join(parts[:i]))
            except ImportError:
                continue
            for attr in parts[i:]:
                obj = getattr(obj, attr, None)
            return obj if inspect.isclass(obj) else None
        return None

    def type_name(self, cls: type) -> str:
        """Return the raw name used to refer to a class."""
        if cls in self._names:
            return self._names[cls]
        if cls is collections.abc.Callable:
            return "callable"
        if cls.__module__ == "builtins":
            return cls.__name__
        path = f"{cls.__module__}.{cls.__qualname__}"
        return self._short_names.get(path, path)

    def annotation_names(self, annotation: Any) -> tuple[list[str], bool]:
        """Flatten an annotation into raw type names and a nullability flag.

        `Optional[X]` and `X | None` yield the names of X and nullable=True.
        Generic aliases report their origin class only.
        """
        if annotation is MISSING:
            return [], False
        if annotation is None:
            return ["None"], False

        origin = typing.get_origin(annotation)
        if origin is typing.Union or origin is types.UnionType:
            args = typing.get_args(annotation)
            members = [a for a in args if a is not type(None)]
            names: list[str] = []
            for arg in members:
                names.extend(self.annotation_names(arg)[0])
            return names, len(members) < len(args)
        if origin is typing.ClassVar or origin is typing.Annotated:
            return self.annotation_names(typing.get_args(annotation)[0])
        if origin is not None:
            if inspect.isclass(origin):
                return [self.type_name(origin)], False
            return ["mixed"], False

        # typing.Any is a class on recent interpreters
        if annotation is typing.Any or isinstance(annotation, typing.TypeVar):
            return ["mixed"], False
        if isinstance(annotation, typing.NewType):
            return self.annotation_names(annotation.__supertype__)
        if inspect.isclass(annotation):
            return [self.type_name(annotation)], False
        if isinstance(annotation, typing.ForwardRef):
            annotation = annotation.__forward_arg__
        if isinstance(annotation, str):
            # Unevaluated, e.g. "Leaf | None" naming an unknown class
            parts = [p.strip() for p in annotation.split("|")]
            names = [p for p in parts if p and p != "None"]
            return names, "None" in parts
        return [str(annotation)], False

    def public_properties(self, cls: type) -> list[StructuralProperty]:
        """List public data attributes and properties, base classes first."""
        hints = self._type_hints(cls)
        found: dict[str, StructuralProperty] = {}

        for klass in _own_mro(cls):
            docs = attribute_docs(klass)
            annotations = _own_annotations(klass)
            names = list(vars(klass))
            names += [n for n in annotations if n not in vars(klass)]

            for name in names:
                if name.startswith("_"):
                    continue
                value = vars(klass).get(name, MISSING)
                if isinstance(value, property):
                    annotation = (
                        self._type_hints(value.fget).get("return", MISSING)
                        if value.fget
                        else MISSING
                    )
                    found[name] = StructuralProperty(
                        name, annotation, DocBlock.of(value.fget)
                    )
                    continue
                if value is not MISSING and (
                    inspect.isroutine(value) or inspect.isclass(value)
                ):
                    continue

                if name in annotations:
                    annotation = hints.get(name, annotations[name])
                elif value is None or inspect.isdatadescriptor(value):
                    annotation = MISSING
                else:
                    annotation = type(value)
                found[name] = StructuralProperty(
                    name, annotation, DocBlock(docs.get(name))
                )

        return list(found.values())

    def public_methods(self, cls: type) -> list[StructuralMethod]:
        """List public methods, dunders included, base classes first."""
        found: dict[str, StructuralMethod] = {}

        for klass in _own_mro(cls):
            for name, value in vars(klass).items():
                if name.startswith("_") and not name.startswith("__"):
                    continue
                if isinstance(value, staticmethod):
                    func, bound = value.__func__, False
                elif isinstance(value, classmethod):
                    func, bound = value.__func__, True
                elif inspect.isfunction(value):
                    func, bound = value, True
                else:
                    continue
                found[name] = self._method(name, func, bound=bound)

        return list(found.values())

    def _method(self, name: str, func: Any, *, bound: bool) -> StructuralMethod:
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            logger.debug("No signature available for %s", name)
            return StructuralMethod(name, doc=DocBlock.of(func))

        hints = self._type_hints(func)
        params = list(signature.parameters.values())
        if bound and params:
            params = params[1:]

        return StructuralMethod(
            name,
            tuple(
                StructuralParameter(p.name, hints.get(p.name, p.annotation))
                for p in params
            ),
            hints.get("return", signature.return_annotation),
            DocBlock.of(func),
        )

    def type_arguments(self, annotation: Any) -> list[str]:
        """Return raw names of every type nested inside a generic annotation.

        `dict[str, list[Leaf]]` yields `str`, `list` and `Leaf`. These are not
        declared types of the member but are still reachable from it.
        """
        names: list[str] = []
        for arg in _nested_args(annotation):
            names.extend(self.annotation_names(arg)[0])
            names.extend(self.type_arguments(arg))
        return names

    def _type_hints(self, obj: Any) -> dict[str, Any]:
        """Evaluate annotations, one at a time if any of them cannot be resolved.

        Registered and namespace classes are visible to string annotations.
        An annotation that still fails to evaluate is kept as written.
        """
        localns = self._known_classes()
        try:
            return typing.get_type_hints(obj, localns=localns or None)
        except (NameError, TypeError, AttributeError, SyntaxError):
            logger.debug("Evaluating annotations of %r one by one", obj)

        owners = _own_mro(obj) if inspect.isclass(obj) else [obj]
        hints: dict[str, Any] = {}
        for owner in owners:
            globalns = _globals_of(owner)
            scope = {**vars(owner), **localns} if inspect.isclass(owner) else localns
            for name, raw in _own_annotations(owner).items():
                hints[name] = _evaluate(raw, globalns, scope)
        return hints

    def _known_classes(self) -> dict[str, type]:
        """Return every class reachable by a configured short name."""
        if self._localns is None:
            self._localns = dict(self.classes)
            for name in self.namespace:
                cls = self.resolve_class(name)
                if cls is not None:
                    self._localns[name] = cls
        return self._localns


def _own_mro(cls: type) -> list[type]:
    """Return the class hierarchy from the furthest base, without `object`."""
    return [k for k in reversed(cls.__mro__) if k is not object]


def _own_annotations(owner: Any) -> dict[str, Any]:
    """Return the annotations written on a class body or function, if readable."""
    try:
        return inspect.get_annotations(owner)
    except NameError:
        logger.debug("Unresolvable annotations on %s", owner.__qualname__)
        return {}


def _globals_of(owner: Any) -> dict[str, Any]:
    """Return the module namespace an annotation was written in."""
    if inspect.isclass(owner):
        module = sys.modules.get(owner.__module__)
        return vars(module) if module else {}
    return getattr(owner, "__globals__", {})


def _evaluate(raw: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    """Evaluate a string annotation, keeping the string if it cannot be."""
    if not isinstance(raw, str):
        return raw
    try:
        return eval(raw, globalns, localns)
    except (NameError, SyntaxError, TypeError, AttributeError):
        return raw


def _nested_args(annotation: Any) -> list[Any]:
    """Return the type arguments of a generic annotation, flattened."""
    origin = typing.get_origin(annotation)
    if origin is None or origin is typing.Literal:
        return []
    args = typing.get_args(annotation)
    if origin is typing.Annotated:
        return [args[0]]

    nested: list[Any] = []
    for arg in args:
        if isinstance(arg, list):
            nested.extend(arg)
        elif arg is not Ellipsis:
            nested.append(arg)
    return nested
