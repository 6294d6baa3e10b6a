"""Logic for recovering docstrings written below class attribute assignments."""

import ast
import inspect
import logging
import textwrap

logger = logging.getLogger(__name__)


def attribute_docs(klass: type) -> dict[str, str]:
    """Return a mapping of attribute name to the string literal that follows it.

    Only the class's own body is inspected. Classes without retrievable
    source (builtins, dynamically created types) have no attribute docs.
    """
    try:
        source = textwrap.dedent(inspect.getsource(klass))
    except (OSError, TypeError):
        logger.debug("No source available for %s", klass.__qualname__)
        return {}

    try:
        tree = ast.parse(source)
    except SyntaxError:
        logger.debug("Could not parse source of %s", klass.__qualname__)
        return {}

    class_def = next(
        (node for node in tree.body if isinstance(node, ast.ClassDef)), None
    )
    if class_def is None:
        return {}

    docs: dict[str, str] = {}
    body = class_def.body
    for stmt, following in zip(body, body[1:]):
        name = _assigned_name(stmt)
        if name and _is_string_literal(following):
            docs[name] = following.value.value  # type: ignore[attr-defined]
    return docs


def _assigned_name(stmt: ast.stmt) -> str | None:
    """Return the single simple name bound by an assignment statement."""
    if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
        return stmt.target.id
    if (
        isinstance(stmt, ast.Assign)
        and len(stmt.targets) == 1
        and isinstance(stmt.targets[0], ast.Name)
    ):
        return stmt.targets[0].id
    return None


def _is_string_literal(stmt: ast.stmt) -> bool:
    return (
        isinstance(stmt, ast.Expr)
        and isinstance(stmt.value, ast.Constant)
        and isinstance(stmt.value.value, str)
    )
