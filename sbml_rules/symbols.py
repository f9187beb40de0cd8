"""Symbol extraction from expression trees."""

from __future__ import annotations

from .ast_nodes import Node, get_name, is_name, iter_nodes


def extract_read_variables(expression: Node | None) -> set[str]:
    """Return the identifiers an expression reads.

    Every node is visited, including arguments of function applications.
    An absent expression (unset math) reads nothing. The walk keeps its own
    stack, so tree depth is not bounded by the interpreter's recursion limit.
    """
    return {get_name(node) for node in iter_nodes(expression) if is_name(node)}


__all__ = ["extract_read_variables"]
