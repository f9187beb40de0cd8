"""Reusable Annotated field type aliases for document models.

Identifiers follow the SBML ``SId`` syntax. Math fields accept either an
infix formula string or an already built expression tree and always hold a
tree (or ``None`` for unset math); they serialise back to formula strings.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from .ast_nodes import NODE_TYPES
from .formula import format_formula, parse_formula

SID_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


def _coerce_math(value: Any) -> Any:
    if value is None or isinstance(value, NODE_TYPES):
        return value
    if isinstance(value, bool):
        raise ValueError("Math must be a formula string or expression node")
    if isinstance(value, int | float):
        value = repr(value)
    if isinstance(value, str):
        return parse_formula(value) if value.strip() else None
    raise ValueError(
        f"Math must be a formula string or expression node, got {type(value).__name__}"
    )


def _render_math(value: Any) -> str | None:
    return None if value is None else format_formula(value)


SId = Annotated[
    str,
    Field(
        description="SBML identifier: letter or underscore followed by letters, digits or underscores.",
        pattern=SID_PATTERN,
        examples=["k1", "S1", "compartment_volume"],
    ),
]

Math = Annotated[
    Any,
    BeforeValidator(_coerce_math),
    PlainSerializer(_render_math),
]

__all__ = ["Math", "SID_PATTERN", "SId"]
