"""Expression tree for rule and function-definition math.

The tree is a closed set of frozen dataclass variants rather than a class
hierarchy. Consumers walk it with ``match`` over the variants:

- ``Symbol``: reference to a model component (``k1``, ``S1``)
- ``CSymbolName``: csymbol names (``time``, ``avogadro``)
- ``Number``: numeric literal
- ``Constant``: SBML constants (``pi``, ``exponentiale``, ``true`` ...)
- ``Operator``: arithmetic, relational and logical operators
- ``Function``: builtin or user-defined function application
- ``CSymbolFunction``: csymbol functions (``delay``, ``rateOf``)

Only ``Symbol`` and ``CSymbolName`` count as *name* nodes, matching the usual
SBML classification.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

CONSTANT_NAMES = frozenset(
    {"pi", "exponentiale", "true", "false", "infinity", "notanumber"}
)

BUILTIN_FUNCTIONS = frozenset(
    {
        "abs",
        "arccos",
        "arccosh",
        "arcsin",
        "arcsinh",
        "arctan",
        "arctanh",
        "ceil",
        "ceiling",
        "cos",
        "cosh",
        "exp",
        "factorial",
        "floor",
        "ln",
        "log",
        "log10",
        "max",
        "min",
        "piecewise",
        "pow",
        "quotient",
        "rem",
        "root",
        "sin",
        "sinh",
        "sqr",
        "sqrt",
        "tan",
        "tanh",
        "xor",
        "implies",
    }
)

ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "^")
RELATIONAL_OPERATORS = ("==", "!=", "<", "<=", ">", ">=")
LOGICAL_OPERATORS = ("and", "or", "not")


@dataclass(frozen=True)
class Symbol:
    name: str


@dataclass(frozen=True)
class CSymbolName:
    definition: Literal["time", "avogadro"]
    name: str


@dataclass(frozen=True)
class Number:
    value: int | float


@dataclass(frozen=True)
class Constant:
    name: str


@dataclass(frozen=True)
class Operator:
    op: str
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Function:
    name: str
    children: tuple[Node, ...] = ()

    @property
    def is_builtin(self) -> bool:
        return self.name in BUILTIN_FUNCTIONS


@dataclass(frozen=True)
class CSymbolFunction:
    definition: Literal["delay", "rateOf"]
    children: tuple[Node, ...] = ()


Node = Symbol | CSymbolName | Number | Constant | Operator | Function | CSymbolFunction

NODE_TYPES = (Symbol, CSymbolName, Number, Constant, Operator, Function, CSymbolFunction)


def is_name(node: Node) -> bool:
    """Return True for nodes that reference a named quantity."""
    match node:
        case Symbol() | CSymbolName():
            return True
        case _:
            return False


def get_name(node: Node) -> str:
    match node:
        case Symbol(name=name) | CSymbolName(name=name) | Constant(name=name):
            return name
        case Function(name=name):
            return name
        case CSymbolFunction(definition=definition):
            return definition
        case Operator(op=op):
            return op
        case Number(value=value):
            return str(value)
    raise TypeError(f"Not an expression node: {node!r}")


def get_children(node: Node) -> tuple[Node, ...]:
    match node:
        case Operator(children=children) | Function(children=children):
            return children
        case CSymbolFunction(children=children):
            return children
        case _:
            return ()


def num_children(node: Node) -> int:
    return len(get_children(node))


def get_child(node: Node, index: int) -> Node:
    return get_children(node)[index]


def iter_nodes(node: Node | None) -> Iterator[Node]:
    """Yield ``node`` and all its descendants in pre-order."""
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_children(current)))


__all__ = [
    "ARITHMETIC_OPERATORS",
    "BUILTIN_FUNCTIONS",
    "CONSTANT_NAMES",
    "CSymbolFunction",
    "CSymbolName",
    "Constant",
    "Function",
    "LOGICAL_OPERATORS",
    "NODE_TYPES",
    "Node",
    "Number",
    "Operator",
    "RELATIONAL_OPERATORS",
    "Symbol",
    "get_child",
    "get_children",
    "get_name",
    "is_name",
    "iter_nodes",
    "num_children",
]
