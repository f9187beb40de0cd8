"""Infix formula codec for rule math.

Formulas are written in an SBML-flavoured infix syntax and parsed with the
standard library :mod:`ast` module in ``eval`` mode. ``^`` is accepted as the
power operator; logical operators use Python spelling (``and``, ``or``,
``not``).

Examples::

    parse_formula("k1 * S1 / (Km + S1)")
    parse_formula("piecewise(0, time < 10, 1)")
    parse_formula("V^2 if flag else 0")      # -> piecewise(V^2, flag, 0)
"""

from __future__ import annotations

import ast
import math

from .ast_nodes import (
    CONSTANT_NAMES,
    CSymbolFunction,
    CSymbolName,
    Constant,
    Function,
    Node,
    Number,
    Operator,
    Symbol,
)


class FormulaError(ValueError):
    """Raised when a formula cannot be parsed or rendered."""


_BINARY_OPERATORS: dict[type[ast.operator], str] = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
    ast.Pow: "^",
}

_COMPARISON_OPERATORS: dict[type[ast.cmpop], str] = {
    ast.Eq: "==",
    ast.NotEq: "!=",
    ast.Lt: "<",
    ast.LtE: "<=",
    ast.Gt: ">",
    ast.GtE: ">=",
}

_CSYMBOL_NAMES = {"time": "time", "avogadro": "avogadro"}
_CSYMBOL_FUNCTIONS = {"delay": "delay", "rateOf": "rateOf"}

# Python precedence levels, lowest binds loosest.
_PRECEDENCE = {
    "or": 1,
    "and": 2,
    "not": 3,
    "==": 4,
    "!=": 4,
    "<": 4,
    "<=": 4,
    ">": 4,
    ">=": 4,
    "+": 5,
    "-": 5,
    "*": 6,
    "/": 6,
    "neg": 7,
    "^": 8,
}
_ATOM = 9


def parse_formula(text: str) -> Node:
    """Parse an infix formula into an expression tree."""
    source = text.strip()
    if not source:
        raise FormulaError("Empty formula")
    try:
        tree = ast.parse(source.replace("^", "**"), mode="eval")
        return _convert(tree.body, text)
    except SyntaxError as e:
        raise FormulaError(f"Invalid formula '{text}': {e.msg}") from e
    except (RecursionError, MemoryError) as e:
        raise FormulaError(
            f"Formula too deeply nested ({len(source)} characters)"
        ) from e


def _convert(node: ast.expr, text: str) -> Node:
    match node:
        case ast.Constant(value=bool() as flag):
            return Constant("true" if flag else "false")
        case ast.Constant(value=int() | float() as value):
            return Number(value)
        case ast.Name(id=name):
            if name in _CSYMBOL_NAMES:
                return CSymbolName(_CSYMBOL_NAMES[name], name)
            if name in CONSTANT_NAMES:
                return Constant(name)
            return Symbol(name)
        case ast.BinOp(left=left, op=op, right=right) if type(op) in _BINARY_OPERATORS:
            return Operator(
                _BINARY_OPERATORS[type(op)],
                (_convert(left, text), _convert(right, text)),
            )
        case ast.UnaryOp(op=ast.UAdd(), operand=operand):
            return _convert(operand, text)
        case ast.UnaryOp(op=ast.USub(), operand=operand):
            return Operator("-", (_convert(operand, text),))
        case ast.UnaryOp(op=ast.Not(), operand=operand):
            return Operator("not", (_convert(operand, text),))
        case ast.BoolOp(op=op, values=values):
            name = "and" if isinstance(op, ast.And) else "or"
            return Operator(name, tuple(_convert(v, text) for v in values))
        case ast.Compare(left=left, ops=ops, comparators=comparators):
            operands = [left, *comparators]
            pairs = []
            for i, op in enumerate(ops):
                symbol = _COMPARISON_OPERATORS.get(type(op))
                if symbol is None:
                    raise FormulaError(f"Unsupported comparison in '{text}'")
                pairs.append(
                    Operator(
                        symbol,
                        (_convert(operands[i], text), _convert(operands[i + 1], text)),
                    )
                )
            # a < b < c  ->  (a < b) and (b < c)
            return pairs[0] if len(pairs) == 1 else Operator("and", tuple(pairs))
        case ast.Call(func=ast.Name(id=name), args=args, keywords=[]):
            children = tuple(_convert(a, text) for a in args)
            if name in _CSYMBOL_FUNCTIONS:
                return CSymbolFunction(_CSYMBOL_FUNCTIONS[name], children)
            return Function(name, children)
        case ast.IfExp(test=test, body=body, orelse=orelse):
            return Function(
                "piecewise",
                (_convert(body, text), _convert(test, text), _convert(orelse, text)),
            )
    raise FormulaError(
        f"Unsupported construct '{type(node).__name__}' in formula '{text}'"
    )


def format_formula(node: Node) -> str:
    """Render an expression tree as an infix formula."""
    try:
        return _format(node)[0]
    except RecursionError as e:
        raise FormulaError("Expression tree too deeply nested to render") from e


def _format(node: Node) -> tuple[str, int]:
    match node:
        case Symbol(name=name) | CSymbolName(name=name) | Constant(name=name):
            return name, _ATOM
        case Number(value=value):
            if math.isnan(value):
                return "notanumber", _ATOM
            if math.isinf(value):
                text = "infinity" if value > 0 else "-infinity"
                return text, (_PRECEDENCE["neg"] if value < 0 else _ATOM)
            text = repr(value)
            return text, (_PRECEDENCE["neg"] if value < 0 else _ATOM)
        case Function(name=name, children=children):
            return f"{name}({', '.join(format_formula(c) for c in children)})", _ATOM
        case CSymbolFunction(definition=name, children=children):
            return f"{name}({', '.join(format_formula(c) for c in children)})", _ATOM
        case Operator(op="-", children=(operand,)):
            text = _wrap(operand, _PRECEDENCE["neg"])
            return ("- " if text.startswith("-") else "-") + text, _PRECEDENCE["neg"]
        case Operator(op="not", children=(operand,)):
            return f"not {_wrap(operand, _PRECEDENCE['not'])}", _PRECEDENCE["not"]
        case Operator(op="^", children=(base, exponent)):
            prec = _PRECEDENCE["^"]
            return f"{_wrap(base, prec + 1)} ^ {_wrap(exponent, prec - 1)}", prec
        case Operator(op=op, children=children) if len(children) >= 2:
            prec = _PRECEDENCE.get(op)
            if prec is None or op == "not":
                raise FormulaError(f"Cannot render operator '{op}'")
            if prec == 4 and len(children) != 2:
                raise FormulaError(f"Relational operator '{op}' takes two operands")
            first = _wrap(children[0], prec if prec > 4 else prec + 1)
            rest = [_wrap(c, prec + 1) for c in children[1:]]
            return f" {op} ".join([first, *rest]), prec
    raise FormulaError(f"Cannot render node {node!r}")


def _wrap(node: Node, minimum: int) -> str:
    text, prec = _format(node)
    return text if prec >= minimum else f"({text})"


__all__ = ["FormulaError", "format_formula", "parse_formula"]
