"""Semantic validation checks for rule and function-definition math."""

from __future__ import annotations

from ..ast_nodes import Function, Symbol, iter_nodes
from ..diagnostics import Diagnostic, Severity
from ..models import Model, RuleKind
from ..ordering import find_cycles
from ..symbols import extract_read_variables

__all__ = ["run_cycle_checks", "run_math_checks"]


def run_math_checks(model: Model) -> list[Diagnostic]:
    issues: list[Diagnostic] = []
    declared = model.declared_ids()
    functions = model.function_ids()

    for index, rule in enumerate(model.rules):
        element = _rule_label(rule, index)
        if not rule.is_set_math():
            issues.append(
                Diagnostic(
                    "missing-math",
                    Severity.WARNING,
                    f"{rule.kind} rule has no math",
                    element,
                )
            )
            continue
        issues.extend(_check_references(rule.math, declared, functions, element))

    for fd in model.function_definitions:
        if fd.math is None:
            issues.append(
                Diagnostic(
                    "missing-math",
                    Severity.WARNING,
                    "function definition has no math",
                    fd.id,
                )
            )
            continue
        # A function body only sees its own arguments.
        issues.extend(_check_references(fd.math, set(fd.arguments), functions, fd.id))
    return issues


def run_cycle_checks(model: Model) -> list[Diagnostic]:
    """Assignment rules must not depend on themselves, directly or transitively."""
    issues: list[Diagnostic] = []
    rules = model.assignment_rules()
    for rule in rules:
        if rule.variable in extract_read_variables(rule.math):
            issues.append(
                Diagnostic(
                    "assignment-rule-cycle",
                    Severity.ERROR,
                    f"assignment rule for '{rule.variable}' refers to itself",
                    rule.variable,
                )
            )
    for cycle in find_cycles(rules):
        issues.append(
            Diagnostic(
                "assignment-rule-cycle",
                Severity.ERROR,
                "assignment rules for "
                + ", ".join(f"'{v}'" for v in cycle)
                + " depend on each other",
                cycle[0],
            )
        )
    return issues


def _check_references(
    math, visible: set[str], functions: set[str], element: str
) -> list[Diagnostic]:
    issues: list[Diagnostic] = []
    reported: set[str] = set()
    for node in iter_nodes(math):
        match node:
            case Symbol(name=name) if name not in visible and name not in reported:
                reported.add(name)
                issues.append(
                    Diagnostic(
                        "undeclared-symbol",
                        Severity.ERROR,
                        f"math refers to undeclared symbol '{name}'",
                        element,
                    )
                )
            case Function(name=name) if (
                not node.is_builtin and name not in functions and name not in reported
            ):
                reported.add(name)
                issues.append(
                    Diagnostic(
                        "undefined-function",
                        Severity.ERROR,
                        f"math calls undefined function '{name}'",
                        element,
                    )
                )
    return issues


def _rule_label(rule, index: int) -> str:
    if rule.type_code is not RuleKind.algebraic:
        return rule.variable
    return rule.metaid or f"rule[{index}]"
