"""Structural validation checks.

These checks look at identifiers and rule targets across the whole model,
without interpreting any math.
"""

from __future__ import annotations

from collections import Counter

from ..diagnostics import Diagnostic, Severity
from ..models import Model, RuleKind

__all__ = ["run_identifier_checks", "run_rule_target_checks"]


def run_identifier_checks(model: Model) -> list[Diagnostic]:
    """Every component and function definition id must be unique."""
    ids = [
        *(f.id for f in model.function_definitions),
        *(c.id for c in model.compartments),
        *(s.id for s in model.species),
        *(p.id for p in model.parameters),
    ]
    issues: list[Diagnostic] = []
    for identifier, count in Counter(ids).items():
        if count > 1:
            issues.append(
                Diagnostic(
                    "duplicate-id",
                    Severity.ERROR,
                    f"identifier '{identifier}' is declared {count} times",
                    identifier,
                )
            )
    return issues


def run_rule_target_checks(model: Model) -> list[Diagnostic]:
    """Rule variables must exist, be non-constant and be set by one rule only.

    Current rules:
        * assignment/rate rule variable names a compartment, species or parameter
        * that component is not declared constant
        * at most one assignment or rate rule targets any variable
    """
    issues: list[Diagnostic] = []
    components = model.variable_components()
    targets: Counter[str] = Counter()
    for rule in model.rules:
        if rule.type_code is RuleKind.algebraic:
            continue
        variable = rule.variable
        targets[variable] += 1
        component = components.get(variable)
        if component is None:
            issues.append(
                Diagnostic(
                    "undeclared-rule-variable",
                    Severity.ERROR,
                    f"{rule.kind} rule assigns undeclared variable '{variable}'",
                    variable,
                )
            )
        elif component.constant:
            issues.append(
                Diagnostic(
                    "constant-rule-variable",
                    Severity.ERROR,
                    f"{rule.kind} rule assigns '{variable}' which is declared constant",
                    variable,
                )
            )
    for variable, count in targets.items():
        if count > 1:
            issues.append(
                Diagnostic(
                    "multiple-rules-for-variable",
                    Severity.ERROR,
                    f"'{variable}' is the target of {count} assignment/rate rules",
                    variable,
                )
            )
    return issues
