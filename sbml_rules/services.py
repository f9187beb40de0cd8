"""Service layer utilities: consistency-check aggregation."""

from __future__ import annotations

from .diagnostics import Diagnostic, ValidatorCategory
from .models import Model
from .validation.semantic import run_cycle_checks, run_math_checks
from .validation.structural import run_identifier_checks, run_rule_target_checks


def check_consistency(
    model: Model, categories: ValidatorCategory = ValidatorCategory.ALL
) -> list[Diagnostic]:
    """Run the checks enabled in ``categories`` returning every diagnostic."""
    issues: list[Diagnostic] = []
    if categories & ValidatorCategory.IDENTIFIER:
        issues.extend(run_identifier_checks(model))
    if categories & ValidatorCategory.GENERAL:
        issues.extend(run_rule_target_checks(model))
        issues.extend(run_cycle_checks(model))
    if categories & ValidatorCategory.MATH:
        issues.extend(run_math_checks(model))
    return issues


__all__ = ["check_consistency"]
