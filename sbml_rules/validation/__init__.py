"""Validation entrypoints (structural & semantic)."""

from .semantic import run_cycle_checks, run_math_checks  # noqa: F401
from .structural import run_identifier_checks, run_rule_target_checks  # noqa: F401
