"""Pydantic models for SBML-style documents.

Only the parts of an SBML model the rule converter and its consistency checks
touch are represented: compartments, species, parameters, function
definitions and the ordered list of rules.

Example document (YAML)::

  level: 3
  version: 2
  model:
    id: cascade
    compartments:
      - {id: cell, size: 1}
    parameters:
      - {id: k1, value: 0.5}
      - {id: A, constant: false}
      - {id: B, constant: false}
    rules:
      - kind: assignment
        variable: A
        math: B + 1
      - kind: assignment
        variable: B
        math: k1 * 2

Rules form a discriminated union on ``kind`` (assignment, rate, algebraic).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .diagnostics import ErrorLog, Severity, ValidatorCategory
from .field_types import Math, SId


class RuleKind(str, Enum):
    """Runtime enum for rule kinds."""

    assignment = "assignment"
    rate = "rate"
    algebraic = "algebraic"


class RuleBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    metaid: str = ""
    math: Math = None

    def is_set_math(self) -> bool:
        return self.math is not None

    @property
    def type_code(self) -> RuleKind:
        return RuleKind(self.kind)  # type: ignore[attr-defined]


class AssignmentRule(RuleBase):
    """``variable := math``, holding at all times."""

    kind: Literal["assignment"] = "assignment"
    variable: SId


class RateRule(RuleBase):
    """``d(variable)/dt = math``."""

    kind: Literal["rate"] = "rate"
    variable: SId


class AlgebraicRule(RuleBase):
    """``0 = math``."""

    kind: Literal["algebraic"] = "algebraic"


Rule = Annotated[
    AssignmentRule | RateRule | AlgebraicRule,
    Field(discriminator="kind"),
]


class Compartment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: SId
    name: str = ""
    size: float | None = None
    constant: bool = True


class Species(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: SId
    name: str = ""
    compartment: SId
    initial_concentration: float | None = None
    initial_amount: float | None = None
    boundary_condition: bool = False
    constant: bool = False


class Parameter(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: SId
    name: str = ""
    value: float | None = None
    constant: bool = True


class FunctionDefinition(BaseModel):
    """Named lambda; ``arguments`` are the bound variables of ``math``."""

    model_config = ConfigDict(extra="forbid")

    id: SId
    name: str = ""
    arguments: list[SId] = Field(default_factory=list)
    math: Math = None


class Model(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = ""
    name: str = ""
    function_definitions: list[FunctionDefinition] = Field(default_factory=list)
    compartments: list[Compartment] = Field(default_factory=list)
    species: list[Species] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    rules: list[Rule] = Field(default_factory=list)

    # Rule list -----------------------------------------------------------
    @property
    def num_rules(self) -> int:
        return len(self.rules)

    def get_rule(self, index: int) -> AssignmentRule | RateRule | AlgebraicRule:
        return self.rules[index]

    def remove_rule(self, index: int) -> AssignmentRule | RateRule | AlgebraicRule:
        """Detach and return the rule at ``index``."""
        return self.rules.pop(index)

    def insert_rule(
        self, index: int, rule: AssignmentRule | RateRule | AlgebraicRule
    ) -> None:
        self.rules.insert(index, rule)

    def add_rule(self, rule: AssignmentRule | RateRule | AlgebraicRule) -> None:
        self.rules.append(rule)

    def assignment_rules(self) -> list[AssignmentRule]:
        return [r for r in self.rules if r.type_code is RuleKind.assignment]

    # Components ----------------------------------------------------------
    def variable_components(self) -> dict[str, Compartment | Species | Parameter]:
        """Components a rule may assign, keyed by id (first wins on duplicates)."""
        found: dict[str, Compartment | Species | Parameter] = {}
        for component in [*self.compartments, *self.species, *self.parameters]:
            found.setdefault(component.id, component)
        return found

    def declared_ids(self) -> set[str]:
        return set(self.variable_components())

    def function_ids(self) -> set[str]:
        return {f.id for f in self.function_definitions}


class SBMLDocument(BaseModel):
    """Top-level document: SBML level/version plus an optional model.

    The document owns an :class:`ErrorLog` that consistency checks append to
    and a set of applicable validator categories.
    """

    model_config = ConfigDict(extra="forbid")

    level: int = 3
    version: int = 2
    model: Model | None = None

    _error_log: ErrorLog = PrivateAttr(default_factory=ErrorLog)
    _applicable_validators: ValidatorCategory = PrivateAttr(
        default=ValidatorCategory.ALL
    )

    @property
    def error_log(self) -> ErrorLog:
        return self._error_log

    @property
    def applicable_validators(self) -> ValidatorCategory:
        return self._applicable_validators

    @applicable_validators.setter
    def applicable_validators(self, categories: ValidatorCategory) -> None:
        self._applicable_validators = ValidatorCategory(categories)

    def check_consistency(self) -> int:
        """Run the applicable checks, append findings to the error log.

        Returns the number of diagnostics at ERROR severity or worse.
        """
        from .services import check_consistency  # noqa: PLC0415

        if self.model is None:
            return 0
        diagnostics = check_consistency(self.model, self.applicable_validators)
        self._error_log.extend(diagnostics)
        return sum(1 for d in diagnostics if d.severity >= Severity.ERROR)


__all__ = [
    "AlgebraicRule",
    "AssignmentRule",
    "Compartment",
    "FunctionDefinition",
    "Model",
    "Parameter",
    "RateRule",
    "Rule",
    "RuleKind",
    "SBMLDocument",
    "Species",
]
