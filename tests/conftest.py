"""Shared pytest fixtures for sbml-rule-converter tests."""

import textwrap
from pathlib import Path

import pytest

from sbml_rules.models import AssignmentRule, Model, Parameter, SBMLDocument


# Helper functions for creating valid test documents
def make_model(rules, constants=("k1", "k2"), **overrides):
    """Create a model whose rule targets are declared non-constant parameters.

    Args:
        rules: Rules in list order.
        constants: Ids declared as constant parameters (readable by math).
        **overrides: Extra Model fields (compartments, species, ...).
    """
    parameters = [Parameter(id=c, value=1.0) for c in constants]
    seen = set(constants)
    for rule in rules:
        variable = getattr(rule, "variable", None)
        if variable and variable not in seen:
            seen.add(variable)
            parameters.append(Parameter(id=variable, constant=False))
    data = {"id": "test_model", "parameters": parameters, "rules": list(rules)}
    data.update(overrides)
    return Model(**data)


def make_document(rules, **kwargs):
    return SBMLDocument(model=make_model(rules, **kwargs))


def assign(variable, math=None):
    return AssignmentRule(variable=variable, math=math)


def variables(rules):
    return [r.variable for r in rules]


@pytest.fixture
def scenario_rules():
    """[A := B + 1, B := 2, C := A * B] in this input order."""
    return [assign("A", "B + 1"), assign("B", "2"), assign("C", "A * B")]


@pytest.fixture
def write_yaml(tmp_path: Path):
    """Write dedented YAML text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "model.yml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write


CASCADE_YAML = """\
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
    - {id: C, constant: false}
    - {id: R, value: 0, constant: false}
  rules:
    - kind: rate
      variable: R
      math: k1 * C
    - kind: assignment
      variable: A
      math: B + 1
    - kind: assignment
      variable: B
      math: k1 * 2
    - kind: assignment
      variable: C
      math: A * B
"""


@pytest.fixture
def cascade_yaml(write_yaml):
    return write_yaml(CASCADE_YAML)
