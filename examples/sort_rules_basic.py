"""Assignment rule sorting example.

Demonstrates:
  * Building a document in code with rules in an unsafe evaluation order
  * Inspecting the dependency graph and any cycles
  * Sorting through the default converter registry
  * A document that fails the consistency pre-check is left untouched
  * Writing the sorted document to YAML in a temporary directory

Run:
    python examples/sort_rules_basic.py

"""

from __future__ import annotations

import tempfile
from pathlib import Path

from sbml_rules.conversion import SORT_RULES, ConversionProperties, default_registry
from sbml_rules.models import (
    AssignmentRule,
    Model,
    Parameter,
    RateRule,
    SBMLDocument,
)
from sbml_rules.ordering import build_graph, find_cycles
from sbml_rules.yaml_store import YamlDocumentStore


def make_document(rules) -> SBMLDocument:
    targets = [Parameter(id=r.variable, constant=False) for r in rules]
    return SBMLDocument(
        model=Model(
            id="example",
            parameters=[Parameter(id="k1", value=0.5), *targets],
            rules=rules,
        )
    )


def demo():
    rules = [
        RateRule(variable="R", math="k1 * total"),
        AssignmentRule(variable="total", math="free + bound"),
        AssignmentRule(variable="bound", math="free * k1"),
        AssignmentRule(variable="free", math="10"),
    ]
    document = make_document(rules)
    batch = document.model.assignment_rules()
    print("Dependencies:")
    for variable, deps in build_graph(batch).items():
        print(f"  {variable} <- {sorted(deps)}")
    print("Cycles:", find_cycles(batch))

    props = ConversionProperties()
    props.add_option(SORT_RULES, True, "sort rules")
    registry = default_registry()

    status = registry.convert(document, props)
    print("Status:", status.name)
    print("Rule order:", [getattr(r, "variable", "-") for r in document.model.rules])

    # Inconsistent document -------------------------------------------------
    broken = make_document(
        [
            AssignmentRule(variable="x", math="y + undefined_parameter"),
            AssignmentRule(variable="y", math="2"),
        ]
    )
    status = registry.convert(broken, props)
    print("\nBroken document status:", status.name)
    for diagnostic in broken.error_log.errors():
        print(" -", diagnostic)
    print("Rule order kept:", [r.variable for r in broken.model.rules])

    with tempfile.TemporaryDirectory(prefix="sbml_rules_") as tmp:
        path = Path(tmp) / "example.yml"
        YamlDocumentStore(path).write(document)
        print("\nWritten YAML:\n")
        print(path.read_text(encoding="utf-8"))


if __name__ == "__main__":  # pragma: no cover
    demo()
