"""Deps command: show the assignment-rule dependency graph and order."""

from __future__ import annotations

from pathlib import Path

import click

from ..ordering import build_graph, find_cycles, order_rules
from .common import load_document


@click.command("deps")
@click.argument(
    "document_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def deps_cmd(document_path: Path):
    """Print which assignment rules each rule of DOCUMENT_PATH depends on."""
    _, document = load_document(document_path)
    rules = document.model.assignment_rules() if document.model else []
    if not rules:
        click.echo("No assignment rules.")
        return
    graph = build_graph(rules)
    for rule in rules:
        deps = ", ".join(sorted(graph[rule.variable])) or "-"
        click.echo(f"{rule.variable} <- {deps}")
    click.echo("Order: " + " ".join(r.variable for r in order_rules(rules, graph)))
    for cycle in find_cycles(rules, graph):
        click.echo("Cycle: " + " ".join(cycle))


__all__ = ["deps_cmd"]
