"""Sort command: reorder assignment rules into evaluation order."""

from __future__ import annotations

from pathlib import Path

import click

from ..conversion import SORT_RULES, OperationStatus, RuleConverter, default_registry
from .common import load_document


@click.command("sort")
@click.argument(
    "document_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the sorted document here (default: overwrite DOCUMENT_PATH).",
)
@click.option(
    "--sort-rules/--no-sort-rules",
    default=True,
    show_default=True,
    help="Value of the sortRules conversion option.",
)
def sort_cmd(document_path: Path, output: Path | None, sort_rules: bool):
    """Reorder the assignment rules of DOCUMENT_PATH so dependencies come first."""
    store, document = load_document(document_path)
    properties = RuleConverter().get_default_properties()
    properties.set_bool_value(SORT_RULES, sort_rules)

    status = default_registry().convert(document, properties)

    if status is OperationStatus.INVALID_SOURCE_DOCUMENT:
        click.echo("Sorting FAILED: source document is not consistent:")
        for diagnostic in document.error_log.errors():
            click.echo(f" - {diagnostic}")
        raise SystemExit(1)
    if status is not OperationStatus.SUCCESS:
        click.echo(f"Sorting FAILED: {status.name}")
        raise SystemExit(2)

    target = store.write(document, output)
    count = len(document.model.assignment_rules()) if document.model else 0
    click.echo(f"Sorted {count} assignment rule(s) -> {target}")


__all__ = ["sort_cmd"]
