"""Check command: run the document consistency checks."""

from __future__ import annotations

from pathlib import Path

import click

from .common import load_document


@click.command("check")
@click.argument(
    "document_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def check_cmd(document_path: Path):
    """Report consistency diagnostics for DOCUMENT_PATH."""
    _, document = load_document(document_path)
    document.error_log.clear_log()
    errors = document.check_consistency()
    for diagnostic in document.error_log:
        click.echo(f" - {diagnostic}")
    if errors:
        click.echo(f"Consistency check FAILED ({errors} error(s)).")
        raise SystemExit(1)
    click.echo("Consistency check PASSED.")


__all__ = ["check_cmd"]
