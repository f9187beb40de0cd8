"""CLI command group for sbml-rule-converter.

This module exposes the root Click command group `sbml_rules` which
aggregates subcommands implemented in sibling modules.

Example usage:

        sbml-rules check model.yml
        sbml-rules deps model.yml
        sbml-rules sort model.yml -o sorted.yml
"""

from __future__ import annotations

import click

from .. import __version__
from .check import check_cmd
from .common import LOG_LEVEL_ENV, LOG_LEVELS, configure_logging
from .deps import deps_cmd
from .sort import sort_cmd


@click.group()
@click.version_option(__version__, prog_name="sbml-rules")
@click.option(
    "--log-level",
    envvar=LOG_LEVEL_ENV,
    default="WARNING",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help=f"Set the logging level (env: {LOG_LEVEL_ENV})",
)
def sbml_rules(log_level: str):  # pragma: no cover - thin group wrapper
    """Assignment-rule ordering and consistency tools."""
    configure_logging(log_level)


# Register subcommands
sbml_rules.add_command(check_cmd)
sbml_rules.add_command(deps_cmd)
sbml_rules.add_command(sort_cmd)

__all__ = ["sbml_rules"]
