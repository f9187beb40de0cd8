"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from ..models import SBMLDocument
from ..yaml_store import YamlDocumentStore

LOG_LEVEL_ENV = "SBML_RULES_LOG_LEVEL"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level_name: str | None = None) -> None:
    """Route package logging to stderr at ``level_name`` (or the env default)."""
    name = (level_name or os.getenv(LOG_LEVEL_ENV, "WARNING")).upper()
    level = getattr(logging, name, logging.WARNING)
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")
    logging.getLogger("sbml_rules").setLevel(level)


def load_document(path: Path) -> tuple[YamlDocumentStore, SBMLDocument]:
    store = YamlDocumentStore(path)
    try:
        return store, store.load()
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Cannot load {path}: {e}") from e
