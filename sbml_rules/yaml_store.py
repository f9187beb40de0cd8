"""YAML persistence for documents (one document per file)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .models import SBMLDocument

_RULE_KEY_ORDER = ("kind", "variable", "math", "metaid")


def _prune(value: Any) -> Any:
    """Drop empty values so written files only carry what was set."""
    if isinstance(value, dict):
        return {
            k: _prune(v) for k, v in value.items() if v not in (None, [], "", {})
        }
    if isinstance(value, list):
        return [_prune(v) for v in value]
    return value


def _rule_entry(rule: dict[str, Any]) -> dict[str, Any]:
    ordered = {k: rule[k] for k in _RULE_KEY_ORDER if k in rule}
    ordered.update({k: v for k, v in rule.items() if k not in ordered})
    return ordered


class YamlDocumentStore:
    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser().resolve()

    # Load --------------------------------------------------------------------
    def load(self) -> SBMLDocument:
        with open(self.path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path.name}: expected a mapping at the top level")
        return SBMLDocument.model_validate(data)

    # Write -------------------------------------------------------------------
    def dump(self, document: SBMLDocument) -> dict[str, Any]:
        data = _prune(document.model_dump())
        model = data.get("model")
        if model and "rules" in model:
            model["rules"] = [_rule_entry(r) for r in model["rules"]]
        return data

    def write(self, document: SBMLDocument, path: str | Path | None = None) -> Path:
        target = self.path if path is None else Path(path).expanduser().resolve()
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as fh:
            yaml.safe_dump(
                self.dump(document), fh, sort_keys=False, allow_unicode=True, width=100
            )
        return target


def load_document(path: str | Path) -> SBMLDocument:
    return YamlDocumentStore(path).load()


__all__ = ["YamlDocumentStore", "load_document"]
