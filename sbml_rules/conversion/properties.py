"""Conversion options passed to converters.

A converter advertises its options through ``get_default_properties`` and
decides whether it handles a request by inspecting the options present.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any


@dataclass
class ConversionOption:
    key: str
    value: Any
    description: str = ""


class ConversionProperties:
    def __init__(self, options: dict[str, ConversionOption] | None = None):
        self._options: dict[str, ConversionOption] = dict(options or {})

    def add_option(self, key: str, value: Any = True, description: str = "") -> None:
        self._options[key] = ConversionOption(key, value, description)

    def remove_option(self, key: str) -> ConversionOption | None:
        return self._options.pop(key, None)

    def has_option(self, key: str) -> bool:
        return key in self._options

    def get_option(self, key: str) -> ConversionOption | None:
        return self._options.get(key)

    def get_value(self, key: str, default: Any = None) -> Any:
        option = self._options.get(key)
        return default if option is None else option.value

    def get_bool_value(self, key: str, default: bool = False) -> bool:
        value = self.get_value(key, default)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    def set_bool_value(self, key: str, value: bool) -> None:
        option = self._options.get(key)
        if option is None:
            self.add_option(key, bool(value))
        else:
            option.value = bool(value)

    def keys(self) -> list[str]:
        return list(self._options)

    def copy(self) -> ConversionProperties:
        return ConversionProperties(copy.deepcopy(self._options))

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={o.value!r}" for k, o in self._options.items())
        return f"ConversionProperties({items})"


__all__ = ["ConversionOption", "ConversionProperties"]
