"""Explicit converter registry.

The host application builds a registry and hands it to whatever needs to
look up converters; nothing registers itself at import time.
"""

from __future__ import annotations

import logging

from ..models import SBMLDocument
from .base import Converter, OperationStatus
from .properties import ConversionProperties
from .rule_converter import RuleConverter

logger = logging.getLogger(__name__)


class ConverterRegistry:
    def __init__(self, converters: list[Converter] | None = None):
        self._converters: list[Converter] = list(converters or [])

    def add_converter(self, converter: Converter) -> None:
        self._converters.append(converter)

    @property
    def num_converters(self) -> int:
        return len(self._converters)

    def get_converter_for(self, properties: ConversionProperties) -> Converter | None:
        """Return a fresh clone of the first converter matching ``properties``."""
        for converter in self._converters:
            if converter.matches_properties(properties):
                return converter.clone()
        return None

    def convert(
        self, document: SBMLDocument, properties: ConversionProperties
    ) -> OperationStatus:
        converter = self.get_converter_for(properties)
        if converter is None:
            logger.warning("No converter matches %r", properties)
            return OperationStatus.CONVERSION_NOT_AVAILABLE
        converter.set_properties(properties)
        converter.set_document(document)
        status = converter.convert()
        logger.debug("%s finished with %s", converter.name, status.name)
        return status


def default_registry() -> ConverterRegistry:
    """Registry holding the converters shipped with this package."""
    return ConverterRegistry([RuleConverter()])


__all__ = ["ConverterRegistry", "default_registry"]
