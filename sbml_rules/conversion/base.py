"""Converter base class and status codes."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from enum import IntEnum

from ..models import SBMLDocument
from .properties import ConversionProperties


class OperationStatus(IntEnum):
    """Result of a conversion; converters report through these, never by raising."""

    SUCCESS = 0
    OPERATION_FAILED = -3
    INVALID_OBJECT = -5
    INVALID_SOURCE_DOCUMENT = -1011
    CONVERSION_NOT_AVAILABLE = -1010


class Converter(ABC):
    """Base class for document converters.

    Subclasses override ``get_default_properties``, ``matches_properties`` and
    ``convert``. A converter instance works on one ``document`` at a time and
    must not be shared between concurrent callers.
    """

    name = "converter"

    def __init__(self, properties: ConversionProperties | None = None):
        self.document: SBMLDocument | None = None
        self.properties = (
            properties if properties is not None else self.get_default_properties()
        )

    def get_default_properties(self) -> ConversionProperties:
        return ConversionProperties()

    def matches_properties(self, properties: ConversionProperties) -> bool:
        return False

    def set_document(self, document: SBMLDocument | None) -> None:
        self.document = document

    def set_properties(self, properties: ConversionProperties) -> None:
        self.properties = properties

    def clone(self) -> Converter:
        duplicate = copy.copy(self)
        duplicate.properties = self.properties.copy()
        duplicate.document = None
        return duplicate

    @abstractmethod
    def convert(self) -> OperationStatus:
        """Run the conversion on ``document`` and report the outcome."""


__all__ = ["Converter", "OperationStatus"]
