"""Document converters and the registry used to look them up."""

from .base import Converter, OperationStatus  # noqa: F401
from .properties import ConversionOption, ConversionProperties  # noqa: F401
from .registry import ConverterRegistry, default_registry  # noqa: F401
from .rule_converter import SORT_RULES, RuleConverter  # noqa: F401
