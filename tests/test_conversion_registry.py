import pytest

from conftest import make_document, variables
from sbml_rules.conversion import (
    SORT_RULES,
    ConversionProperties,
    Converter,
    ConverterRegistry,
    OperationStatus,
    RuleConverter,
    default_registry,
)


def _sort_properties():
    props = ConversionProperties()
    props.add_option(SORT_RULES, True, "sort rules")
    return props


def test_default_registry_holds_rule_converter():
    registry = default_registry()
    assert registry.num_converters == 1
    converter = registry.get_converter_for(_sort_properties())
    assert isinstance(converter, RuleConverter)
    # each lookup hands out an independent converter
    assert converter is not registry.get_converter_for(_sort_properties())


def test_registries_are_independent():
    first = default_registry()
    second = ConverterRegistry()
    assert second.num_converters == 0
    second.add_converter(RuleConverter())
    assert first.num_converters == 1
    assert second.num_converters == 1


def test_no_matching_converter():
    registry = default_registry()
    assert registry.get_converter_for(ConversionProperties()) is None
    document = make_document([])
    status = registry.convert(document, ConversionProperties())
    assert status is OperationStatus.CONVERSION_NOT_AVAILABLE


def test_registry_convert_sorts_rules(scenario_rules):
    document = make_document(scenario_rules)
    status = default_registry().convert(document, _sort_properties())
    assert status is OperationStatus.SUCCESS
    assert variables(document.model.rules) == ["B", "A", "C"]


def test_conversion_properties_values():
    props = ConversionProperties()
    assert not props.has_option("x")
    assert props.get_value("x", 3) == 3
    props.set_bool_value("flag", True)
    assert props.get_bool_value("flag") is True
    props.add_option("text", "Yes")
    assert props.get_bool_value("text") is True
    assert props.keys() == ["flag", "text"]

    clone = props.copy()
    clone.set_bool_value("flag", False)
    assert props.get_bool_value("flag") is True

    removed = props.remove_option("flag")
    assert removed is not None and removed.key == "flag"
    assert len(props) == 1


def test_converter_base_requires_convert():
    with pytest.raises(TypeError):
        Converter()
