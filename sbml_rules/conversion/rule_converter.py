"""Converter that sorts a model's assignment rules into evaluation order.

Workflow of :meth:`RuleConverter.convert`:

1. No document or no model -> ``INVALID_OBJECT``.
2. ``sortRules`` switched off -> ``SUCCESS`` without touching anything.
3. No rules at all -> ``SUCCESS``.
4. Consistency pre-check with every validator category enabled (the error
   log is cleared first, the document's own categories are restored after).
   Any ERROR/FATAL diagnostic -> ``INVALID_SOURCE_DOCUMENT``, rules untouched.
5. Assignment rules are ordered (see :mod:`sbml_rules.ordering`), detached
   from the rule list walking backwards, and the ordered batch is inserted at
   the front. Other rule kinds keep their relative order behind the batch.

Any failure during step 5 restores the rule list exactly as found and yields
``OPERATION_FAILED``.

The batch handed to the orderer is in document order, so rules with no
dependency between them keep their document order. This deliberately differs
from libsbml, which orders the batch as it was detached (reverse document
order) and therefore reverses independent rules.
"""

from __future__ import annotations

import logging

from ..diagnostics import Severity, ValidatorCategory
from ..models import Model, RuleKind, SBMLDocument
from ..ordering import OrderingError, order_rules
from .base import Converter, OperationStatus
from .properties import ConversionProperties

SORT_RULES = "sortRules"

logger = logging.getLogger(__name__)


class RuleConverter(Converter):
    name = "rule-sorter"

    def get_default_properties(self) -> ConversionProperties:
        props = ConversionProperties()
        props.add_option(SORT_RULES, True, "sort rules")
        return props

    def matches_properties(self, properties: ConversionProperties) -> bool:
        return properties is not None and properties.has_option(SORT_RULES)

    def convert(self) -> OperationStatus:
        document = self.document
        if document is None or document.model is None:
            return OperationStatus.INVALID_OBJECT
        model = document.model

        if not self.properties.get_bool_value(SORT_RULES, True):
            logger.debug("%s disabled; rules left as found", SORT_RULES)
            return OperationStatus.SUCCESS
        if model.num_rules == 0:
            return OperationStatus.SUCCESS

        original = list(model.rules)
        try:
            if not self._source_is_valid(document):
                return OperationStatus.INVALID_SOURCE_DOCUMENT
            self._reorder(model)
        except Exception:
            logger.exception("Rule sorting failed; restoring the original rule list")
            model.rules[:] = original
            return OperationStatus.OPERATION_FAILED
        return OperationStatus.SUCCESS

    def _source_is_valid(self, document: SBMLDocument) -> bool:
        log = document.error_log
        log.clear_log()
        applicable = document.applicable_validators
        document.applicable_validators = ValidatorCategory.ALL
        try:
            document.check_consistency()
        finally:
            document.applicable_validators = applicable
        failures = log.num_fails_with_severity(
            Severity.ERROR
        ) + log.num_fails_with_severity(Severity.FATAL)
        if failures:
            logger.info(
                "Source document failed consistency check with %d error(s)", failures
            )
        return failures == 0

    def _reorder(self, model: Model) -> None:
        total = model.num_rules
        ordered = order_rules(model.assignment_rules())

        # Walk backwards so indices still to visit stay valid.
        detached = 0
        for i in range(total - 1, -1, -1):
            if model.get_rule(i).type_code is RuleKind.assignment:
                model.remove_rule(i)
                detached += 1
        logger.debug("Detached %d assignment rule(s)", detached)
        if detached != len(ordered):
            raise OrderingError(
                f"Detached {detached} assignment rules but ordered {len(ordered)}"
            )

        for rule in reversed(ordered):
            model.insert_rule(0, rule)
        if model.num_rules != total:
            raise OrderingError(
                f"Rule list holds {model.num_rules} rules after reinsertion, expected {total}"
            )
        logger.debug("Reinserted %d assignment rule(s) at the front", len(ordered))


__all__ = ["RuleConverter", "SORT_RULES"]
