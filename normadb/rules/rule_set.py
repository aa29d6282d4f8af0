# normadb/rules/rule_set.py
"""Ordered registry of normalization rules."""

import logging
from typing import Optional

from normadb.models.analysis import NormalForm, Violation
from normadb.models.schema import Schema, Table
from normadb.rules.base import NormalizationRule
from normadb.rules.first_normal_form import (
    AtomicValuesRule,
    NoRepeatingGroupsRule,
    PrimaryKeyRule,
)
from normadb.rules.second_normal_form import (
    FullFunctionalDependencyRule,
    NoPartialDependencyRule,
)
from normadb.rules.third_normal_form import BoyceCoddRule, NoTransitiveDependencyRule
from normadb.utils.constants import NF_MAX_WEIGHTS, SCORING_VERSION
from normadb.utils.exceptions import RuleEvaluationError

logger = logging.getLogger("rule-set")


class RuleSet:
    """An ordered, immutable collection of rules.

    Registration order determines evaluation order and therefore the order
    in which violations are reported.
    """

    def __init__(self, rules: list[NormalizationRule]):
        ids = [rule.rule_id for rule in rules]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate rule ids in rule set: {ids}")
        self._rules = tuple(rules)
        self._by_id = {rule.rule_id: rule for rule in rules}

    @classmethod
    def standard(cls) -> "RuleSet":
        """Build the version-locked standard rule set.

        Raises:
            ValueError: If the rule weights no longer add up to the locked
                per normal form maxima.
        """
        rule_set = cls([
            PrimaryKeyRule(),
            NoRepeatingGroupsRule(),
            AtomicValuesRule(),
            NoPartialDependencyRule(),
            FullFunctionalDependencyRule(),
            NoTransitiveDependencyRule(),
            BoyceCoddRule(),
        ])
        for nf, expected in NF_MAX_WEIGHTS.items():
            actual = rule_set.max_weight(nf)
            if abs(actual - expected) > 1e-9:
                raise ValueError(
                    f"Scoring v{SCORING_VERSION}: {nf} weights sum to {actual}, "
                    f"expected {expected}"
                )
        return rule_set

    @property
    def rules(self) -> tuple[NormalizationRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def get_rule(self, rule_id: str) -> Optional[NormalizationRule]:
        return self._by_id.get(rule_id)

    def rules_for(self, normal_form) -> list[NormalizationRule]:
        nf = NormalForm(normal_form)
        return [rule for rule in self._rules if rule.normal_form == nf]

    def max_weight(self, normal_form) -> float:
        total = 0.0
        for rule in self.rules_for(normal_form):
            total += rule.weight
        return round(total, 10)

    def evaluate_table(self, table: Table) -> list[Violation]:
        """Run every rule against one table, in registration order.

        A rule that raises is logged and skipped; the remaining rules
        still run.

        Args:
            table: The canonical table.

        Returns:
            Raw, unresolved violations.
        """
        violations: list[Violation] = []
        for rule in self._rules:
            try:
                result = rule.evaluate(table)
            except Exception as e:
                error = RuleEvaluationError(rule.rule_id, table.qualified_name, str(e))
                logger.error("%s", error.message)
                continue
            violations.extend(result.violations)
        return violations

    def evaluate(self, schema: Schema) -> list[Violation]:
        """Run every rule against every table of a schema."""
        violations: list[Violation] = []
        for table in schema.table_list():
            violations.extend(self.evaluate_table(table))
        return violations
