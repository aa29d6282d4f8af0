# normadb/rules/__init__.py
"""Normalization rules for normadb."""

from normadb.rules.base import NormalizationRule, RuleResult, RuleExplanation
from normadb.rules.first_normal_form import (
    PrimaryKeyRule,
    NoRepeatingGroupsRule,
    AtomicValuesRule,
)
from normadb.rules.second_normal_form import (
    NoPartialDependencyRule,
    FullFunctionalDependencyRule,
)
from normadb.rules.third_normal_form import (
    NoTransitiveDependencyRule,
    BoyceCoddRule,
)
from normadb.rules.rule_set import RuleSet

__all__ = [
    # Base
    "NormalizationRule",
    "RuleResult",
    "RuleExplanation",
    # 1NF
    "PrimaryKeyRule",
    "NoRepeatingGroupsRule",
    "AtomicValuesRule",
    # 2NF
    "NoPartialDependencyRule",
    "FullFunctionalDependencyRule",
    # 3NF
    "NoTransitiveDependencyRule",
    "BoyceCoddRule",
    # Registry
    "RuleSet",
]
