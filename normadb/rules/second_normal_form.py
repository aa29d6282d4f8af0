# normadb/rules/second_normal_form.py
"""Second normal form rules.

Both rules are name-based heuristics over English column names; they cannot
see actual functional dependencies.
"""

import re

from normadb.models.analysis import NormalForm, Severity
from normadb.models.schema import Column, Table
from normadb.rules.base import NormalizationRule, RuleExplanation, RuleResult


class NoPartialDependencyRule(NormalizationRule):
    """Non-key columns depending on part of a composite key (heuristic)."""

    rule_id = "2nf.partial_dependency"
    normal_form = NormalForm.SECOND
    name = "No Partial Dependencies"
    description = "Non-key attributes must depend on the entire primary key"
    weight = 0.60

    REPORT_THRESHOLD = 0.6

    # (key suffix, confidence when the key stem appears in a column name)
    KEY_SUFFIXES = [
        ("_id", 0.8),
        ("_code", 0.8),
        ("_type", 0.7),
        ("_name", 0.6),
    ]
    DESCRIPTION_CONFIDENCE = 0.6

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        if table.has_composite_primary_key():
            for column in table.non_key_columns():
                confidence = self.assess_confidence(column, table)
                if confidence >= self.REPORT_THRESHOLD:
                    violations.append(self._violation(
                        table,
                        column.name,
                        f"Column '{column.name}' may have partial dependency on "
                        "composite primary key",
                        "Second Normal Form requires that non-key attributes depend on "
                        "the entire primary key, not just part of it.",
                        f"Consider moving '{column.name}' to a separate table with the "
                        "relevant part of the composite key",
                        severity=Severity.WARNING,
                        confidence=confidence
                    ))

        return self._result(
            violations,
            max((v.confidence for v in violations), default=0.6),
            "Some columns may depend on only part of the composite primary key",
            "No partial dependencies detected"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails="Some non-key attributes appear to depend on only part of the composite primary key.",
            what_to_fix_first="Move attributes that describe one key part into that part's own table.",
            example_fix_sql=(
                "-- Instead of enrollment(student_id, course_id, student_name):\n"
                "CREATE TABLE students (student_id INTEGER PRIMARY KEY, student_name TEXT);"
            ),
            impact="High (60%)"
        )

    def assess_confidence(self, column: Column, table: Table) -> float:
        """Score how strongly a column name echoes one primary key part."""
        confidence = 0.0
        column_name = column.name.lower()
        key_parts = [pk.lower() for pk in table.primary_keys]

        for key in key_parts:
            for suffix, weight in self.KEY_SUFFIXES:
                if not key.endswith(suffix):
                    continue
                stem = key[:-len(suffix)]
                if stem and stem in column_name:
                    confidence = max(confidence, weight)

        if "description" in column_name and any("id" in key for key in key_parts):
            confidence = max(confidence, self.DESCRIPTION_CONFIDENCE)

        return confidence


class FullFunctionalDependencyRule(NormalizationRule):
    """Derived or aggregate columns stored alongside the key (heuristic)."""

    rule_id = "2nf.full_functional_dependency"
    normal_form = NormalForm.SECOND
    name = "Full Functional Dependency"
    description = "All non-key attributes must fully depend on the primary key"
    weight = 0.40

    DERIVED_CONFIDENCE = 0.7
    BASELINE_CONFIDENCE = 0.3
    REPORT_THRESHOLD = 0.5

    DERIVED_PATTERNS = [
        re.compile(p, re.IGNORECASE)
        for p in (
            r"total_", r"sum_", r"count_", r"avg_", r"average_",
            r"calc_", r"computed_", r"_total$", r"_sum$", r"_count$",
        )
    ]

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        if table.primary_keys:
            for column in table.non_key_columns():
                confidence = self.assess_confidence(column.name)
                if confidence > self.REPORT_THRESHOLD:
                    violations.append(self._violation(
                        table,
                        column.name,
                        f"Column '{column.name}' appears to be a derived attribute",
                        "Second Normal Form requires that all attributes be fully "
                        "dependent on the primary key.",
                        "Consider removing derived attributes or moving them to a view",
                        severity=Severity.WARNING,
                        confidence=confidence
                    ))

        return self._result(
            violations,
            self.DERIVED_CONFIDENCE if violations else self.BASELINE_CONFIDENCE,
            "Some columns appear to store derived or aggregate values",
            "No derived attributes detected"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails="Aggregate columns such as 'order_total' are derived from other rows, not from the key.",
            what_to_fix_first="Compute aggregates in a view or query instead of storing them.",
            example_fix_sql=(
                "CREATE VIEW order_totals AS SELECT order_id, SUM(price) AS total "
                "FROM order_items GROUP BY order_id;"
            ),
            impact="Medium (40%)"
        )

    def assess_confidence(self, column_name: str) -> float:
        if any(p.search(column_name) for p in self.DERIVED_PATTERNS):
            return self.DERIVED_CONFIDENCE
        return self.BASELINE_CONFIDENCE
