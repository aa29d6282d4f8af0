# normadb/rules/first_normal_form.py
"""First normal form rules."""

import re

from normadb.models.analysis import NormalForm, Severity
from normadb.models.schema import Table
from normadb.rules.base import NormalizationRule, RuleExplanation, RuleResult


class PrimaryKeyRule(NormalizationRule):
    """Every table must have a primary key."""

    rule_id = "1nf.primary_key"
    normal_form = NormalForm.FIRST
    name = "Primary Key Required"
    description = "Every table must have a primary key"
    weight = 0.40
    deterministic = True

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        if not table.primary_keys:
            violations.append(self._violation(
                table,
                None,
                f"Table '{table.name}' has no primary key",
                "First Normal Form requires that each table has a unique identifier "
                "(primary key) to distinguish rows.",
                f"Add a primary key to '{table.name}'. Consider adding an 'id' column "
                "with SERIAL or BIGINT type.",
                severity=Severity.ERROR,
                confidence=1.0
            ))
        return self._result(
            violations,
            1.0,
            f"Table '{table.name}' has no primary key",
            f"Table '{table.name}' has a primary key"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails="The table has no primary key, so rows cannot be told apart.",
            what_to_fix_first="Add a primary key to every table.",
            example_fix_sql="ALTER TABLE orders ADD COLUMN id BIGSERIAL PRIMARY KEY;",
            impact="High (40%)"
        )


class NoRepeatingGroupsRule(NormalizationRule):
    """Columns must not hold arrays or JSON documents."""

    rule_id = "1nf.repeating_groups"
    normal_form = NormalForm.FIRST
    name = "No Repeating Groups"
    description = "Table must not contain repeating groups or arrays"
    weight = 0.25
    deterministic = True

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        for column in table.columns.values():
            if self.is_array_type(column.type):
                violations.append(self._violation(
                    table,
                    column.name,
                    f"Column '{column.name}' has array type which violates 1NF",
                    "First Normal Form requires that each column contains atomic "
                    "(indivisible) values. Array types store multiple values in a "
                    "single column.",
                    f"Consider creating a separate table for '{column.name}' values "
                    f"with a foreign key reference to '{table.name}'",
                    severity=Severity.ERROR,
                    confidence=1.0
                ))
            elif self.is_json_type(column.type):
                violations.append(self._violation(
                    table,
                    column.name,
                    f"Column '{column.name}' has JSON type which may violate 1NF",
                    "First Normal Form requires atomic values. JSON types can contain "
                    "structured data that may not be atomic.",
                    "Consider normalizing the JSON structure into separate tables or "
                    "ensure JSON contains only atomic values",
                    severity=Severity.WARNING,
                    confidence=1.0
                ))
        return self._result(
            violations,
            1.0,
            "Some columns store arrays or JSON documents",
            "No array or JSON columns found"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails="Array and JSON columns store several values in one field.",
            what_to_fix_first="Move array elements and JSON members into child tables.",
            example_fix_sql=(
                "-- Instead of tags TEXT[]:\n"
                "CREATE TABLE post_tags (post_id INTEGER REFERENCES posts(id), "
                "tag TEXT, PRIMARY KEY (post_id, tag));"
            ),
            impact="Medium (25%)"
        )

    @staticmethod
    def is_array_type(data_type: str) -> bool:
        return "[]" in data_type or "ARRAY" in data_type.upper()

    @staticmethod
    def is_json_type(data_type: str) -> bool:
        return "JSON" in data_type.upper()


class AtomicValuesRule(NormalizationRule):
    """Column names hinting at multi-value storage (heuristic)."""

    rule_id = "1nf.atomic_values"
    normal_form = NormalForm.FIRST
    name = "Atomic Values"
    description = "All columns must contain atomic values"
    weight = 0.10

    CONFIDENCE = 0.7

    MULTI_VALUE_PATTERNS = [
        re.compile(p, re.IGNORECASE)
        for p in ("list", "array", "items", "values", "data", "info", "details", "attributes")
    ]

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        for column in table.columns.values():
            if self.suggests_multi_value(column.name, column.type):
                violations.append(self._violation(
                    table,
                    column.name,
                    f"Column '{column.name}' name suggests multi-value storage",
                    "First Normal Form requires each column to contain a single "
                    "atomic value.",
                    f"Consider splitting '{column.name}' into separate columns or a "
                    "related table",
                    severity=Severity.WARNING,
                    confidence=self.CONFIDENCE
                ))
        return self._result(
            violations,
            self.CONFIDENCE,
            "Some column names suggest multi-value storage",
            "No column names suggest multi-value storage"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails="Column names such as 'item_list' or 'details' often hide several values.",
            what_to_fix_first="Confirm what the column stores and split it if it holds more than one value.",
            example_fix_sql=(
                "CREATE TABLE order_items (order_id INTEGER REFERENCES orders(id), "
                "item TEXT);"
            ),
            impact="Low (10%)"
        )

    def suggests_multi_value(self, column_name: str, data_type: str) -> bool:
        if "TEXT" in data_type.upper():
            return False
        return any(p.search(column_name) for p in self.MULTI_VALUE_PATTERNS)
