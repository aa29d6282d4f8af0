# normadb/rules/third_normal_form.py
"""Third normal form rules."""

import re

from normadb.models.analysis import NormalForm, Severity
from normadb.models.schema import Table
from normadb.rules.base import NormalizationRule, RuleExplanation, RuleResult


class NoTransitiveDependencyRule(NormalizationRule):
    """Non-key columns that look determined by another non-key column (heuristic)."""

    rule_id = "3nf.transitive_dependency"
    normal_form = NormalForm.THIRD
    name = "No Transitive Dependencies"
    description = "Non-key attributes must not depend on other non-key attributes"
    weight = 0.50

    REPORT_THRESHOLD = 0.6
    ENTITY_ATTRIBUTE_CONFIDENCE = 0.9
    TRANSITIVE_PAIR_CONFIDENCE = 0.8
    SHARED_STEM_CONFIDENCE = 0.7

    DETERMINANT_SUFFIXES = ("_id", "_code", "_type", "_status")
    DETERMINANT_ENDINGS = ("category", "type", "status")
    REFERENCE_ENTITIES = ("country", "state", "city", "department", "location", "region")

    ENTITY_ATTRIBUTES = {
        "country": ["country_code", "country_name", "currency", "continent"],
        "state": ["state_code", "state_name", "region"],
        "city": ["city_name", "zipcode", "population"],
        "department": ["dept_name", "manager", "budget"],
        "category": ["category_name", "description", "parent_id"],
    }

    TRANSITIVE_PAIRS = [
        ("country", "currency"),
        ("country", "continent"),
        ("state", "country"),
        ("city", "state"),
        ("city", "country"),
        ("department", "manager"),
        ("category", "description"),
    ]

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        if table.primary_keys:
            non_key = [column.name for column in table.non_key_columns()]
            for column_name in non_key:
                confidence, determinant = self.assess_confidence(column_name, non_key)
                if confidence > self.REPORT_THRESHOLD:
                    violations.append(self._violation(
                        table,
                        column_name,
                        f"Column '{column_name}' may depend on non-key column "
                        f"'{determinant}' rather than the primary key",
                        "Third Normal Form requires that non-key attributes do not "
                        "depend on other non-key attributes.",
                        f"Consider moving '{column_name}' to a separate table keyed by "
                        f"'{determinant}' to eliminate the transitive dependency",
                        severity=Severity.WARNING,
                        confidence=confidence
                    ))

        return self._result(
            violations,
            0.7,
            "Some columns may have transitive dependencies on other non-key attributes",
            "No transitive dependencies detected"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails=(
                "Some non-key attributes may depend on other non-key attributes rather "
                "than directly on the primary key."
            ),
            what_to_fix_first="Move transitive dependencies to separate tables to eliminate the dependency chain.",
            example_fix_sql=(
                "-- Instead of:\n"
                "CREATE TABLE users (id SERIAL PRIMARY KEY, department_id INTEGER, department_name TEXT);\n"
                "-- Use:\n"
                "CREATE TABLE users (id SERIAL PRIMARY KEY, department_id INTEGER);\n"
                "CREATE TABLE departments (id SERIAL PRIMARY KEY, name TEXT);"
            ),
            impact="Medium (50%)"
        )

    def assess_confidence(self, column_name: str, non_key: list[str]) -> tuple[float, str]:
        """Return the strongest confidence and the determinant behind it."""
        column = column_name.lower()
        best, best_determinant = 0.0, ""
        for other in non_key:
            if other == column_name or not self.is_determinant(other):
                continue
            confidence = self._pair_confidence(column, other.lower())
            if confidence > best:
                best, best_determinant = confidence, other
        return min(best, 1.0), best_determinant

    def is_determinant(self, column_name: str) -> bool:
        name = column_name.lower()
        return (
            name.endswith(self.DETERMINANT_SUFFIXES)
            or name.endswith(self.DETERMINANT_ENDINGS)
            or name.endswith(self.REFERENCE_ENTITIES)
        )

    def _pair_confidence(self, column: str, determinant: str) -> float:
        stem = self._stem(determinant)
        if column in self.ENTITY_ATTRIBUTES.get(stem, []):
            return self.ENTITY_ATTRIBUTE_CONFIDENCE
        for entity, attribute in self.TRANSITIVE_PAIRS:
            if (entity in determinant and attribute in column) or \
                    (attribute in determinant and entity in column):
                return self.TRANSITIVE_PAIR_CONFIDENCE
        if stem and stem in column:
            return self.SHARED_STEM_CONFIDENCE
        return 0.0

    def _stem(self, determinant: str) -> str:
        for suffix in self.DETERMINANT_SUFFIXES:
            if determinant.endswith(suffix):
                return determinant[:-len(suffix)]
        return determinant


class BoyceCoddRule(NormalizationRule):
    """Likely determinants that are not candidate keys (heuristic)."""

    rule_id = "3nf.boyce_codd"
    normal_form = NormalForm.THIRD
    name = "Boyce-Codd Normal Form Check"
    description = "Every determinant must be a candidate key"
    weight = 0.50

    CONFIDENCE = 0.7

    DETERMINANT_PATTERNS = [
        re.compile(r"_id$"),
        re.compile(r"_code$"),
        re.compile(r"_type$"),
        re.compile(r"email$", re.IGNORECASE),
        re.compile(r"username$", re.IGNORECASE),
        re.compile(r"ssn$", re.IGNORECASE),
        re.compile(r"tax_id$", re.IGNORECASE),
    ]

    def evaluate(self, table: Table) -> RuleResult:
        violations = []
        candidate_keys = table.candidate_keys()
        for column in table.columns.values():
            if self.is_likely_determinant(column.name) and column.name not in candidate_keys:
                violations.append(self._violation(
                    table,
                    column.name,
                    f"Column '{column.name}' appears to be a determinant but not a "
                    "candidate key",
                    "Boyce-Codd Normal Form requires that every determinant "
                    "(attribute that determines another) be a candidate key.",
                    f"Consider making '{column.name}' a candidate key or normalizing "
                    "the table structure",
                    severity=Severity.WARNING,
                    confidence=self.CONFIDENCE
                ))

        return self._result(
            violations,
            self.CONFIDENCE,
            "Some columns appear to be determinants but are not candidate keys",
            "All determinants appear to be candidate keys"
        )

    def get_explanation(self) -> RuleExplanation:
        return RuleExplanation(
            why_this_fails=(
                "Some columns appear to be determinants (attributes that determine "
                "others) but are not candidate keys."
            ),
            what_to_fix_first="Make determinant columns candidate keys or normalize the table structure.",
            example_fix_sql=(
                "-- Add unique constraint to make email a candidate key:\n"
                "CREATE TABLE users (id SERIAL PRIMARY KEY, email TEXT NOT NULL UNIQUE);"
            ),
            impact="Medium (50%)"
        )

    def is_likely_determinant(self, column_name: str) -> bool:
        return any(p.search(column_name) for p in self.DETERMINANT_PATTERNS)
