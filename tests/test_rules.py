# tests/test_rules.py
"""Tests for the normalization rules and the rule set."""

import pytest
from normadb.models.analysis import NormalForm, Severity
from normadb.rules import (
    AtomicValuesRule,
    BoyceCoddRule,
    FullFunctionalDependencyRule,
    NoPartialDependencyRule,
    NoRepeatingGroupsRule,
    NoTransitiveDependencyRule,
    NormalizationRule,
    PrimaryKeyRule,
    RuleSet,
)
from normadb.services.ddl_parser import DDLParser


def table_from(ddl: str):
    """Parse a single CREATE TABLE statement into a canonical table."""
    schema = DDLParser().parse(ddl)
    return schema.table_list()[0]


class TestFirstNormalFormRules:
    """1NF rule test suite."""

    # === Primary key ===

    def test_missing_primary_key(self):
        """Test a table without a primary key gets a table-level ERROR."""
        result = PrimaryKeyRule().evaluate(table_from("CREATE TABLE logs (msg TEXT);"))
        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.rule_id == "1nf.primary_key"
        assert violation.column is None
        assert violation.severity == Severity.ERROR
        assert violation.confidence == 1.0
        assert result.score_contribution == 0

    def test_primary_key_present(self):
        """Test a table with a primary key passes."""
        result = PrimaryKeyRule().evaluate(
            table_from("CREATE TABLE users (id SERIAL PRIMARY KEY);")
        )
        assert result.violations == []
        assert result.score_contribution == 1

    # === Repeating groups ===

    def test_array_columns_are_errors(self):
        """Test [] and ARRAY types are ERROR violations."""
        table = table_from(
            "CREATE TABLE posts (id INT PRIMARY KEY, tags TEXT[], scores INTEGER ARRAY);"
        )
        result = NoRepeatingGroupsRule().evaluate(table)
        assert [(v.column, v.severity) for v in result.violations] == [
            ("tags", Severity.ERROR),
            ("scores", Severity.ERROR),
        ]

    def test_json_columns_are_warnings(self):
        """Test JSON and JSONB types are WARNING violations."""
        table = table_from("CREATE TABLE events (id INT PRIMARY KEY, payload JSONB);")
        result = NoRepeatingGroupsRule().evaluate(table)
        assert len(result.violations) == 1
        assert result.violations[0].severity == Severity.WARNING
        assert result.violations[0].confidence == 1.0

    # === Atomic values ===

    def test_multi_value_name(self):
        """Test names hinting at lists are flagged with confidence 0.7."""
        table = table_from("CREATE TABLE orders (id INT PRIMARY KEY, item_list VARCHAR(200));")
        result = AtomicValuesRule().evaluate(table)
        assert [v.column for v in result.violations] == ["item_list"]
        assert result.violations[0].confidence == 0.7

    def test_text_columns_exempt(self):
        """Test TEXT columns are not flagged by name."""
        table = table_from("CREATE TABLE products (id INT PRIMARY KEY, details TEXT);")
        assert AtomicValuesRule().evaluate(table).violations == []


class TestSecondNormalFormRules:
    """2NF rule test suite."""

    # === Partial dependency ===

    def test_partial_dependency_on_key_part(self):
        """Test a column echoing one composite key part is flagged."""
        table = table_from(
            "CREATE TABLE enrollment (student_id INT, course_id INT, student_name TEXT, "
            "grade CHAR(2), PRIMARY KEY (student_id, course_id));"
        )
        result = NoPartialDependencyRule().evaluate(table)
        assert [v.column for v in result.violations] == ["student_name"]
        assert result.violations[0].confidence == 0.8
        assert result.violations[0].normal_form == NormalForm.SECOND

    def test_description_with_id_key(self):
        """Test a description column next to an id key part is flagged at 0.6."""
        table = table_from(
            "CREATE TABLE supply (part_id INT, vendor_id INT, description TEXT, "
            "PRIMARY KEY (part_id, vendor_id));"
        )
        result = NoPartialDependencyRule().evaluate(table)
        assert [v.column for v in result.violations] == ["description"]
        assert result.violations[0].confidence == 0.6

    def test_single_column_key_skipped(self):
        """Test partial dependency needs a composite key."""
        table = table_from(
            "CREATE TABLE students (student_id INT PRIMARY KEY, student_name TEXT);"
        )
        assert NoPartialDependencyRule().evaluate(table).violations == []

    # === Full functional dependency ===

    def test_derived_column_flagged(self):
        """Test aggregate-looking columns are flagged at 0.7."""
        table = table_from(
            "CREATE TABLE orders (id INT PRIMARY KEY, order_total NUMERIC, note TEXT);"
        )
        result = FullFunctionalDependencyRule().evaluate(table)
        assert [v.column for v in result.violations] == ["order_total"]
        assert result.violations[0].confidence == 0.7

    def test_derived_column_without_key_skipped(self):
        """Test tables without a primary key are skipped."""
        table = table_from("CREATE TABLE orders (total_amount NUMERIC);")
        result = FullFunctionalDependencyRule().evaluate(table)
        assert result.violations == []
        assert result.confidence == 0.3


class TestThirdNormalFormRules:
    """3NF rule test suite."""

    # === Transitive dependency ===

    def test_shared_stem(self):
        """Test a column sharing a determinant's stem is flagged at 0.7."""
        table = table_from(
            "CREATE TABLE employees (id SERIAL PRIMARY KEY, department_id INT, "
            "department_name TEXT);"
        )
        result = NoTransitiveDependencyRule().evaluate(table)
        assert [v.column for v in result.violations] == ["department_name"]
        assert result.violations[0].confidence == 0.7
        assert "department_id" in result.violations[0].message

    def test_known_entity_attribute(self):
        """Test a known attribute of a reference entity is flagged at 0.9."""
        table = table_from(
            "CREATE TABLE addresses (id SERIAL PRIMARY KEY, country TEXT, currency TEXT);"
        )
        result = NoTransitiveDependencyRule().evaluate(table)
        assert [(v.column, v.confidence) for v in result.violations] == [("currency", 0.9)]

    def test_known_transitive_pair(self):
        """Test known pairs are matched in either direction at 0.8."""
        table = table_from(
            "CREATE TABLE places (id SERIAL PRIMARY KEY, city TEXT, state TEXT);"
        )
        result = NoTransitiveDependencyRule().evaluate(table)
        assert [(v.column, v.confidence) for v in result.violations] == [
            ("city", 0.8),
            ("state", 0.8),
        ]

    def test_transitive_skipped_without_key(self):
        """Test tables without a primary key are skipped."""
        table = table_from("CREATE TABLE staff (department_id INT, department_name TEXT);")
        assert NoTransitiveDependencyRule().evaluate(table).violations == []

    # === Boyce-Codd ===

    def test_determinant_not_candidate_key(self):
        """Test an email column without UNIQUE is flagged."""
        table = table_from("CREATE TABLE users (id SERIAL PRIMARY KEY, email TEXT);")
        result = BoyceCoddRule().evaluate(table)
        assert [v.column for v in result.violations] == ["email"]
        assert result.violations[0].confidence == 0.7

    def test_unique_determinant_passes(self):
        """Test a UNIQUE email is a candidate key."""
        table = table_from("CREATE TABLE users (id SERIAL PRIMARY KEY, email TEXT UNIQUE);")
        assert BoyceCoddRule().evaluate(table).violations == []

    def test_single_column_unique_constraint_counts(self):
        """Test single-column table-level UNIQUE makes a candidate key."""
        table = table_from(
            "CREATE TABLE users (id INT PRIMARY KEY, username TEXT, UNIQUE (username));"
        )
        assert BoyceCoddRule().evaluate(table).violations == []


class _ExplodingRule(NormalizationRule):
    rule_id = "test.exploding"
    normal_form = NormalForm.FIRST
    name = "Exploding"
    weight = 0.0

    def evaluate(self, table):
        raise RuntimeError("boom")

    def get_explanation(self):
        raise NotImplementedError


class TestRuleSet:
    """Rule set test suite."""

    def setup_method(self):
        """Set up test fixtures."""
        self.rule_set = RuleSet.standard()

    def test_registration_order(self):
        """Test the standard rule set order and ids."""
        assert [rule.rule_id for rule in self.rule_set] == [
            "1nf.primary_key",
            "1nf.repeating_groups",
            "1nf.atomic_values",
            "2nf.partial_dependency",
            "2nf.full_functional_dependency",
            "3nf.transitive_dependency",
            "3nf.boyce_codd",
        ]

    def test_max_weights(self):
        """Test per normal form maximum weights."""
        assert self.rule_set.max_weight("1NF") == pytest.approx(0.75)
        assert self.rule_set.max_weight(NormalForm.SECOND) == pytest.approx(1.0)
        assert self.rule_set.max_weight("3NF") == pytest.approx(1.0)

    def test_rules_for(self):
        """Test filtering rules by normal form."""
        names = [rule.name for rule in self.rule_set.rules_for("2NF")]
        assert names == ["No Partial Dependencies", "Full Functional Dependency"]

    def test_get_rule(self):
        """Test looking up rules by id."""
        assert self.rule_set.get_rule("3nf.boyce_codd").weight == 0.5
        assert self.rule_set.get_rule("missing") is None

    def test_weight_drift_rejected(self, monkeypatch):
        """Test the standard set refuses weights that no longer add up."""
        monkeypatch.setattr(PrimaryKeyRule, "weight", 0.5)
        with pytest.raises(ValueError):
            RuleSet.standard()

    def test_duplicate_rule_ids_rejected(self):
        """Test duplicate rule ids are rejected."""
        with pytest.raises(ValueError):
            RuleSet([PrimaryKeyRule(), PrimaryKeyRule()])

    def test_failing_rule_skipped(self):
        """Test a rule that raises is skipped while others still run."""
        rule_set = RuleSet([_ExplodingRule(), PrimaryKeyRule()])
        violations = rule_set.evaluate_table(table_from("CREATE TABLE logs (msg TEXT);"))
        assert [v.rule_id for v in violations] == ["1nf.primary_key"]

    def test_explanations(self):
        """Test every rule exposes fix guidance."""
        for rule in self.rule_set:
            explanation = rule.get_explanation().to_dict()
            assert set(explanation) == {"whyThisFails", "whatToFixFirst", "exampleFixSQL", "impact"}
            assert explanation["whatToFixFirst"]

    def test_deterministic_rules(self):
        """Test only the primary key and repeating group rules are deterministic."""
        assert [rule.rule_id for rule in self.rule_set if rule.deterministic] == [
            "1nf.primary_key",
            "1nf.repeating_groups",
        ]
