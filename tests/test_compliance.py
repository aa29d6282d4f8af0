# tests/test_compliance.py
"""Tests for compliance scoring."""

import pytest
from normadb.models.analysis import ComplianceStatus, NormalForm, Severity, Violation
from normadb.rules import RuleSet
from normadb.services.compliance import ComplianceCalculator, round_score


def violation(rule_id: str, normal_form: NormalForm, severity=Severity.WARNING, column="c", table="t"):
    """Build a violation for a rule id."""
    return Violation(
        rule_id=rule_id,
        normal_form=normal_form,
        table=table,
        column=column,
        severity=severity,
        message=rule_id,
        explanation="explanation",
        suggestion="suggestion"
    )


class TestComplianceCalculator:
    """Compliance calculator test suite."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = ComplianceCalculator(RuleSet.standard())

    # === Per normal form scores ===

    def test_no_violations(self):
        """Test a clean table scores 100 everywhere."""
        compliance = self.calculator.calculate([])
        assert {nf: score.score for nf, score in compliance.items()} == {
            "1NF": 100.0,
            "2NF": 100.0,
            "3NF": 100.0,
        }
        assert all(score.status == ComplianceStatus.PASS for score in compliance.values())
        assert self.calculator.overall_score(compliance) == 100.0

    def test_missing_primary_key(self):
        """Test a missing primary key alone caps 1NF at 46.67."""
        compliance = self.calculator.calculate([
            violation("1nf.primary_key", NormalForm.FIRST, Severity.ERROR, column=None)
        ])
        assert compliance["1NF"].score == 46.67
        assert compliance["1NF"].status == ComplianceStatus.FAIL

    def test_array_column_without_key(self):
        """Test an array column on a keyless table scores 13.33 on 1NF."""
        compliance = self.calculator.calculate([
            violation("1nf.primary_key", NormalForm.FIRST, Severity.ERROR, column=None),
            violation("1nf.repeating_groups", NormalForm.FIRST, Severity.ERROR, column="tags"),
        ])
        first = compliance["1NF"]
        assert first.violated_weight == 0.65
        assert first.max_weight == 0.75
        assert first.score == 13.33
        assert first.status == ComplianceStatus.FAIL
        assert first.total_rules == 3
        assert first.passed_rules == 1
        assert self.calculator.overall_score(compliance) == 56.67

    def test_json_warning_only(self):
        """Test a JSON warning alone scores 66.67 on 1NF."""
        compliance = self.calculator.calculate([
            violation("1nf.repeating_groups", NormalForm.FIRST, column="payload"),
        ])
        assert compliance["1NF"].score == 66.67
        assert compliance["1NF"].status == ComplianceStatus.FAIL

    def test_rule_counted_once(self):
        """Test a rule firing on many columns is penalized once."""
        compliance = self.calculator.calculate([
            violation("3nf.boyce_codd", NormalForm.THIRD, column="a_id"),
            violation("3nf.boyce_codd", NormalForm.THIRD, column="b_id"),
            violation("3nf.boyce_codd", NormalForm.THIRD, column="c_id", table="other"),
        ])
        assert compliance["3NF"].score == 50.0
        assert compliance["3NF"].violated_weight == 0.5
        assert len(compliance["3NF"].violations) == 3

    def test_warning_band(self):
        """Test a score between 70 and 90 is a WARNING."""
        compliance = self.calculator.calculate([
            violation("1nf.atomic_values", NormalForm.FIRST),
        ])
        assert compliance["1NF"].score == 86.67
        assert compliance["1NF"].status == ComplianceStatus.WARNING

    def test_unknown_rule_id_has_no_weight(self):
        """Test violations with unknown rule ids do not change the score."""
        compliance = self.calculator.calculate([
            violation("custom.rule", NormalForm.FIRST),
        ])
        assert compliance["1NF"].score == 100.0

    def test_score_bounds(self):
        """Test scores stay within 0..100 when every rule fires."""
        violations = [
            violation(rule.rule_id, rule.normal_form, column=rule.rule_id)
            for rule in RuleSet.standard()
        ]
        compliance = self.calculator.calculate(violations)
        assert compliance["1NF"].score == 0.0
        assert compliance["2NF"].score == 0.0
        assert compliance["3NF"].score == 0.0
        assert self.calculator.overall_score(compliance) == 0.0

    # === Status and helpers ===

    @pytest.mark.parametrize("score,status", [
        (100.0, ComplianceStatus.PASS),
        (90.0, ComplianceStatus.PASS),
        (89.99, ComplianceStatus.WARNING),
        (70.0, ComplianceStatus.WARNING),
        (69.99, ComplianceStatus.FAIL),
    ])
    def test_status_thresholds(self, score, status):
        """Test status thresholds are inclusive."""
        assert ComplianceCalculator.status_for(score) == status

    def test_summarize(self):
        """Test violation counts."""
        summary = self.calculator.summarize([
            violation("1nf.primary_key", NormalForm.FIRST, Severity.ERROR, column=None),
            violation("3nf.boyce_codd", NormalForm.THIRD),
        ])
        assert summary.total_violations == 2
        assert summary.critical_violations == 1
        assert summary.warnings == 1

    def test_highest_weight_violation(self):
        """Test the heaviest rule's violation is picked."""
        light = violation("1nf.atomic_values", NormalForm.FIRST)
        heavy = violation("2nf.partial_dependency", NormalForm.SECOND)
        assert self.calculator.highest_weight_violation([light, heavy]) is heavy
        assert self.calculator.highest_weight_violation([]) is None

    def test_fix_recommendations(self):
        """Test one recommendation per rule, heaviest rule first."""
        calculator = self.calculator
        recommendations = calculator.fix_recommendations([
            violation("1nf.atomic_values", NormalForm.FIRST),
            violation("1nf.atomic_values", NormalForm.FIRST, column="d"),
            violation("2nf.partial_dependency", NormalForm.SECOND),
        ])
        rule_set = calculator.rule_set
        assert recommendations == [
            rule_set.get_rule("2nf.partial_dependency").get_explanation().what_to_fix_first,
            rule_set.get_rule("1nf.atomic_values").get_explanation().what_to_fix_first,
        ]

    def test_round_score_half_up(self):
        """Test halves round away from zero."""
        assert round_score(56.665) == 56.67
        assert round_score(13.333333333333334) == 13.33
