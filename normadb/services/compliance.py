# normadb/services/compliance.py
"""Weighted compliance scoring."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from normadb.models.analysis import (
    AnalysisSummary,
    ComplianceScore,
    ComplianceStatus,
    NormalForm,
    Severity,
    Violation,
)
from normadb.rules.rule_set import RuleSet
from normadb.utils.constants import (
    NF_OVERALL_WEIGHTS,
    PASS_THRESHOLD,
    WARNING_THRESHOLD,
)


class ComplianceCalculator:
    """Turn resolved violations into per normal form scores.

    A rule counts at most once per normal form no matter how many columns
    or tables it fired on, so its weight is the whole penalty.
    """

    def __init__(self, rule_set: RuleSet):
        self.rule_set = rule_set

    def calculate(self, violations: list[Violation]) -> dict[str, ComplianceScore]:
        """Score every normal form.

        Args:
            violations: Resolved violations.

        Returns:
            Scores keyed by ``"1NF"``, ``"2NF"`` and ``"3NF"``.
        """
        return {
            nf.value: self._score_normal_form(nf, violations)
            for nf in NormalForm
        }

    def _score_normal_form(self, nf: NormalForm, violations: list[Violation]) -> ComplianceScore:
        rules = self.rule_set.rules_for(nf)
        max_weight = self.rule_set.max_weight(nf)
        nf_violations = [v for v in violations if v.normal_form == nf]

        violated_ids = self._violated_rule_ids(nf_violations)
        violated_weight = sum(
            self.rule_set.get_rule(rule_id).weight for rule_id in violated_ids
        )

        if max_weight > 0:
            raw = (max_weight - violated_weight) / max_weight * 100
        else:
            raw = 100.0
        score = round_score(max(0.0, min(100.0, raw)))

        return ComplianceScore(
            normal_form=nf,
            score=score,
            max_weight=round(max_weight, 2),
            violated_weight=round(violated_weight, 2),
            total_rules=len(rules),
            passed_rules=max(0, len(rules) - len(violated_ids)),
            status=self.status_for(score),
            violations=nf_violations
        )

    def _violated_rule_ids(self, violations: list[Violation]) -> list[str]:
        # Unknown ids carry no weight
        ids: list[str] = []
        for violation in violations:
            if violation.rule_id not in ids and self.rule_set.get_rule(violation.rule_id):
                ids.append(violation.rule_id)
        return ids

    @staticmethod
    def overall_score(compliance: dict[str, ComplianceScore]) -> float:
        total = sum(
            Decimal(repr(compliance[nf].score)) * Decimal(repr(weight))
            for nf, weight in NF_OVERALL_WEIGHTS.items()
        )
        return round_score(total)

    @staticmethod
    def status_for(score: float) -> ComplianceStatus:
        if score >= PASS_THRESHOLD:
            return ComplianceStatus.PASS
        if score >= WARNING_THRESHOLD:
            return ComplianceStatus.WARNING
        return ComplianceStatus.FAIL

    @staticmethod
    def summarize(violations: list[Violation]) -> AnalysisSummary:
        errors = sum(1 for v in violations if v.severity == Severity.ERROR)
        return AnalysisSummary(
            total_violations=len(violations),
            critical_violations=errors,
            warnings=len(violations) - errors
        )

    def highest_weight_violation(self, violations: list[Violation]) -> Optional[Violation]:
        """Return the violation whose rule carries the most weight.

        Ties keep the first violation seen.
        """
        best: Optional[Violation] = None
        best_weight = -1.0
        for violation in violations:
            rule = self.rule_set.get_rule(violation.rule_id)
            weight = rule.weight if rule else 0.0
            if weight > best_weight:
                best, best_weight = violation, weight
        return best

    def fix_recommendations(self, violations: list[Violation]) -> list[str]:
        """List what to fix first, one entry per violated rule, heaviest first."""
        rules = []
        for violation in violations:
            rule = self.rule_set.get_rule(violation.rule_id)
            if rule is not None and rule not in rules:
                rules.append(rule)
        rules.sort(key=lambda r: r.weight, reverse=True)
        return [rule.get_explanation().what_to_fix_first for rule in rules]


def round_score(value: Union[float, Decimal]) -> float:
    """Round to two decimals, halves away from zero."""
    if not isinstance(value, Decimal):
        value = Decimal(repr(value))
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
