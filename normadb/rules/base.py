# normadb/rules/base.py
"""Normalization rule base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from normadb.models.analysis import NormalForm, Severity, Violation
from normadb.models.schema import Table


@dataclass
class RuleResult:
    """Outcome of evaluating one rule against one table."""

    violations: list[Violation] = field(default_factory=list)
    score_contribution: int = 1
    confidence: float = 1.0
    explanation: str = ""


@dataclass(frozen=True)
class RuleExplanation:
    """Guidance shown alongside a failing rule."""

    why_this_fails: str
    what_to_fix_first: str
    example_fix_sql: str
    impact: str

    def to_dict(self) -> dict:
        return {
            "whyThisFails": self.why_this_fails,
            "whatToFixFirst": self.what_to_fix_first,
            "exampleFixSQL": self.example_fix_sql,
            "impact": self.impact,
        }


class NormalizationRule(ABC):
    """A table-scoped normalization check with fixed metadata.

    ``weight`` is the rule's share of its normal form's maximum score.
    Deterministic rules always report confidence 1.0; heuristic rules
    report what their name-pattern formula yields and are approximate.
    """

    rule_id: str = ""
    normal_form: NormalForm = NormalForm.FIRST
    name: str = ""
    description: str = ""
    weight: float = 0.0
    deterministic: bool = False

    @abstractmethod
    def evaluate(self, table: Table) -> RuleResult:
        """Evaluate the rule against a table.

        Args:
            table: The canonical table.

        Returns:
            Violations found plus the rule-level confidence and explanation.
        """

    @abstractmethod
    def get_explanation(self) -> RuleExplanation:
        """Return guidance for fixing violations of this rule."""

    def _violation(
        self,
        table: Table,
        column: Optional[str],
        message: str,
        explanation: str,
        suggestion: str,
        severity: Severity = Severity.WARNING,
        confidence: float = 1.0
    ) -> Violation:
        return Violation(
            rule_id=self.rule_id,
            normal_form=self.normal_form,
            table=table.key,
            column=column,
            severity=severity,
            message=message,
            explanation=explanation,
            suggestion=suggestion,
            confidence=confidence
        )

    def _result(
        self,
        violations: list[Violation],
        confidence: float,
        failed: str,
        passed: str
    ) -> RuleResult:
        return RuleResult(
            violations=violations,
            score_contribution=0 if violations else 1,
            confidence=confidence,
            explanation=failed if violations else passed
        )
