# normadb/services/conflict_resolver.py
"""Per-column conflict resolution between rule violations."""

from dataclasses import dataclass, field

from normadb.models.analysis import Severity, Violation

TABLE_LEVEL = "table-level"


@dataclass
class _ColumnGroup:
    table: str
    column: str
    errors: list[Violation] = field(default_factory=list)
    warnings: list[Violation] = field(default_factory=list)


class ConflictResolver:
    """Resolve overlapping violations on the same column.

    Within one ``(table, column)`` group an ERROR suppresses every WARNING.
    Without an ERROR all WARNINGs stand; violations are never merged and
    confidence never affects the outcome.
    """

    def resolve(self, violations: list[Violation]) -> list[Violation]:
        """Apply conflict resolution.

        Args:
            violations: Raw violations of one or more tables.

        Returns:
            Surviving violations, grouped in first-seen group order.
        """
        resolved: list[Violation] = []
        for group in self._group_by_column(violations):
            resolved.extend(group.errors or group.warnings)
        return resolved

    def analyze_conflicts(self, violations: list[Violation]) -> dict:
        """Resolve violations and report what was suppressed.

        Returns:
            A dict with ``resolved``, ``suppressed`` and ``analysis`` counts.
        """
        resolved: list[Violation] = []
        suppressed: list[Violation] = []
        columns_with_errors = 0
        columns_with_warnings = 0

        groups = self._group_by_column(violations)
        for group in groups:
            if group.errors:
                resolved.extend(group.errors)
                suppressed.extend(group.warnings)
                columns_with_errors += 1
            else:
                resolved.extend(group.warnings)
                if group.warnings:
                    columns_with_warnings += 1

        return {
            "resolved": resolved,
            "suppressed": suppressed,
            "analysis": {
                "totalColumns": len(groups),
                "columnsWithErrors": columns_with_errors,
                "columnsWithWarnings": columns_with_warnings,
                "suppressedWarnings": len(suppressed),
            }
        }

    def _group_by_column(self, violations: list[Violation]) -> list[_ColumnGroup]:
        groups: dict[tuple[str, str], _ColumnGroup] = {}
        for violation in violations:
            column = violation.column or TABLE_LEVEL
            key = (violation.table, column)
            group = groups.get(key)
            if group is None:
                group = groups[key] = _ColumnGroup(violation.table, column)
            if violation.severity == Severity.ERROR:
                group.errors.append(violation)
            else:
                group.warnings.append(violation)
        return list(groups.values())
