# normadb/services/aggregator.py
"""Per-schema and whole-database rollup of table analyses."""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from normadb.models.analysis import (
    DatabaseAnalysisResult,
    NormalForm,
    NormalFormRollup,
    SchemaAnalysisResult,
    SchemaStatus,
    TableAnalysisResult,
    Violation,
)
from normadb.models.schema import Table
from normadb.rules.rule_set import RuleSet
from normadb.services.compliance import ComplianceCalculator, round_score
from normadb.services.conflict_resolver import ConflictResolver
from normadb.utils.constants import PASS_THRESHOLD, SYSTEM_SCHEMAS, WARNING_THRESHOLD

logger = logging.getLogger("aggregator")


class SchemaAggregator:
    """Group canonical tables by schema and roll their scores up."""

    def __init__(
        self,
        rule_set: RuleSet,
        resolver: ConflictResolver,
        calculator: ComplianceCalculator,
        excluded_schemas: Optional[Iterable[str]] = None
    ):
        self.rule_set = rule_set
        self.resolver = resolver
        self.calculator = calculator
        self.excluded_schemas = set(
            SYSTEM_SCHEMAS if excluded_schemas is None else excluded_schemas
        )

    def aggregate(self, tables: list[Table]) -> DatabaseAnalysisResult:
        """Analyze every table and roll results up per schema.

        Args:
            tables: Canonical tables, possibly spanning several schemas.

        Returns:
            Schemas in first-seen order; excluded schemas are dropped.
        """
        grouped: dict[str, list[Table]] = {}
        for table in tables:
            if table.schema_name in self.excluded_schemas:
                logger.debug("Skipping table %s in excluded schema", table.qualified_name)
                continue
            grouped.setdefault(table.schema_name, []).append(table)

        schemas = [
            self.analyze_schema(schema_name, schema_tables)
            for schema_name, schema_tables in grouped.items()
        ]

        overall = _mean([s.overall_score for s in schemas])
        logger.info(
            "Aggregated %d schemas, %d tables, overall score %.2f",
            len(schemas),
            sum(s.table_count for s in schemas),
            overall
        )
        return DatabaseAnalysisResult(
            total_schemas=len(schemas),
            total_tables=sum(s.table_count for s in schemas),
            overall_score=overall,
            schemas=schemas
        )

    def analyze_schema(self, schema_name: str, tables: list[Table]) -> SchemaAnalysisResult:
        """Score each table independently, then roll up one schema."""
        table_results: list[TableAnalysisResult] = []
        all_violations: list[Violation] = []
        violated_tables = {nf.value: 0 for nf in NormalForm}

        for table in tables:
            violations = self.resolver.resolve(self.rule_set.evaluate_table(table))
            compliance = self.calculator.calculate(violations)

            for nf in violated_tables:
                if compliance[nf].violations:
                    violated_tables[nf] += 1

            table_results.append(TableAnalysisResult(
                table_name=table.name,
                scores={nf: score.score for nf, score in compliance.items()},
                overall_score=self.calculator.overall_score(compliance),
                violation_count=len(violations)
            ))
            all_violations.extend(violations)

        total = len(tables)
        normalization = {
            nf: NormalFormRollup(
                score=_share_passing(violated, total),
                violated_tables=violated,
                total_tables=total
            )
            for nf, violated in violated_tables.items()
        }
        overall = _mean([t.overall_score for t in table_results])

        return SchemaAnalysisResult(
            schema_name=schema_name,
            table_count=total,
            normalization=normalization,
            violations=all_violations,
            overall_score=overall,
            status=self.schema_status(overall, bool(all_violations)),
            tables=table_results
        )

    @staticmethod
    def schema_status(overall_score: float, has_violations: bool) -> SchemaStatus:
        if not has_violations:
            return SchemaStatus.PERFECT
        if overall_score >= PASS_THRESHOLD:
            return SchemaStatus.GOOD
        if overall_score >= WARNING_THRESHOLD:
            return SchemaStatus.NEEDS_ATTENTION
        return SchemaStatus.CRITICAL


def _mean(values: list[float]) -> float:
    if not values:
        return 100.0
    return round_score(sum(Decimal(repr(v)) for v in values) / len(values))


def _share_passing(violated: int, total: int) -> float:
    if total == 0 or violated == 0:
        return 100.0
    return round_score(100 - violated / total * 100)
