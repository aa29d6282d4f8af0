# normadb/services/analyzer.py
"""Normalization analysis facade."""

import logging
from typing import Iterable, Optional, Union

from normadb.models.analysis import AnalysisReport, DatabaseAnalysisResult
from normadb.models.dump import DumpParseResult, ExtractedTable, ValidationResult
from normadb.models.schema import Schema, Table
from normadb.rules.rule_set import RuleSet
from normadb.services.aggregator import SchemaAggregator
from normadb.services.compliance import ComplianceCalculator
from normadb.services.conflict_resolver import ConflictResolver
from normadb.services.ddl_parser import DDLParser
from normadb.services.ddl_validator import DDLValidator
from normadb.services.dump_extractor import DumpExtractor
from normadb.utils.constants import SUPPORTED_STATEMENTS
from normadb.utils.exceptions import (
    AnalysisError,
    NormaDBError,
    ValidationFailedError,
)

logger = logging.getLogger("normadb")


class NormalizationAnalyzer:
    """Entry point for parsing, validating and scoring PostgreSQL DDL.

    Every call is independent; nothing is cached between calls.
    """

    def __init__(
        self,
        rule_set: Optional[RuleSet] = None,
        excluded_schemas: Optional[Iterable[str]] = None
    ):
        """Initialize the analyzer.

        Args:
            rule_set: Rules to apply; the standard rule set by default.
            excluded_schemas: Schemas left out of multi-schema analysis;
                the PostgreSQL system schemas by default.
        """
        self.rule_set = rule_set or RuleSet.standard()
        self.parser = DDLParser()
        self.validator = DDLValidator(self.parser)
        self.extractor = DumpExtractor()
        self.resolver = ConflictResolver()
        self.calculator = ComplianceCalculator(self.rule_set)
        self.aggregator = SchemaAggregator(
            self.rule_set,
            self.resolver,
            self.calculator,
            excluded_schemas=excluded_schemas
        )

    def parse_ddl(self, sql: str) -> Schema:
        """Parse DDL into a canonical schema; raises ParseError."""
        return self.parser.parse(sql)

    def validate_ddl(self, sql: str) -> ValidationResult:
        return self.validator.validate(sql)

    def ensure_valid(self, sql: str) -> ValidationResult:
        """Validate DDL text and refuse it when validation reports errors.

        Raises:
            ValidationFailedError: If validation reports any error.
        """
        validation = self.validate_ddl(sql)
        if not validation.is_valid:
            raise ValidationFailedError(validation.errors)
        return validation

    def extract_dump_tables(self, content: Union[str, bytes]) -> DumpParseResult:
        return self.extractor.extract(content)

    def analyze(self, schema: Schema) -> AnalysisReport:
        """Score a whole schema as one unit.

        A rule counts once per normal form if it fired on any table.

        Args:
            schema: The canonical schema.

        Returns:
            The analysis report.

        Raises:
            AnalysisError: If scoring fails unexpectedly.
        """
        try:
            violations = self.resolver.resolve(self.rule_set.evaluate(schema))
            compliance = self.calculator.calculate(violations)
            report = AnalysisReport(
                schema_info=schema,
                compliance=compliance,
                overall_score=self.calculator.overall_score(compliance),
                summary=self.calculator.summarize(violations)
            )
        except AnalysisError:
            raise
        except Exception as e:
            raise AnalysisError(_describe(e)) from e

        logger.info(
            "Analyzed %d tables: overall score %.2f, %d violations",
            len(schema.tables),
            report.overall_score,
            report.summary.total_violations
        )
        return report

    def analyze_ddl(self, sql: str) -> AnalysisReport:
        """Validate, parse and analyze DDL text.

        Raises:
            ValidationFailedError: If validation reports any error.
            AnalysisError: If parsing or scoring fails.
        """
        self.ensure_valid(sql)

        try:
            schema = self.parse_ddl(sql)
        except Exception as e:
            raise AnalysisError(_describe(e)) from e
        return self.analyze(schema)

    def analyze_multi_schema(
        self,
        tables: Union[list[ExtractedTable], Schema]
    ) -> DatabaseAnalysisResult:
        """Score every table independently and roll up per schema.

        Args:
            tables: Extracted table facts, or an already parsed schema.

        Returns:
            The database rollup.

        Raises:
            AnalysisError: If any table cannot be built or scored.
        """
        try:
            if isinstance(tables, Schema):
                canonical: list[Table] = tables.table_list()
            else:
                canonical = [self.parser.builder.build(facts) for facts in tables]
            return self.aggregator.aggregate(canonical)
        except AnalysisError:
            raise
        except Exception as e:
            raise AnalysisError(_describe(e)) from e

    def analyze_dump(
        self,
        content: Union[str, bytes]
    ) -> tuple[DumpParseResult, DatabaseAnalysisResult]:
        """Extract tables from a dump and analyze them per schema.

        Raises:
            AnalysisError: If no table could be extracted from the dump.
        """
        extraction = self.extract_dump_tables(content)
        if not extraction.success:
            raise AnalysisError(
                "Failed to parse dump file: " + "; ".join(extraction.errors)
            )
        return extraction, self.analyze_multi_schema(extraction.tables)

    def get_supported_features(self) -> dict:
        return {
            "dialects": ["PostgreSQL"],
            "statements": list(SUPPORTED_STATEMENTS),
            "normalForms": ["1NF", "2NF", "3NF"],
        }


def _describe(error: Exception) -> str:
    if isinstance(error, NormaDBError):
        return error.message
    return str(error) or type(error).__name__
