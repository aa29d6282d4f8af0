# normadb/models/analysis.py
"""Analysis result models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from normadb.models.schema import Schema
from normadb.utils.constants import SCORING_VERSION


class NormalForm(str, Enum):
    """Normal form enumeration."""

    FIRST = "1NF"
    SECOND = "2NF"
    THIRD = "3NF"


class Severity(str, Enum):
    """Violation severity.

    ERROR is reserved for deterministic checks, WARNING for heuristics.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"


class ComplianceStatus(str, Enum):
    """Per normal form status derived from its score."""

    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


class SchemaStatus(str, Enum):
    """Display status of a schema rollup."""

    PERFECT = "PERFECT"
    GOOD = "GOOD"
    NEEDS_ATTENTION = "NEEDS_ATTENTION"
    CRITICAL = "CRITICAL"


class Violation(BaseModel):
    """A single normalization rule violation."""

    rule_id: str = Field(alias="ruleId")
    normal_form: NormalForm = Field(alias="normalForm")
    table: str
    column: Optional[str] = None
    severity: Severity
    message: str
    explanation: str
    suggestion: str
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = ConfigDict(populate_by_name=True)


class ComplianceScore(BaseModel):
    """Score of one normal form."""

    normal_form: NormalForm = Field(alias="normalForm")
    score: float
    max_weight: float = Field(alias="maxWeight")
    violated_weight: float = Field(alias="violatedWeight")
    total_rules: int = Field(alias="totalRules")
    passed_rules: int = Field(alias="passedRules")
    status: ComplianceStatus
    violations: list[Violation] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class AnalysisSummary(BaseModel):
    """Violation counts of a report."""

    total_violations: int = Field(default=0, alias="totalViolations")
    critical_violations: int = Field(default=0, alias="criticalViolations")
    warnings: int = 0

    model_config = ConfigDict(populate_by_name=True)


class ScoringModel(BaseModel):
    """Describes how scores were computed."""

    type: str = "rule-relative"
    description: str = (
        "Scores are calculated relative to implemented rules, "
        "not absolute percentages"
    )
    version: str = SCORING_VERSION


class AnalysisReport(BaseModel):
    """Single schema analysis report."""

    schema_info: Schema = Field(alias="schema")
    compliance: dict[str, ComplianceScore]
    overall_score: float = Field(alias="overallScore")
    summary: AnalysisSummary
    scoring_model: ScoringModel = Field(default_factory=ScoringModel, alias="scoringModel")

    model_config = ConfigDict(populate_by_name=True)


class NormalFormRollup(BaseModel):
    """Share of tables in a schema free of violations for one normal form."""

    score: float
    violated_tables: int = Field(alias="violatedTables")
    total_tables: int = Field(alias="totalTables")

    model_config = ConfigDict(populate_by_name=True)


class TableAnalysisResult(BaseModel):
    """Per table breakdown inside a schema rollup."""

    table_name: str = Field(alias="tableName")
    scores: dict[str, float]
    overall_score: float = Field(alias="overallScore")
    violation_count: int = Field(alias="violationCount")

    model_config = ConfigDict(populate_by_name=True)


class SchemaAnalysisResult(BaseModel):
    """Rollup of every table in one database schema."""

    schema_name: str = Field(alias="schemaName")
    table_count: int = Field(alias="tableCount")
    normalization: dict[str, NormalFormRollup]
    violations: list[Violation] = Field(default_factory=list)
    overall_score: float = Field(alias="overallScore")
    status: SchemaStatus
    tables: list[TableAnalysisResult] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class DatabaseAnalysisResult(BaseModel):
    """Rollup of every schema in the input."""

    total_schemas: int = Field(alias="totalSchemas")
    total_tables: int = Field(alias="totalTables")
    overall_score: float = Field(alias="overallScore")
    schemas: list[SchemaAnalysisResult] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
