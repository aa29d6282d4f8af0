# normadb/models/__init__.py
"""Data models for normadb."""

from normadb.models.schema import (
    ForeignKeyRef,
    Column,
    ForeignKey,
    Table,
    Schema,
)
from normadb.models.dump import (
    ConstraintType,
    ReferenceDef,
    ColumnDef,
    ConstraintDef,
    ExtractedTable,
    DumpMetadata,
    DumpParseResult,
    ValidationResult,
)
from normadb.models.analysis import (
    NormalForm,
    Severity,
    ComplianceStatus,
    SchemaStatus,
    Violation,
    ComplianceScore,
    AnalysisSummary,
    ScoringModel,
    AnalysisReport,
    NormalFormRollup,
    TableAnalysisResult,
    SchemaAnalysisResult,
    DatabaseAnalysisResult,
)

__all__ = [
    "ForeignKeyRef",
    "Column",
    "ForeignKey",
    "Table",
    "Schema",
    "ConstraintType",
    "ReferenceDef",
    "ColumnDef",
    "ConstraintDef",
    "ExtractedTable",
    "DumpMetadata",
    "DumpParseResult",
    "ValidationResult",
    "NormalForm",
    "Severity",
    "ComplianceStatus",
    "SchemaStatus",
    "Violation",
    "ComplianceScore",
    "AnalysisSummary",
    "ScoringModel",
    "AnalysisReport",
    "NormalFormRollup",
    "TableAnalysisResult",
    "SchemaAnalysisResult",
    "DatabaseAnalysisResult",
]
