# normadb/services/__init__.py
"""Service modules for normadb."""

from normadb.services.table_builder import TableBuilder, assemble_table
from normadb.services.ddl_parser import DDLParser, split_statements, split_definitions
from normadb.services.ddl_validator import DDLValidator
from normadb.services.dump_extractor import DumpExtractor
from normadb.services.conflict_resolver import ConflictResolver
from normadb.services.compliance import ComplianceCalculator
from normadb.services.aggregator import SchemaAggregator
from normadb.services.analyzer import NormalizationAnalyzer

__all__ = [
    # Parsing
    "TableBuilder",
    "assemble_table",
    "DDLParser",
    "split_statements",
    "split_definitions",
    "DDLValidator",
    "DumpExtractor",
    # Scoring
    "ConflictResolver",
    "ComplianceCalculator",
    "SchemaAggregator",
    # Facade
    "NormalizationAnalyzer",
]
