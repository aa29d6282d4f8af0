# normadb/utils/__init__.py
"""Utility modules for normadb."""

from normadb.utils.constants import ErrorCode, ERROR_MESSAGES
from normadb.utils.exceptions import (
    NormaDBError,
    ParseError,
    UnsupportedConstructError,
    ExtractionWarning,
    RuleEvaluationError,
    AnalysisError,
    ValidationFailedError,
    InputTooLargeError,
)
from normadb.utils.identifiers import (
    normalize_identifier,
    split_qualified_name,
    parse_identifier_list,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "NormaDBError",
    "ParseError",
    "UnsupportedConstructError",
    "ExtractionWarning",
    "RuleEvaluationError",
    "AnalysisError",
    "ValidationFailedError",
    "InputTooLargeError",
    "normalize_identifier",
    "split_qualified_name",
    "parse_identifier_list",
]
