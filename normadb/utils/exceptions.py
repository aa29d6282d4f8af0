# normadb/utils/exceptions.py
"""Exception classes for normadb."""

from normadb.utils.constants import ErrorCode, ERROR_MESSAGES


class NormaDBError(Exception):
    """Base exception class for normadb."""

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict | None = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary format.

        Returns:
            A dictionary representation of the error.
        """
        return {
            "status": "error",
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details
            }
        }


class ParseError(NormaDBError):
    """Fatal DDL parsing error (unbalanced parentheses, missing column list...)."""

    def __init__(self, message: str, construct: str | None = None):
        super().__init__(
            code=ErrorCode.PARSE_FAILED,
            message=message,
            details={"construct": construct} if construct else None
        )
        self.construct = construct


class UnsupportedConstructError(NormaDBError):
    """A statement or clause the analyzer refuses to validate."""

    def __init__(self, construct: str):
        super().__init__(
            code=ErrorCode.UNSUPPORTED_CONSTRUCT,
            message=f"Unsupported SQL construct: {construct}",
            details={"construct": construct}
        )
        self.construct = construct


class ExtractionWarning(NormaDBError):
    """Recoverable dump extraction problem; recorded, never raised."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(
            code=ErrorCode.EXTRACTION_WARNING,
            message=message,
            details={"line": line} if line is not None else None
        )
        self.line = line


class RuleEvaluationError(NormaDBError):
    """A single rule failed while evaluating one table."""

    def __init__(self, rule_id: str, table: str, reason: str):
        super().__init__(
            code=ErrorCode.RULE_EVALUATION_FAILED,
            message=f"Rule '{rule_id}' failed on table '{table}': {reason}",
            details={"rule_id": rule_id, "table": table}
        )
        self.rule_id = rule_id
        self.table = table


class AnalysisError(NormaDBError):
    """Top-level analysis failure wrapping the underlying cause."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.ANALYSIS_FAILED,
            message=f"Analysis failed: {message}"
        )


class ValidationFailedError(NormaDBError):
    """Validation reported errors, so analysis was not attempted."""

    def __init__(self, errors: list[str]):
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            details={"errors": list(errors)}
        )
        self.errors = list(errors)


class InputTooLargeError(NormaDBError):
    """Input exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code=ErrorCode.INPUT_TOO_LARGE,
            message=f"Input of {size} bytes exceeds the {limit} byte limit",
            details={"size": size, "limit": limit}
        )
