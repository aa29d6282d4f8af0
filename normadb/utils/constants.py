# normadb/utils/constants.py
"""Constants for normadb."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error code enumeration."""

    PARSE_FAILED = "ERR_001"
    UNSUPPORTED_CONSTRUCT = "ERR_002"
    EXTRACTION_WARNING = "ERR_003"
    RULE_EVALUATION_FAILED = "ERR_004"
    ANALYSIS_FAILED = "ERR_005"
    VALIDATION_FAILED = "ERR_006"
    INPUT_TOO_LARGE = "ERR_007"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.PARSE_FAILED: "SQL parsing failed",
    ErrorCode.UNSUPPORTED_CONSTRUCT: "Unsupported SQL construct",
    ErrorCode.EXTRACTION_WARNING: "Dump extraction incomplete",
    ErrorCode.RULE_EVALUATION_FAILED: "Normalization rule evaluation failed",
    ErrorCode.ANALYSIS_FAILED: "Analysis failed",
    ErrorCode.VALIDATION_FAILED: "Invalid SQL",
    ErrorCode.INPUT_TOO_LARGE: "Input exceeds the maximum allowed size",
}


DEFAULT_SCHEMA = "public"

SYSTEM_SCHEMAS = ("pg_catalog", "information_schema", "pg_toast")

# Binary pg_dump archives (custom format) start with this signature
BINARY_DUMP_SIGNATURE = "PGDMP"

# Version-locked scoring policy. Changing any of these changes every score.
SCORING_VERSION = "1.0"

NF_MAX_WEIGHTS: dict[str, float] = {
    "1NF": 0.75,
    "2NF": 1.00,
    "3NF": 1.00,
}

NF_OVERALL_WEIGHTS: dict[str, float] = {
    "1NF": 0.50,
    "2NF": 0.30,
    "3NF": 0.20,
}

PASS_THRESHOLD = 90.0
WARNING_THRESHOLD = 70.0

SUPPORTED_STATEMENTS = [
    "CREATE TABLE",
    "Column definitions",
    "PRIMARY KEY",
    "FOREIGN KEY",
    "UNIQUE",
]
