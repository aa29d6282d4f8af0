# normadb/services/ddl_validator.py
"""DDL validation services."""

import logging

from normadb.models.dump import ValidationResult
from normadb.services.ddl_parser import (
    CREATE_TABLE_PREFIX,
    LITERAL_TOKENS,
    DDLParser,
    inherits_columns,
    split_statements,
    tokenize_sql,
)
from normadb.utils.exceptions import ParseError, UnsupportedConstructError

logger = logging.getLogger("ddl-validator")


class DDLValidator:
    """Check DDL text before analysis.

    Validation reports problems instead of raising: parse failures and
    unsupported constructs become errors, suspicious tables become warnings.
    """

    # Object kinds the analyzer cannot reason about
    UNSUPPORTED_OBJECTS = {"VIEW", "TRIGGER", "FUNCTION", "PROCEDURE", "RULE"}

    # Words that may sit between CREATE and the object kind
    CREATE_MODIFIERS = {"OR", "REPLACE", "TEMP", "TEMPORARY", "RECURSIVE", "CONSTRAINT"}

    def __init__(self, parser: DDLParser | None = None):
        self.parser = parser or DDLParser()

    def validate(self, sql: str) -> ValidationResult:
        """Validate DDL text.

        Args:
            sql: DDL text.

        Returns:
            The validation result; ``is_valid`` is False when any error
            was found.
        """
        result = ValidationResult(is_valid=True)

        try:
            statements = split_statements(sql)
        except ParseError as e:
            result.errors.append(f"SQL parsing failed: {e.message}")
            result.is_valid = False
            return result

        table_count = 0
        for statement in statements:
            try:
                words = self._keywords(statement)
                self._check_object_kind(words)
                if not CREATE_TABLE_PREFIX.match(statement) or inherits_columns(statement):
                    continue

                facts = self.parser.parse_statement(statement)
                table_count += 1
                if "CHECK" in words:
                    raise UnsupportedConstructError(
                        f"CHECK constraint in table '{facts.table_name}'"
                    )

                table = self.parser.builder.build(facts)
                if not table.primary_keys:
                    result.warnings.append(f"Table '{table.name}' has no primary key")
                if not table.columns:
                    result.warnings.append(f"Table '{table.name}' has no columns defined")
            except UnsupportedConstructError as e:
                result.errors.append(e.message)
            except ParseError as e:
                result.errors.append(f"SQL parsing failed: {e.message}")

        if table_count == 0:
            result.warnings.append("No CREATE TABLE statements found in the SQL file")

        result.is_valid = not result.errors
        logger.debug(
            "Validated %d statements: %d errors, %d warnings",
            len(statements),
            len(result.errors),
            len(result.warnings)
        )
        return result

    def _keywords(self, statement: str) -> list[str]:
        """Upper-cased bare words of a statement, literals excluded."""
        tokens = tokenize_sql(statement)
        # Multi-word keywords such as PRIMARY KEY arrive as one token
        return [
            word
            for token in tokens
            if token.token_type not in LITERAL_TOKENS
            for word in token.text.upper().split()
        ]

    def _check_object_kind(self, words: list[str]) -> None:
        if not words or words[0] != "CREATE":
            return
        index = 1
        while index < len(words) and words[index] in self.CREATE_MODIFIERS:
            index += 1
        if index >= len(words):
            return

        kind = words[index]
        if kind == "MATERIALIZED" and index + 1 < len(words) and words[index + 1] == "VIEW":
            raise UnsupportedConstructError("CREATE MATERIALIZED VIEW")
        if kind in self.UNSUPPORTED_OBJECTS:
            raise UnsupportedConstructError(f"CREATE {kind}")
