# normadb/services/ddl_parser.py
"""PostgreSQL DDL parsing services."""

import logging
import re
from typing import Optional

from sqlglot.dialects.postgres import Postgres
from sqlglot.errors import TokenError
from sqlglot.tokens import Token, TokenType

from normadb.models.dump import (
    ColumnDef,
    ConstraintDef,
    ConstraintType,
    ExtractedTable,
    ReferenceDef,
)
from normadb.models.schema import Schema
from normadb.services.table_builder import TableBuilder
from normadb.utils.exceptions import ParseError
from normadb.utils.identifiers import (
    IDENTIFIER_PART,
    QUALIFIED_NAME,
    normalize_identifier,
    parse_identifier_list,
    split_qualified_name,
)

logger = logging.getLogger("ddl-parser")

CREATE_TABLE_PREFIX = re.compile(
    r"^\s*CREATE\s+(?:(?:GLOBAL|LOCAL)\s+)?(?:(?:TEMPORARY|TEMP|UNLOGGED)\s+)?TABLE\b",
    re.IGNORECASE
)

_CREATE_TABLE_RE = re.compile(
    r"^\s*CREATE\s+(?:(?:GLOBAL|LOCAL)\s+)?(?:(?:TEMPORARY|TEMP|UNLOGGED)\s+)?TABLE\s+"
    r"(?:IF\s+NOT\s+EXISTS\s+)?(?P<name>" + QUALIFIED_NAME + r")\s*(?P<rest>.*)$",
    re.IGNORECASE | re.DOTALL
)

# Partitions and typed tables take their columns from a parent table or type
_INHERITED_COLUMNS_RE = re.compile(r"^(?:PARTITION\s+)?OF\b", re.IGNORECASE)

_CONSTRAINT_RE = re.compile(
    r"^CONSTRAINT\s+" + IDENTIFIER_PART + r"\s*(?P<body>.*)$",
    re.IGNORECASE | re.DOTALL
)
_PRIMARY_KEY_RE = re.compile(r"^PRIMARY\s+KEY\s*\((?P<cols>[^)]*)\)", re.IGNORECASE)
_FOREIGN_KEY_RE = re.compile(
    r"^FOREIGN\s+KEY\s*\((?P<cols>[^)]*)\)\s*REFERENCES\s+(?P<table>" + QUALIFIED_NAME + r")"
    r"\s*(?:\((?P<ref_cols>[^)]*)\))?",
    re.IGNORECASE
)
_UNIQUE_RE = re.compile(r"^UNIQUE\b[^(]*\((?P<cols>[^)]*)\)", re.IGNORECASE)
_REFERENCES_TARGET_RE = re.compile(
    r"^(?P<table>" + QUALIFIED_NAME + r")\s*(?:\((?P<cols>[^)]*)\))?"
)
_SKIPPED_CLAUSE_RE = re.compile(r"^(?:CHECK|EXCLUDE|LIKE)\b", re.IGNORECASE)
_LEADING_WORD_RE = re.compile(r"[A-Za-z_]+")

# Words that end the type part of a column definition
COLUMN_STOP_WORDS = frozenset({
    "CONSTRAINT", "NOT", "NULL", "PRIMARY", "UNIQUE", "DEFAULT",
    "REFERENCES", "CHECK", "COLLATE", "GENERATED", "AUTO_INCREMENT",
})

# Token types whose text is data, never a keyword
LITERAL_TOKENS = frozenset({
    TokenType.STRING,
    TokenType.IDENTIFIER,
    TokenType.HEREDOC_STRING,
    TokenType.NATIONAL_STRING,
    TokenType.BYTE_STRING,
    TokenType.RAW_STRING,
    TokenType.BIT_STRING,
    TokenType.HEX_STRING,
    TokenType.UNICODE_STRING,
})


class _DDLTokenizer(Postgres.Tokenizer):
    """PostgreSQL tokenizer that never folds the rest of a statement into a command string.

    Column names such as ``show`` or ``fetch`` would otherwise swallow the
    clause that follows them.
    """

    COMMANDS: set = set()


def _head(text: str, limit: int = 60) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) > limit:
        return collapsed[:limit] + "..."
    return collapsed


def tokenize_sql(text: str) -> list[Token]:
    """Lex PostgreSQL text with sqlglot.

    Comments are dropped; every token keeps its offsets into ``text``.

    Raises:
        ParseError: On unterminated literals or other lexing failures.
    """
    try:
        return _DDLTokenizer(dialect="postgres").tokenize(text)
    except TokenError as e:
        statement = _head(text)
        raise ParseError(
            f"Malformed literal or token in: {statement}",
            construct=statement
        ) from e


def _source_text(text: str, tokens: list[Token]) -> str:
    """Source text spanned by tokens, with comments between them collapsed to a space."""
    parts: list[str] = []
    previous: Optional[Token] = None
    for token in tokens:
        if previous is not None:
            gap = text[previous.end + 1:token.start]
            parts.append(gap if not gap.strip() else " ")
        parts.append(text[token.start:token.end + 1])
        previous = token
    return "".join(parts).strip()


def _split_top_level(text: str, separator: TokenType) -> list[str]:
    """Split text on a separator token that is outside parentheses.

    Args:
        text: The text to split.
        separator: ``TokenType.SEMICOLON`` or ``TokenType.COMMA``.

    Returns:
        Non-empty, stripped pieces in order, comments removed.

    Raises:
        ParseError: On unbalanced parentheses or unterminated literals.
    """
    pieces: list[str] = []
    current: list[Token] = []
    depth = 0

    for token in tokenize_sql(text):
        if token.token_type == TokenType.L_PAREN:
            depth += 1
        elif token.token_type == TokenType.R_PAREN:
            depth -= 1
            if depth < 0:
                statement = _head(_source_text(text, current))
                raise ParseError(
                    f"Unbalanced parentheses: unexpected ')' in: {statement}",
                    construct=statement
                )
        elif token.token_type == separator and depth == 0:
            if current:
                pieces.append(_source_text(text, current))
            current = []
            continue
        current.append(token)

    if depth > 0:
        statement = _head(_source_text(text, current))
        raise ParseError(
            f"Unbalanced parentheses: {depth} unclosed '(' in: {statement}",
            construct=statement
        )

    if current:
        pieces.append(_source_text(text, current))
    return pieces


def split_statements(sql: str) -> list[str]:
    """Split SQL text into statements on top-level semicolons."""
    return _split_top_level(sql, TokenType.SEMICOLON)


def split_definitions(body: str) -> list[str]:
    """Split a CREATE TABLE body into column and constraint clauses."""
    return _split_top_level(body, TokenType.COMMA)


def tokenize_clause(clause: str) -> list[str]:
    """Split a clause into words on whitespace outside parentheses.

    ``NUMERIC(10, 2)`` and ``"User Name"`` stay single words; multi-word
    keywords such as ``PRIMARY KEY`` are split back into their words.
    """
    words: list[str] = []
    depth = 0
    previous: Optional[Token] = None

    for token in tokenize_sql(clause):
        text = clause[token.start:token.end + 1]
        if previous is not None and (depth > 0 or token.start == previous.end + 1):
            gap = clause[previous.end + 1:token.start]
            words[-1] += (gap if not gap.strip() else " ") + text
        elif token.token_type in LITERAL_TOKENS:
            words.append(text)
        else:
            words.extend(text.split())

        if token.token_type == TokenType.L_PAREN:
            depth += 1
        elif token.token_type == TokenType.R_PAREN:
            depth = max(0, depth - 1)
        previous = token

    return words


def inherits_columns(statement: str) -> bool:
    """True for ``CREATE TABLE ... PARTITION OF`` and ``CREATE TABLE ... OF type``."""
    match = _CREATE_TABLE_RE.match(statement)
    return bool(match and _INHERITED_COLUMNS_RE.match(match.group("rest")))


def _keyword(token: str) -> str:
    """Leading bare word of a token, upper-cased; empty for literals."""
    if not token or token[0] in ("'", '"'):
        return ""
    match = _LEADING_WORD_RE.match(token)
    return match.group(0).upper() if match else ""


def _normalize_type(raw: str) -> str:
    data_type = " ".join(raw.split()).upper()
    data_type = re.sub(r"\s+(?=[(\[])", "", data_type)
    return re.sub(r"\s*,\s*", ",", data_type)


def _find_closing_paren(text: str, start: int) -> int:
    """Offset of the ')' closing the first '(' at or after ``start``; -1 if none."""
    depth = 0
    for token in tokenize_sql(text):
        if token.start < start:
            continue
        if token.token_type == TokenType.L_PAREN:
            depth += 1
        elif token.token_type == TokenType.R_PAREN and depth > 0:
            depth -= 1
            if depth == 0:
                return token.start
    return -1




class DDLParser:
    """Parse CREATE TABLE statements into table facts and canonical tables.

    Statements other than CREATE TABLE are skipped silently so that dumps
    containing other DDL can be parsed.
    """

    def __init__(self):
        self.builder = TableBuilder(parse_statement=self.parse_statement)

    def parse(self, sql: str) -> Schema:
        """Parse DDL text into a canonical schema.

        Args:
            sql: One or more semicolon-terminated statements.

        Returns:
            The parsed schema.

        Raises:
            ParseError: On malformed input.
        """
        schema = Schema()
        for facts in self.extract(sql):
            schema.add_table(self.builder.build(facts))
        return schema

    def extract(self, sql: str) -> list[ExtractedTable]:
        """Parse every CREATE TABLE statement into table facts.

        Args:
            sql: DDL text.

        Returns:
            Facts for each CREATE TABLE statement with its own column list,
            in input order. Partitions and typed tables are skipped.
        """
        tables = []
        for statement in split_statements(sql):
            if not CREATE_TABLE_PREFIX.match(statement):
                logger.debug("Skipping statement: %s", _head(statement))
                continue
            if inherits_columns(statement):
                logger.debug("Skipping partition or typed table: %s", _head(statement))
                continue
            tables.append(self._parse_create_table(statement))
        return tables

    def parse_statement(self, statement: str) -> ExtractedTable:
        """Parse the first CREATE TABLE statement found in the text.

        Args:
            statement: Text holding a CREATE TABLE statement, possibly with
                comments or trailing statements.

        Returns:
            Facts for that table.

        Raises:
            ParseError: If there is no CREATE TABLE statement or it is malformed.
        """
        for candidate in split_statements(statement):
            if CREATE_TABLE_PREFIX.match(candidate):
                return self._parse_create_table(candidate)
        raise ParseError(
            f"No CREATE TABLE statement found in: {_head(statement)}",
            construct=_head(statement)
        )

    def _parse_create_table(self, statement: str) -> ExtractedTable:
        match = _CREATE_TABLE_RE.match(statement)
        if not match:
            raise ParseError(
                f"Malformed CREATE TABLE statement: {_head(statement)}",
                construct=_head(statement)
            )

        schema_name, table_name = split_qualified_name(match.group("name"))
        rest = match.group("rest")
        if not rest.startswith("("):
            raise ParseError(
                f"CREATE TABLE {table_name} has no column list",
                construct=f"CREATE TABLE {table_name}"
            )

        close = _find_closing_paren(rest, 0)
        if close == -1:
            raise ParseError(
                f"Unbalanced parentheses in CREATE TABLE {table_name}",
                construct=f"CREATE TABLE {table_name}"
            )

        columns: list[ColumnDef] = []
        constraints: list[ConstraintDef] = []
        for clause in split_definitions(rest[1:close]):
            self._parse_clause(clause, table_name, columns, constraints)

        return ExtractedTable(
            schema_name=schema_name,
            table_name=table_name,
            columns=columns,
            constraints=constraints,
            source="sql",
            create_statement=statement
        )

    def _parse_clause(
        self,
        clause: str,
        table_name: str,
        columns: list[ColumnDef],
        constraints: list[ConstraintDef]
    ) -> None:
        """Classify one clause by its leading keyword and record it."""
        named = _CONSTRAINT_RE.match(clause)
        if named:
            self._parse_clause(named.group("body"), table_name, columns, constraints)
            return

        if re.match(r"^PRIMARY\s+KEY\b", clause, re.IGNORECASE):
            match = _PRIMARY_KEY_RE.match(clause)
            if not match:
                raise ParseError(
                    f"Malformed PRIMARY KEY clause in table '{table_name}': {_head(clause)}",
                    construct=clause
                )
            constraints.append(ConstraintDef(
                type=ConstraintType.PRIMARY_KEY,
                columns=parse_identifier_list(match.group("cols"))
            ))
        elif re.match(r"^FOREIGN\s+KEY\b", clause, re.IGNORECASE):
            match = _FOREIGN_KEY_RE.match(clause)
            if not match:
                raise ParseError(
                    f"Malformed FOREIGN KEY clause in table '{table_name}': {_head(clause)}",
                    construct=clause
                )
            _, ref_table = split_qualified_name(match.group("table"))
            constraints.append(ConstraintDef(
                type=ConstraintType.FOREIGN_KEY,
                columns=parse_identifier_list(match.group("cols")),
                references=ReferenceDef(
                    table=ref_table,
                    columns=parse_identifier_list(match.group("ref_cols") or "")
                )
            ))
        elif re.match(r"^UNIQUE\b", clause, re.IGNORECASE):
            match = _UNIQUE_RE.match(clause)
            if not match:
                raise ParseError(
                    f"Malformed UNIQUE clause in table '{table_name}': {_head(clause)}",
                    construct=clause
                )
            constraints.append(ConstraintDef(
                type=ConstraintType.UNIQUE,
                columns=parse_identifier_list(match.group("cols"))
            ))
