# normadb/services/dump_extractor.py
"""CREATE TABLE block extraction from PostgreSQL dump files.

The extractor only finds statement blocks and records them as facts; the
contents of each block are interpreted later by the DDL parser.
"""

import logging
import re
from typing import Optional, Union

from normadb.models.dump import DumpParseResult, ExtractedTable
from normadb.services.ddl_parser import inherits_columns
from normadb.utils.constants import BINARY_DUMP_SIGNATURE
from normadb.utils.exceptions import ExtractionWarning
from normadb.utils.identifiers import QUALIFIED_NAME, split_qualified_name

logger = logging.getLogger("dump-extractor")

# Binary dumps interleave non-text bytes, so noise may precede the keyword
_CREATE_TABLE_RE = re.compile(
    r"CREATE\s+(?:(?:GLOBAL|LOCAL)\s+)?(?:(?:TEMPORARY|TEMP|UNLOGGED)\s+)?TABLE\s+"
    r"(?:IF\s+NOT\s+EXISTS\s+)?(?P<name>" + QUALIFIED_NAME + r")",
    re.IGNORECASE
)
_STRING_LITERAL_RE = re.compile(r"'(?:[^']|'')*'")


class _OpenBlock:
    """A CREATE TABLE block being accumulated."""

    def __init__(self, schema_name: str, table_name: str, line_number: int):
        self.schema_name = schema_name
        self.table_name = table_name
        self.line_number = line_number
        self.lines: list[str] = []
        self.depth = 0
        self.seen_semicolon = False

    @property
    def label(self) -> str:
        return f"{self.schema_name}.{self.table_name}"

    def feed(self, line: str) -> bool:
        """Add a line; return True when the statement is complete."""
        code = _STRING_LITERAL_RE.sub("''", line)
        self.depth += code.count("(") - code.count(")")
        if ";" in code:
            self.seen_semicolon = True
            if self.depth <= 0:
                line = line[:line.rfind(";") + 1]
        self.lines.append(line)
        return self.seen_semicolon and self.depth <= 0

    def statement(self) -> str:
        return "\n".join(self.lines).strip()


class DumpExtractor:
    """Extract CREATE TABLE statement blocks from text or binary dumps."""

    def detect_format(self, content: str) -> str:
        """Detect the dump format from its signature.

        Args:
            content: The dump content.

        Returns:
            ``"binary"`` for pg_dump archives, ``"text"`` otherwise.
        """
        return "binary" if content.startswith(BINARY_DUMP_SIGNATURE) else "text"

    def extract(self, content: Union[str, bytes]) -> DumpParseResult:
        """Scan a dump and collect every complete CREATE TABLE block.

        Unclosed blocks are reported as warnings in ``errors``; the blocks
        that did complete are still returned.

        Args:
            content: Raw dump content; bytes are decoded as UTF-8 with
                replacement characters.

        Returns:
            The extraction result.
        """
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")

        result = DumpParseResult()
        result.metadata.total_size = len(content)
        result.metadata.detected_format = self.detect_format(content)

        block: Optional[_OpenBlock] = None

        for line_number, raw_line in enumerate(content.split("\n"), start=1):
            line = raw_line.strip()
            if not line or line.startswith("--") or line.startswith("/*"):
                continue

            match = _CREATE_TABLE_RE.search(line)
            if match:
                if block is not None:
                    self._warn(
                        result,
                        f"Unclosed CREATE TABLE for {block.label} before line {line_number}",
                        block.line_number
                    )
                schema_name, table_name = split_qualified_name(match.group("name"))
                block = _OpenBlock(schema_name, table_name, line_number)
                line = line[match.start():]
            elif block is None:
                continue

            if block.feed(line):
                statement = block.statement()
                if inherits_columns(statement):
                    logger.debug("Skipping partition or typed table %s", block.label)
                else:
                    result.tables.append(ExtractedTable(
                        schema_name=block.schema_name,
                        table_name=block.table_name,
                        source="dump",
                        create_statement=statement
                    ))
                block = None

        if block is not None:
            self._warn(
                result,
                f"Unclosed CREATE TABLE for {block.label} at end of file",
                block.line_number
            )

        result.metadata.extracted_size = sum(
            len(table.create_statement or "") for table in result.tables
        )
        result.success = bool(result.tables) or not result.errors

        logger.info(
            "Extracted %d tables from %s dump (%d of %d characters, %d warnings)",
            len(result.tables),
            result.metadata.detected_format,
            result.metadata.extracted_size,
            result.metadata.total_size,
            len(result.errors)
        )
        return result

    def _warn(self, result: DumpParseResult, message: str, line: int) -> None:
        warning = ExtractionWarning(message, line=line)
        logger.warning("%s", warning.message)
        result.errors.append(warning.message)
