# normadb/models/dump.py
"""Table fact models produced by the parser and dump extractor."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict


class ConstraintType(str, Enum):
    """Table-level constraint kinds the analyzer understands."""

    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"


class ReferenceDef(BaseModel):
    """Target of a foreign key constraint."""

    table: str
    columns: list[str] = Field(default_factory=list)


class ColumnDef(BaseModel):
    """A column as declared, before canonicalization."""

    name: str
    type: str
    nullable: bool = True
    primary_key: bool = Field(default=False, alias="primaryKey")
    unique: bool = False
    references: Optional[ReferenceDef] = None

    model_config = ConfigDict(populate_by_name=True)


class ConstraintDef(BaseModel):
    """A table-level constraint as declared."""

    type: ConstraintType
    columns: list[str]
    references: Optional[ReferenceDef] = None


class ExtractedTable(BaseModel):
    """Facts about one CREATE TABLE statement.

    Either ``columns``/``constraints`` are filled in, or only
    ``create_statement`` carries the verbatim text to be parsed later.
    """

    schema_name: str = Field(alias="schema")
    table_name: str = Field(alias="tableName")
    columns: list[ColumnDef] = Field(default_factory=list)
    constraints: list[ConstraintDef] = Field(default_factory=list)
    source: Literal["sql", "dump"] = "sql"
    create_statement: Optional[str] = Field(default=None, alias="createStatement")

    model_config = ConfigDict(populate_by_name=True)


class DumpMetadata(BaseModel):
    """Diagnostics about a dump extraction run."""

    total_size: int = Field(default=0, alias="totalSize")
    extracted_size: int = Field(default=0, alias="extractedSize")
    detected_format: Literal["text", "binary"] = Field(
        default="text", alias="detectedFormat"
    )

    model_config = ConfigDict(populate_by_name=True)


class DumpParseResult(BaseModel):
    """Result of extracting CREATE TABLE blocks from a dump."""

    success: bool = False
    tables: list[ExtractedTable] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    metadata: DumpMetadata = Field(default_factory=DumpMetadata)


class ValidationResult(BaseModel):
    """Result of validating DDL text."""

    is_valid: bool = Field(alias="isValid")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
