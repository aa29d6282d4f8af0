# normadb/models/schema.py
"""Canonical schema models."""

import logging
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from normadb.utils.constants import DEFAULT_SCHEMA

logger = logging.getLogger("schema-model")


class ForeignKeyRef(BaseModel):
    """Unresolved reference from a column to another table.

    ``column`` is None when the DDL omits it (``REFERENCES users``), which
    means the target's primary key. Targets are never checked for existence.
    """

    table: str
    column: Optional[str] = None


class Column(BaseModel):
    """Column information model."""

    name: str
    type: str
    nullable: bool = True
    primary_key: bool = Field(default=False, alias="primaryKey")
    unique: bool = False
    foreign_key: Optional[ForeignKeyRef] = Field(default=None, alias="foreignKey")

    model_config = ConfigDict(populate_by_name=True)


class ForeignKey(BaseModel):
    """Table-level foreign key edge."""

    column: str
    references_table: str = Field(alias="referencesTable")
    references_column: Optional[str] = Field(default=None, alias="referencesColumn")

    model_config = ConfigDict(populate_by_name=True)


class Table(BaseModel):
    """Canonical table model.

    ``columns`` keeps declaration order and ``primary_keys`` keeps the
    declared key order, which matters for composite keys.
    """

    name: str
    schema_name: str = Field(default=DEFAULT_SCHEMA, alias="schema")
    columns: dict[str, Column] = Field(default_factory=dict)
    primary_keys: list[str] = Field(default_factory=list, alias="primaryKeys")
    foreign_keys: list[ForeignKey] = Field(default_factory=list, alias="foreignKeys")
    unique_constraints: list[list[str]] = Field(
        default_factory=list, alias="uniqueConstraints"
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}"

    @property
    def key(self) -> str:
        """Name of the table as keyed in a Schema and stamped on its violations."""
        return Schema.key_for(self.name, self.schema_name)

    def get_column(self, name: str) -> Optional[Column]:
        return self.columns.get(name)

    def is_primary_key(self, column_name: str) -> bool:
        return column_name in self.primary_keys

    def is_foreign_key(self, column_name: str) -> bool:
        column = self.columns.get(column_name)
        return column is not None and column.foreign_key is not None

    def has_composite_primary_key(self) -> bool:
        return len(self.primary_keys) > 1

    def non_key_columns(self) -> list[Column]:
        """Columns that are not part of the primary key, in declared order."""
        return [
            col for col in self.columns.values()
            if col.name not in self.primary_keys
        ]

    def candidate_keys(self) -> list[str]:
        """Identify single columns that uniquely identify a row.

        Combines the primary key columns, columns declared ``UNIQUE`` inline
        and single-column unique constraints.

        Returns:
            Column names without duplicates, primary keys first.
        """
        keys = list(self.primary_keys)
        for column in self.columns.values():
            if column.unique and column.name not in keys:
                keys.append(column.name)
        for group in self.unique_constraints:
            if len(group) == 1 and group[0] not in keys:
                keys.append(group[0])
        return keys


class Schema(BaseModel):
    """A parsed set of tables.

    Tables in ``public`` are keyed by their bare name, tables in any other
    schema by ``schema.table``.
    """

    tables: dict[str, Table] = Field(default_factory=dict)

    @staticmethod
    def key_for(name: str, schema_name: str = DEFAULT_SCHEMA) -> str:
        if schema_name == DEFAULT_SCHEMA:
            return name
        return f"{schema_name}.{name}"

    def add_table(self, table: Table) -> None:
        key = self.key_for(table.name, table.schema_name)
        if key in self.tables:
            logger.warning("Table '%s' defined more than once; keeping the last definition", key)
        self.tables[key] = table

    def get_table(self, name: str, schema_name: str = DEFAULT_SCHEMA) -> Optional[Table]:
        return self.tables.get(self.key_for(name, schema_name))

    def table_list(self) -> list[Table]:
        return list(self.tables.values())
