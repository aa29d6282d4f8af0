# normadb/services/table_builder.py
"""Canonical table construction from extracted table facts."""

import logging
from typing import Callable, Optional

from normadb.models.dump import ColumnDef, ConstraintDef, ConstraintType, ExtractedTable
from normadb.models.schema import Column, ForeignKey, ForeignKeyRef, Table
from normadb.utils.exceptions import ParseError

logger = logging.getLogger("table-builder")


class TableBuilder:
    """Turn ExtractedTable facts into canonical Tables.

    Structured facts are assembled directly. A dump fact that only carries
    the verbatim CREATE statement is routed through the DDL parser first, so
    both inputs end up in the same assembly step.
    """

    def __init__(
        self,
        parse_statement: Optional[Callable[[str], ExtractedTable]] = None
    ):
        """Initialize the builder.

        Args:
            parse_statement: Callable turning CREATE TABLE text into facts,
                normally ``DDLParser.parse_statement``.
        """
        self.parse_statement = parse_statement

    def build(self, extracted: ExtractedTable) -> Table:
        """Build a canonical table.

        Args:
            extracted: Table facts from the parser or the dump extractor.

        Returns:
            The canonical table.

        Raises:
            ParseError: If the facts cannot be turned into a table.
        """
        if extracted.columns or extracted.constraints or extracted.source == "sql":
            facts = extracted
        elif extracted.create_statement:
            if self.parse_statement is None:
                raise ParseError(
                    f"No DDL parser configured to build table '{extracted.table_name}'",
                    construct=extracted.table_name
                )
            facts = self.parse_statement(extracted.create_statement)
        else:
            raise ParseError(
                f"Table '{extracted.schema_name}.{extracted.table_name}' has neither "
                "column facts nor a CREATE TABLE statement",
                construct=extracted.table_name
            )

        return assemble_table(
            schema_name=extracted.schema_name,
            table_name=extracted.table_name,
            columns=facts.columns,
            constraints=facts.constraints
        )


def assemble_table(
    schema_name: str,
    table_name: str,
    columns: list[ColumnDef],
    constraints: list[ConstraintDef]
) -> Table:
    """Assemble a Table from column and constraint definitions.

    Columns are applied first, then table-level constraints in order. The
    column flags are reconciled with the primary key list and foreign key
    edges at the end.

    Args:
        schema_name: Owning schema.
        table_name: Table name.
        columns: Column definitions in declared order.
        constraints: Table-level constraints in declared order.

    Returns:
        The assembled table.
    """
    table = Table(name=table_name, schema_name=schema_name)

    for col in columns:
        table.columns[col.name] = Column(
            name=col.name,
            type=col.type,
            nullable=col.nullable,
            primary_key=col.primary_key,
            unique=col.unique
        )
        if col.primary_key:
            _append_once(table.primary_keys, col.name)
        if col.unique:
            table.unique_constraints.append([col.name])
        if col.references is not None:
            table.foreign_keys.append(ForeignKey(
                column=col.name,
                references_table=col.references.table,
                references_column=col.references.columns[0] if col.references.columns else None
            ))

    for constraint in constraints:
        if constraint.type == ConstraintType.PRIMARY_KEY:
            for name in constraint.columns:
                _append_once(table.primary_keys, name)
        elif constraint.type == ConstraintType.FOREIGN_KEY:
            if constraint.references is None:
                logger.debug("Foreign key on %s.%s has no target", table_name, constraint.columns)
                continue
            targets = constraint.references.columns
            for index, name in enumerate(constraint.columns):
                table.foreign_keys.append(ForeignKey(
                    column=name,
                    references_table=constraint.references.table,
                    references_column=targets[index] if index < len(targets) else None
                ))
        elif constraint.type == ConstraintType.UNIQUE:
            table.unique_constraints.append(list(constraint.columns))

    for column in table.columns.values():
        column.primary_key = column.name in table.primary_keys

    for edge in table.foreign_keys:
        column = table.columns.get(edge.column)
        if column is not None and column.foreign_key is None:
            column.foreign_key = ForeignKeyRef(
                table=edge.references_table,
                column=edge.references_column
            )

    return table


def _append_once(items: list[str], value: str) -> None:
    if value not in items:
        items.append(value)
