# tests/test_models.py
"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError
from normadb.models.analysis import (
    AnalysisSummary,
    NormalForm,
    Severity,
    Violation,
)
from normadb.models.dump import ColumnDef, ExtractedTable
from normadb.models.schema import Column, ForeignKeyRef, Schema, Table


class TestSchemaModels:
    """Schema model test suite."""

    def test_column_aliases(self):
        """Test column fields serialize with camelCase aliases."""
        column = Column(
            name="user_id",
            type="INTEGER",
            primary_key=True,
            foreign_key=ForeignKeyRef(table="users")
        )
        data = column.model_dump(by_alias=True)
        assert data["primaryKey"] is True
        assert data["foreignKey"] == {"table": "users", "column": None}

    def test_populate_by_alias(self):
        """Test models accept alias names on input."""
        table = Table.model_validate({
            "name": "orders",
            "schema": "sales",
            "primaryKeys": ["id"],
        })
        assert table.schema_name == "sales"
        assert table.primary_keys == ["id"]
        assert table.qualified_name == "sales.orders"

    def test_candidate_keys(self):
        """Test candidate keys combine the primary key and unique columns."""
        table = Table(
            name="users",
            columns={
                "id": Column(name="id", type="INTEGER", primary_key=True),
                "email": Column(name="email", type="TEXT", unique=True),
                "username": Column(name="username", type="TEXT"),
                "first": Column(name="first", type="TEXT"),
                "last": Column(name="last", type="TEXT"),
            },
            primary_keys=["id"],
            unique_constraints=[["email"], ["username"], ["first", "last"]]
        )
        assert table.candidate_keys() == ["id", "email", "username"]

    def test_non_key_columns(self):
        """Test non-key columns keep declared order."""
        table = Table(
            name="order_lines",
            columns={
                "order_id": Column(name="order_id", type="INTEGER"),
                "quantity": Column(name="quantity", type="INTEGER"),
                "line_no": Column(name="line_no", type="INTEGER"),
                "price": Column(name="price", type="NUMERIC"),
            },
            primary_keys=["order_id", "line_no"]
        )
        assert [c.name for c in table.non_key_columns()] == ["quantity", "price"]
        assert table.has_composite_primary_key() is True

    def test_schema_keys(self):
        """Test public tables are keyed by bare name, others are qualified."""
        schema = Schema()
        schema.add_table(Table(name="users"))
        schema.add_table(Table(name="log", schema_name="audit"))
        assert list(schema.tables) == ["users", "audit.log"]
        assert schema.get_table("log", "audit").name == "log"
        assert schema.get_table("log") is None
        assert Schema.key_for("users") == "users"

    def test_table_key(self):
        """Test a table knows its own schema key."""
        assert Table(name="users").key == "users"
        assert Table(name="log", schema_name="audit").key == "audit.log"

    def test_duplicate_table_keeps_last(self):
        """Test redefining a table replaces the earlier definition."""
        schema = Schema()
        schema.add_table(Table(name="users", primary_keys=["id"]))
        schema.add_table(Table(name="users"))
        assert schema.get_table("users").primary_keys == []


class TestAnalysisModels:
    """Analysis model test suite."""

    def violation(self, **overrides):
        data = {
            "rule_id": "1nf.primary_key",
            "normal_form": NormalForm.FIRST,
            "table": "logs",
            "severity": Severity.ERROR,
            "message": "Table 'logs' has no primary key",
            "explanation": "explanation",
            "suggestion": "suggestion",
        }
        data.update(overrides)
        return Violation(**data)

    def test_violation_defaults(self):
        """Test table-level violations carry no column and full confidence."""
        violation = self.violation()
        assert violation.column is None
        assert violation.confidence == 1.0

    def test_violation_serialization(self):
        """Test violations serialize with aliases and enum values."""
        data = self.violation().model_dump(by_alias=True, mode="json")
        assert data["ruleId"] == "1nf.primary_key"
        assert data["normalForm"] == "1NF"
        assert data["severity"] == "ERROR"

    @pytest.mark.parametrize("confidence", [-0.1, 1.5])
    def test_confidence_bounds(self, confidence):
        """Test confidence must lie within 0..1."""
        with pytest.raises(ValidationError):
            self.violation(confidence=confidence)

    def test_summary_defaults(self):
        """Test an empty summary."""
        summary = AnalysisSummary()
        assert summary.model_dump(by_alias=True) == {
            "totalViolations": 0,
            "criticalViolations": 0,
            "warnings": 0,
        }


class TestDumpModels:
    """Table fact model test suite."""

    def test_extracted_table_from_aliases(self):
        """Test table facts accept the camelCase field names."""
        facts = ExtractedTable.model_validate({
            "schema": "public",
            "tableName": "users",
            "source": "dump",
            "createStatement": "CREATE TABLE users (id INT);",
        })
        assert facts.table_name == "users"
        assert facts.columns == []
        assert facts.create_statement.startswith("CREATE TABLE")

    def test_extracted_table_source(self):
        """Test only known sources are accepted."""
        with pytest.raises(ValidationError):
            ExtractedTable(schema_name="public", table_name="users", source="csv")

    def test_column_def_defaults(self):
        """Test declared columns are nullable and keyless by default."""
        column = ColumnDef(name="email", type="TEXT")
        assert column.nullable is True
        assert column.primary_key is False
        assert column.references is None
