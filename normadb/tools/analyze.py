# normadb/tools/analyze.py
"""MCP analysis tool implementations."""

from mcp.server.fastmcp import FastMCP

from normadb.config import Settings
from normadb.services.analyzer import NormalizationAnalyzer
from normadb.tools.common import check_input_size, error_response, log_request


def register_analyze_tools(
    mcp: FastMCP,
    analyzer: NormalizationAnalyzer,
    settings: Settings
) -> None:
    """Register the DDL analysis tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        analyzer: The normalization analyzer.
        settings: Application settings.
    """

    @mcp.tool()
    async def analyze_ddl(sql: str) -> dict:
        """
        Analyze PostgreSQL CREATE TABLE statements for 1NF, 2NF and 3NF compliance.

        Args:
            sql: DDL text containing one or more CREATE TABLE statements.

        Returns:
            The analysis report with per normal form scores and violations.
        """
        try:
            check_input_size(sql, settings)
            log_request(settings, "analyze_ddl", sql)
            report = analyzer.analyze_ddl(sql)
            return {
                "status": "success",
                "data": report.model_dump(by_alias=True, mode="json")
            }
        except Exception as e:
            return error_response(e, "Failed to analyze DDL")

    @mcp.tool()
    async def analyze_schemas(sql: str) -> dict:
        """
        Analyze DDL spanning several database schemas, scoring each table independently.

        Args:
            sql: DDL text; tables may be schema-qualified.

        Returns:
            Per schema rollups and the database overall score.
        """
        try:
            check_input_size(sql, settings)
            log_request(settings, "analyze_schemas", sql)
            analyzer.ensure_valid(sql)
            tables = analyzer.parser.extract(sql)
            result = analyzer.analyze_multi_schema(tables)
            return {
                "status": "success",
                "data": result.model_dump(by_alias=True, mode="json")
            }
        except Exception as e:
            return error_response(e, "Failed to analyze schemas")

    @mcp.tool()
    async def debug_scoring(sql: str) -> dict:
        """
        Show how each normal form score was calculated.

        Args:
            sql: DDL text containing CREATE TABLE statements.

        Returns:
            The per normal form calculation breakdown.
        """
        try:
            check_input_size(sql, settings)
            log_request(settings, "debug_scoring", sql)
            analyzer.ensure_valid(sql)
            schema = analyzer.parse_ddl(sql)
            report = analyzer.analyze(schema)
            calculator = analyzer.calculator

            breakdown = {}
            for nf, score in report.compliance.items():
                breakdown[nf] = {
                    "maxWeight": score.max_weight,
                    "violatedWeight": score.violated_weight,
                    "calculation": (
                        f"({score.max_weight} - {score.violated_weight}) / "
                        f"{score.max_weight} * 100 = {score.score}"
                    ),
                    "score": score.score,
                    "status": score.status.value,
                    "violatedRules": sorted({v.rule_id for v in score.violations}),
                }

            violations = [v for score in report.compliance.values() for v in score.violations]
            highest = calculator.highest_weight_violation(violations)
            return {
                "status": "success",
                "data": {
                    "tables": list(schema.tables.keys()),
                    "breakdown": breakdown,
                    "overallScore": report.overall_score,
                    "highestWeightViolation": (
                        highest.model_dump(by_alias=True, mode="json") if highest else None
                    ),
                    "recommendations": calculator.fix_recommendations(violations),
                }
            }
        except Exception as e:
            return error_response(e, "Failed to compute scoring breakdown")
