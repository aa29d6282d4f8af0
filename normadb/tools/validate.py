# normadb/tools/validate.py
"""MCP validation tool implementations."""

from mcp.server.fastmcp import FastMCP

from normadb.config import Settings
from normadb.services.analyzer import NormalizationAnalyzer
from normadb.tools.common import check_input_size, error_response, log_request


def register_validate_tools(
    mcp: FastMCP,
    analyzer: NormalizationAnalyzer,
    settings: Settings
) -> None:
    """Register the validation and capability tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        analyzer: The normalization analyzer.
        settings: Application settings.
    """

    @mcp.tool()
    async def validate_ddl(sql: str) -> dict:
        """
        Check DDL for parse errors and unsupported constructs without scoring it.

        Args:
            sql: DDL text.

        Returns:
            Validity flag, errors and warnings.
        """
        try:
            check_input_size(sql, settings)
            log_request(settings, "validate_ddl", sql)
            result = analyzer.validate_ddl(sql)
            return {
                "status": "success",
                "data": result.model_dump(by_alias=True)
            }
        except Exception as e:
            return error_response(e, "Failed to validate DDL")

    @mcp.tool()
    async def get_supported_features() -> dict:
        """
        List the SQL dialects, statements and normal forms the analyzer supports.

        Returns:
            Supported features.
        """
        return {
            "status": "success",
            "data": analyzer.get_supported_features()
        }
