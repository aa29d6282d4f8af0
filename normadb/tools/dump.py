# normadb/tools/dump.py
"""MCP dump analysis tool implementation."""

from mcp.server.fastmcp import FastMCP

from normadb.config import Settings
from normadb.services.analyzer import NormalizationAnalyzer
from normadb.tools.common import check_input_size, error_response, log_request


def register_dump_tool(
    mcp: FastMCP,
    analyzer: NormalizationAnalyzer,
    settings: Settings
) -> None:
    """Register the dump analysis tool with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        analyzer: The normalization analyzer.
        settings: Application settings.
    """

    @mcp.tool()
    async def analyze_dump(content: str) -> dict:
        """
        Extract CREATE TABLE statements from a pg_dump file and analyze every schema.

        Args:
            content: The dump file content.

        Returns:
            Extraction diagnostics plus per schema rollups.
        """
        try:
            check_input_size(content, settings)
            log_request(settings, "analyze_dump", content)
            extraction, result = analyzer.analyze_dump(content)
            return {
                "status": "success",
                "data": {
                    "dumpInfo": {
                        "tablesFound": len(extraction.tables),
                        "errors": extraction.errors,
                        "metadata": extraction.metadata.model_dump(by_alias=True),
                    },
                    "analysis": result.model_dump(by_alias=True, mode="json"),
                }
            }
        except Exception as e:
            return error_response(e, "Failed to analyze dump")
