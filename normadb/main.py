# normadb/main.py
"""Main entry point for the normadb server."""

import asyncio
import logging
from mcp.server.fastmcp import FastMCP

from normadb.config import Settings
from normadb.services.analyzer import NormalizationAnalyzer
from normadb.tools import (
    register_analyze_tools,
    register_dump_tool,
    register_validate_tools,
)


logger = logging.getLogger("normadb")


def main() -> None:
    """Main entry point for the server."""
    import argparse

    parser = argparse.ArgumentParser(description="PostgreSQL Normalization Analyzer MCP Server")
    parser.add_argument(
        "--host",
        type=str,
        help="Host to bind the SSE server to"
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to bind the SSE server to"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    args = parser.parse_args()

    # Load settings
    settings = Settings()
    if args.host:
        settings.mcp_host = args.host
    if args.port:
        settings.mcp_port = args.port
    if args.log_level:
        settings.log_level = args.log_level

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    logger.info("Starting normadb server initialization")

    asyncio.run(run_server(settings))


def create_mcp_app(settings: Settings) -> FastMCP:
    """Create the MCP application with every tool registered.

    Args:
        settings: Application settings.

    Returns:
        Configured FastMCP instance.
    """
    mcp = FastMCP("normadb", host=settings.mcp_host, port=settings.mcp_port)

    analyzer = NormalizationAnalyzer(
        excluded_schemas=settings.get_excluded_schemas()
    )

    register_analyze_tools(mcp, analyzer, settings)
    register_validate_tools(mcp, analyzer, settings)
    register_dump_tool(mcp, analyzer, settings)

    return mcp


async def run_server(settings: Settings) -> None:
    """Run the MCP server.

    Args:
        settings: Application settings.
    """
    logger.info("settings: %s", settings.model_dump())

    mcp = create_mcp_app(settings)

    logger.info("normadb server ready on %s:%d", settings.mcp_host, settings.mcp_port)

    await mcp.run_sse_async()


if __name__ == "__main__":
    main()
