# normadb/tools/__init__.py
"""MCP tools for normadb."""

from normadb.tools.analyze import register_analyze_tools
from normadb.tools.validate import register_validate_tools
from normadb.tools.dump import register_dump_tool

__all__ = [
    "register_analyze_tools",
    "register_validate_tools",
    "register_dump_tool",
]
