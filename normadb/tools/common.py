# normadb/tools/common.py
"""Helpers shared by the MCP tools."""

import logging
from typing import Union

from normadb.config import Settings
from normadb.utils.exceptions import InputTooLargeError, NormaDBError

logger = logging.getLogger("normadb-tools")


def check_input_size(content: Union[str, bytes], settings: Settings) -> None:
    """Reject input larger than the configured limit.

    Raises:
        InputTooLargeError: If the encoded input exceeds ``max_input_bytes``.
    """
    size = len(content.encode("utf-8")) if isinstance(content, str) else len(content)
    if size > settings.max_input_bytes:
        raise InputTooLargeError(size, settings.max_input_bytes)


def log_request(settings: Settings, tool: str, content: Union[str, bytes]) -> None:
    if settings.log_requests:
        logger.info("Tool %s called with %d characters of input", tool, len(content))


def error_response(error: Exception, context: str) -> dict:
    """Build the error payload returned by every tool."""
    if isinstance(error, NormaDBError):
        logger.warning("%s: %s", context, error.message)
        return error.to_dict()
    logger.exception("%s", context)
    return {
        "status": "error",
        "error": f"{context}: {str(error)}"
    }
