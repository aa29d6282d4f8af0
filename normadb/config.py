# normadb/config.py
"""Configuration management for normadb."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
import json

from normadb.utils.constants import SYSTEM_SCHEMAS


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Scoring weights and thresholds are version-locked constants, not
    settings.
    """

    # MCP configuration
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8989

    # Logging configuration
    log_level: str = "INFO"
    log_requests: bool = True

    # Input configuration
    max_input_bytes: int = 5 * 1024 * 1024

    # Analysis configuration
    excluded_schemas: str = Field(
        default=json.dumps(list(SYSTEM_SCHEMAS)),
        description="JSON array of schema names left out of multi-schema analysis"
    )

    class Config:
        env_prefix = "NORMADB_"

    def get_excluded_schemas(self) -> List[str]:
        """Parse excluded schemas from JSON.

        Returns:
            List of schema names; the system schemas if the value is invalid.
        """
        try:
            schemas = json.loads(self.excluded_schemas)
        except json.JSONDecodeError:
            return list(SYSTEM_SCHEMAS)
        if not isinstance(schemas, list):
            return list(SYSTEM_SCHEMAS)
        return [str(s) for s in schemas]
