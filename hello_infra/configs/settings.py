"""
Local tooling settings.

Settings for code that runs outside a Pulumi stack: the architecture diagram,
the outputs env writer and logging. Values come from environment variables
prefixed with HELLO_INFRA_ or a .env file.

Dependencies: pydantic_settings
System role: Configuration for developer tooling
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ToolSettings(BaseSettings):
    """Settings shared by local tooling."""

    model_config = SettingsConfigDict(
        env_prefix="HELLO_INFRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    outputs_file: str = Field(
        default="infrastructure.env",
        description="File the stack outputs are written to",
    )
    diagram_filename: str = Field(
        default="hello_infra_architecture",
        description="Output filename (without extension) for the architecture diagram",
    )


@lru_cache
def get_settings() -> ToolSettings:
    """
    Get tool settings singleton.

    Returns:
        ToolSettings: Settings instance, loaded once per process
    """
    return ToolSettings()
