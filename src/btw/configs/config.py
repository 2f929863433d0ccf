"""Process settings using pydantic-settings.

Priority order (highest first):

1. Init arguments
2. Environment variables (``BTW_`` prefix, e.g. ``BTW_TOOLS=files,session``)
3. ``.env`` dotenv file in the working directory
4. Field defaults

Settings only carry what can be expressed as plain values.  The default
chat client is a live object and lives on ``BtwOptions`` instead.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .system import LoggingConfig

ENV_DELIMITER = "__"  # Nested environment variable delimiter
ENV_PREFIX = "BTW_"

DEFAULT_ENCODING = "utf-8"


class BtwSettings(BaseSettings):
    """Process-wide btw settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
    )

    tools: str | None = Field(
        default=None,
        description="Default tool selection: comma-separated tool names or "
        "groups, 'all', or 'none'.",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration settings",
    )


def get_settings() -> BtwSettings:
    """Read settings from the environment.

    Re-reads on every call so changes to ``BTW_*`` variables are picked up.
    """
    return BtwSettings()
