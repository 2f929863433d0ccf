from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="WARNING", description="Root log level")
    json_output: bool = Field(
        default=False,
        description="Emit JSON lines instead of human-readable lines",
    )
