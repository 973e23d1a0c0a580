"""Converter configuration — defaults applied when a prompt leaves them out."""

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConverterConfig(BaseModel):
    """Settings shared by all provider converters.

    ``default_max_tokens`` is used by providers whose client requires an
    output token limit (Anthropic) when the prompt's invocation parameters
    do not set one.
    """

    default_max_tokens: int = Field(default=1024, gt=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level
