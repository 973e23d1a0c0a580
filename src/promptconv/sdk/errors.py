"""SDK error types."""

from __future__ import annotations


class PromptLoadError(Exception):
    """Raised when a prompt or variables file cannot be read or validated."""


class ConfigValidationError(Exception):
    """Raised when a converter config file fails parsing or validation."""
