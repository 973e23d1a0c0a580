"""Loading prompt records, variables and converter config from files.

This is the input boundary of promptconv: files are parsed here and
validated into typed models, so conversion itself never does I/O.
JSON files are read with :mod:`json`, everything else as YAML.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from promptconv.core.conversion.config import ConverterConfig
from promptconv.core.prompt.models import PromptVersion
from promptconv.sdk.errors import ConfigValidationError, PromptLoadError


def _read_mapping(path: Path, error_cls: type[Exception]) -> dict[str, Any]:
    """Read *path* as a JSON or YAML mapping, raising *error_cls* on failure."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise error_cls(f"Cannot read {path}: {exc}") from exc

    data: Any
    if path.suffix == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise error_cls(f"JSON parse error in {path}: {exc}") from exc
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise error_cls(f"YAML parse error in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise error_cls(f"{path} must contain a mapping")
    return data  # pyright: ignore[reportUnknownVariableType]


class PromptLoader:
    """Load and validate a prompt record file into a :class:`PromptVersion`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> PromptVersion:
        """Read the file and validate it.

        Raises:
            PromptLoadError: On read or parse errors, or schema validation failures.
        """
        data = _read_mapping(self._path, PromptLoadError)
        try:
            return PromptVersion.model_validate(data)
        except ValidationError as exc:
            raise PromptLoadError(str(exc)) from exc


def load_variables(path: Path) -> dict[str, Any]:
    """Read a variables mapping from a JSON or YAML file.

    Raises:
        PromptLoadError: If the file is unreadable or not a mapping.
    """
    return _read_mapping(path, PromptLoadError)


class ConfigLoader:
    """Load a :class:`ConverterConfig` from a YAML or JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ConverterConfig:
        """Read the file, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before parsing.

        Raises:
            ConfigValidationError: On read, parse or validation failures.
        """
        data = _read_mapping(self._path, ConfigValidationError)
        expanded = {
            key: os.path.expandvars(value) if isinstance(value, str) else value
            for key, value in data.items()
        }
        try:
            return ConverterConfig.model_validate(expanded)
        except ValidationError as exc:
            raise ConfigValidationError(str(exc)) from exc
