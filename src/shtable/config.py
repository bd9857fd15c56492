"""Render configuration.

Settings come from an optional ``shtable.yaml`` file and are then overridden
by ``SHTABLE_*`` environment variables.
"""

from __future__ import annotations

import codecs
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shtable.errors import ConfigurationError
from shtable.width import LocaleWidthMeasurer

CONFIG_FILENAME = "shtable.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class RenderConfig(BaseModel):
    """How tables are printed.

    Attributes:
        header: Print the header row and divider.
        quiet: Suppress the header and divider regardless of ``header``.
        encoding: Encoding used for width measurement. None means the
            process locale.
        delimiter: Field separator for delimited input.
    """

    model_config = ConfigDict(extra="forbid")

    header: bool = True
    quiet: bool = False
    encoding: str | None = None
    delimiter: str = Field(default=",", min_length=1, max_length=1)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @property
    def print_header(self) -> bool:
        return self.header and not self.quiet

    def with_overrides(self, **overrides: Any) -> RenderConfig:
        """Return a validated copy with the given fields replaced."""
        try:
            return RenderConfig.model_validate({**self.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def measurer(self) -> LocaleWidthMeasurer:
        """Width measurer for the configured encoding."""
        return LocaleWidthMeasurer(self.encoding)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean in {name}", value=value)


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if "SHTABLE_QUIET" in env:
        overrides["quiet"] = _parse_bool("SHTABLE_QUIET", env["SHTABLE_QUIET"])
    if env.get("SHTABLE_ENCODING"):
        overrides["encoding"] = env["SHTABLE_ENCODING"]
    return overrides


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> RenderConfig:
    """Load render configuration.

    Args:
        path: Configuration file. When omitted, ``shtable.yaml`` in the
            current directory is used if it exists.
        env: Environment to read overrides from. Defaults to ``os.environ``.

    Returns:
        Validated configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    if env is None:
        env = os.environ

    data: dict[str, Any] = {}
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if candidate.is_file():
            path = candidate
    elif not path.is_file():
        raise ConfigurationError("Configuration file not found", path=path)

    if path is not None:
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read configuration: {e}", path=path) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError("Configuration must be a mapping", path=path)
        data.update(loaded)

    data.update(_env_overrides(env))

    try:
        return RenderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", path=path) from e
