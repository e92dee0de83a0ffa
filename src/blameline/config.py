"""Configuration loading and management for blameline.

Configuration sources are merged in priority order:
    1. Defaults (defined in BlameConfig)
    2. Global config (~/.blameline.toml)
    3. Project config (./blameline.toml)
    4. Explicit config file
    5. Environment variables (BLAMELINE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, command_timeout_seconds=60)
    >>> config.verbosity
    'verbose'
    >>> config.command_timeout_seconds
    60
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class BlameConfig:
    """Settings for git invocation and blame model building.

    Attributes:
        git_path: Executable used for every git command
        command_timeout_seconds: Timeout applied to each git subprocess
        max_output_mb: Cap on captured git output; longer output is truncated
        include_line_content: Keep each line's trailing source text on CommitLine
        verbosity: Logging verbosity level
    """

    git_path: str = "git"
    command_timeout_seconds: float = 30.0
    max_output_mb: float = 50.0
    include_line_content: bool = True
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if not self.git_path:
            raise InvalidConfigError("git_path", self.git_path, "must not be empty")
        if self.command_timeout_seconds <= 0:
            raise InvalidConfigError(
                "command_timeout_seconds", self.command_timeout_seconds, "must be positive"
            )
        if self.max_output_mb <= 0:
            raise InvalidConfigError("max_output_mb", self.max_output_mb, "must be positive")
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITIES)}"
            )

    @property
    def max_output_bytes(self) -> int:
        """Get max git output size in bytes."""
        return int(self.max_output_mb * 1024 * 1024)


DEFAULT_CONFIG = BlameConfig()


def load_config(config_file: Path | None = None, **overrides: Any) -> BlameConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated BlameConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".blameline.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "blameline.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return BlameConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BLAMELINE_* environment variables.

    Supported environment variables:
        BLAMELINE_GIT_PATH: str
        BLAMELINE_COMMAND_TIMEOUT_SECONDS: float
        BLAMELINE_MAX_OUTPUT_MB: float
        BLAMELINE_INCLUDE_LINE_CONTENT: bool (true/false/1/0)
        BLAMELINE_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(BlameConfig)

    result: dict[str, Any] = {}

    for field_name in BlameConfig.__dataclass_fields__:
        env_key = f"BLAMELINE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type."""
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file and return its [blameline] table or top-level keys."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("blameline", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid config file '{path}': [blameline] must be a table")
    return dict(section)
