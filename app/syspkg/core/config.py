"""User configuration for syspkg.

Configuration is stored in ~/.config/syspkg/config.toml and supplies
the default Options for CLI runs:

    dry_run = false
    interactive = false
    verbose = false
    log_level = "WARNING"
"""

import tomllib
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from syspkg.core.paths import get_config_path
from syspkg.models.options import Options

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SyspkgConfig(BaseModel):
    """Configuration for syspkg.

    Attributes:
        dry_run: Simulate changes by default.
        interactive: Attach package manager runs to the terminal by default.
        verbose: Log captured command output by default.
        log_level: Logging level for the CLI.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dry_run: Annotated[bool, Field(description="Simulate changes by default")] = False
    interactive: Annotated[
        bool,
        Field(description="Attach package manager runs to the terminal"),
    ] = False
    verbose: Annotated[bool, Field(description="Log captured command output")] = False
    log_level: Annotated[LogLevel, Field(description="CLI logging level")] = "WARNING"

    def to_options(self) -> Options:
        """Build the Options these settings describe."""
        return Options(
            dry_run=self.dry_run,
            interactive=self.interactive,
            verbose=self.verbose,
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> SyspkgConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SyspkgConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return SyspkgConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def get_default_config() -> SyspkgConfig:
    """Create a default SyspkgConfig.

    Returns:
        SyspkgConfig with default settings.
    """
    return SyspkgConfig()
