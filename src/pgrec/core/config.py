"""Configuration management using Pydantic.

Provides:
- Typed configuration models with validation
- YAML file loading with defaults
- Environment variable overrides for hardware facts
- Configuration initialization and display
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pgrec.core.exceptions import ConfigurationError, ValidationError
from pgrec.core.validation import parse_memory, validate_core_count


# Default configuration path
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "pgrec" / "config.yaml"

OUTPUT_FORMATS = ("alter-system", "conf")


class HardwareConfig(BaseModel):
    """Hardware overrides. Unset fields are detected from the host."""

    total_memory: Optional[str] = None
    core_count: Optional[int] = None

    @field_validator("total_memory", mode="before")
    @classmethod
    def validate_total_memory(cls, v: Optional[object]) -> Optional[str]:
        if v is None:
            return v
        try:
            size = parse_memory(v if isinstance(v, int) else str(v))
        except ValidationError as e:
            raise ValueError(e.message) from None
        if size == 0:
            raise ValueError("total_memory must be positive")
        return str(v)

    @field_validator("core_count")
    @classmethod
    def validate_core_count(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        try:
            return validate_core_count(v)
        except ValidationError as e:
            raise ValueError(e.message) from None

    @property
    def total_memory_bytes(self) -> Optional[int]:
        """Memory override in bytes, if configured."""
        if self.total_memory is None:
            return None
        return parse_memory(self.total_memory)


class OutputConfig(BaseModel):
    """Script rendering options."""

    format: str = "alter-system"
    include_reload: bool = False
    include_verification: bool = False

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"Output format must be one of: {list(OUTPUT_FORMATS)}")
        return v


class RecConfig(BaseModel):
    """Root configuration model, loaded from ~/.config/pgrec/config.yaml."""

    hardware: HardwareConfig = Field(default_factory=HardwareConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: Path) -> "RecConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If file not found or invalid
        """
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}",
                hint="Create it with: pgrec config init",
            )

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {path}",
                details=[str(e)],
            ) from e
        except PermissionError:
            raise ConfigurationError(
                f"Cannot read configuration file: {path}",
                hint="Check file permissions",
            ) from None

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {path}",
            )

        try:
            return cls(**data)
        except Exception as e:
            raise ConfigurationError(
                f"Invalid configuration: {path}",
                details=[str(e)],
            ) from e

    @classmethod
    def load_or_default(cls, path: Optional[Path] = None) -> "RecConfig":
        """Load configuration, falling back to defaults if file doesn't exist."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        if path.exists():
            return cls.load(path)
        return cls()

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        data = self.model_dump(exclude_none=True)
        return yaml.dump(data, default_flow_style=False, sort_keys=False)


class EnvOverrides(BaseSettings):
    """Hardware overrides loaded from environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    total_memory: Optional[str] = Field(None, alias="PGREC_TOTAL_MEMORY")
    core_count: Optional[str] = Field(None, alias="PGREC_CORE_COUNT")


class AppConfig:
    """Application configuration combining config file and environment.

    This is the main interface for accessing configuration throughout the app.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config: Optional[RecConfig] = None,
    ) -> None:
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._config = config or RecConfig.load_or_default(self.config_path)
        self._env = EnvOverrides()

    @property
    def config(self) -> RecConfig:
        """Get the file configuration."""
        return self._config

    @property
    def env(self) -> EnvOverrides:
        """Get the environment overrides."""
        return self._env

    @property
    def output(self) -> OutputConfig:
        """Shortcut to output config."""
        return self._config.output

    @property
    def total_memory_bytes(self) -> Optional[int]:
        """Memory override: environment first, then config file."""
        if self._env.total_memory:
            try:
                return parse_memory(self._env.total_memory)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid PGREC_TOTAL_MEMORY: {self._env.total_memory!r}",
                    hint=e.hint,
                ) from e
        return self._config.hardware.total_memory_bytes

    @property
    def core_count(self) -> Optional[int]:
        """Core count override: environment first, then config file."""
        if self._env.core_count:
            try:
                return validate_core_count(self._env.core_count)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid PGREC_CORE_COUNT: {self._env.core_count!r}",
                    hint=e.hint,
                ) from e
        return self._config.hardware.core_count


def get_example_config() -> str:
    """Generate example configuration file content."""
    return """# pgrec configuration
# Hardware values left unset are detected from this host.
# Environment overrides: PGREC_TOTAL_MEMORY, PGREC_CORE_COUNT

hardware:
  total_memory: null  # e.g. 64GB
  core_count: null  # e.g. 16

output:
  format: alter-system  # alter-system, conf
  include_reload: false  # append SELECT pg_reload_conf();
  include_verification: false  # append pg_settings verification query
"""


def init_config(path: Path, force: bool = False) -> None:
    """Initialize a new configuration file.

    Args:
        path: Path to create config file
        force: Overwrite if exists

    Raises:
        ConfigurationError: If file exists and force is False
    """
    if path.exists() and not force:
        raise ConfigurationError(
            f"Configuration file already exists: {path}",
            hint="Use --force to overwrite",
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(get_example_config())
    os.chmod(path, 0o644)
