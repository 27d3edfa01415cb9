"""Configuration management for toolprep."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ICON_CLASS = "default-icon"
DEFAULT_CONFIG_PATH = Path("toolprep.yaml")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ToolprepSettings(BaseSettings):
    """toolprep runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLPREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    config_path: Path = Field(default=DEFAULT_CONFIG_PATH)
    default_icon_class: str = Field(default=DEFAULT_ICON_CLASS)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{value}'")
        return level


def get_settings() -> ToolprepSettings:
    """Get toolprep settings instance."""
    return ToolprepSettings()


class ToolConfig(BaseModel):
    """Per-tool configuration, used when the host passes none for a tool.

    Unknown keys are kept so hosts can hand tool-specific options through to
    the preparation routine.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    icon_class_name: str = Field(default=DEFAULT_ICON_CLASS, alias="iconClassName")
    display_in_toolbox: bool = Field(default=False, alias="displayInToolbox")
    enable_line_breaks: bool = Field(default=False, alias="enableLineBreaks")

    def merged_with(self, override: "ToolConfig | None") -> "ToolConfig":
        """Return a copy of this config with the explicitly set fields of override applied."""
        if override is None:
            return self.model_copy()
        data = self.model_dump(by_alias=True)
        data.update(override.model_dump(by_alias=True, exclude_unset=True))
        return ToolConfig.model_validate(data)


class EditorConfig(BaseModel):
    """Editor configuration as supplied by the host.

    Attributes:
        tools: Tool name to tool definition, in registration order.
        tools_config: Optional per-tool configuration, keyed by tool name.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    tools: dict[str, Any]
    tools_config: dict[str, ToolConfig] = Field(default_factory=dict, alias="toolsConfig")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EditorConfig":
        """Build an EditorConfig from a plain mapping.

        Raises:
            ConfigError: If the mapping has no ``tools`` entry or is malformed.
        """
        if "tools" not in data:
            raise ConfigError("Can't start without tools")
        data = {**data, "tools": data["tools"] or {}}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid editor configuration: {e}") from e
