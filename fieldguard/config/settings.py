"""Root settings model for fieldguard configuration."""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from fieldguard.config.models.observability import ObservabilityConfig
from fieldguard.config.models.workflow import SweeperConfig, WorkflowConfig

# TOML config handed to the settings source by get_settings()
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the loaded TOML files."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration.

    Precedence, highest first:
    1. constructor arguments
    2. FIELDGUARD_* environment variables (nested with __)
    3. config/{FIELDGUARD_ENV}.toml merged over config/default.toml
    4. model defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDGUARD_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="fieldguard", description="Application name for logging")
    workflow: WorkflowConfig = Field(
        default_factory=WorkflowConfig,
        description="Information request policy",
    )
    sweeper: SweeperConfig = Field(
        default_factory=SweeperConfig,
        description="Periodic expiry sweep",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging and metrics",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
