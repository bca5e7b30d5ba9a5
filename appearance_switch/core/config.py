"""Application configuration using Pydantic Settings with YAML/JSON file support."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from appearance_switch.core.enums import AppearanceBackend
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_DIR = Path.home() / ".appearance_switch"


class SchedulerConfig(BaseModel):
    """Reconciliation timing configuration."""

    tick_interval_seconds: float = Field(
        default=60.0, gt=0, description="Period between schedule checks in seconds"
    )
    startup_delay_seconds: float = Field(
        default=1.0, ge=0, description="Delay before the first check, leaving time for permission prompts"
    )
    event_poll_interval_ms: int = Field(
        default=50, gt=0, description="Milliseconds between event bus dispatch cycles"
    )
    monitor_enabled: bool = Field(
        default=True, description="Watch for appearance changes made outside the application"
    )
    monitor_interval_seconds: float = Field(
        default=5.0, gt=0, description="Period between appearance polls in seconds"
    )

    @property
    def tick_interval_ms(self) -> int:
        return int(self.tick_interval_seconds * 1000)

    @property
    def startup_delay_ms(self) -> int:
        return int(self.startup_delay_seconds * 1000)

    @property
    def monitor_interval_ms(self) -> int:
        return int(self.monitor_interval_seconds * 1000)


class AppearanceConfig(BaseModel):
    """System appearance backend configuration."""

    backend: AppearanceBackend = Field(
        default=AppearanceBackend.AUTO, description="Backend used to read and change the appearance"
    )
    command_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for appearance change commands in seconds"
    )
    read_timeout_seconds: float = Field(
        default=2.0, gt=0, description="Timeout for appearance queries in seconds"
    )


class StorageConfig(BaseModel):
    """Schedule settings storage configuration."""

    settings_dir: Path = Field(
        default_factory=lambda: CONFIG_DIR,
        description="Directory holding the schedule settings file",
    )
    settings_file_name: str = Field(
        default="settings.json", description="Settings file name; .yaml/.yml selects YAML"
    )

    @property
    def settings_path(self) -> Path:
        return self.settings_dir.expanduser() / self.settings_file_name


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level name")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


class AppConfig(BaseSettings):
    """Main application configuration.

    Looks for config.yaml or config.json in:
    1. Current directory
    2. User config directory (~/.appearance_switch/)
    Then environment variables (APPEARANCE_SWITCH_*).

    Example config file:
        scheduler:
          tick_interval_seconds: 60
        appearance:
          backend: gnome
        logging:
          level: DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="APPEARANCE_SWITCH_",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    appearance: AppearanceConfig = Field(default_factory=AppearanceConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def _find_config_file(cls) -> Path | None:
        """Return the first existing config file.

        Priority order:
        1. config.yaml in current directory
        2. config.json in current directory
        3. ~/.appearance_switch/config.yaml
        4. ~/.appearance_switch/config.json
        """
        config_files = [
            Path("config.yaml"),
            Path("config.json"),
            CONFIG_DIR / "config.yaml",
            CONFIG_DIR / "config.json",
        ]
        for config_file in config_files:
            if config_file.is_file():
                return config_file
        return None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML/JSON config file between init arguments and the environment."""
        config_file = cls._find_config_file()
        if config_file is None:
            return init_settings, env_settings, dotenv_settings, file_secret_settings

        logger.info(f"[CONFIG] Loading configuration from {config_file}")
        if config_file.suffix in (".yaml", ".yml"):
            file_settings = YamlConfigSettingsSource(settings_cls, yaml_file=config_file)
        else:
            file_settings = JsonConfigSettingsSource(settings_cls, json_file=config_file)

        return init_settings, file_settings, env_settings, dotenv_settings, file_secret_settings


_config_instance: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the singleton configuration instance."""
    global _config_instance  # noqa: PLW0603
    if _config_instance is None:
        _config_instance = AppConfig()
    return _config_instance


def set_config(config: AppConfig) -> None:
    """Set the configuration instance (mainly for testing)."""
    global _config_instance  # noqa: PLW0603
    _config_instance = config


def reset_config() -> None:
    """Reset the configuration instance (mainly for testing)."""
    global _config_instance  # noqa: PLW0603
    _config_instance = None
