"""Configuration management for todoflow."""

from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

from todoflow.utils.clock import resolve_timezone
from todoflow.utils.logger import get_logger


class StorageConfig(BaseModel):
    """Storage backend configuration.

    Attributes:
        backend: ``sqlite`` for the on-disk database, ``memory`` for a
            throwaway store (useful for dry runs)
        db_path: Database file; None means the platform data directory
        timeout: Seconds to wait on a locked database
    """

    backend: Literal["sqlite", "memory"] = Field(default="sqlite")
    db_path: Optional[str] = Field(default=None)
    timeout: float = Field(default=30.0, gt=0)


class ScheduleConfig(BaseModel):
    """Batch job configuration."""

    timezone: Optional[str] = Field(default=None)

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: Optional[str]) -> Optional[str]:
        if value:
            resolve_timezone(value)
        return value or None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml", "quiet"] = Field(default="pretty")


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def _split_key(key: str) -> tuple[list[str], str]:
    *parents, leaf = key.split(".")
    return parents, leaf


class ConfigManager:
    """Loads, edits and persists one configuration profile.

    Profiles live in ``<user_config_dir>/todoflow/<profile>.json``. Keys
    are dot-separated paths into :class:`Config`, e.g. ``storage.db_path``.
    """

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("todoflow"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Read the profile file; a missing or unreadable file yields defaults."""
        if not self.config_file.exists():
            return Config()
        try:
            return Config.model_validate_json(self.config_file.read_text())
        except (OSError, ValidationError) as e:
            get_logger("config").warning(
                "config file %s unreadable, using defaults: %s", self.config_file, e
            )
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        if config is not None:
            self._config = config
        self.config_file.write_text(self.config.model_dump_json(indent=2))

    def get(self, key: str) -> Any:
        """Value at ``key``; a whole section comes back as a dict, unknown keys as None."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Validate and persist a new value for ``key``.

        Raises:
            KeyError: If the key does not name a configuration field
            pydantic.ValidationError: If the value is not valid for the field
        """
        parents, leaf = _split_key(key)
        data = self.config.model_dump()
        section = data
        for name in parents:
            section = section.get(name)
            if not isinstance(section, dict):
                raise KeyError(key)
        if leaf not in section:
            raise KeyError(key)

        section[leaf] = value
        self.save_config(Config.model_validate(data))

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one key, or the whole profile, to its default."""
        if key is None:
            self.save_config(Config())
            return
        self.set(key, self.get_from_config(Config(), key))

    @staticmethod
    def get_from_config(config: Config, key: str) -> Any:
        node: Any = config
        for name in key.split("."):
            if not isinstance(node, BaseModel) or name not in type(node).model_fields:
                return None
            node = getattr(node, name)
        return node.model_dump() if isinstance(node, BaseModel) else node


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Return the process-wide manager, switching when another profile is asked for."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
