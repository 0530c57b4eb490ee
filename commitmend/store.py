"""Persisted run configuration.

Handles <repo>/.commitmend/config.yaml:
- provider, mode and model
- generation and validation retry budgets

API keys are never written here; they come from the environment or are
entered per run.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from commitmend.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_PROVIDER,
    DEFAULT_VALIDATION_MAX_RETRIES,
    MAX_RETRY_COUNT,
    MIN_RETRY_COUNT,
    CommitMode,
    LLMProvider,
)

CONFIG_DIR_NAME = ".commitmend"
CONFIG_FILE_NAME = "config.yaml"


class ConfigStoreError(Exception):
    """Raised when the stored configuration cannot be read or written."""
    pass


class StoredConfig(BaseModel):
    """Schema of config.yaml."""

    provider: LLMProvider = DEFAULT_PROVIDER
    mode: CommitMode = CommitMode.AUTO
    model: Optional[str] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    validation_max_retries: int = DEFAULT_VALIDATION_MAX_RETRIES

    @field_validator("max_retries", "validation_max_retries")
    @classmethod
    def retry_count_in_range(cls, v: int) -> int:
        if not MIN_RETRY_COUNT <= v <= MAX_RETRY_COUNT:
            raise ValueError(f"must be between {MIN_RETRY_COUNT} and {MAX_RETRY_COUNT}")
        return v

    @field_validator("model")
    @classmethod
    def blank_model_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    def has_retry_settings(self) -> bool:
        """True if both retry counts were present in the stored file."""
        return {"max_retries", "validation_max_retries"} <= self.model_fields_set

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        if data["model"] is None:
            del data["model"]
        return data


class ConfigStore:
    """Reads and writes config.yaml inside a repository.

    Args:
        repo_root: Repository root. Defaults to the current directory.
    """

    def __init__(self, repo_root: Optional[Path] = None):
        self.repo_root = Path(repo_root or Path.cwd())

    @property
    def config_dir(self) -> Path:
        return self.repo_root / CONFIG_DIR_NAME

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def exists(self) -> bool:
        return self.config_file.is_file()

    def get(self) -> Optional[StoredConfig]:
        """Load the stored configuration.

        Returns:
            The StoredConfig, or None if no file exists.

        Raises:
            ConfigStoreError: If the file is unreadable or invalid.
        """
        if not self.exists():
            return None

        try:
            with open(self.config_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except Exception as e:
            raise ConfigStoreError(f"Failed to load config from {self.config_file}: {e}")

        if not isinstance(data, dict):
            raise ConfigStoreError(f"Config in {self.config_file} must be a mapping")

        try:
            return StoredConfig(**data)
        except ValidationError as e:
            raise ConfigStoreError(f"Invalid config in {self.config_file}: {e}")

    def set(self, config: StoredConfig) -> None:
        """Write the configuration, creating the directory if needed."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        except Exception as e:
            raise ConfigStoreError(f"Failed to save config to {self.config_file}: {e}")

    def set_property(self, name: str, value: Any) -> StoredConfig:
        """Update one field of the stored configuration.

        Raises:
            ConfigStoreError: If the field is unknown or the value invalid.
        """
        if name not in StoredConfig.model_fields:
            raise ConfigStoreError(f"Unknown config property: {name}")

        current = self.get() or StoredConfig()
        data = current.to_dict()
        data[name] = value
        try:
            updated = StoredConfig(**data)
        except ValidationError as e:
            raise ConfigStoreError(f"Invalid value for {name}: {e}")
        self.set(updated)
        return updated

    def reset(self) -> bool:
        """Delete the stored configuration.

        Returns:
            True if a file was removed.
        """
        if not self.exists():
            return False
        try:
            self.config_file.unlink()
        except OSError as e:
            raise ConfigStoreError(f"Failed to remove {self.config_file}: {e}")
        return True
