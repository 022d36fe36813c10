"""
Configuration management for Taxonomist.

This module handles loading and accessing configuration values from config.yaml,
and the startup checks that must pass before content is indexed and served.
"""

import yaml
import copy
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from pydantic import BaseModel, Field

from .store.context import CacheContext


class ConfigurationError(ValueError):
    """Raised when the startup configuration is invalid. Fatal."""


DEFAULT_CONFIG: Dict[str, Any] = {
    "content": {
        "root_path": "./content",
        "static_assets_folder_name": "static",
        "index_file_name": "_index.md",
        "file_extensions": [".md"],
        "cache_name": "content",
        "index_cache_name": "content_index",
        "remote_repository_url": None,
        "recheck_pending_file_events_interval": 5000,
        "recheck_pending_remote_events_interval": 15000
    },
    "paths": {
        "log_file": "taxonomist.log"
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    }
}


class ConfigManager:
    """
    Manages configuration loading and access for Taxonomist.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            logging.info(f"Configuration file not found: {self.config_path}, using defaults")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "content.root_path")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("content.cache_name")  # Returns "content"
            config.get("logging.level")       # Returns "INFO"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def root_path(self) -> str:
        return self.get("content.root_path", "./content")

    @property
    def static_assets_folder_name(self) -> str:
        return self.get("content.static_assets_folder_name", "static")

    @property
    def index_file_name(self) -> str:
        return self.get("content.index_file_name", "_index.md")

    @property
    def file_extensions(self) -> list:
        return self.get("content.file_extensions", [".md"])

    @property
    def cache_name(self) -> str:
        return self.get("content.cache_name", "content")

    @property
    def index_cache_name(self) -> str:
        return self.get("content.index_cache_name", "content_index")

    @property
    def remote_repository_url(self) -> Optional[str]:
        return self.get("content.remote_repository_url")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "taxonomist.log")


class StartupConfig(BaseModel):
    """
    Validated configuration the content index is started with.
    """

    root_path: str = Field(
        ...,
        description="Directory holding the markdown content"
    )

    static_assets_folder_name: str = Field(
        ...,
        description="Folder under the root that is never indexed"
    )

    cache_name: str = Field(
        ...,
        description="Identifier of the entity store"
    )

    index_cache_name: str = Field(
        ...,
        description="Identifier of the derived tree cache"
    )

    remote_repository_url: Optional[str] = Field(
        default=None,
        description="Remote repository synced into the root, if any"
    )

    file_events_interval: int = Field(
        ...,
        description="Local file-change recheck interval"
    )

    remote_events_interval: Optional[int] = Field(
        default=None,
        description="Remote repository recheck interval"
    )

    def cache_context(self) -> CacheContext:
        return CacheContext(cache_name=self.cache_name, index_cache_name=self.index_cache_name)


def _ensure_interval(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"Config {name} is not a valid interval number")
    return value


def validate_startup_config(manager: Optional["ConfigManager"] = None) -> StartupConfig:
    """
    Check the configuration the process is about to start with.

    Args:
        manager: Configuration to check (defaults to the global instance)

    Returns:
        The validated startup configuration

    Raises:
        ConfigurationError: If an interval is not a positive number, or a
            remote repository is configured and the file interval is not
            smaller than the remote interval
    """
    manager = manager or config

    file_interval = _ensure_interval(
        manager.get("content.recheck_pending_file_events_interval"),
        "recheck_pending_file_events_interval"
    )

    repository_url = manager.remote_repository_url
    remote_interval = None

    if isinstance(repository_url, str) and repository_url != "":
        remote_interval = _ensure_interval(
            manager.get("content.recheck_pending_remote_events_interval"),
            "recheck_pending_remote_events_interval"
        )
        if file_interval >= remote_interval:
            raise ConfigurationError(
                "Since remote_repository_url has been provided, "
                "recheck_pending_file_events_interval must be smaller than "
                "recheck_pending_remote_events_interval"
            )
    else:
        repository_url = None

    return StartupConfig(
        root_path=manager.root_path,
        static_assets_folder_name=manager.static_assets_folder_name,
        cache_name=manager.cache_name,
        index_cache_name=manager.index_cache_name,
        remote_repository_url=repository_url,
        file_events_interval=file_interval,
        remote_events_interval=remote_interval
    )


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
