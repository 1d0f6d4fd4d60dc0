"""
Configuration file parsing and management.

Reads optional YAML configuration files and merges them
(explicit path → project → user → defaults).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".ai-dev-env.yml",                                      # Project root (highest priority)
    ".ai-dev-env.yaml",
    os.path.expanduser("~/.config/ai-dev-env/config.yml"),  # User global
    os.path.expanduser("~/.config/ai-dev-env/config.yaml"),
]


@dataclass(frozen=True)
class PackagingConfig:
    """
    Settings for the Pake packaging CLI.

    Attributes:
        command: Packaging CLI binary
        package: Package name installed through the package manager
        width: Window width suggested in manual-install hints
        height: Window height suggested in manual-install hints
    """
    command: str = "pake"
    package: str = "pake-cli"
    width: int = 1200
    height: int = 800

    def __post_init__(self):
        if not self.command or not self.package:
            raise ValueError("packaging.command and packaging.package must not be empty")
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Invalid packaging window size: {self.width}x{self.height}. "
                "Width and height must be positive"
            )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> PackagingConfig:
        """Create PackagingConfig from dictionary."""
        return PackagingConfig(
            command=data.get("command", "pake"),
            package=data.get("package", "pake-cli"),
            width=int(data.get("width", 1200)),
            height=int(data.get("height", 800)),
        )


@dataclass(frozen=True)
class Config:
    """
    Complete configuration for ai-dev-env.

    Attributes:
        version: Config schema version
        catalog: Path to the tool catalog (empty = bundled catalog)
        templates_dir: Directory with <ide>-settings.json templates (empty = bundled)
        default_ide: IDE preselected in menus and non-interactive runs
        package_manager: Package manager used to install the packaging CLI
        packaging: Packaging CLI settings
        timeout_seconds: Timeout for each external command (0 = none, None = not set)
        source: Path to the configuration file that was loaded
    """
    version: int = 1
    catalog: str = ""
    templates_dir: str = ""
    default_ide: str = ""
    package_manager: str = "npm"
    packaging: PackagingConfig = field(default_factory=PackagingConfig)
    timeout_seconds: int | None = None
    source: str = ""

    def __post_init__(self):
        """Validate config after initialization."""
        if self.version != 1:
            raise ValueError(f"Unsupported config version: {self.version}. Expected version 1")

        if not self.package_manager:
            raise ValueError("package_manager must not be empty")

        if self.timeout_seconds is not None and self.timeout_seconds < 0:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. "
                "Must be 0 (no timeout) or positive"
            )

    @property
    def timeout(self) -> int | None:
        return self.timeout_seconds or None

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Config:
        """Create Config from dictionary."""
        return Config(
            version=data.get("version", 1),
            catalog=data.get("catalog", "") or "",
            templates_dir=data.get("templates_dir", "") or "",
            default_ide=data.get("default_ide", "") or "",
            package_manager=data.get("package_manager", "npm"),
            packaging=PackagingConfig.from_dict(data.get("packaging", {}) or {}),
            timeout_seconds=(
                int(data["timeout_seconds"]) if data.get("timeout_seconds") is not None else None
            ),
            source=source,
        )

    def merge_with(self, other: Config) -> Config:
        """
        Merge this config with another, preferring values from this config.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged Config object
        """
        defaults = Config()
        return Config(
            version=self.version,
            catalog=self.catalog or other.catalog,
            templates_dir=self.templates_dir or other.templates_dir,
            default_ide=self.default_ide or other.default_ide,
            package_manager=(
                self.package_manager
                if self.package_manager != defaults.package_manager
                else other.package_manager
            ),
            packaging=self.packaging if self.packaging != defaults.packaging else other.packaging,
            timeout_seconds=(
                self.timeout_seconds
                if self.timeout_seconds is not None
                else other.timeout_seconds
            ),
            source=self.source or other.source,
        )


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as e:
        logger.debug(f"Could not parse {file_path}: {e}")
        return None


def load_config_file(file_path: str) -> Config | None:
    """
    Load configuration from a single file.

    Returns:
        Config object, or None if file cannot be loaded
    """
    if not os.path.exists(file_path):
        return None

    logger.debug(f"Loading config from: {file_path}")

    data = _load_yaml(file_path)
    if data is None:
        logger.warning(f"Invalid config file: {file_path}")
        return None

    try:
        return Config.from_dict(data, source=file_path)
    except (ValueError, TypeError) as e:
        logger.warning(f"Config validation failed for {file_path}: {e}")
        return None


def load_config(custom_path: str | None = None) -> Config:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .ai-dev-env.yml
    3. User ~/.config/ai-dev-env/config.yml
    4. Default configuration

    Returns:
        Merged Config object (never None, returns defaults if no config found)

    Raises:
        ConfigError: If custom_path is provided but file cannot be loaded
    """
    configs: list[Config] = []

    if custom_path:
        config = load_config_file(custom_path)
        if config is None:
            raise ConfigError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location)
        if config is not None:
            configs.append(config)

    if not configs:
        logger.debug("No config files found, using defaults")
        return Config()

    # First config has highest priority
    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    logger.debug(f"Merged {len(configs)} config file(s)")
    return merged
