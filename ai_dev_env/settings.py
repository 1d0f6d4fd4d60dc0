"""
IDE settings file management.

The bundled template replaces the user's settings.json wholesale; the
previous file is kept as settings.json.backup. Files are never merged.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from .catalog import IDE
from .environment import Environment
from .logging_config import log_success

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "data" / "config"

DEFAULT_SETTINGS = {
    "editor.formatOnSave": True,
    "editor.defaultFormatter": "esbenp.prettier-vscode",
    "editor.codeActionsOnSave": {
        "source.fixAll.eslint": True,
    },
    "editor.suggest.snippetsPreventQuickSuggestions": False,
    "editor.inlineSuggest.enabled": True,
    "github.copilot.enable": {
        "*": True,
        "plaintext": False,
        "markdown": True,
    },
}


def settings_path_for(ide: IDE, env: Environment) -> Path | None:
    """
    Locate the user settings.json of an IDE.

    Args:
        ide: IDE catalog entry
        env: Runtime environment

    Returns:
        Path to settings.json, or None if it cannot be determined
    """
    if not ide.settings_dir:
        return None

    if env.os_name == "darwin":
        root = env.home_path / "Library" / "Application Support" if env.home_path else None
    elif env.os_name == "windows":
        root = env.appdata_path
    else:
        root = env.home_path / ".config" if env.home_path else None

    if root is None:
        return None
    return root / ide.settings_dir / "User" / "settings.json"


def template_path_for(ide: IDE, templates_dir: str | Path | None = None) -> Path:
    """Path of the bundled settings template, e.g. config/vscode-settings.json."""
    base = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
    return base / f"{ide.name.lower().replace(' ', '')}-settings.json"


def ensure_settings_file(path: Path, label: str) -> bool:
    """
    Create the settings file with default content if it is missing.

    Args:
        path: settings.json location
        label: IDE name for messages

    Returns:
        True if the file was created
    """
    logger.debug(f"Ensuring settings file exists for {label} at {path}")
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        logger.debug(f"Settings file for {label} already exists")
        return False

    logger.info(f"Creating default settings file for {label}...")
    path.write_text(json.dumps(DEFAULT_SETTINGS, indent=2), encoding="utf-8")
    log_success(logger, f"Created default settings file for {label}.")
    return True


def apply_settings(path: Path, label: str, template: Path) -> Path | None:
    """
    Replace the settings file with a template, keeping a backup.

    Args:
        path: settings.json location
        label: IDE name for messages
        template: Template to copy over the settings file

    Returns:
        Backup path if the template was applied, None if no template exists

    Raises:
        OSError: If a file operation fails
    """
    ensure_settings_file(path, label)

    if not template.exists():
        logger.info(f"Config file {template} not found. Using default settings.")
        return None

    backup = path.with_name(path.name + ".backup")
    logger.info("Settings file already exists. Creating backup...")
    shutil.copyfile(path, backup)
    shutil.copyfile(template, path)
    log_success(logger, f"Applied {label} configuration from {template}.")
    return backup
