"""
Tool catalog loading.

The catalog is a single JSON document listing the installable IDEs,
extensions and desktop apps:

    {"ides": [...], "extensions": [...], "apps": [...]}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "tools.json"

# Settings directory names for IDEs that don't declare one
KNOWN_SETTINGS_DIRS = {
    "VS Code": "Code",
    "Cursor": "Cursor",
}


@dataclass(frozen=True)
class IDE:
    """
    IDE catalog entry.

    Attributes:
        name: Display name (e.g., "VS Code")
        command: Launcher binary (e.g., "code")
        install: OS identifier -> install command
        settings_dir: Directory name under the OS application-data root
    """
    name: str
    command: str
    install: dict[str, str] = field(default_factory=dict)
    settings_dir: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IDE":
        """Create from catalog JSON data."""
        name = data.get("name", "")
        return cls(
            name=name,
            command=data.get("command", ""),
            install=dict(data.get("install", {})),
            settings_dir=data.get("settings_dir") or KNOWN_SETTINGS_DIRS.get(name, ""),
        )


@dataclass(frozen=True)
class Extension:
    """IDE extension catalog entry."""
    name: str
    id: str
    default: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Extension":
        """Create from catalog JSON data."""
        return cls(
            name=data.get("name", ""),
            id=data.get("id", ""),
            default=bool(data.get("default", False)),
        )


@dataclass(frozen=True)
class App:
    """
    Desktop app catalog entry.

    Attributes:
        name: App name (selection key)
        type: "pake" for web pages wrapped by Pake, anything else is generic
        url: Target URL
        install: OS identifier -> install command template
        display_name: Preferred window/app name
        default: Pre-selected in menus and non-interactive runs
    """
    name: str
    type: str
    url: str = ""
    install: dict[str, str] = field(default_factory=dict)
    display_name: str | None = None
    default: bool = True

    @property
    def is_pake(self) -> bool:
        return self.type == "pake"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "App":
        """Create from catalog JSON data."""
        return cls(
            name=data.get("name", ""),
            type=data.get("type", ""),
            url=data.get("url", ""),
            install=dict(data.get("install", {})),
            display_name=data.get("displayName") or data.get("display_name"),
            default=bool(data.get("default", True)),
        )


@dataclass(frozen=True)
class ToolCatalog:
    """Everything the installer can offer, loaded once per run."""
    ides: tuple[IDE, ...] = ()
    extensions: tuple[Extension, ...] = ()
    apps: tuple[App, ...] = ()
    source: str = ""

    @classmethod
    def from_dict(cls, data: Any, source: str = "") -> "ToolCatalog":
        """
        Create catalog from parsed JSON.

        Raises:
            CatalogError: If the document does not have the catalog shape
        """
        if not isinstance(data, dict):
            raise CatalogError(
                f"Invalid tools configuration in {source or 'catalog'}: expected a JSON object",
                remediation="Please check tools.json",
            )

        for key in ("ides", "extensions", "apps"):
            if not isinstance(data.get(key), list):
                raise CatalogError(
                    f"Invalid tools configuration in {source or 'catalog'}: '{key}' must be a list",
                    remediation="Please check tools.json",
                )

        return cls(
            ides=tuple(IDE.from_dict(item) for item in data["ides"]),
            extensions=tuple(Extension.from_dict(item) for item in data["extensions"]),
            apps=tuple(App.from_dict(item) for item in data["apps"]),
            source=source,
        )

    def get_ide(self, name: str) -> IDE | None:
        for ide in self.ides:
            if ide.name == name:
                return ide
        return None

    def get_app(self, name: str) -> App | None:
        for app in self.apps:
            if app.name == name:
                return app
        return None

    def default_extension_ids(self) -> list[str]:
        """Ids of extensions pre-checked in the menu."""
        return [ext.id for ext in self.extensions if ext.default]

    def default_app_names(self) -> list[str]:
        """Names of apps pre-checked in the menu."""
        return [app.name for app in self.apps if app.default]


def load_catalog(path: str | Path | None = None) -> ToolCatalog:
    """
    Load the tool catalog from a JSON file.

    Args:
        path: Catalog path (defaults to the bundled data/tools.json)

    Returns:
        ToolCatalog instance

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    logger.debug(f"Loading tools configuration from {catalog_path}")

    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogError(f"Could not read catalog {catalog_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(
            f"Invalid JSON in catalog {catalog_path}: {e}",
            remediation="Please check tools.json",
        ) from e

    catalog = ToolCatalog.from_dict(data, source=str(catalog_path))
    logger.debug(
        f"Loaded {len(catalog.ides)} IDEs, {len(catalog.extensions)} extensions, "
        f"{len(catalog.apps)} apps"
    )
    return catalog
