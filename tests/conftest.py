"""Shared fixtures."""

import logging

import pytest

from ai_dev_env.catalog import ToolCatalog
from ai_dev_env.environment import Environment


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog keeps working across tests."""
    yield
    logger = logging.getLogger("ai_dev_env")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def darwin_env(tmp_path):
    """macOS environment rooted in a temporary home directory."""
    return Environment(os_name="darwin", home=str(tmp_path / "home"), variables={"PATH": "/usr/bin"})


@pytest.fixture
def sample_catalog_data():
    return {
        "ides": [
            {
                "name": "VS Code",
                "command": "code",
                "install": {
                    "darwin": "brew install --cask visual-studio-code",
                    "linux": "sudo snap install code --classic",
                },
            },
            {
                "name": "Cursor",
                "command": "cursor",
                "install": {"darwin": "brew install --cask cursor"},
            },
        ],
        "extensions": [
            {"name": "GitHub Copilot", "id": "github.copilot", "default": True},
            {"name": "Prettier", "id": "esbenp.prettier-vscode"},
        ],
        "apps": [
            {
                "name": "Semantic Chat",
                "type": "pake",
                "url": "https://chat.example.com",
                "install": {
                    "darwin": 'pake https://chat.example.com --name "Semantic Chat" --width 1200 --height 800',
                },
            },
            {
                "name": "Notes",
                "type": "brew",
                "url": "https://notes.example.com",
                "install": {"darwin": "brew install --cask notes"},
                "default": False,
            },
        ],
    }


@pytest.fixture
def sample_catalog(sample_catalog_data):
    return ToolCatalog.from_dict(sample_catalog_data, source="sample")
