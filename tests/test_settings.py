"""
Tests for IDE settings management (ai_dev_env/settings.py).
"""

import json
from pathlib import Path

import pytest

from ai_dev_env.catalog import IDE
from ai_dev_env.environment import Environment
from ai_dev_env.settings import (
    DEFAULT_SETTINGS,
    DEFAULT_TEMPLATES_DIR,
    apply_settings,
    ensure_settings_file,
    settings_path_for,
    template_path_for,
)


VSCODE = IDE(name="VS Code", command="code", settings_dir="Code")
CURSOR = IDE(name="Cursor", command="cursor", settings_dir="Cursor")


class TestSettingsPath:
    """Tests for per-OS settings locations."""

    def test_darwin(self):
        env = Environment(os_name="darwin", home="/Users/dev")
        assert settings_path_for(VSCODE, env) == Path(
            "/Users/dev/Library/Application Support/Code/User/settings.json"
        )

    def test_linux(self):
        env = Environment(os_name="linux", home="/home/dev")
        assert settings_path_for(CURSOR, env) == Path("/home/dev/.config/Cursor/User/settings.json")

    def test_windows_uses_appdata(self):
        env = Environment(os_name="windows", home="C:/Users/dev", appdata="C:/Users/dev/AppData/Roaming")
        assert settings_path_for(VSCODE, env) == Path(
            "C:/Users/dev/AppData/Roaming/Code/User/settings.json"
        )

    def test_windows_without_appdata(self):
        env = Environment(os_name="windows", home="C:/Users/dev")
        assert settings_path_for(VSCODE, env) is None

    def test_missing_home(self):
        assert settings_path_for(VSCODE, Environment(os_name="linux")) is None

    def test_unknown_ide(self):
        ide = IDE(name="Zed", command="zed")
        assert settings_path_for(ide, Environment(os_name="linux", home="/home/dev")) is None


class TestTemplatePath:
    def test_name_is_lowercased_without_spaces(self, tmp_path):
        assert template_path_for(VSCODE, tmp_path) == tmp_path / "vscode-settings.json"
        assert template_path_for(CURSOR, tmp_path) == tmp_path / "cursor-settings.json"

    def test_bundled_templates_exist(self):
        """Test the package ships templates for the bundled IDEs."""
        assert template_path_for(VSCODE) == DEFAULT_TEMPLATES_DIR / "vscode-settings.json"
        assert template_path_for(VSCODE).exists()
        assert template_path_for(CURSOR).exists()


class TestEnsureSettingsFile:
    """Tests for default settings creation."""

    def test_creates_default_file(self, tmp_path):
        """Test missing file is created with the default keys."""
        target = tmp_path / "Code" / "User" / "settings.json"

        created = ensure_settings_file(target, "VS Code")

        assert created is True
        data = json.loads(target.read_text())
        assert set(DEFAULT_SETTINGS) <= set(data)
        assert data["editor.formatOnSave"] is True

    def test_existing_file_untouched(self, tmp_path):
        target = tmp_path / "settings.json"
        target.write_text('{"editor.fontSize": 14}')

        created = ensure_settings_file(target, "VS Code")

        assert created is False
        assert target.read_text() == '{"editor.fontSize": 14}'


class TestApplySettings:
    """Tests for template application with backup."""

    @pytest.fixture
    def template(self, tmp_path):
        path = tmp_path / "config" / "vscode-settings.json"
        path.parent.mkdir()
        path.write_text('{\n  "workbench.colorTheme": "Default Dark+"\n}\n')
        return path

    def test_backup_and_overwrite(self, tmp_path, template):
        """Test the previous file is backed up and the target equals the template."""
        target = tmp_path / "User" / "settings.json"
        target.parent.mkdir()
        target.write_text('{"editor.fontSize": 14}')

        backup = apply_settings(target, "VS Code", template)

        assert backup == tmp_path / "User" / "settings.json.backup"
        assert backup.read_text() == '{"editor.fontSize": 14}'
        assert target.read_text() == template.read_text()

    def test_overwrites_previous_backup(self, tmp_path, template):
        target = tmp_path / "settings.json"
        target.write_text("new")
        (tmp_path / "settings.json.backup").write_text("old backup")

        apply_settings(target, "VS Code", template)

        assert (tmp_path / "settings.json.backup").read_text() == "new"

    def test_missing_target_gets_default_then_template(self, tmp_path, template):
        """Test a fresh machine ends with the template and a backup of the defaults."""
        target = tmp_path / "User" / "settings.json"

        backup = apply_settings(target, "VS Code", template)

        assert target.read_text() == template.read_text()
        assert json.loads(backup.read_text()) == DEFAULT_SETTINGS

    def test_missing_template_keeps_defaults(self, tmp_path):
        target = tmp_path / "User" / "settings.json"

        backup = apply_settings(target, "VS Code", tmp_path / "nope.json")

        assert backup is None
        assert json.loads(target.read_text()) == DEFAULT_SETTINGS
        assert not (tmp_path / "User" / "settings.json.backup").exists()
