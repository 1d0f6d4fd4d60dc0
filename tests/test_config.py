"""
Tests for configuration parsing (ai_dev_env/config.py).
"""

import pytest
from unittest.mock import patch

from ai_dev_env.config import (
    Config,
    PackagingConfig,
    _load_yaml,
    load_config,
    load_config_file,
)
from ai_dev_env.errors import ConfigError


VALID_YAML = """\
version: 1
catalog: /opt/tools.json
default_ide: Cursor
package_manager: pnpm
packaging:
  command: pake
  package: pake-cli
  width: 1440
  height: 900
timeout_seconds: 600
"""


class TestPackagingConfig:
    """Tests for PackagingConfig dataclass."""

    def test_defaults(self):
        packaging = PackagingConfig()
        assert packaging.command == "pake"
        assert packaging.package == "pake-cli"
        assert (packaging.width, packaging.height) == (1200, 800)

    def test_from_dict_partial(self):
        packaging = PackagingConfig.from_dict({"width": 1000})
        assert packaging.width == 1000
        assert packaging.height == 800

    def test_invalid_size(self):
        with pytest.raises(ValueError, match="Invalid packaging window size"):
            PackagingConfig(width=0)

    def test_empty_command(self):
        with pytest.raises(ValueError):
            PackagingConfig(command="")


class TestConfig:
    """Tests for Config dataclass."""

    def test_defaults(self):
        config = Config()
        assert config.version == 1
        assert config.package_manager == "npm"
        assert config.timeout is None
        assert config.catalog == ""

    def test_timeout_property(self):
        assert Config(timeout_seconds=30).timeout == 30

    def test_invalid_version(self):
        with pytest.raises(ValueError, match="Unsupported config version"):
            Config(version=2)

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="Invalid timeout_seconds"):
            Config(timeout_seconds=-1)

    def test_from_dict(self):
        config = Config.from_dict(
            {"default_ide": "Cursor", "packaging": {"package": "pake-cli@3"}}, source="x.yml"
        )
        assert config.default_ide == "Cursor"
        assert config.packaging.package == "pake-cli@3"
        assert config.source == "x.yml"

    def test_immutable(self):
        config = Config()
        with pytest.raises(AttributeError):
            config.default_ide = "VS Code"

    def test_merge_prefers_self(self):
        project = Config(default_ide="Cursor", source="project.yml")
        user = Config(default_ide="VS Code", package_manager="pnpm", timeout_seconds=60, source="user.yml")

        merged = project.merge_with(user)

        assert merged.default_ide == "Cursor"
        assert merged.package_manager == "pnpm"  # project left the default
        assert merged.timeout_seconds == 60
        assert merged.source == "project.yml"

    def test_merge_explicit_zero_timeout_wins(self):
        """Test a higher-priority file can turn the timeout off."""
        project = Config.from_dict({"timeout_seconds": 0})
        user = Config.from_dict({"timeout_seconds": 300})

        merged = project.merge_with(user)

        assert merged.timeout_seconds == 0
        assert merged.timeout is None

    def test_merge_unset_timeout_inherits(self):
        merged = Config().merge_with(Config(timeout_seconds=300))
        assert merged.timeout == 300


class TestLoadConfigFile:
    """Tests for loading single YAML files."""

    def test_valid_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(VALID_YAML)

        config = load_config_file(str(path))

        assert config.catalog == "/opt/tools.json"
        assert config.package_manager == "pnpm"
        assert config.packaging.width == 1440
        assert config.timeout_seconds == 600
        assert config.source == str(path)

    def test_missing_file(self, tmp_path):
        assert load_config_file(str(tmp_path / "missing.yml")) is None

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("version: [1, 2\n")
        assert _load_yaml(str(path)) is None
        assert load_config_file(str(path)) is None

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("version: 3\n")
        assert load_config_file(str(path)) is None

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config_file(str(path)) == Config(source=str(path))


class TestLoadConfig:
    """Tests for merged configuration loading."""

    @patch("ai_dev_env.config.CONFIG_LOCATIONS", [])
    def test_no_files_gives_defaults(self):
        assert load_config() == Config()

    @patch("ai_dev_env.config.CONFIG_LOCATIONS", [])
    def test_custom_path_missing_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="Could not load config"):
            load_config(str(tmp_path / "missing.yml"))

    def test_custom_path_wins(self, tmp_path):
        custom = tmp_path / "custom.yml"
        custom.write_text("default_ide: Cursor\n")
        user = tmp_path / "user.yml"
        user.write_text("default_ide: VS Code\ntimeout_seconds: 120\n")

        with patch("ai_dev_env.config.CONFIG_LOCATIONS", [str(user)]):
            config = load_config(str(custom))

        assert config.default_ide == "Cursor"
        assert config.timeout_seconds == 120
