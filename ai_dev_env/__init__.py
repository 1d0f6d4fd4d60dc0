"""
AI Development Environment Setup Tool.

Installs an IDE, IDE extensions and web apps wrapped as desktop
applications, then applies a bundled IDE settings file.

Modules:
- Catalog and configuration: catalog, config, environment
- Execution: runner, prompts
- Installation: ide, apps, settings
- Reporting: results, render
"""

__version__ = "1.0.0"

VERSION = __version__

from .catalog import IDE, App, Extension, ToolCatalog, load_catalog
from .config import Config, PackagingConfig, load_config, load_config_file
from .environment import Environment, current_os, detect_environment
from .errors import AiDevEnvError, CatalogError, ConfigError, TemplateError
from .runner import CommandResult, probe_version, run_command
from .results import SetupReport, StepResult, StepStatus
from .ide import install_extensions, install_ide
from .apps import (
    PakeClassification,
    PakeOptions,
    PakeOutcome,
    classify_pake_result,
    install_apps,
    parse_pake_template,
    sanitize_app_name,
)
from .settings import DEFAULT_SETTINGS, apply_settings, ensure_settings_file
from .workflow import run_setup

__all__ = [
    "__version__",
    "VERSION",
    # Catalog and configuration
    "IDE",
    "App",
    "Extension",
    "ToolCatalog",
    "load_catalog",
    "Config",
    "PackagingConfig",
    "load_config",
    "load_config_file",
    "Environment",
    "current_os",
    "detect_environment",
    # Errors
    "AiDevEnvError",
    "CatalogError",
    "ConfigError",
    "TemplateError",
    # Execution
    "CommandResult",
    "probe_version",
    "run_command",
    # Results
    "SetupReport",
    "StepResult",
    "StepStatus",
    # Installation
    "install_ide",
    "install_extensions",
    "PakeClassification",
    "PakeOptions",
    "PakeOutcome",
    "classify_pake_result",
    "install_apps",
    "parse_pake_template",
    "sanitize_app_name",
    "DEFAULT_SETTINGS",
    "apply_settings",
    "ensure_settings_file",
    "run_setup",
]
