"""
The setup flow.

pick IDE → install IDE → pick extensions → install extensions →
pick apps → install apps → apply settings. Every step records a StepResult;
no failure stops the run.
"""

from __future__ import annotations

import logging

from questionary import Choice

from .apps import install_apps
from .catalog import ToolCatalog
from .config import Config
from .environment import Environment
from .ide import SKIP, install_extensions, install_ide
from .logging_config import log_success
from .prompts import select_many, select_one
from .results import SetupReport, StepResult, StepStatus
from .settings import apply_settings, settings_path_for, template_path_for

logger = logging.getLogger(__name__)

COMPLETION_MESSAGE = "Setup complete! Enjoy your development environment."


def choose_ide(catalog: ToolCatalog, config: Config, interactive: bool) -> str:
    """Return the chosen IDE name, or SKIP."""
    options = [Choice(ide.name, value=ide.name) for ide in catalog.ides]
    options.append(Choice("Skip", value=SKIP))

    default = config.default_ide if catalog.get_ide(config.default_ide) else options[0].value
    choice = select_one("Choose an IDE to install:", options, default=default, interactive=interactive)
    return choice or SKIP


def choose_extensions(catalog: ToolCatalog, interactive: bool) -> list[str]:
    defaults = set(catalog.default_extension_ids())
    options = [
        Choice(ext.name, value=ext.id, checked=ext.id in defaults)
        for ext in catalog.extensions
    ]
    choices = select_many("Choose extensions to install:", options, interactive=interactive)
    if not interactive:
        logger.debug(f"Using default extensions in non-interactive mode: {', '.join(choices)}")
    return choices


def choose_apps(catalog: ToolCatalog, interactive: bool) -> list[str]:
    if interactive and catalog.apps:
        for index, app in enumerate(catalog.apps, start=1):
            logger.info(f"  {index}. {app.name} ({app.url})")
            if app.is_pake:
                logger.info("     Creates a native desktop app with Pake")
        logger.info("")

    defaults = set(catalog.default_app_names())
    options = [
        Choice(f"{app.name} ({app.url})", value=app.name, checked=app.name in defaults)
        for app in catalog.apps
    ]
    choices = select_many(
        "Select apps to install as desktop applications:", options, interactive=interactive
    )
    if not interactive:
        logger.debug(f"Using default apps in non-interactive mode: {', '.join(choices)}")
    return choices


def apply_ide_configuration(ide_name: str, catalog: ToolCatalog, config: Config, env: Environment) -> StepResult:
    """
    Copy the IDE's settings template into its user configuration directory.

    Returns:
        StepResult of kind "settings"
    """
    ide = catalog.get_ide(ide_name)
    if ide is None:
        logger.error(f"IDE {ide_name} not found in configuration")
        return StepResult("settings", ide_name, StepStatus.FAILED, "not found in configuration")

    settings_path = settings_path_for(ide, env)
    if settings_path is None:
        logger.warning(f"Settings path not defined for {ide.name}. Skipping configuration.")
        return StepResult("settings", ide.name, StepStatus.SKIPPED, "settings path unknown")

    template = template_path_for(ide, config.templates_dir or None)
    try:
        backup = apply_settings(settings_path, ide.name, template)
    except OSError as e:
        logger.error(f"Failed to apply {ide.name} settings: {e}")
        return StepResult("settings", ide.name, StepStatus.FAILED, "could not write settings", detail=str(e))

    if backup is None:
        return StepResult("settings", ide.name, StepStatus.OK, "default settings kept", detail=str(settings_path))
    return StepResult("settings", ide.name, StepStatus.OK, f"template applied, backup at {backup}", detail=str(settings_path))


def run_setup(
    catalog: ToolCatalog,
    config: Config,
    env: Environment,
    interactive: bool = True,
) -> SetupReport:
    """
    Run the whole setup flow.

    Args:
        catalog: Tool catalog
        config: Configuration
        env: Runtime environment
        interactive: Prompt the user; otherwise use catalog defaults

    Returns:
        SetupReport with one entry per attempted step

    Raises:
        KeyboardInterrupt: If the user aborts a prompt
    """
    report = SetupReport(os_name=env.os_name, interactive=interactive)

    # Step 1: IDE
    ide_name = choose_ide(catalog, config, interactive)
    report.ide = ide_name
    logger.debug(f"Selected IDE: {ide_name}")

    ide = catalog.get_ide(ide_name) if ide_name != SKIP else None
    if ide_name == SKIP:
        report.add(StepResult("ide", SKIP, StepStatus.SKIPPED, "no IDE selected"))
    elif ide is None:
        logger.error(f"IDE {ide_name} not found in configuration")
        report.add(StepResult("ide", ide_name, StepStatus.FAILED, "not found in configuration"))
    else:
        report.add(install_ide(ide, env, timeout=config.timeout))

    # Step 2: extensions
    extension_ids = choose_extensions(catalog, interactive)
    if ide is not None:
        report.extend(install_extensions(ide, extension_ids, env, timeout=config.timeout))

    # Step 3: apps
    app_names = choose_apps(catalog, interactive)
    report.extend(install_apps(app_names, catalog, config, env))

    # Step 4: settings
    if ide_name != SKIP:
        report.add(apply_ide_configuration(ide_name, catalog, config, env))

    logger.info("")
    log_success(logger, COMPLETION_MESSAGE)
    return report
