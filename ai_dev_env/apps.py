"""
Desktop app installation.

Apps of type "pake" are web pages wrapped into native desktop applications
by the Pake CLI. Their catalog install command is a template: only the URL,
--name, --width and --height are read from it; it is never run as a shell
string. Other apps run their OS-specific install command directly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .catalog import App, ToolCatalog
from .config import Config
from .environment import Environment, current_os
from .errors import TemplateError
from .logging_config import log_success
from .results import StepResult, StepStatus
from .runner import CommandResult, probe_version, run_command, split_command

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"pake\s+(https?://\S+)")
NAME_RE = re.compile(r'--name\s+(?:"([^"]+)"|(\S+))')
WIDTH_RE = re.compile(r"--width\s+(\d+)")
HEIGHT_RE = re.compile(r"--height\s+(\d+)")

# Pake only accepts letters, digits and hyphens in --name
UNSAFE_NAME_CHARS_RE = re.compile(r"[^a-zA-Z0-9-]")

# stderr markers of a bundling step that fails after the app bundle was built
BUNDLE_FAILURE_MARKERS = {
    "darwin": ("bundle_dmg.sh",),
}
BUNDLE_PATH_RE = re.compile(r"Bundling\s+([^(]+\.app)\s+\(")


@dataclass(frozen=True)
class PakeOptions:
    """
    Arguments parsed from a pake install template.

    Attributes:
        url: Page to wrap
        name: Value of --name, if present
        width: Value of --width, if present
        height: Value of --height, if present
    """
    url: str
    name: str | None = None
    width: int | None = None
    height: int | None = None

    def to_args(self, app_name: str) -> list[str]:
        """Build the pake argument list for an already sanitized name."""
        args = [self.url, "--name", app_name]
        if self.width is not None and self.height is not None:
            args += ["--width", str(self.width), "--height", str(self.height)]
        return args


class PakeOutcome(str, Enum):
    SUCCESS = "success"
    SUCCESS_WITH_WARNING = "success_with_warning"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PakeClassification:
    outcome: PakeOutcome
    bundle_path: str | None = None


def parse_pake_template(template: str) -> PakeOptions:
    """
    Extract pake arguments from a catalog install template.

    Args:
        template: e.g. 'pake https://chat.example.com --name "My App" --width 1200 --height 800'

    Returns:
        PakeOptions

    Raises:
        TemplateError: If the template has no http(s) URL after 'pake'
    """
    url_match = URL_RE.search(template)
    if not url_match:
        raise TemplateError(
            f"Could not extract URL from install command: {template}",
            remediation="The install command must look like 'pake https://... --name Name'",
        )

    name_match = NAME_RE.search(template)
    width_match = WIDTH_RE.search(template)
    height_match = HEIGHT_RE.search(template)

    return PakeOptions(
        url=url_match.group(1),
        name=(name_match.group(1) or name_match.group(2)) if name_match else None,
        width=int(width_match.group(1)) if width_match else None,
        height=int(height_match.group(1)) if height_match else None,
    )


def sanitize_app_name(name: str) -> str:
    """Strip everything but ASCII letters, digits and hyphens."""
    return UNSAFE_NAME_CHARS_RE.sub("", name)


def classify_pake_result(result: CommandResult, os_name: str | None = None) -> PakeClassification:
    """
    Classify a pake run.

    Pake's output is not a stable interface, so a non-zero exit is inspected
    heuristically: a known bundling-failure marker together with a bundle
    path means the app itself was built. A marker without a path can't be
    decided either way.

    Args:
        result: Outcome of the pake command
        os_name: OS identifier (defaults to the current OS)

    Returns:
        PakeClassification
    """
    if result.success:
        return PakeClassification(PakeOutcome.SUCCESS)

    markers = BUNDLE_FAILURE_MARKERS.get(os_name or current_os(), ())
    if not any(marker in result.stderr for marker in markers):
        return PakeClassification(PakeOutcome.FAILED)

    path_match = BUNDLE_PATH_RE.search(result.stderr)
    if path_match:
        return PakeClassification(PakeOutcome.SUCCESS_WITH_WARNING, path_match.group(1).strip())
    return PakeClassification(PakeOutcome.UNKNOWN)


def manual_install_hint(app: App, config: Config) -> str:
    """Command line a user can run to create the app by hand."""
    packaging = config.packaging
    display_name = app.display_name or app.name.replace(" ", "")
    return (
        f"{config.package_manager} install -g {packaging.package} && "
        f"{packaging.command} {app.url} --name {display_name} "
        f"--width {packaging.width} --height {packaging.height}"
    )


def ensure_packaging_cli(config: Config, timeout: float | None = None) -> str | None:
    """
    Make sure the packaging CLI is available, installing it if needed.

    Args:
        config: Configuration (package manager and packaging CLI names)
        timeout: Timeout for each command

    Returns:
        None when the CLI is ready, otherwise an error message
    """
    pm = config.package_manager
    packaging = config.packaging

    pm_present, _ = probe_version(pm, timeout=timeout)
    if not pm_present:
        return f"{pm} is not installed or not in PATH. Please install Node.js and {pm} first."

    cli_present, version = probe_version(packaging.command, timeout=timeout)
    if cli_present:
        version_str = f" {version}" if version else ""
        log_success(logger, f"Pake CLI{version_str} is already installed")
        return None

    logger.warning("Pake CLI not found, installing...")
    result = run_command(pm, ["install", "-g", packaging.package], timeout=timeout)
    if not result.success:
        return f"Failed to install Pake CLI: {result.stderr.strip()}"

    log_success(logger, "Pake CLI installed successfully")
    return None


def install_pake_app(app: App, config: Config, env: Environment) -> StepResult:
    """
    Create a desktop app for a web page with Pake.

    Args:
        app: Catalog entry of type "pake"
        config: Configuration
        env: Runtime environment

    Returns:
        StepResult (ok, warning, unsupported, failed or unknown)
    """
    logger.info(f"\n📦 Installing {app.name}...")
    logger.info(f"URL: {app.url}")

    template = app.install.get(env.os_name)
    if not template:
        logger.warning(f"Installation not supported on {env.os_name}. Please install manually using Pake:")
        logger.info(f"   {manual_install_hint(app, config)}")
        return StepResult("app", app.name, StepStatus.UNSUPPORTED, f"no install command for {env.os_name}")

    error = ensure_packaging_cli(config, timeout=config.timeout)
    if error:
        logger.error(f"Failed to install Pake: {error}")
        logger.info(f"\n💡 To install {app.name} manually, run:")
        logger.info(f"   {manual_install_hint(app, config)}")
        return StepResult("app", app.name, StepStatus.FAILED, "Pake CLI unavailable", detail=error)

    try:
        options = parse_pake_template(template)
    except TemplateError as e:
        logger.error(f"{e.message} ({app.name})")
        return StepResult("app", app.name, StepStatus.FAILED, "invalid install template", detail=e.message)

    display_name = app.display_name or options.name or app.name
    args = options.to_args(sanitize_app_name(display_name))
    command = config.packaging.command

    logger.info(f"Running: {command} {' '.join(args)}")
    result = run_command(command, args, env=env.variables, timeout=config.timeout)
    classification = classify_pake_result(result, env.os_name)

    if classification.outcome is PakeOutcome.SUCCESS:
        log_success(logger, f"Successfully created desktop app for {app.name}!")
        logger.info("   The application is now in your applications folder.")
        return StepResult("app", app.name, StepStatus.OK, "desktop app created")

    if classification.outcome is PakeOutcome.SUCCESS_WITH_WARNING:
        logger.warning("DMG bundling failed, but the app was still created.")
        logger.warning("   This is a common issue on macOS and can be safely ignored.")
        log_success(logger, f"The application should be available at: {classification.bundle_path}")
        return StepResult(
            "app", app.name, StepStatus.WARNING,
            "created despite bundling error",
            detail=classification.bundle_path or "",
        )

    if classification.outcome is PakeOutcome.UNKNOWN:
        logger.error(
            f"Pake bundling failed and the app bundle could not be located; "
            f"check the output below. {result.stderr.strip()}"
        )
        return StepResult("app", app.name, StepStatus.UNKNOWN, "bundling failed", detail=result.stderr)

    logger.error(f"Pake command failed: {result.stderr.strip()}")
    return StepResult(
        "app", app.name, StepStatus.FAILED,
        f"pake exited with {result.exit_code}",
        detail=result.stderr,
    )


def install_generic_app(app: App, env: Environment, timeout: float | None = None) -> StepResult:
    """Run an app's OS-specific install command."""
    install_cmd = (app.install.get(env.os_name) or "").strip()
    if not install_cmd:
        logger.warning(f"Installation not supported on {env.os_name}. Please install {app.name} manually.")
        return StepResult("app", app.name, StepStatus.UNSUPPORTED, f"no install command for {env.os_name}")

    logger.info(f"📦 Installing {app.name}...")
    try:
        parts = split_command(install_cmd, env.os_name)
    except ValueError as e:
        logger.error(f"Invalid install command for {app.name}: {install_cmd} ({e})")
        return StepResult("app", app.name, StepStatus.FAILED, "invalid install command", detail=str(e))

    result = run_command(parts[0], parts[1:], env=env.variables, timeout=timeout)

    if result.success:
        log_success(logger, f"{app.name} installed successfully.")
        return StepResult("app", app.name, StepStatus.OK, "installed")

    logger.error(f"Failed to install {app.name}: {result.stderr.strip()}")
    return StepResult(
        "app", app.name, StepStatus.FAILED,
        f"install command exited with {result.exit_code}",
        detail=result.stderr,
    )


def install_apps(
    app_names: list[str],
    catalog: ToolCatalog,
    config: Config,
    env: Environment,
) -> list[StepResult]:
    """
    Install the selected apps one after another.

    Returns:
        One StepResult per selected name
    """
    if not app_names:
        logger.info("No apps selected for installation.")
        return []

    logger.info("\n🚀 Installing desktop applications...")
    results: list[StepResult] = []

    for name in app_names:
        app = catalog.get_app(name)
        if app is None:
            logger.error(f"App {name} not found in configuration")
            results.append(StepResult("app", name, StepStatus.FAILED, "not found in configuration"))
        elif app.is_pake:
            results.append(install_pake_app(app, config, env))
        else:
            results.append(install_generic_app(app, env, timeout=config.timeout))

    return results
