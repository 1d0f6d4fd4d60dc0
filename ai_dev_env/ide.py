"""
IDE and extension installation.
"""

from __future__ import annotations

import logging

from .catalog import IDE
from .environment import Environment
from .logging_config import log_success
from .results import StepResult, StepStatus
from .runner import probe_version, run_command, split_command

logger = logging.getLogger(__name__)

SKIP = "skip"


def install_ide(
    ide: IDE,
    env: Environment,
    timeout: float | None = None,
) -> StepResult:
    """
    Install an IDE unless its launcher already responds to --version.

    Args:
        ide: Catalog entry of the chosen IDE
        env: Runtime environment
        timeout: Timeout for each command

    Returns:
        StepResult (ok, unsupported or failed)
    """
    present, version = probe_version(ide.command, timeout=timeout)
    if present:
        version_str = f" ({version})" if version else ""
        log_success(logger, f"{ide.name} is already installed{version_str}.")
        return StepResult("ide", ide.name, StepStatus.OK, f"already installed{version_str}")

    logger.warning(f"{ide.name} is not installed. Installing...")
    install_cmd = (ide.install.get(env.os_name) or "").strip()

    if not install_cmd:
        logger.warning(
            f"Installation not supported on {env.os_name}. Please install {ide.name} manually."
        )
        return StepResult(
            "ide", ide.name, StepStatus.UNSUPPORTED,
            f"no install command for {env.os_name}",
        )

    try:
        parts = split_command(install_cmd, env.os_name)
    except ValueError as e:
        logger.error(f"Invalid install command for {ide.name}: {install_cmd} ({e})")
        return StepResult("ide", ide.name, StepStatus.FAILED, "invalid install command", detail=str(e))

    result = run_command(parts[0], parts[1:], env=env.variables, timeout=timeout)

    if result.success:
        log_success(logger, f"{ide.name} installed successfully.")
        return StepResult("ide", ide.name, StepStatus.OK, "installed")

    logger.error(f"Failed to install {ide.name} on {env.os_name}: {result.stderr.strip()}")
    logger.info(f"You can try installing manually with: {install_cmd}")
    return StepResult(
        "ide", ide.name, StepStatus.FAILED,
        f"install command exited with {result.exit_code}",
        detail=result.stderr,
    )


def install_extensions(
    ide: IDE,
    extension_ids: list[str],
    env: Environment,
    timeout: float | None = None,
) -> list[StepResult]:
    """
    Install extensions through the IDE's --install-extension subcommand.

    Each id is attempted exactly once; a failure does not stop the others.

    Args:
        ide: IDE whose launcher performs the installs
        extension_ids: Extension identifiers in install order
        env: Runtime environment
        timeout: Timeout for each command

    Returns:
        One StepResult per extension
    """
    if not extension_ids:
        return []

    logger.info(f"Installing extensions for {ide.name}... (this may take a while)")
    results: list[StepResult] = []
    total = len(extension_ids)

    for index, ext_id in enumerate(extension_ids, start=1):
        logger.info(f"[{index}/{total}] Installing {ext_id}...")
        result = run_command(
            ide.command, ["--install-extension", ext_id], env=env.variables, timeout=timeout
        )

        if result.success:
            log_success(logger, f"Installed extension: {ext_id}")
            results.append(StepResult("extension", ext_id, StepStatus.OK, "installed"))
        else:
            logger.error(f"Failed to install extension {ext_id}: {result.stderr.strip()}")
            results.append(
                StepResult(
                    "extension", ext_id, StepStatus.FAILED,
                    f"exited with {result.exit_code}",
                    detail=result.stderr,
                )
            )

    return results
