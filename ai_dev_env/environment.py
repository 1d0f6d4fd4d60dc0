"""
Runtime environment detection.

Captures the operating system, the directories used to locate IDE settings
and the process environment handed to child processes, so installers receive
them explicitly instead of reading globals.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .common import is_ci_environment

logger = logging.getLogger(__name__)

VALID_OS_NAMES = {"darwin", "linux", "windows"}


def current_os() -> str:
    """
    Map sys.platform to a catalog OS identifier.

    Returns:
        "darwin", "windows" or "linux" (any other platform is treated as linux)
    """
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith(("win32", "cygwin")):
        return "windows"
    return "linux"


@dataclass(frozen=True)
class Environment:
    """
    Detected environment information.

    Attributes:
        os_name: Catalog OS identifier ('darwin', 'linux' or 'windows')
        home: Home directory from HOME (USERPROFILE on Windows), if set
        appdata: Windows APPDATA directory, if set
        variables: Environment passed through to child processes
        ci: Whether a CI/CD environment was detected
    """
    os_name: str
    home: str | None = None
    appdata: str | None = None
    variables: dict[str, str] = field(default_factory=dict)
    ci: bool = False

    def __str__(self) -> str:
        ci_str = " (ci)" if self.ci else ""
        return f"{self.os_name}{ci_str}"

    @property
    def home_path(self) -> Path | None:
        return Path(self.home) if self.home else None

    @property
    def appdata_path(self) -> Path | None:
        return Path(self.appdata) if self.appdata else None


def detect_environment(override_os: str | None = None) -> Environment:
    """
    Detect the runtime environment.

    Args:
        override_os: Explicit OS identifier (mainly for tests)

    Returns:
        Environment snapshot of the current process

    Raises:
        ValueError: If override_os is not a known OS identifier
    """
    if override_os and override_os not in VALID_OS_NAMES:
        raise ValueError(
            f"Invalid OS override: {override_os}. "
            f"Must be one of: {', '.join(sorted(VALID_OS_NAMES))}"
        )

    os_name = override_os or current_os()
    variables = dict(os.environ)

    home = variables.get("HOME")
    if not home and os_name == "windows":
        home = variables.get("USERPROFILE")

    env = Environment(
        os_name=os_name,
        home=home or None,
        appdata=variables.get("APPDATA") or None,
        variables=variables,
        ci=is_ci_environment(),
    )
    logger.debug(f"Operating system detected: {env}")
    return env
