"""
External command execution.

Every shell-out goes through run_command, which never raises for a failed or
missing program; callers inspect the returned CommandResult.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
import subprocess
import time
from dataclasses import dataclass
from typing import Mapping, Sequence

from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

VERSION_RE = re.compile(r"(\d+(?:\.\d+)+)")
ANSI_ESCAPE_RE = re.compile(r'\x1b\[[0-9;]*m')


@dataclass(frozen=True)
class CommandResult:
    """
    Result of running one external command.

    Attributes:
        success: Whether the process exited with code 0
        stdout: Captured standard output
        stderr: Captured standard error (or the spawn error text)
        exit_code: Process exit code, -1 if the process never ran
        duration_seconds: Wall time spent
    """
    success: bool
    stdout: str
    stderr: str
    exit_code: int
    duration_seconds: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exit_code": self.exit_code,
            "duration_seconds": self.duration_seconds,
        }


def run_command(
    program: str,
    args: Sequence[str] = (),
    silent: bool = False,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """
    Run a program to completion.

    Args:
        program: Executable name or path
        args: Arguments
        silent: Detach stdin and don't echo output
        env: Extra variables merged over the parent environment
        timeout: Timeout in seconds (None waits forever)

    Returns:
        CommandResult with execution outcome
    """
    command = [program, *args]
    merged_env = {**os.environ, **(env or {})}
    start_time = time.time()

    logger.debug(f"Executing: {' '.join(command)}")

    try:
        proc = subprocess.run(
            command,
            stdin=subprocess.DEVNULL if silent else None,
            capture_output=True,
            text=True,
            env=merged_env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return CommandResult(
            success=False,
            stdout=_decode(e.stdout),
            stderr=f"Command timed out after {timeout}s: {' '.join(command)}",
            exit_code=-1,
            duration_seconds=time.time() - start_time,
        )
    except OSError as e:
        # FileNotFoundError, PermissionError, ...
        logger.debug(f"Could not start {program}: {e}")
        return CommandResult(
            success=False,
            stdout="",
            stderr=str(e),
            exit_code=-1,
            duration_seconds=time.time() - start_time,
        )

    duration = time.time() - start_time
    if not silent and proc.stdout:
        for line in proc.stdout.splitlines():
            logger.debug(f"  {line}")

    return CommandResult(
        success=proc.returncode == 0,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        exit_code=proc.returncode,
        duration_seconds=duration,
    )


def split_command(command: str, os_name: str) -> list[str]:
    """
    Split a catalog install command into program and arguments.

    Windows commands are split without POSIX escaping so backslashes in
    paths survive; surrounding double quotes are removed from each token.

    Args:
        command: Install command from the catalog
        os_name: OS identifier the command is meant for

    Returns:
        Argument vector, program first

    Raises:
        ValueError: If the command has unbalanced quotes or is empty
    """
    if os_name == "windows":
        parts = [
            part[1:-1] if len(part) >= 2 and part[0] == part[-1] == '"' else part
            for part in shlex.split(command, posix=False)
        ]
    else:
        parts = shlex.split(command)

    if not parts or not parts[0]:
        raise ValueError("empty command")
    return parts


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode(errors="replace")
    return output


def extract_version(output: str) -> str | None:
    """
    Extract the first version number from command output.

    Args:
        output: Output of a --version probe

    Returns:
        Normalized version string, or None if none was found
    """
    for line in output.splitlines():
        match = VERSION_RE.search(ANSI_ESCAPE_RE.sub("", line))
        if not match:
            continue
        try:
            return str(Version(match.group(1)))
        except InvalidVersion:
            return match.group(1)
    return None


def probe_version(command: str, timeout: float | None = None) -> tuple[bool, str | None]:
    """
    Check whether a binary responds to --version.

    Args:
        command: Binary to probe
        timeout: Timeout in seconds

    Returns:
        Tuple of (present, version). version is None when the output has no
        recognizable version number.
    """
    result = run_command(command, ["--version"], silent=True, timeout=timeout)
    if not result.success:
        return (False, None)
    return (True, extract_version(result.stdout))
