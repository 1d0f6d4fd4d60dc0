"""
Common utilities shared across ai_dev_env modules.
"""

from __future__ import annotations

import os
import sys


def is_ci_environment() -> bool:
    """
    Check if running in a CI/CD environment.

    Returns:
        True if CI indicators are present, False otherwise.
    """
    ci_indicators = [
        "CI",
        "CONTINUOUS_INTEGRATION",
        "GITHUB_ACTIONS",
        "GITLAB_CI",
        "CIRCLECI",
        "TRAVIS",
        "JENKINS_HOME",
        "BUILDKITE",
        "DRONE",
        "SEMAPHORE",
        "APPVEYOR",
        "CODEBUILD_BUILD_ID",
        "TF_BUILD",  # Azure Pipelines
    ]
    return any(os.environ.get(var) for var in ci_indicators)


def stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        # Replaced or closed stdout
        return False


def is_interactive(non_interactive_flag: bool = False) -> bool:
    """
    Decide whether prompts may be shown.

    Args:
        non_interactive_flag: Value of --non-interactive

    Returns:
        False when the flag is set, stdout is not a terminal, or CI is detected
    """
    if non_interactive_flag:
        return False
    if not stdout_is_tty():
        return False
    return not is_ci_environment()
