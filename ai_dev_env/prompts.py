"""
Terminal selection menus.

Single-choice and multi-choice prompts built on questionary. In
non-interactive mode, or when the terminal cannot be prompted, the
pre-marked defaults are returned instead.
"""

from __future__ import annotations

import logging
from typing import Sequence

import questionary
from questionary import Choice

logger = logging.getLogger(__name__)


def _default_values(options: Sequence[Choice]) -> list[str]:
    return [option.value for option in options if option.checked]


def select_one(
    message: str,
    options: Sequence[Choice],
    default: str | None = None,
    interactive: bool = True,
) -> str | None:
    """
    Ask the user to pick one option.

    Args:
        message: Prompt text
        options: Available choices
        default: Value returned without prompting (defaults to the first option)
        interactive: Prompt the user; otherwise return the default

    Returns:
        Selected value, or None if there are no options

    Raises:
        KeyboardInterrupt: If the user aborts the prompt
    """
    if not options:
        return None

    fallback = default if default is not None else options[0].value
    if not interactive:
        return fallback

    try:
        answer = questionary.select(
            message,
            choices=list(options),
            default=fallback,
        ).unsafe_ask()
    except (EOFError, OSError) as e:
        logger.debug(f"Error during selection prompt: {e}. Using default.")
        return fallback

    return answer if answer is not None else fallback


def select_many(
    message: str,
    options: Sequence[Choice],
    interactive: bool = True,
) -> list[str]:
    """
    Ask the user to pick any number of options.

    Args:
        message: Prompt text
        options: Available choices; checked ones are the defaults
        interactive: Prompt the user; otherwise return the defaults

    Returns:
        Selected values in menu order

    Raises:
        KeyboardInterrupt: If the user aborts the prompt
    """
    defaults = _default_values(options)
    if not interactive or not options:
        return defaults

    try:
        answer = questionary.checkbox(message, choices=list(options)).unsafe_ask()
    except (EOFError, OSError) as e:
        logger.debug(f"Error during selection prompt: {e}. Using defaults.")
        return defaults

    return list(answer) if answer is not None else defaults
