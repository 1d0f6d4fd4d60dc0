"""
Run summary rendering.
"""

import os
import sys
from typing import TextIO

from wcwidth import wcswidth

from .results import SetupReport, StepStatus


# Environment options
USE_EMOJI = os.environ.get("AI_DEV_ENV_EMOJI", "1") == "1"
USE_COLOR = os.environ.get("AI_DEV_ENV_COLOR", "1") == "1"

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"

STATUS_COLORS = {
    StepStatus.OK: GREEN,
    StepStatus.WARNING: YELLOW,
    StepStatus.SKIPPED: BLUE,
    StepStatus.UNSUPPORTED: YELLOW,
    StepStatus.FAILED: RED,
    StepStatus.UNKNOWN: RED,
}


def status_icon(status: StepStatus) -> str:
    """Get status icon for a step."""
    if not USE_EMOJI:
        return {
            StepStatus.OK: "✓",
            StepStatus.WARNING: "!",
            StepStatus.SKIPPED: "-",
            StepStatus.UNSUPPORTED: "~",
            StepStatus.FAILED: "x",
            StepStatus.UNKNOWN: "?",
        }[status]

    return {
        StepStatus.OK: "✅",
        StepStatus.WARNING: "⚠️",
        StepStatus.SKIPPED: "⏭️",
        StepStatus.UNSUPPORTED: "🚫",
        StepStatus.FAILED: "❌",
        StepStatus.UNKNOWN: "❓",
    }[status]


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Apply color to text unless colors are disabled."""
    if not enabled or not USE_COLOR or not text:
        return text
    return f"{color}{text}{RESET}"


def display_width(text: str) -> int:
    """Terminal cell width of text (emoji count as two cells)."""
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def pad(text: str, width: int) -> str:
    return text + " " * max(0, width - display_width(text))


def render_summary(report: SetupReport, stream: TextIO | None = None, color: bool | None = None) -> None:
    """
    Print an aligned table of all steps followed by a one-line summary.

    Args:
        report: Results of the run
        stream: Output stream (defaults to stdout)
        color: Force colors on/off (defaults to stream is a TTY)
    """
    out = stream or sys.stdout
    if color is None:
        color = getattr(out, "isatty", lambda: False)()

    if not report.steps:
        return

    rows = [
        (status_icon(step.status), step.kind, step.name, step.status.value, step.message)
        for step in report.steps
    ]
    headers = ("", "step", "name", "status", "details")
    widths = [
        max(display_width(row[i]) for row in [headers, *rows])
        for i in range(len(headers) - 1)
    ]

    print("", file=out)
    print("  ".join(pad(h, w) for h, w in zip(headers, widths)) + "  " + headers[-1], file=out)
    for step, row in zip(report.steps, rows):
        cells = [pad(cell, w) for cell, w in zip(row, widths)]
        cells[3] = colorize(cells[3], STATUS_COLORS[step.status], color)
        print("  ".join(cells) + "  " + row[-1], file=out)

    print_summary(report, out)


def print_summary(report: SetupReport, stream: TextIO | None = None) -> None:
    """Print summary line."""
    out = stream or sys.stdout
    succeeded = sum(1 for step in report.steps if step.status.succeeded)
    parts = [f"{len(report.steps)} steps", f"{succeeded} succeeded"]

    for status in (StepStatus.FAILED, StepStatus.UNKNOWN, StepStatus.UNSUPPORTED, StepStatus.SKIPPED):
        count = report.count(status)
        if count:
            parts.append(f"{count} {status.value}")

    print(f"\nSummary: {', '.join(parts)}", file=out)
