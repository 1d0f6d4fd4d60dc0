"""
Per-step outcomes of a setup run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class StepStatus(str, Enum):
    """Outcome of one step."""
    OK = "ok"
    WARNING = "warning"          # Succeeded, but something looked off
    SKIPPED = "skipped"
    UNSUPPORTED = "unsupported"  # No install command for this OS
    FAILED = "failed"
    UNKNOWN = "unknown"          # Outcome could not be classified

    @property
    def succeeded(self) -> bool:
        return self in (StepStatus.OK, StepStatus.WARNING)


@dataclass(frozen=True)
class StepResult:
    """
    Result of a single setup step.

    Attributes:
        kind: Step category ("ide", "extension", "app", "settings")
        name: Item the step acted on
        status: Outcome
        message: Short human-readable summary
        detail: Raw error output or a discovered path
    """
    kind: str
    name: str
    status: StepStatus
    message: str = ""
    detail: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "detail": self.detail,
        }


@dataclass
class SetupReport:
    """Ordered results of one run."""
    ide: str = "skip"
    os_name: str = ""
    interactive: bool = True
    steps: list[StepResult] = field(default_factory=list)

    def add(self, step: StepResult) -> StepResult:
        self.steps.append(step)
        return step

    def extend(self, steps: list[StepResult]) -> None:
        self.steps.extend(steps)

    def count(self, status: StepStatus) -> int:
        return sum(1 for step in self.steps if step.status is status)

    @property
    def failures(self) -> list[StepResult]:
        return [
            step for step in self.steps
            if step.status in (StepStatus.FAILED, StepStatus.UNKNOWN)
        ]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "ide": self.ide,
            "os": self.os_name,
            "interactive": self.interactive,
            "steps": [step.to_dict() for step in self.steps],
            "counts": {status.value: self.count(status) for status in StepStatus},
        }
