"""Small types and Enums used by gsu."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Level(str, Enum):
    """Severity of a console line."""

    info = "INFO"
    success = "SUCCESS"
    warning = "WARNING"
    error = "ERROR"


class Outcome(str, Enum):
    """Terminal state of one repository in a run."""

    updated = "updated"
    up_to_date = "up_to_date"
    pulled_no_change = "pulled_no_change"
    skipped = "skipped"
    failed = "failed"
    dry_run = "dry_run"

    @property
    def succeeded(self) -> bool:
        return self in (Outcome.updated, Outcome.up_to_date, Outcome.pulled_no_change)


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation: success with its output, or failure with exit status."""

    ok: bool
    output: str = ""
    returncode: int = 0
    stderr: str = ""

    @property
    def value(self) -> str | None:
        """Stripped stdout when the command succeeded and printed something, else None."""
        return self.output if self.ok and self.output else None


@dataclass
class RepoResult:
    name: str
    path: str
    outcome: Outcome
    lines: list[tuple[Level, str]] = field(default_factory=list)


@dataclass
class RunSummary:
    total: int = 0
    updated: int = 0
    failed: int = 0
    skipped: int = 0

    def record(self, outcome: Outcome) -> None:
        self.total += 1
        if outcome.succeeded:
            self.updated += 1
        elif outcome is Outcome.failed:
            self.failed += 1
        elif outcome is Outcome.skipped:
            self.skipped += 1
