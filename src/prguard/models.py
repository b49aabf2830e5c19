"""Data models shared by the fetcher, evaluator and reporter."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ChangedFile:
    """One file touched by a pull request, as reported by the GitHub API."""
    path: str
    status: str  # 'added', 'modified', 'removed', 'renamed', 'copied', 'changed', 'unchanged'
    additions: int = 0
    deletions: int = 0
    changes: int | None = None
    previous_path: str | None = None  # For renames

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ChangedFile:
        """Create a ChangedFile from a `pulls/{n}/files` record."""
        changes = data.get("changes")
        return cls(
            path=data.get("filename", ""),
            status=data.get("status", "modified"),
            additions=_count(data.get("additions")),
            deletions=_count(data.get("deletions")),
            changes=int(changes) if _is_number(changes) else None,
            previous_path=data.get("previous_filename"),
        )

    @property
    def line_delta(self) -> int:
        """Lines touched in this file.

        The API's own `changes` count wins; some records omit it, in which
        case additions and deletions are summed instead.
        """
        if self.changes is not None:
            return self.changes
        return self.additions + self.deletions

    @property
    def is_renamed(self) -> bool:
        return self.status == "renamed"

    @property
    def segments(self) -> list[str]:
        return self.path.split("/")


@dataclass(frozen=True)
class Violation:
    """A broken policy rule."""
    rule: str  # 'max_lines', 'max_files', 'missing_tests'
    message: str
    actual: int | None = None
    limit: int | None = None

    @property
    def is_advisory(self) -> bool:
        """Display severity only. In `fail` mode any violation fails the run."""
        return self.rule == "missing_tests"

    def __str__(self) -> str:
        return self.message


@dataclass
class EvaluationResult:
    """Aggregate metrics and violations for one pull request."""
    total_files: int = 0
    total_changes: int = 0
    tests_touched: bool = False
    violations: list[Violation] = field(default_factory=list)
    skipped: str | None = None  # 'no_files', 'all_excluded'

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def summary(self) -> str:
        return (
            f"Files considered: {self.total_files}. "
            f"Changes: {self.total_changes}. "
            f"Tests touched: {'yes' if self.tests_touched else 'no'}."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_changes": self.total_changes,
            "tests_touched": self.tests_touched,
            "skipped": self.skipped,
            "violations": [
                {
                    "rule": v.rule,
                    "message": v.message,
                    "actual": v.actual,
                    "limit": v.limit,
                }
                for v in self.violations
            ],
        }


class Outcome(str, Enum):
    """Final signal for the CI run."""

    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"

    @property
    def exit_code(self) -> int:
        return 1 if self is Outcome.FAILURE else 0


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _count(value: Any) -> int:
    return int(value) if _is_number(value) else 0
