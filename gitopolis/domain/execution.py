"""
Execution result domain objects for gitopolis.

Provides the per-repo outcome of running a command and the counters the
exec fan-out accumulates across repositories.
"""

from dataclasses import dataclass
from typing import Optional

from ..exit_codes import SUCCESS, GENERAL_ERROR


@dataclass(frozen=True)
class ExecutionOutcome:
    """
    Result of running a command in one repository.

    captured_text is only set in oneline mode; streamed output has already
    been written to the terminal by the time the outcome exists.
    """
    repo_path: str
    exit_success: bool
    exit_code: Optional[int] = None
    captured_text: Optional[str] = None


@dataclass
class RunSummary:
    """Counters accumulated over one exec fan-out."""
    failed_count: int = 0
    skipped_count: int = 0

    @property
    def has_problems(self) -> bool:
        return self.failed_count + self.skipped_count > 0

    @property
    def exit_code(self) -> int:
        return GENERAL_ERROR if self.has_problems else SUCCESS

    def record(self, outcome: ExecutionOutcome) -> None:
        if not outcome.exit_success:
            self.failed_count += 1

    def record_skip(self) -> None:
        self.skipped_count += 1
