"""Domain models for action-cli.

Value objects are **frozen** dataclasses.  :class:`RetryState` is the one
mutable record, and it lives only for the duration of a single task run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Task execution
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TaskSpec:
    """Description of one retryable unit of work shown with a spinner."""

    callback: Callable[..., Any]
    """Sync or async callable invoked with the run's positional args."""

    display_text: str = "loading..."
    """Text shown next to the spinner while an attempt is in flight."""

    success_text: str = "ok"
    """Text the spinner settles on after a successful attempt."""

    failure_text: str = "failure"
    """Text the spinner settles on once the retry budget is spent."""

    max_retries: int = 2
    """Extra attempts allowed after the first failure."""

    retry_delay_ms: int = 200
    """Fixed pause between attempts, in milliseconds."""

    color: str = "yellow"
    """Spinner colour (any Rich colour name)."""

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_delay_ms < 0:
            raise ValueError(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms}")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


@dataclass(slots=True)
class RetryState:
    """Attempt bookkeeping scoped to one logical run of a :class:`TaskSpec`."""

    attempts: int = 0
    errors: list[BaseException] = field(default_factory=list)

    @property
    def last_error(self) -> BaseException | None:
        return self.errors[-1] if self.errors else None


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    """Terminal result of a task run.

    ``ok`` distinguishes a successful run whose callback returned ``None``
    from a run that exhausted its retry budget.
    """

    ok: bool
    value: Any = None
    error: BaseException | None = None
    attempts: int = 0

    @classmethod
    def success(cls, value: Any, attempts: int) -> TaskOutcome:
        return cls(ok=True, value=value, attempts=attempts)

    @classmethod
    def failure(cls, error: BaseException | None, attempts: int) -> TaskOutcome:
        return cls(ok=False, error=error, attempts=attempts)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TemplateInfo:
    """A git-hosted project template."""

    url: str
    """Clone URL of the template repository."""

    branch: str
    """Branch checked out into the new project."""

    name: str = ""
    """Registry key, empty for ad-hoc URLs."""

    description: str = ""


# ---------------------------------------------------------------------------
# Update advisory
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UpdateAdvisory:
    """A newer published release of the tool exists."""

    package: str
    current_version: str
    latest_version: str
    update_command: str
