"""Protocols (interfaces) consumed by the core layer.

These define the contracts that CLI and infrastructure adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, Protocol


class ProgressIndicator(Protocol):
    """A spinner-like indicator owned by exactly one task attempt."""

    def start(self, text: str, color: str) -> None:
        """Begin displaying *text* in *color*."""
        ...  # pragma: no cover

    def succeed(self, text: str) -> None:
        """Stop and mark the attempt as successful."""
        ...  # pragma: no cover

    def fail(self, text: str) -> None:
        """Stop and mark the attempt as failed."""
        ...  # pragma: no cover


class CloneProvider(Protocol):
    """Contract for version-control clone backends."""

    async def clone(self, url: str, destination: str, branch: str) -> None:
        """Clone *url* at *branch* into the directory *destination*.

        Raises
        ------
        CloneFailedError
            When the clone does not complete.
        """
        ...  # pragma: no cover


class EstimateReporter(Protocol):
    """Shows approximate progress for an awaitable of unknown length."""

    async def track(self, operation: Awaitable[Any], text: str, estimate_ms: int) -> Any:
        """Await *operation* while displaying progress, returning its result."""
        ...  # pragma: no cover


class NullIndicator:
    """Indicator that renders nothing; used when no UI is attached."""

    def start(self, text: str, color: str) -> None:
        pass

    def succeed(self, text: str) -> None:
        pass

    def fail(self, text: str) -> None:
        pass
