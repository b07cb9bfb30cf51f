"""Rich progress displays for template downloads.

Two widgets are provided:

* :class:`RichSpinner` — one spinner per task attempt, settling on a
  ✔/✖ line.  Satisfies
  :class:`~action_cli.core.protocols.ProgressIndicator`.
* :class:`EstimatedProgress` — a progress bar that fills over an
  estimated duration while an awaitable runs.  Satisfies
  :class:`~action_cli.core.protocols.EstimateReporter`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from action_cli.cli.console import get_rich_console
from action_cli.exceptions import EnvironmentError

SUCCEED_SYMBOL: str = "✔"
FAIL_SYMBOL: str = "✖"


def _import_rich(*names: str) -> tuple[Any, ...]:
    try:
        import rich.markup
        import rich.progress
        import rich.status
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    modules = {
        "markup": rich.markup,
        "progress": rich.progress,
        "status": rich.status,
    }
    return tuple(modules[name] for name in names)


class RichSpinner:
    """Spinner owned by a single task attempt.

    Usage::

        spinner = RichSpinner()
        spinner.start("Downloading template...", "yellow")
        ...
        spinner.succeed("Template downloaded")
    """

    def __init__(self, console: Any | None = None) -> None:
        markup, status = _import_rich("markup", "status")
        self._escape = markup.escape
        self._status_class = status.Status
        self._console: Any = console or get_rich_console()
        self._status: Any = None

    @property
    def active(self) -> bool:
        return self._status is not None

    def start(self, text: str, color: str) -> None:
        """Start spinning with *text* rendered in *color*."""
        self.stop()
        label = f"[{color}]{self._escape(text)}[/{color}]"
        status = self._status_class(label, console=self._console, spinner="dots", spinner_style=color)
        status.start()
        self._status = status

    def stop(self) -> None:
        """Stop the animation (idempotent)."""
        if self._status is not None:
            self._status.stop()
            self._status = None

    def succeed(self, text: str) -> None:
        self.stop()
        self._console.print(f"[green]{SUCCEED_SYMBOL}[/green] {self._escape(text)}")

    def fail(self, text: str) -> None:
        self.stop()
        self._console.print(f"[red]{FAIL_SYMBOL}[/red] {self._escape(text)}")


class EstimatedProgress:
    """Progress bar that advances towards an estimated completion time.

    The bar never reaches 100% until the tracked operation finishes; it
    holds at 99% when the estimate runs out.
    """

    def __init__(self, console: Any | None = None, *, refresh_seconds: float = 0.1) -> None:
        (progress,) = _import_rich("progress")
        self._progress: Any = progress.Progress(
            progress.SpinnerColumn(),
            progress.TextColumn("[bold blue]{task.description}"),
            progress.BarColumn(),
            progress.TaskProgressColumn(),
            progress.TimeElapsedColumn(),
            progress.TextColumn("[dim](est. {task.fields[estimate]})"),
            console=console or get_rich_console(),
            transient=False,
        )
        self._refresh_seconds = refresh_seconds

    async def track(self, operation: Awaitable[Any], text: str, estimate_ms: int) -> Any:
        """Await *operation* while the bar fills; re-raise its failure."""
        total = max(estimate_ms, 1)
        task_id = self._progress.add_task(
            text,
            total=total,
            estimate=f"{estimate_ms / 1000:.1f}s",
        )
        future = asyncio.ensure_future(operation)
        loop = asyncio.get_running_loop()
        started = loop.time()

        self._progress.start()
        try:
            while not future.done():
                elapsed_ms = (loop.time() - started) * 1000
                self._progress.update(task_id, completed=min(elapsed_ms, total * 0.99))
                await asyncio.wait({future}, timeout=self._refresh_seconds)
            try:
                result = future.result()
            except Exception:
                self._progress.update(task_id, description=f"[red]{FAIL_SYMBOL} {text}")
                raise
            self._progress.update(task_id, completed=total, description=f"[green]{SUCCEED_SYMBOL} {text}")
            return result
        finally:
            if not future.done():
                future.cancel()
            self._progress.stop()
