"""Retrying task runner with per-run progress feedback.

:class:`TaskRunner` awaits a fallible callback, retrying it with a
fixed delay until it succeeds or the spec's retry budget is spent.

Guarantees
----------
* Attempt bookkeeping lives in a :class:`RetryState` created per call, so
  concurrent runs never share or deplete each other's budget.
* Attempts are strictly sequential within a run.
* Every attempt gets its own indicator from the injected factory.
* No ``Exception`` raised by the callback escapes; the run ends in a
  :class:`TaskOutcome`.  Cancellation and ``KeyboardInterrupt`` propagate
  after the attempt's indicator is marked as failed.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from action_cli.core.models import RetryState, TaskOutcome, TaskSpec
from action_cli.core.protocols import NullIndicator, ProgressIndicator

logger = logging.getLogger(__name__)

RETRYING_TEXT: str = "Failure, retrying..."

IndicatorFactory = Callable[[], ProgressIndicator]


class TaskRunner:
    """Runs :class:`TaskSpec` callbacks with bounded retry.

    Parameters
    ----------
    indicator_factory:
        Zero-argument callable returning a fresh :class:`ProgressIndicator`.
        Defaults to an indicator that renders nothing.
    sleep:
        Awaitable delay function, injectable for tests.
    """

    def __init__(
        self,
        indicator_factory: IndicatorFactory | None = None,
        *,
        sleep: Callable[[float], Any] = asyncio.sleep,
    ) -> None:
        self._indicator_factory: IndicatorFactory = indicator_factory or NullIndicator
        self._sleep = sleep

    async def run_outcome(self, spec: TaskSpec, *args: Any) -> TaskOutcome:
        """Run *spec* and report how it ended."""
        state = RetryState()
        while True:
            state.attempts += 1
            indicator = self._indicator_factory()
            indicator.start(spec.display_text, spec.color)
            try:
                result = spec.callback(*args)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                state.errors.append(exc)
                logger.debug(
                    "Task %r attempt %d/%d failed: %s",
                    spec.display_text, state.attempts, spec.max_attempts, exc,
                )
                if state.attempts <= spec.max_retries:
                    indicator.fail(RETRYING_TEXT)
                    await self._sleep(spec.retry_delay_ms / 1000)
                    continue
                indicator.fail(spec.failure_text)
                return TaskOutcome.failure(state.last_error, state.attempts)
            except BaseException:
                # Cancellation or Ctrl+C: settle the indicator, then propagate.
                indicator.fail(spec.failure_text)
                raise

            indicator.succeed(spec.success_text)
            return TaskOutcome.success(result, state.attempts)

    async def run(self, spec: TaskSpec, *args: Any) -> Any | None:
        """Run *spec* and return the callback's result, or ``None`` on failure.

        Use :meth:`run_outcome` when a legitimate ``None`` result must be
        told apart from a failed run.
        """
        outcome = await self.run_outcome(spec, *args)
        return outcome.value if outcome.ok else None


async def run_task(
    spec: TaskSpec,
    *args: Any,
    indicator_factory: IndicatorFactory | None = None,
) -> Any | None:
    """Convenience wrapper around :meth:`TaskRunner.run`."""
    return await TaskRunner(indicator_factory).run(spec, *args)
