"""Template resolution rules and the template fetch service.

The fetch service delegates the clone to a
:class:`~action_cli.core.protocols.CloneProvider` and drives it either
through :class:`~action_cli.core.task_runner.TaskRunner` (spinner with
retry) or through an :class:`~action_cli.core.protocols.EstimateReporter`
(approximate progress bar, no retry).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from action_cli.config import PACKAGE_MANAGERS
from action_cli.core.models import TaskOutcome, TaskSpec, TemplateInfo
from action_cli.core.protocols import CloneProvider, EstimateReporter
from action_cli.core.task_runner import TaskRunner

HTTP_URL_REGEX = re.compile(
    r"^(((ht|f)tps?)://)?([^!@#$%^&*?.\s-]([^!@#$%^&*?.\s]{0,63}[^!@#$%^&*?.\s])?\.)+[a-z]{2,6}/?"
)

MASTER_BRANCH_HOSTS: tuple[str, ...] = ("gitee.com",)
"""Hosts whose repositories default to ``master``."""


def default_branch(url: str, fallback: str = "main") -> str:
    """Return the branch to clone when the caller did not name one."""
    if any(host in url for host in MASTER_BRANCH_HOSTS):
        return "master"
    return fallback


def resolve_package_manager(
    name: str | None,
    fallback: str = "pnpm",
    *,
    allowed: Iterable[str] = PACKAGE_MANAGERS,
) -> str:
    """Return *name* if it is a supported package manager, else *fallback*."""
    return name if name in tuple(allowed) else fallback


def is_http_url(text: str) -> bool:
    return HTTP_URL_REGEX.match(text) is not None


class TemplateFetchService:
    """Clones a template into a new project directory.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`CloneProvider` protocol.
    runner:
        Task runner used by :meth:`fetch`.
    """

    def __init__(
        self,
        provider: CloneProvider,
        runner: TaskRunner | None = None,
        *,
        max_retries: int = 2,
        retry_delay_ms: int = 200,
    ) -> None:
        self._provider: CloneProvider = provider
        self._runner: TaskRunner = runner or TaskRunner()
        self._max_retries = max_retries
        self._retry_delay_ms = retry_delay_ms

    def build_task(self, project_name: str, template: TemplateInfo) -> TaskSpec:
        """Describe the clone of *template* as a retryable task."""

        async def _clone() -> str:
            await self._provider.clone(template.url, project_name, template.branch)
            return project_name

        return TaskSpec(
            callback=_clone,
            display_text="Downloading template...",
            success_text="Template downloaded",
            failure_text="Template download failed",
            max_retries=self._max_retries,
            retry_delay_ms=self._retry_delay_ms,
            color="yellow",
        )

    async def fetch(self, project_name: str, template: TemplateInfo) -> TaskOutcome:
        """Clone with spinner feedback and bounded retry.

        Clone failures are absorbed; inspect ``TaskOutcome.ok``.
        """
        return await self._runner.run_outcome(self.build_task(project_name, template))

    async def fetch_with_estimate(
        self,
        project_name: str,
        template: TemplateInfo,
        reporter: EstimateReporter,
        *,
        estimate_ms: int = 7000,
    ) -> None:
        """Clone once while *reporter* shows an estimated completion time.

        Raises
        ------
        CloneFailedError
            Propagated from the provider.
        """
        await reporter.track(
            self._provider.clone(template.url, project_name, template.branch),
            "Downloading template...",
            estimate_ms,
        )
