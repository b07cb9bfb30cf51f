"""Core layer — version logic, task running and template rules.

Rules
-----
* No ``print()`` calls; diagnostics go through :mod:`logging`.
* No imports from ``cli`` or ``infra``; the only other package module
  used is :mod:`action_cli.config`, for constants.
* Clone and progress work reaches core through injected protocols.
"""

from action_cli.core.models import (
    RetryState,
    TaskOutcome,
    TaskSpec,
    TemplateInfo,
    UpdateAdvisory,
)
from action_cli.core.protocols import CloneProvider, EstimateReporter, ProgressIndicator
from action_cli.core.task_runner import TaskRunner, run_task
from action_cli.core.templates import (
    TemplateFetchService,
    default_branch,
    is_http_url,
    resolve_package_manager,
)
from action_cli.core.versioning import evaluate_staleness, greater_than, parse_version

__all__: list[str] = [
    "CloneProvider",
    "EstimateReporter",
    "ProgressIndicator",
    "RetryState",
    "TaskOutcome",
    "TaskRunner",
    "TaskSpec",
    "TemplateFetchService",
    "TemplateInfo",
    "UpdateAdvisory",
    "default_branch",
    "evaluate_staleness",
    "greater_than",
    "is_http_url",
    "parse_version",
    "resolve_package_manager",
    "run_task",
]
