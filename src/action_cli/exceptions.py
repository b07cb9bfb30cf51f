"""Custom exception hierarchy for action-cli.

All exceptions that cross layer boundaries must inherit from
:class:`ActionCliError`.  Raw third-party exceptions (httpx, subprocess
failures, JSON decoding) must not propagate beyond the infrastructure
layer — they are caught and re-raised as a typed subclass defined here.

Hierarchy
---------
ActionCliError
├── TemplateNotFoundError
├── TemplateRegistryError
├── InvalidTemplateURLError
├── TemplateSelectionError
├── ProjectExistsError
├── CloneFailedError
├── GitNotFoundError
└── EnvironmentError
"""

from __future__ import annotations


class ActionCliError(Exception):
    """Base exception for all action-cli errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Template registry -----------------------------------------------------

class TemplateNotFoundError(ActionCliError):
    """Raised when a template name is not present in the registry."""


class TemplateRegistryError(ActionCliError):
    """Raised when ``templates.json`` cannot be read or parsed."""


class InvalidTemplateURLError(ActionCliError):
    """Raised when a template source is neither a known name nor a URL."""


class TemplateSelectionError(ActionCliError):
    """Raised when the interactive template prompt yields no choice."""


# --- Project creation ------------------------------------------------------

class ProjectExistsError(ActionCliError):
    """Raised when the destination directory already exists."""


class CloneFailedError(ActionCliError):
    """Raised when ``git clone`` exits with an error."""


# --- Environment / tooling -------------------------------------------------

class GitNotFoundError(ActionCliError):
    """Raised when git cannot be located on the system PATH."""


class EnvironmentError(ActionCliError):
    """Raised when an optional runtime dependency is not available."""


def append_template_list_suggestion(hint: str) -> str:
    """Append template-listing guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "List available templates with:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    action list",
        )
    )
