"""Infrastructure layer — external system integration.

Wraps the package registry, git and the template registry file.  Every
raw third-party exception is caught here and either re-raised as an
:class:`~action_cli.exceptions.ActionCliError` subclass or, for the
registry lookup, downgraded to a logged warning.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from action_cli.infra.git_clone import GitCloneProvider
from action_cli.infra.git_detector import GitStatus, detect_git, require_git
from action_cli.infra.registry_client import RegistryClient
from action_cli.infra.template_store import TemplateStore

__all__: list[str] = [
    "GitCloneProvider",
    "GitStatus",
    "RegistryClient",
    "TemplateStore",
    "detect_git",
    "require_git",
]
