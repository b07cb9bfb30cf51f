"""action-cli — project scaffolding from git-hosted templates.

Clones a template repository into a new project directory with retrying
progress feedback, and warns when a newer action-cli release exists.
"""

from action_cli.version import __version__

__all__: list[str] = ["__version__"]
