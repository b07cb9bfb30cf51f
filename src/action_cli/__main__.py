"""Allow ``python -m action_cli`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m action_cli`` behaves identically to the ``action`` console
script.
"""

from __future__ import annotations

from action_cli.cli.app import cli

if __name__ == "__main__":
    cli()
