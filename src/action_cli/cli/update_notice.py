"""Startup staleness check for the installed action-cli release."""

from __future__ import annotations

import logging

from action_cli.cli.console import console
from action_cli.core.models import UpdateAdvisory
from action_cli.core.versioning import evaluate_staleness
from action_cli.infra.registry_client import RegistryClient

logger = logging.getLogger(__name__)

PACKAGE_NAME: str = "action-cli"
UPDATE_COMMAND: str = f"pip install --upgrade {PACKAGE_NAME}"


def render_advisory(advisory: UpdateAdvisory) -> None:
    """Print the two-line update advisory."""
    console.print(
        f"[yellow]Detected latest version of {advisory.package}: "
        f"[bright_black]{advisory.latest_version}[/bright_black]. "
        f"Your current version is: [bright_black]{advisory.current_version}[/bright_black][/yellow]"
    )
    console.print(f"To update, use [yellow]{advisory.update_command}[/yellow]")


async def check_version(
    name: str,
    current_version: str,
    *,
    client: RegistryClient | None = None,
) -> UpdateAdvisory | None:
    """Warn on stderr when the registry has a newer release of *name*.

    Never raises; an unknown latest version prints nothing.
    """
    try:
        latest = await (client or RegistryClient()).latest_version(name)
        advisory = evaluate_staleness(name, current_version, latest, update_command=UPDATE_COMMAND)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Version check for %s skipped: %s", name, exc)
        return None

    if advisory is not None:
        render_advisory(advisory)
    return advisory
