"""``action doctor`` — environment diagnostics command.

Collects system information and renders a Rich table summarising
whether the runtime environment can create projects.
"""

from __future__ import annotations

import asyncio
import platform
import sys

from action_cli.cli import exit_codes
from action_cli.cli.console import console
from action_cli.cli.update_notice import PACKAGE_NAME
from action_cli.config import Settings
from action_cli.infra.git_detector import detect_git
from action_cli.infra.registry_client import RegistryClient
from action_cli.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _action_cli_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the action-cli version row."""
    return "action-cli", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _git_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the git row."""
    status_obj = detect_git()
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "git", path_str, "[green]OK[/green]"
    return "git", "not found", "[red]FAIL[/red]"


def _registry_check(settings: Settings | None = None) -> tuple[str, str, str]:
    """Return (label, value, status) for the registry reachability row."""
    settings = settings or Settings()
    latest = asyncio.run(RegistryClient(settings).latest_version(PACKAGE_NAME))
    if latest is None:
        return "registry", f"{settings.registry_base} unreachable", "[yellow]WARN[/yellow]"
    return "registry", f"{settings.registry_base} (latest {latest})", "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\naction doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _action_cli_version_check(),
        _python_version_check(),
        _git_check(),
        _registry_check(settings),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="action doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    git_status = detect_git()
    if not git_status.found and git_status.install_commands:
        console.print("git is not installed.")
        console.print("Install using one of the following commands:\n")
        for cmd in git_status.install_commands:
            console.print(f"  {cmd}")
        console.print()

    if has_failure:
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("All checks passed.")
    return exit_codes.SUCCESS
