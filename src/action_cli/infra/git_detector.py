"""Infrastructure: git detection and platform guidance.

Locates the git binary on the system PATH and provides
platform-specific installation guidance when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from action_cli.exceptions import GitNotFoundError


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Result of a git detection probe.

    Attributes
    ----------
    found : bool
        Whether git was located on PATH.
    path : Path | None
        Absolute path to the git binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing git on the current
        platform.  Empty when git is already present.
    """

    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


def detect_git() -> GitStatus:
    """Probe the system for a git binary.

    Returns a :class:`GitStatus` regardless of whether git is present.
    """
    result = shutil.which("git")
    if result is not None:
        return GitStatus(found=True, path=Path(result).resolve(), install_commands=())
    return GitStatus(found=False, path=None, install_commands=_platform_install_commands())


def git_install_hint(status: GitStatus | None = None) -> str | None:
    """Render install guidance for a missing git, or ``None``."""
    status = status or detect_git()
    if not status.install_commands:
        return None
    lines = ["Install git using one of:"]
    lines.extend(f"  {cmd}" for cmd in status.install_commands)
    return "\n".join(lines)


def require_git() -> Path:
    """Locate git or raise :class:`GitNotFoundError`."""
    status = detect_git()
    if not status.found or status.path is None:
        raise GitNotFoundError(
            "git is not installed or not on PATH.",
            hint=git_install_hint(status),
        )
    return status.path


def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Git.Git",
            "choco install git",
        )
    if system == "linux":
        return (
            "sudo apt install git",
            "sudo dnf install git",
            "sudo pacman -S git",
        )
    if system == "darwin":
        return ("brew install git", "xcode-select --install")
    return ("Please install git from https://git-scm.com/downloads",)
