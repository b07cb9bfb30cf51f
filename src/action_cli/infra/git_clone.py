"""git-backed implementation of :class:`~action_cli.core.protocols.CloneProvider`.

This module is the **only** place in the codebase that runs git.
Process failures are re-raised as
:class:`~action_cli.exceptions.CloneFailedError`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from action_cli.exceptions import CloneFailedError, GitNotFoundError
from action_cli.infra.git_detector import git_install_hint

logger = logging.getLogger(__name__)


class GitCloneProvider:
    """Clones repositories with the ``git`` command line client.

    Parameters
    ----------
    base_dir:
        Directory the destination is created in.  Defaults to the
        current working directory at clone time.
    binary:
        git executable name or path.
    """

    def __init__(self, base_dir: Path | None = None, *, binary: str = "git") -> None:
        self._base_dir = base_dir
        self._binary = binary

    def build_command(self, url: str, destination: str, branch: str) -> list[str]:
        return [self._binary, "clone", "-b", branch, url, destination]

    async def clone(self, url: str, destination: str, branch: str) -> None:
        """Clone *url* at *branch* into *destination*.

        Raises
        ------
        GitNotFoundError
            When the git binary cannot be executed.
        CloneFailedError
            When git exits with a non-zero status.
        """
        cmd = self.build_command(url, destination, branch)
        cwd = self._base_dir or Path.cwd()
        logger.debug("Running %s in %s", " ".join(cmd), cwd)

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise GitNotFoundError(
                "git is not installed or not on PATH.",
                hint=git_install_hint(),
            ) from exc

        _stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise CloneFailedError(
                f"git clone of {url} (branch {branch}) failed: {detail or f'exit code {proc.returncode}'}",
                hint="Check the template URL, the branch name and your network.",
            )
