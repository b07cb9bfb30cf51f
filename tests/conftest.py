"""Shared pytest fixtures and configuration for the action-cli test suite.

Guidelines
----------
* No internet access in any test — httpx is driven by ``MockTransport``.
* git is never executed; subprocess creation is mocked.
* Settings and the template registry point into a temporary directory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


class RecordingIndicator:
    """ProgressIndicator test double that records every call."""

    def __init__(self, log: list[tuple[str, ...]] | None = None) -> None:
        self.events: list[tuple[str, ...]] = log if log is not None else []

    def start(self, text: str, color: str) -> None:
        self.events.append(("start", text, color))

    def succeed(self, text: str) -> None:
        self.events.append(("succeed", text))

    def fail(self, text: str) -> None:
        self.events.append(("fail", text))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Keep every test away from the real user config and cwd."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    templates_file = tmp_path / "config" / "action-cli" / "templates.json"
    monkeypatch.setenv("ACTION_CLI_TEMPLATES_FILE", str(templates_file))
    monkeypatch.setenv("ACTION_CLI_RETRY_DELAY_MS", "0")
    yield templates_file

    # configure_logging() detaches the package logger from the root logger.
    package_logger = logging.getLogger("action_cli")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture()
def indicator_log() -> list[tuple[str, ...]]:
    return []


@pytest.fixture()
def indicator_factory(indicator_log: list[tuple[str, ...]]):
    return lambda: RecordingIndicator(indicator_log)
