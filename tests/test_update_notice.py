"""Tests for the startup staleness check (cli/update_notice.py)."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from action_cli.cli.update_notice import UPDATE_COMMAND, check_version


def _client(latest: str | None) -> MagicMock:
    client = MagicMock()
    client.latest_version = AsyncMock(return_value=latest)
    return client


class TestCheckVersion:
    def test_prints_advisory_when_newer(self, capsys: pytest.CaptureFixture[str]) -> None:
        advisory = asyncio.run(check_version("action-cli", "1.0.0", client=_client("1.2.0")))

        err = capsys.readouterr().err
        assert advisory is not None
        assert "1.2.0" in err
        assert "1.0.0" in err
        assert UPDATE_COMMAND in err

    def test_queries_the_named_package(self) -> None:
        client = _client(None)
        asyncio.run(check_version("action-cli", "1.0.0", client=client))
        client.latest_version.assert_awaited_once_with("action-cli")

    def test_silent_when_lookup_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        advisory = asyncio.run(check_version("action-cli", "1.0.0", client=_client(None)))

        assert advisory is None
        assert capsys.readouterr().err == ""

    @pytest.mark.parametrize("latest", ["1.0.0", "0.9.9", "1.0"])
    def test_silent_when_not_newer(self, latest: str, capsys: pytest.CaptureFixture[str]) -> None:
        advisory = asyncio.run(check_version("action-cli", "1.0.0", client=_client(latest)))

        assert advisory is None
        assert capsys.readouterr().err == ""

    def test_never_raises(self, capsys: pytest.CaptureFixture[str]) -> None:
        client = MagicMock()
        client.latest_version = AsyncMock(side_effect=RuntimeError("unexpected"))

        assert asyncio.run(check_version("action-cli", "1.0.0", client=client)) is None
        assert capsys.readouterr().err == ""
