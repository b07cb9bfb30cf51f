"""Tests for template rules, the template store and the fetch service.

The clone provider is mocked — no git, no network.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from action_cli.core.models import TemplateInfo
from action_cli.core.task_runner import TaskRunner
from action_cli.core.templates import (
    TemplateFetchService,
    default_branch,
    is_http_url,
    resolve_package_manager,
)
from action_cli.exceptions import (
    CloneFailedError,
    TemplateNotFoundError,
    TemplateRegistryError,
)
from action_cli.infra.template_store import TemplateStore


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

class TestDefaultBranch:
    def test_gitee_defaults_to_master(self) -> None:
        assert default_branch("https://gitee.com/acme/starter.git") == "master"

    def test_other_hosts_use_fallback(self) -> None:
        assert default_branch("https://github.com/acme/starter.git") == "main"
        assert default_branch("https://github.com/acme/starter.git", "develop") == "develop"

    def test_gitee_wins_over_fallback(self) -> None:
        assert default_branch("git@gitee.com:acme/starter.git", "develop") == "master"


class TestResolvePackageManager:
    @pytest.mark.parametrize("name", ["npm", "cnpm", "pnpm", "yarn"])
    def test_known_names_pass_through(self, name: str) -> None:
        assert resolve_package_manager(name) == name

    @pytest.mark.parametrize("name", ["bun", "", None, "PNPM"])
    def test_unknown_names_fall_back(self, name: str | None) -> None:
        assert resolve_package_manager(name) == "pnpm"

    def test_custom_fallback(self) -> None:
        assert resolve_package_manager("bun", "npm") == "npm"


class TestIsHttpUrl:
    @pytest.mark.parametrize(
        "text",
        [
            "https://github.com/acme/starter.git",
            "http://gitee.com/acme/starter",
            "github.com/acme/starter",
            "ftp://files.example.org/x",
        ],
    )
    def test_urls_match(self, text: str) -> None:
        assert is_http_url(text) is True

    @pytest.mark.parametrize("text", ["vue3-admin", "starter", "", "not a url"])
    def test_names_do_not_match(self, text: str) -> None:
        assert is_http_url(text) is False


# ---------------------------------------------------------------------------
# TemplateStore
# ---------------------------------------------------------------------------

def _write(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestTemplateStore:
    def test_missing_file_is_created_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "templates.json"
        store = TemplateStore(path)

        assert store.load() == []
        assert path.read_text(encoding="utf-8") == "{}"

    def test_loads_entries_in_order(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "templates.json",
            {
                "vue": {"url": "https://github.com/acme/vue.git", "branch": "v3", "description": "Vue"},
                "react": {"url": "https://gitee.com/acme/react.git"},
            },
        )
        templates = TemplateStore(path).load()

        assert templates == [
            TemplateInfo(url="https://github.com/acme/vue.git", branch="v3", name="vue", description="Vue"),
            TemplateInfo(url="https://gitee.com/acme/react.git", branch="master", name="react"),
        ]

    def test_missing_branch_uses_fallback(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "templates.json", {"x": {"url": "https://github.com/a/x"}})
        assert TemplateStore(path, fallback_branch="trunk").get("x").branch == "trunk"

    def test_unknown_template_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "templates.json", {})
        with pytest.raises(TemplateNotFoundError) as exc_info:
            TemplateStore(path).get("nope")
        assert exc_info.value.hint is not None
        assert "action list" in exc_info.value.hint

    @pytest.mark.parametrize("content", ["", "   ", "{not json", "[1, 2]"])
    def test_unreadable_registry_raises(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "templates.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(TemplateRegistryError):
            TemplateStore(path).read_raw()

    def test_entry_without_url_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "templates.json", {"broken": {"branch": "main"}})
        with pytest.raises(TemplateRegistryError, match="broken"):
            TemplateStore(path).load()


# ---------------------------------------------------------------------------
# TemplateFetchService
# ---------------------------------------------------------------------------

_TEMPLATE = TemplateInfo(url="https://github.com/acme/starter.git", branch="main", name="starter")


async def _no_sleep(_seconds: float) -> None:
    return None


class TestTemplateFetchService:
    def test_fetch_clones_with_branch(self) -> None:
        provider = MagicMock()
        provider.clone = AsyncMock(return_value=None)
        service = TemplateFetchService(provider, TaskRunner(sleep=_no_sleep))

        outcome = asyncio.run(service.fetch("my-app", _TEMPLATE))

        assert outcome.ok is True
        assert outcome.value == "my-app"
        provider.clone.assert_awaited_once_with(_TEMPLATE.url, "my-app", "main")

    def test_fetch_retries_failed_clone(self) -> None:
        provider = MagicMock()
        provider.clone = AsyncMock(side_effect=[CloneFailedError("network"), None])
        service = TemplateFetchService(provider, TaskRunner(sleep=_no_sleep), max_retries=2)

        outcome = asyncio.run(service.fetch("my-app", _TEMPLATE))

        assert outcome.ok is True
        assert outcome.attempts == 2

    def test_fetch_absorbs_final_failure(self) -> None:
        provider = MagicMock()
        provider.clone = AsyncMock(side_effect=CloneFailedError("network"))
        service = TemplateFetchService(provider, TaskRunner(sleep=_no_sleep), max_retries=1)

        outcome = asyncio.run(service.fetch("my-app", _TEMPLATE))

        assert outcome.ok is False
        assert outcome.attempts == 2
        assert isinstance(outcome.error, CloneFailedError)
        assert provider.clone.await_count == 2

    def test_fetch_reports_progress_texts(self, indicator_factory, indicator_log) -> None:
        provider = MagicMock()
        provider.clone = AsyncMock(return_value=None)
        service = TemplateFetchService(provider, TaskRunner(indicator_factory, sleep=_no_sleep))

        asyncio.run(service.fetch("my-app", _TEMPLATE))

        assert indicator_log == [
            ("start", "Downloading template...", "yellow"),
            ("succeed", "Template downloaded"),
        ]

    def test_build_task_uses_configured_budget(self) -> None:
        service = TemplateFetchService(MagicMock(), max_retries=5, retry_delay_ms=1000)
        spec = service.build_task("my-app", _TEMPLATE)

        assert spec.max_retries == 5
        assert spec.retry_delay_ms == 1000
        assert spec.failure_text == "Template download failed"


class _PassThroughReporter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    async def track(self, operation: Any, text: str, estimate_ms: int) -> Any:
        self.calls.append((text, estimate_ms))
        return await operation


class TestFetchWithEstimate:
    def test_clone_runs_through_reporter(self) -> None:
        provider = MagicMock()
        provider.clone = AsyncMock(return_value=None)
        reporter = _PassThroughReporter()

        asyncio.run(
            TemplateFetchService(provider).fetch_with_estimate(
                "my-app", _TEMPLATE, reporter, estimate_ms=3000,
            )
        )

        provider.clone.assert_awaited_once_with(_TEMPLATE.url, "my-app", "main")
        assert reporter.calls == [("Downloading template...", 3000)]

    def test_clone_failure_propagates(self) -> None:
        provider = MagicMock()
        provider.clone = AsyncMock(side_effect=CloneFailedError("denied"))

        with pytest.raises(CloneFailedError, match="denied"):
            asyncio.run(
                TemplateFetchService(provider).fetch_with_estimate("my-app", _TEMPLATE, _PassThroughReporter())
            )
