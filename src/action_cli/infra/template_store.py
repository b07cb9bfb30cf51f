"""Read-only access to the ``templates.json`` template registry.

The registry maps template names to entries of the form::

    {"vue3-admin": {"url": "https://github.com/x/vue3-admin.git",
                    "branch": "main",
                    "description": "Vue 3 admin starter"}}

``branch`` and ``description`` are optional.  A missing file is created
empty on first access.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from action_cli.core.models import TemplateInfo
from action_cli.core.templates import default_branch
from action_cli.exceptions import (
    TemplateNotFoundError,
    TemplateRegistryError,
    append_template_list_suggestion,
)

logger = logging.getLogger(__name__)


class TemplateStore:
    """Loads :class:`TemplateInfo` entries from a JSON file.

    Parameters
    ----------
    path:
        Location of ``templates.json``.
    fallback_branch:
        Branch used for entries that do not name one and are not on a
        ``master``-default host.
    """

    def __init__(self, path: Path, *, fallback_branch: str = "main") -> None:
        self._path = path
        self._fallback_branch = fallback_branch

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_exists(self) -> None:
        if self._path.exists():
            return
        logger.debug("Creating empty template registry at %s", self._path)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text("{}", encoding="utf-8")
        except OSError as exc:
            raise TemplateRegistryError(f"Can not create {self._path}: {exc}") from exc

    def read_raw(self) -> dict[str, Any]:
        """Return the parsed registry document.

        Raises
        ------
        TemplateRegistryError
            If the file cannot be read, is empty, or is not a JSON object.
        """
        self._ensure_exists()
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateRegistryError(f"Can not read {self._path}: {exc}") from exc

        if not text.strip():
            raise TemplateRegistryError(
                f"{self._path.name} is empty.",
                hint='Write "{}" to the file or add template entries.',
            )
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TemplateRegistryError(f"{self._path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise TemplateRegistryError(f"{self._path} must contain a JSON object.")
        return data

    def _to_template(self, name: str, entry: Any) -> TemplateInfo:
        if not isinstance(entry, dict) or not isinstance(entry.get("url"), str):
            raise TemplateRegistryError(f"Template {name!r} has no 'url' string.")
        url: str = entry["url"]
        branch = entry.get("branch")
        if not isinstance(branch, str) or not branch:
            branch = default_branch(url, self._fallback_branch)
        description = entry.get("description")
        return TemplateInfo(
            url=url,
            branch=branch,
            name=name,
            description=description if isinstance(description, str) else "",
        )

    def load(self) -> list[TemplateInfo]:
        """Return every template, in file order."""
        return [self._to_template(name, entry) for name, entry in self.read_raw().items()]

    def get(self, name: str) -> TemplateInfo:
        """Return the template registered as *name*.

        Raises
        ------
        TemplateNotFoundError
            If no such template exists.
        """
        data = self.read_raw()
        if name not in data:
            raise TemplateNotFoundError(
                f"Template {name!r} not found in {self._path}.",
                hint=append_template_list_suggestion("Pass a template name or a git URL."),
            )
        return self._to_template(name, data[name])
