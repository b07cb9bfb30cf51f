"""Package registry lookup for the latest published release.

Talks to an npm-style registry: ``GET <base><package>`` returns a JSON
document whose ``dist-tags.latest`` field names the newest release.
Lookups never raise; any failure is logged as a warning and reported as
``None``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from action_cli.config import Settings
from action_cli.version import __version__

logger = logging.getLogger(__name__)


def build_async_client(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the configured timeout and headers."""
    settings = settings or Settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={
            "User-Agent": f"action-cli/{__version__}",
            "Accept": "application/json",
        },
        transport=transport,
    )


def _extract_latest(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    tags = payload.get("dist-tags")
    if not isinstance(tags, dict):
        return None
    latest = tags.get("latest")
    return latest if isinstance(latest, str) and latest else None


class RegistryClient:
    """Resolves the latest version of a package from the registry.

    Parameters
    ----------
    settings:
        Source of the registry base URL and HTTP timeout.
    transport:
        Optional httpx transport, used by tests to avoid the network.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._transport = transport

    def package_url(self, name: str) -> str:
        return f"{self._settings.registry_base}{name}"

    async def latest_version(self, name: str) -> str | None:
        """Return the ``latest`` dist-tag of *name*, or ``None`` on failure."""
        url = self.package_url(name)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.debug("Registry lookup %s failed: %s", url, exc)
            logger.warning("Can not get latest version of %s", name)
            return None

        version = _extract_latest(payload)
        if version is None:
            logger.warning("Can not get latest version of %s", name)
        return version

