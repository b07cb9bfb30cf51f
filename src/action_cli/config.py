"""Runtime configuration for action-cli.

Values come from ``ACTION_CLI_*`` environment variables (or a ``.env``
file in the working directory) through pydantic-settings, falling back
to the defaults below.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NPM_URL: str = "https://registry.npmjs.org/"
"""Public package registry queried for the latest release."""

NPM_MIRROR_URL: str = "https://registry.npmmirror.com/"
"""Registry mirror used when ``use_mirror`` is enabled."""

PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "cnpm", "pnpm", "yarn")
"""Package managers accepted by ``create --pm``."""

TEMPLATE_FILE: str = "templates.json"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "action-cli"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "action-cli"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "action-cli"
    return Path.home() / ".config" / "action-cli"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ACTION_CLI_",
        env_file=".env",
        extra="ignore",
    )

    registry_url: str = NPM_URL
    mirror_url: str = NPM_MIRROR_URL
    use_mirror: bool = False
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    default_branch: str = "main"
    templates_file: Path = Field(default_factory=lambda: get_user_config_dir() / TEMPLATE_FILE)
    package_manager: str = "pnpm"

    max_retries: int = Field(default=2, ge=0)
    retry_delay_ms: int = Field(default=200, ge=0)
    clone_estimate_ms: int = Field(default=7000, ge=0)

    @property
    def registry_base(self) -> str:
        """Registry base URL in effect, always ending with ``/``."""
        base = self.mirror_url if self.use_mirror else self.registry_url
        return base if base.endswith("/") else base + "/"


def get_settings() -> Settings:
    return Settings()
