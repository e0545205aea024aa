"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking
  them into the CLI.
- Lets adapters (HTTP, in-memory) read the same configuration.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "recordsync"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "recordsync"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "recordsync"
    return Path.home() / ".config" / "recordsync"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# recordsync user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) without polluting the core.
    - A single configuration contract for CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDSYNC_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:3000/api",
        min_length=8,
        description="Base URL of the REST resource holding the collection.",
    )
    collection: str = Field(
        default="entities",
        min_length=1,
        description="Collection path appended to the base URL (e.g. 'pokemon').",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="recordsync/0.1",
        min_length=1,
        description="User-Agent sent to the remote resource.",
    )

    notification_duration_ms: int = Field(
        default=2000,
        ge=0,
        description="How long a success/failure notification stays visible.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level used by the CLI (DEBUG, INFO, WARNING...).",
    )
    seed_path: Path | None = Field(
        default=None,
        description="JSON file with initial records for the in-memory resource.",
    )
