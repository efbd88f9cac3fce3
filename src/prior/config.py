"""
Settings and the local credential file.

The credential file holds a single ``{apiKey, agentId}`` record. It is
overwritten wholesale on registration and never merged.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .types import API_BASE, Credentials

DEFAULT_CONFIG_PATH = Path.home() / ".prior" / "config.json"
BASE_URL_ENV_VAR = "PRIOR_BASE_URL"
API_KEY_ENV_VAR = "PRIOR_API_KEY"
CONFIG_FILE_MODE = 0o600


@dataclass(frozen=True)
class Settings:
    base_url: str = API_BASE
    config_path: Path = DEFAULT_CONFIG_PATH


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    return value.strip() or None


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_path: str | Path | None = None,
) -> Settings:
    env = os.environ if environ is None else environ
    base_url = _env(env, BASE_URL_ENV_VAR) or API_BASE
    return Settings(
        base_url=base_url.rstrip("/"),
        config_path=Path(config_path) if config_path else DEFAULT_CONFIG_PATH,
    )


class ConfigStore:
    """Reads and writes the credential file. No locking; last writer wins."""

    def __init__(self, path: str | Path = DEFAULT_CONFIG_PATH):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Credentials]:
        """Return stored credentials, or None if absent or unreadable."""
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None

        if not isinstance(data, dict) or not data.get("apiKey"):
            return None
        return Credentials.from_dict(data)

    def save(self, credentials: Credentials) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only from creation: the file holds an API key
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(credentials.to_dict(), indent=2))
        # An older file keeps its mode through O_CREAT
        os.chmod(self._path, CONFIG_FILE_MODE)
