"""
Shared types for the Prior client.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

__version__ = "0.2.5"

API_BASE = "https://api.cg3.io"

HOST_TAG = "openclaw"

DEFAULT_HEADERS = {
    "User-Agent": f"prior-{HOST_TAG}/{__version__}",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class Credentials:
    api_key: str
    agent_id: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        return {
            "apiKey": self.api_key,
            "agentId": self.agent_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Credentials":
        return cls(api_key=data["apiKey"], agent_id=data.get("agentId"))


# ── Envelope ──────────────────────────────────────────────


@dataclass(frozen=True)
class Ok:
    """A response body that decoded as JSON.

    The remote payload decides success through its own ``ok`` field;
    HTTP status codes are never consulted.
    """

    payload: Any

    @property
    def ok(self) -> bool:
        return isinstance(self.payload, dict) and bool(self.payload.get("ok"))

    @property
    def data(self) -> Any:
        if isinstance(self.payload, dict):
            return self.payload.get("data")
        return None

    @property
    def error(self) -> Any:
        if isinstance(self.payload, dict):
            return self.payload.get("error")
        return None

    def to_dict(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class Malformed:
    """A response body that was not JSON."""

    raw: str

    ok = False
    data = None

    @property
    def error(self) -> str:
        return self.raw

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.raw}


Envelope = Union[Ok, Malformed]
