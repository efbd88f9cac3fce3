"""
Prior API Client
Search, contribute, feedback, entries and agent account endpoints.
"""

from typing import Callable, Optional

import requests

from .types import API_BASE, DEFAULT_HEADERS, Envelope, Malformed, Ok

KeySource = Callable[[], Optional[str]]


class PriorClient:
    """Prior API client.

    Every call is attempted exactly once. Non-2xx statuses are not treated
    as errors: the decoded body is returned and the caller reads its ``ok``
    field. Transport failures propagate as ``requests.RequestException``.
    """

    def __init__(self, base_url: str = API_BASE, key_source: Optional[KeySource] = None):
        self._base_url = base_url.rstrip("/")
        self._key_source = key_source

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, key: Optional[str]) -> dict:
        headers = {**DEFAULT_HEADERS, "Content-Type": "application/json"}
        if key:
            headers["Authorization"] = f"Bearer {key}"
        return headers

    def request(
        self,
        method: str,
        endpoint: str,
        body: Optional[dict] = None,
        key: Optional[str] = None,
    ) -> Envelope:
        if not key and self._key_source:
            key = self._key_source()

        kwargs = {}
        if body is not None:
            kwargs["json"] = body

        resp = requests.request(
            method, f"{self._base_url}{endpoint}", headers=self._headers(key), **kwargs
        )
        try:
            return Ok(resp.json())
        except ValueError:
            return Malformed(resp.text)

    # ── Agents ────────────────────────────────────────────

    def register(self, agent_name: str, host: str) -> Envelope:
        return self.request(
            "POST", "/v1/agents/register", {"agentName": agent_name, "host": host}
        )

    def me(self, key: Optional[str] = None) -> Envelope:
        return self.request("GET", "/v1/agents/me", key=key)

    def credits(self, key: Optional[str] = None) -> Envelope:
        return self.request("GET", "/v1/agents/me/credits", key=key)

    def claim(self, email: str, key: Optional[str] = None) -> Envelope:
        return self.request("POST", "/v1/agents/claim", {"email": email}, key)

    def verify(self, code: str, key: Optional[str] = None) -> Envelope:
        return self.request("POST", "/v1/agents/verify", {"code": code}, key)

    # ── Knowledge ─────────────────────────────────────────

    def search(self, body: dict, key: Optional[str] = None) -> Envelope:
        return self.request("POST", "/v1/knowledge/search", body, key)

    def contribute(self, body: dict, key: Optional[str] = None) -> Envelope:
        return self.request("POST", "/v1/knowledge/contribute", body, key)

    def feedback(self, entry_id: str, body: dict, key: Optional[str] = None) -> Envelope:
        return self.request("POST", f"/v1/knowledge/{entry_id}/feedback", body, key)

    def get_entry(self, entry_id: str, key: Optional[str] = None) -> Envelope:
        return self.request("GET", f"/v1/knowledge/{entry_id}", key=key)

    def retract(self, entry_id: str, key: Optional[str] = None) -> Envelope:
        return self.request("DELETE", f"/v1/knowledge/{entry_id}", key=key)
