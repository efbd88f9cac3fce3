"""
Shared fixtures for prior test suite.
"""

from unittest.mock import MagicMock

import pytest

from prior.config import ConfigStore
from prior.types import Credentials


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PRIOR_API_KEY", raising=False)
    monkeypatch.delenv("PRIOR_BASE_URL", raising=False)


# ── Credential fixtures ──────────────────────────────────────

@pytest.fixture
def api_key():
    return "ask_test_0123456789abcdef"


@pytest.fixture
def agent_id():
    return "ag_test_001"


@pytest.fixture
def credentials(api_key, agent_id):
    return Credentials(api_key=api_key, agent_id=agent_id)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / ".prior" / "config.json"


@pytest.fixture
def store(config_path):
    return ConfigStore(config_path)


@pytest.fixture
def saved_store(store, credentials):
    store.save(credentials)
    return store


# ── Mock response factories ──────────────────────────────────

@pytest.fixture
def make_response():
    """Build a mocked requests.Response from a JSON body or raw text."""

    def _make(body=None, text=None, status_code=200):
        resp = MagicMock()
        resp.status_code = status_code
        if text is not None:
            resp.text = text
            resp.json.side_effect = ValueError("Expecting value")
        else:
            resp.text = ""
            resp.json.return_value = body
        return resp

    return _make


@pytest.fixture
def mock_register_response(api_key, agent_id):
    """Response from /v1/agents/register."""
    return {"ok": True, "data": {"apiKey": api_key, "agentId": agent_id}}


@pytest.fixture
def mock_search_response():
    """Search with two results."""
    return {
        "ok": True,
        "data": {
            "results": [
                {"id": "k_abc123", "title": "Tailwind v4 vite plugin"},
                {"id": "k_def456", "title": "Svelte 5 runes"},
            ],
        },
    }


@pytest.fixture
def mock_empty_search_response():
    return {"ok": True, "data": {"results": []}}


@pytest.fixture
def mock_contribute_response():
    return {"ok": True, "data": {"id": "k_new001", "creditsEarned": 0}}


@pytest.fixture
def mock_error_response():
    return {"ok": False, "error": "Insufficient credits"}
