"""
Tests for prior.auth module.

Covers:
- resolve_key (env override, stored key, none)
- agent_name (prefix, hostname truncation)
- ensure_key (no registration when resolved, register + persist,
  failure exits without writing)
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from prior.auth import agent_name, ensure_key, resolve_key
from prior.client import PriorClient
from prior.types import Credentials, Malformed, Ok


@pytest.fixture
def client():
    return MagicMock(spec=PriorClient)


# ── resolve_key ─────────────────────────────────────────────


class TestResolveKey:

    def test_env_wins_over_store(self, saved_store):
        assert resolve_key(saved_store, {"PRIOR_API_KEY": "ask_env"}) == "ask_env"

    def test_stored_key(self, saved_store, api_key):
        assert resolve_key(saved_store, {}) == api_key

    def test_blank_env_falls_back_to_store(self, saved_store, api_key):
        assert resolve_key(saved_store, {"PRIOR_API_KEY": "  "}) == api_key

    def test_none_when_nothing_stored(self, store):
        assert resolve_key(store, {}) is None

    def test_reads_process_env_by_default(self, store, monkeypatch):
        monkeypatch.setenv("PRIOR_API_KEY", "ask_proc")
        assert resolve_key(store) == "ask_proc"


# ── agent_name ──────────────────────────────────────────────


class TestAgentName:

    def test_prefixed(self):
        assert agent_name("devbox") == "openclaw-devbox"

    def test_truncates_hostname(self):
        assert agent_name("a" * 40) == "openclaw-" + "a" * 20

    @patch("prior.auth.socket.gethostname", return_value="laptop.local")
    def test_defaults_to_local_hostname(self, _mock_host):
        assert agent_name() == "openclaw-laptop.local"


# ── ensure_key ──────────────────────────────────────────────


class TestEnsureKey:

    def test_existing_key_skips_registration(self, client, saved_store, api_key):
        assert ensure_key(client, saved_store, environ={}) == api_key
        client.register.assert_not_called()

    def test_env_key_skips_registration(self, client, store):
        assert ensure_key(client, store, environ={"PRIOR_API_KEY": "ask_env"}) == "ask_env"
        client.register.assert_not_called()

    def test_registers_and_persists(
        self, client, store, mock_register_response, api_key, agent_id, capsys
    ):
        client.register.return_value = Ok(mock_register_response)

        key = ensure_key(client, store, environ={}, hostname="devbox")

        assert key == api_key
        client.register.assert_called_once_with("openclaw-devbox", "openclaw")
        assert store.load() == Credentials(api_key, agent_id)
        err = capsys.readouterr().err
        assert "Auto-registering" in err
        assert f"Registered as {agent_id}" in err
        assert str(store.path) in err

    def test_missing_api_key_exits_without_writing(self, client, store, config_path, capsys):
        response = {"ok": True, "data": {"agentId": "ag_1"}}
        client.register.return_value = Ok(response)

        with pytest.raises(SystemExit) as exc_info:
            ensure_key(client, store, environ={}, hostname="devbox")

        assert exc_info.value.code == 1
        assert client.register.call_count == 1
        assert not config_path.exists()
        assert json.dumps(response) in capsys.readouterr().err

    def test_missing_agent_id_exits(self, client, store, config_path):
        client.register.return_value = Ok({"ok": True, "data": {"apiKey": "ask_1"}})

        with pytest.raises(SystemExit):
            ensure_key(client, store, environ={}, hostname="devbox")

        assert not config_path.exists()

    def test_remote_rejection_exits(self, client, store, config_path, capsys):
        client.register.return_value = Ok({"ok": False, "error": "rate limited"})

        with pytest.raises(SystemExit) as exc_info:
            ensure_key(client, store, environ={}, hostname="devbox")

        assert exc_info.value.code == 1
        assert "Registration failed" in capsys.readouterr().err

    def test_malformed_response_exits(self, client, store, capsys):
        client.register.return_value = Malformed("<html>oops</html>")

        with pytest.raises(SystemExit):
            ensure_key(client, store, environ={}, hostname="devbox")

        assert '"error": "<html>oops</html>"' in capsys.readouterr().err

    @patch("prior.client.requests.request")
    def test_single_registration_call_over_http(
        self, mock_request, store, make_response
    ):
        mock_request.return_value = make_response({"ok": True, "data": {}})

        with pytest.raises(SystemExit):
            ensure_key(PriorClient("https://api.test"), store, environ={}, hostname="devbox")

        assert mock_request.call_count == 1
        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://api.test/v1/agents/register")
        assert "Authorization" not in kwargs["headers"]
