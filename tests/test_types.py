"""
Tests for prior.types module.

Covers:
- Credentials serialization
- Ok / Malformed envelope accessors
- Module-level constants
"""

import dataclasses

import pytest

from prior import __version__
from prior.types import API_BASE, DEFAULT_HEADERS, HOST_TAG, Credentials, Malformed, Ok


class TestCredentials:

    def test_to_dict_uses_wire_keys(self, credentials, api_key, agent_id):
        assert credentials.to_dict() == {"apiKey": api_key, "agentId": agent_id}

    def test_from_dict(self):
        creds = Credentials.from_dict({"apiKey": "k", "agentId": "a"})
        assert creds == Credentials("k", "a")

    def test_from_dict_without_agent_id(self):
        creds = Credentials.from_dict({"apiKey": "k"})
        assert creds.agent_id is None

    def test_frozen(self, credentials):
        with pytest.raises(dataclasses.FrozenInstanceError):
            credentials.api_key = "hacked"


class TestOk:

    def test_ok_true_from_payload(self):
        env = Ok({"ok": True, "data": {"x": 1}})
        assert env.ok is True
        assert env.data == {"x": 1}
        assert env.error is None

    def test_remote_failure_is_not_ok(self):
        env = Ok({"ok": False, "error": "nope"})
        assert env.ok is False
        assert env.error == "nope"

    def test_missing_ok_field_is_not_ok(self):
        assert Ok({"data": {}}).ok is False

    def test_non_object_payload(self):
        env = Ok([1, 2, 3])
        assert env.ok is False
        assert env.data is None
        assert env.to_dict() == [1, 2, 3]

    def test_to_dict_returns_payload_unchanged(self):
        payload = {"ok": True, "data": {"results": []}, "extra": 1}
        assert Ok(payload).to_dict() is payload


class TestMalformed:

    def test_never_ok(self):
        env = Malformed("<html>502</html>")
        assert env.ok is False
        assert env.data is None

    def test_error_is_raw_text(self):
        assert Malformed("Bad Gateway").error == "Bad Gateway"

    def test_to_dict_shape(self):
        assert Malformed("oops").to_dict() == {"ok": False, "error": "oops"}


class TestConstants:

    def test_api_base(self):
        assert API_BASE == "https://api.cg3.io"

    def test_user_agent_identifies_client(self):
        assert DEFAULT_HEADERS["User-Agent"] == f"prior-{HOST_TAG}/{__version__}"

    def test_version_reexported_from_package(self):
        import prior
        import prior.types

        assert prior.__version__ == prior.types.__version__
