"""
Prior API key bootstrap
Environment override, then the stored key, then one-time self-registration.
"""

import json
import os
import socket
import sys
from typing import Mapping, Optional

from .client import PriorClient
from .config import API_KEY_ENV_VAR, ConfigStore
from .types import HOST_TAG, Credentials

HOSTNAME_MAX_LEN = 20


def resolve_key(store: ConfigStore, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the API key from the environment or the credential file."""
    env = os.environ if environ is None else environ
    env_key = (env.get(API_KEY_ENV_VAR) or "").strip()
    if env_key:
        return env_key

    credentials = store.load()
    return credentials.api_key if credentials else None


def agent_name(hostname: Optional[str] = None) -> str:
    host = socket.gethostname() if hostname is None else hostname
    return f"{HOST_TAG}-{host[:HOSTNAME_MAX_LEN]}"


def _gateway_hint(api_key: str) -> str:
    patch = {"skills": {"entries": {"prior": {"apiKey": api_key}}}}
    return f"    To persist in OpenClaw, run: gateway config.patch with raw: '{json.dumps(patch, separators=(',', ':'))}'"


def ensure_key(
    client: PriorClient,
    store: ConfigStore,
    environ: Optional[Mapping[str, str]] = None,
    hostname: Optional[str] = None,
) -> str:
    """Return a usable API key, registering a new agent if needed.

    Exits the process with status 1 when registration does not yield
    both an API key and an agent id. Nothing is written in that case.
    """
    key = resolve_key(store, environ)
    if key:
        return key

    print("[*] No API key found. Auto-registering...", file=sys.stderr)
    res = client.register(agent_name(hostname), HOST_TAG)

    data = res.data if isinstance(res.data, dict) else {}
    if res.ok and data.get("apiKey") and data.get("agentId"):
        credentials = Credentials(api_key=data["apiKey"], agent_id=data["agentId"])
        store.save(credentials)
        print(
            f"[+] Registered as {credentials.agent_id}. Key saved to {store.path}",
            file=sys.stderr,
        )
        print(_gateway_hint(credentials.api_key), file=sys.stderr)
        return credentials.api_key

    print(f"[!] Registration failed: {json.dumps(res.to_dict())}", file=sys.stderr)
    sys.exit(1)
