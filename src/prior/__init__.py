"""
prior — command-line client for the Prior knowledge exchange for AI agents.
"""

from .auth import ensure_key, resolve_key
from .client import PriorClient
from .config import ConfigStore, Settings, load_settings
from .types import Credentials, Malformed, Ok, __version__

__all__ = [
    "ConfigStore",
    "Credentials",
    "Malformed",
    "Ok",
    "PriorClient",
    "Settings",
    "ensure_key",
    "load_settings",
    "resolve_key",
    "__version__",
]
