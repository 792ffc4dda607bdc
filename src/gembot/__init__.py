"""Gembot - a terminal chat client for Gemini."""

from .config import SessionConfig, Settings, get_settings
from .identity import Identity, IdentityProvider
from .session import Outcome, SessionController, SessionSnapshot
from .transcript import Transcript
from .transport import HttpTransport, Transport
from .types import Speaker, Turn

__version__ = "0.1.0"

__all__ = [
    "HttpTransport",
    "Identity",
    "IdentityProvider",
    "Outcome",
    "SessionConfig",
    "SessionController",
    "SessionSnapshot",
    "Settings",
    "Speaker",
    "Transcript",
    "Transport",
    "Turn",
    "get_settings",
]
