"""Sessions and the registry that orders them."""

from .registry import RegistryStats, SessionId, SessionRegistry
from .session import Session, display_name, validate_session_name

__all__ = [
    "Session",
    "SessionId",
    "SessionRegistry",
    "RegistryStats",
    "display_name",
    "validate_session_name",
]
