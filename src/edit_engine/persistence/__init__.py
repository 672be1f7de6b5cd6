"""Text codec and filesystem store for sessions."""

from .codec import (
    decode_clipboard,
    decode_index,
    decode_session,
    encode_clipboard,
    encode_index,
    encode_session,
)
from .store import SessionStore

__all__ = [
    "SessionStore",
    "encode_session",
    "decode_session",
    "encode_clipboard",
    "decode_clipboard",
    "encode_index",
    "decode_index",
]
