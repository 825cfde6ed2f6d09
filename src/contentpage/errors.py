"""Exceptions raised while reading content pages"""

from typing import Optional


class MalformedDocument(ValueError):
    """Front matter is absent, unterminated, or not a valid key/value mapping."""

    def __init__(self, reason: str, path: Optional[str] = None):
        self.reason = reason
        self.path = path
        super().__init__(f"{path}: {reason}" if path else reason)
