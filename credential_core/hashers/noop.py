"""
No-op Hasher
============
Stores passwords as-is. Only for keeping pre-migration plaintext fixtures
verifiable; the delegating hasher refuses it as the preferred algorithm
unless insecure mode is explicitly enabled.
"""

import hmac
from dataclasses import dataclass

from .base import BasePasswordHasher, require_text


@dataclass(frozen=True)
class NoOpHasher(BasePasswordHasher):
    """Identity hasher."""

    name = "noop"
    insecure = True

    def encode(self, plaintext: str) -> str:
        require_text(plaintext)
        return plaintext

    def matches(self, plaintext: str, payload: str) -> bool:
        return hmac.compare_digest(require_text(plaintext), payload.encode("utf-8"))
