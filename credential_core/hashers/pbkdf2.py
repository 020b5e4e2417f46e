"""
PBKDF2 Hasher
=============
Key stretching with PBKDF2-HMAC.

Payload format::

    $pbkdf2-<digest>$<iterations>$<base64 salt>$<base64 hash>
"""

import hashlib
import hmac
import re
import secrets
from dataclasses import dataclass

from ..exceptions import MalformedPayloadError
from .base import BasePasswordHasher, b64decode, b64encode, require_text

SUPPORTED_DIGESTS = ("sha1", "sha256", "sha512")
MAX_ITERATIONS = 2 ** 31 - 1

_ITERATIONS_RE = re.compile(r"[0-9]{1,10}")


@dataclass(frozen=True)
class Pbkdf2Hasher(BasePasswordHasher):
    """PBKDF2-HMAC hasher with a fixed digest and iteration count."""

    iterations: int = 310_000
    digest: str = "sha256"
    salt_len: int = 16
    hash_len: int = 32

    name = "pbkdf2"

    def __post_init__(self):
        if not 1 <= self.iterations <= MAX_ITERATIONS:
            raise ValueError(f"PBKDF2 iterations must be between 1 and {MAX_ITERATIONS}")
        if self.digest not in SUPPORTED_DIGESTS:
            raise ValueError(f"Unsupported PBKDF2 digest: {self.digest}")
        if self.salt_len < 8:
            raise ValueError("PBKDF2 salt must be at least 8 bytes")
        if self.hash_len < 16:
            raise ValueError("PBKDF2 hash must be at least 16 bytes")

    def encode(self, plaintext: str) -> str:
        secret = require_text(plaintext)
        salt = secrets.token_bytes(self.salt_len)
        derived = hashlib.pbkdf2_hmac(
            self.digest, secret, salt, self.iterations, self.hash_len
        )
        return (
            f"$pbkdf2-{self.digest}${self.iterations}"
            f"${b64encode(salt)}${b64encode(derived)}"
        )

    def matches(self, plaintext: str, payload: str) -> bool:
        secret = require_text(plaintext)
        digest, iterations, salt, expected = self._parse(payload)
        try:
            derived = hashlib.pbkdf2_hmac(
                digest, secret, salt, iterations, len(expected)
            )
        except (ValueError, OverflowError) as e:
            raise MalformedPayloadError(
                "Invalid PBKDF2 parameters", algorithm=self.name
            ) from e
        return hmac.compare_digest(derived, expected)

    def _parse(self, payload: str):
        """Split a stored payload into (digest, iterations, salt, hash)."""
        parts = payload.split("$")
        if len(parts) != 5 or parts[0] or not parts[1].startswith("pbkdf2-"):
            raise MalformedPayloadError(
                "Payload is not a PBKDF2 hash", algorithm=self.name
            )

        digest = parts[1][len("pbkdf2-"):]
        if digest not in SUPPORTED_DIGESTS:
            raise MalformedPayloadError(
                f"Unsupported PBKDF2 digest: {digest}", algorithm=self.name
            )
        if (
            not _ITERATIONS_RE.fullmatch(parts[2])
            or not 1 <= int(parts[2]) <= MAX_ITERATIONS
        ):
            raise MalformedPayloadError(
                "Invalid PBKDF2 iteration count", algorithm=self.name
            )

        salt = b64decode(parts[3], self.name)
        expected = b64decode(parts[4], self.name)
        if not salt or not expected:
            raise MalformedPayloadError(
                "Empty PBKDF2 salt or hash", algorithm=self.name
            )
        return digest, int(parts[2]), salt, expected
