"""
Scrypt Hasher
=============
Memory-hard hashing with scrypt.

Payload format::

    $<hex params>$<base64 salt>$<base64 hash>

where ``params = log2(N) << 16 | r << 8 | p``.
"""

import hashlib
import hmac
import re
import secrets
from dataclasses import dataclass

from ..exceptions import MalformedPayloadError
from .base import BasePasswordHasher, b64decode, b64encode, require_text

MAX_LOG_N = 30

_PARAMS_RE = re.compile(r"[0-9a-f]{1,8}")


def _maxmem(n: int, r: int, p: int) -> int:
    """Memory ceiling for hashlib.scrypt, with 1 MiB of headroom."""
    return 128 * r * (n + p + 2) + 1024 * 1024


@dataclass(frozen=True)
class ScryptHasher(BasePasswordHasher):
    """Scrypt hasher with fixed CPU/memory cost, block size and parallelism."""

    n: int = 2 ** 15
    r: int = 8
    p: int = 1
    salt_len: int = 16
    hash_len: int = 32

    name = "scrypt"

    def __post_init__(self):
        if self.n < 2 or self.n & (self.n - 1):
            raise ValueError("scrypt N must be a power of two greater than 1")
        if self.n.bit_length() - 1 > MAX_LOG_N:
            raise ValueError(f"scrypt N must not exceed 2**{MAX_LOG_N}")
        if not 1 <= self.r <= 255:
            raise ValueError("scrypt r must be between 1 and 255")
        if not 1 <= self.p <= 255:
            raise ValueError("scrypt p must be between 1 and 255")
        if self.salt_len < 8:
            raise ValueError("scrypt salt must be at least 8 bytes")
        if self.hash_len < 16:
            raise ValueError("scrypt hash must be at least 16 bytes")

    @property
    def params(self) -> int:
        return (self.n.bit_length() - 1) << 16 | self.r << 8 | self.p

    def encode(self, plaintext: str) -> str:
        secret = require_text(plaintext)
        salt = secrets.token_bytes(self.salt_len)
        derived = hashlib.scrypt(
            secret,
            salt=salt,
            n=self.n,
            r=self.r,
            p=self.p,
            maxmem=_maxmem(self.n, self.r, self.p),
            dklen=self.hash_len,
        )
        return f"${self.params:x}${b64encode(salt)}${b64encode(derived)}"

    def matches(self, plaintext: str, payload: str) -> bool:
        secret = require_text(plaintext)
        n, r, p, salt, expected = self._parse(payload)
        try:
            derived = hashlib.scrypt(
                secret,
                salt=salt,
                n=n,
                r=r,
                p=p,
                maxmem=_maxmem(n, r, p),
                dklen=len(expected),
            )
        except ValueError as e:
            raise MalformedPayloadError(
                "Invalid scrypt parameters", algorithm=self.name
            ) from e
        return hmac.compare_digest(derived, expected)

    def _parse(self, payload: str):
        """Split a stored payload into (N, r, p, salt, hash)."""
        parts = payload.split("$")
        if len(parts) != 4 or parts[0]:
            raise MalformedPayloadError(
                "Payload is not a scrypt hash", algorithm=self.name
            )
        if not _PARAMS_RE.fullmatch(parts[1]):
            raise MalformedPayloadError(
                "Invalid scrypt parameter block", algorithm=self.name
            )
        params = int(parts[1], 16)

        log_n, r, p = params >> 16, (params >> 8) & 0xFF, params & 0xFF
        if not 1 <= log_n <= MAX_LOG_N or r < 1 or p < 1:
            raise MalformedPayloadError(
                "scrypt parameters out of range", algorithm=self.name
            )

        salt = b64decode(parts[2], self.name)
        expected = b64decode(parts[3], self.name)
        if not salt or not expected:
            raise MalformedPayloadError(
                "Empty scrypt salt or hash", algorithm=self.name
            )
        return 1 << log_n, r, p, salt, expected
