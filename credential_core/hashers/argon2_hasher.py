"""
Argon2 Hasher
=============
Memory-hard hashing using Argon2id via argon2-cffi.

Argon2id is the winner of the Password Hashing Competition (2015). The
payload is the PHC string produced by argon2-cffi, e.g.
``$argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>``; verification reads the
variant, memory, time and parallelism from it.
"""

from dataclasses import dataclass, field

from ..exceptions import MalformedPayloadError
from .base import BasePasswordHasher, require_text


def _argon2():
    try:
        import argon2
        import argon2.exceptions
    except ImportError:
        raise ImportError(
            "argon2-cffi is required for Argon2 hashing. "
            "Install with: pip install argon2-cffi"
        )
    return argon2


@dataclass(frozen=True)
class Argon2Hasher(BasePasswordHasher):
    """Argon2id hasher with fixed time, memory and parallelism costs."""

    time_cost: int = 3          # Number of iterations
    memory_cost: int = 65536    # 64MB memory (64 * 1024 KB)
    parallelism: int = 4
    hash_len: int = 32
    salt_len: int = 16
    _hasher: object = field(init=False, repr=False, compare=False)

    name = "argon2"

    def __post_init__(self):
        if self.time_cost < 1:
            raise ValueError("Argon2 time_cost must be positive")
        if self.parallelism < 1:
            raise ValueError("Argon2 parallelism must be positive")
        if self.memory_cost < 8 * self.parallelism:
            raise ValueError("Argon2 memory_cost must be at least 8 * parallelism KiB")

        argon2 = _argon2()
        hasher = argon2.PasswordHasher(
            time_cost=self.time_cost,
            memory_cost=self.memory_cost,
            parallelism=self.parallelism,
            hash_len=self.hash_len,
            salt_len=self.salt_len,
            type=argon2.Type.ID,
        )
        object.__setattr__(self, "_hasher", hasher)

    def encode(self, plaintext: str) -> str:
        return self._hasher.hash(require_text(plaintext))

    def matches(self, plaintext: str, payload: str) -> bool:
        secret = require_text(plaintext)
        if not payload.startswith("$argon2") or not payload.isascii():
            raise MalformedPayloadError(
                "Payload is not an Argon2 hash", algorithm=self.name
            )

        exceptions = _argon2().exceptions
        try:
            return self._hasher.verify(payload, secret)
        except exceptions.VerifyMismatchError:
            return False
        except (exceptions.InvalidHashError, exceptions.VerificationError) as e:
            raise MalformedPayloadError(
                "Invalid Argon2 hash", algorithm=self.name
            ) from e
