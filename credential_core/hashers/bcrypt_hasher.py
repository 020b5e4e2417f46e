"""
Bcrypt Hasher
=============
Adaptive hashing with bcrypt. The payload is the standard modular crypt
string, e.g. ``$2b$12$<22 chars salt><31 chars hash>``, so the cost
factor travels with every credential.
"""

import re
from dataclasses import dataclass

from ..exceptions import MalformedPayloadError
from .base import BasePasswordHasher, require_text

# bcrypt ignores everything past 72 bytes
MAX_PASSWORD_BYTES = 72
MIN_ROUNDS = 4
MAX_ROUNDS = 31

_BCRYPT_PATTERN = re.compile(r"^\$2[abxy]?\$(\d\d)\$[./A-Za-z0-9]{53}$")


def _bcrypt():
    try:
        import bcrypt
    except ImportError:
        raise ImportError(
            "bcrypt is required for bcrypt hashing. "
            "Install with: pip install bcrypt"
        )
    return bcrypt


@dataclass(frozen=True)
class BcryptHasher(BasePasswordHasher):
    """Bcrypt hasher with a fixed log2 work factor."""

    rounds: int = 12
    prefix: str = "2b"

    name = "bcrypt"

    def __post_init__(self):
        if not MIN_ROUNDS <= self.rounds <= MAX_ROUNDS:
            raise ValueError(
                f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}"
            )
        if self.prefix not in ("2a", "2b"):
            raise ValueError("bcrypt prefix must be '2a' or '2b'")

    def encode(self, plaintext: str) -> str:
        secret = require_text(plaintext)
        if len(secret) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"bcrypt passwords cannot be longer than {MAX_PASSWORD_BYTES} bytes"
            )
        bcrypt = _bcrypt()
        salt = bcrypt.gensalt(rounds=self.rounds, prefix=self.prefix.encode("ascii"))
        return bcrypt.hashpw(secret, salt).decode("ascii")

    def matches(self, plaintext: str, payload: str) -> bool:
        secret = require_text(plaintext)
        match = _BCRYPT_PATTERN.match(payload)
        if not match or not MIN_ROUNDS <= int(match.group(1)) <= MAX_ROUNDS:
            raise MalformedPayloadError(
                "Payload is not a bcrypt hash", algorithm=self.name
            )
        if len(secret) > MAX_PASSWORD_BYTES:
            return False

        bcrypt = _bcrypt()
        try:
            # checkpw re-derives with the salt and rounds of the stored hash
            return bcrypt.checkpw(secret, payload.encode("ascii"))
        except ValueError as e:
            raise MalformedPayloadError(
                "Invalid bcrypt salt", algorithm=self.name
            ) from e
