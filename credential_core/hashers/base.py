"""
Password Hasher Base
====================
Common interface shared by every hashing algorithm family.
"""

import base64
import binascii
from abc import ABC, abstractmethod

from ..exceptions import MalformedPayloadError


class BasePasswordHasher(ABC):
    """
    Abstract base class for one-way password hashers.

    A hasher is stateless apart from its cost parameters, which are fixed at
    construction. ``encode`` returns a self-describing payload, ``matches``
    reads every parameter it needs back out of that payload.
    """

    name: str = "base"
    insecure: bool = False

    @abstractmethod
    def encode(self, plaintext: str) -> str:
        """
        Hash a plaintext password.

        Args:
            plaintext: Password to hash

        Returns:
            Payload containing salt, cost parameters and digest
        """
        pass

    @abstractmethod
    def matches(self, plaintext: str, payload: str) -> bool:
        """
        Check a plaintext password against a stored payload.

        Raises:
            MalformedPayloadError: If the payload cannot be parsed
        """
        pass


def require_text(plaintext) -> bytes:
    """Return the UTF-8 bytes of a plaintext password."""
    if not isinstance(plaintext, str):
        raise TypeError(
            f"Password must be str, not {type(plaintext).__name__}"
        )
    return plaintext.encode("utf-8")


def b64encode(data: bytes) -> str:
    """Standard base64 without padding."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def b64decode(value: str, algorithm: str) -> bytes:
    """Decode unpadded base64 read from a stored payload."""
    try:
        return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedPayloadError(
            f"Invalid base64 in {algorithm} payload", algorithm=algorithm
        ) from e
