"""
Credential Exceptions
=====================
Exception classes for password hashing and verification.

A wrong password is not an exception: it is reported as
``MatchResult(matched=False)``. Everything below signals either a
misconfigured deployment or a stored credential this process cannot verify.
"""

from typing import List, Optional

from .models import Resolution


class CredentialError(Exception):
    """Base exception for all credential hashing errors."""
    pass


class ConfigurationError(CredentialError):
    """
    Raised when the hasher is assembled with an invalid configuration.

    Fatal at startup: an unregistered preferred id, a deprecated or no-op
    hasher selected as preferred, or a duplicate algorithm id.
    """
    pass


class UnresolvedCredentialError(CredentialError):
    """
    Raised when a stored credential names no verifier this process knows.

    Distinct from a wrong password: it points at a credential-migration gap
    and must be surfaced to operators, while the end user fails closed.
    """

    def __init__(
        self,
        message: str,
        resolution: Resolution,
        algorithm_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.resolution = resolution
        self.algorithm_id = algorithm_id


class MalformedPayloadError(CredentialError):
    """Raised by a hasher when a stored payload cannot be parsed."""

    def __init__(self, message: str, algorithm: Optional[str] = None):
        super().__init__(message)
        self.algorithm = algorithm


class PasswordPolicyError(CredentialError, ValueError):
    """Raised when a plaintext password violates the password policy."""

    def __init__(self, violations: List[str]):
        super().__init__(" ".join(violations))
        self.violations = violations
