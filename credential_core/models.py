"""
Credential Models
=================
Data models and enums for credential verification results.
"""

from typing import TYPE_CHECKING, Optional
from dataclasses import dataclass
from enum import Enum

if TYPE_CHECKING:
    from .hashers.base import BasePasswordHasher


class Resolution(str, Enum):
    """Outcome of mapping a stored credential to a hasher."""
    RESOLVED = "resolved"
    UNRESOLVED_NULL_ID = "unresolved_null_id"
    UNRESOLVED_UNKNOWN_ID = "unresolved_unknown_id"


@dataclass(frozen=True)
class MatchResult:
    """Result of verifying a plaintext against a stored credential."""
    matched: bool
    needs_upgrade: bool = False
    algorithm_id: Optional[str] = None

    def __bool__(self) -> bool:
        return self.matched


@dataclass(frozen=True)
class ResolvedCredential:
    """A stored credential split and bound to the hasher that verifies it."""
    resolution: Resolution
    algorithm_id: Optional[str]
    payload: str
    hasher: Optional["BasePasswordHasher"] = None
    unprefixed: bool = False  # resolved through default_for_matches

    @property
    def is_resolved(self) -> bool:
        return self.resolution == Resolution.RESOLVED
