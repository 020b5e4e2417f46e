"""
Hashing Configuration
=====================
Configuration for the delegating password hasher, read from environment
variables by ``HashingConfig.from_env()``.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_float(env: Mapping[str, str], name: str) -> Optional[float]:
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True)
class HashingConfig:
    """
    Configuration for the standard delegating hasher.

    Cost parameters are deliberately absent: each algorithm id is bound to
    fixed parameters, and tuning means registering a new id.
    """
    preferred_id: str = "bcrypt"
    default_for_matches: Optional[str] = None  # None = fail closed
    allow_insecure: bool = False
    deprecated_ids: Tuple[str, ...] = field(default_factory=tuple)

    # Async verification timeout (seconds), None = wait for completion
    verify_timeout_seconds: Optional[float] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "HashingConfig":
        """
        Build configuration from ``CREDENTIAL_*`` environment variables.

        Args:
            env: Mapping to read instead of ``os.environ``
        """
        env = os.environ if env is None else env
        deprecated = env.get("CREDENTIAL_DEPRECATED_IDS", "")
        return cls(
            preferred_id=env.get("CREDENTIAL_PREFERRED_ID", cls.preferred_id),
            default_for_matches=env.get("CREDENTIAL_DEFAULT_FOR_MATCHES") or None,
            allow_insecure=_env_bool(env, "CREDENTIAL_ALLOW_INSECURE", False),
            deprecated_ids=tuple(
                item.strip() for item in deprecated.split(",") if item.strip()
            ),
            verify_timeout_seconds=_env_float(env, "CREDENTIAL_VERIFY_TIMEOUT"),
        )
