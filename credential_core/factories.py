"""
Hasher Factories
================
Standard registry of algorithm ids and a one-call constructor for the
delegating hasher.

Each standard id is bound to the default parameters of its hasher for good.
To raise a cost factor, register the stronger hasher under a new id through
``extra_hashers`` and make it the preferred id; credentials under the old id
keep verifying and get upgraded on login.
"""

from typing import Dict, Mapping, Optional

from .config import HashingConfig
from .delegating import DelegatingPasswordHasher
from .hashers import (
    Argon2Hasher,
    BasePasswordHasher,
    BcryptHasher,
    NoOpHasher,
    Pbkdf2Hasher,
    ScryptHasher,
)
from .registry import AlgorithmRegistry


def default_hashers() -> Dict[str, BasePasswordHasher]:
    """Standard id -> hasher mapping."""
    return {
        "bcrypt": BcryptHasher(),
        "pbkdf2": Pbkdf2Hasher(),
        "scrypt": ScryptHasher(),
        "argon2": Argon2Hasher(),
        "noop": NoOpHasher(),
    }


def create_registry(
    extra_hashers: Optional[Mapping[str, BasePasswordHasher]] = None,
    deprecated=(),
) -> AlgorithmRegistry:
    """
    Build the standard registry plus any extra ids.

    Raises:
        ConfigurationError: If an extra id collides with a standard one
    """
    pairs = list(default_hashers().items())
    if extra_hashers:
        pairs.extend(extra_hashers.items())
    return AlgorithmRegistry.from_pairs(pairs, deprecated=deprecated)


def create_delegating_hasher(
    config: Optional[HashingConfig] = None,
    extra_hashers: Optional[Mapping[str, BasePasswordHasher]] = None,
) -> DelegatingPasswordHasher:
    """
    Create the delegating hasher with every standard algorithm registered.

    Args:
        config: Hashing configuration (default: ``HashingConfig.from_env()``)
        extra_hashers: Additional ids, e.g. ``{"bcrypt-14": BcryptHasher(rounds=14)}``

    Raises:
        ConfigurationError: If the configuration violates a startup invariant
    """
    config = config or HashingConfig.from_env()
    registry = create_registry(extra_hashers, deprecated=config.deprecated_ids)
    return DelegatingPasswordHasher(
        registry,
        preferred_id=config.preferred_id,
        default_for_matches=config.default_for_matches,
        allow_insecure=config.allow_insecure,
        verify_timeout=config.verify_timeout_seconds,
    )
