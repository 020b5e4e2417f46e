"""Shared fixtures: low-cost hashers so the suite runs quickly."""

import pytest

from credential_core import (
    AlgorithmRegistry,
    Argon2Hasher,
    BcryptHasher,
    DelegatingPasswordHasher,
    NoOpHasher,
    Pbkdf2Hasher,
    ScryptHasher,
)


@pytest.fixture
def fast_hashers():
    """Cheap instances of every hasher family, keyed by test algorithm id."""
    return {
        "bcrypt-style": BcryptHasher(rounds=4),
        "pbkdf2-style": Pbkdf2Hasher(iterations=1000),
        "scrypt-style": ScryptHasher(n=16, r=8, p=1),
        "argon2-style": Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1),
        "noop": NoOpHasher(),
    }


@pytest.fixture
def registry(fast_hashers):
    return AlgorithmRegistry(fast_hashers)


@pytest.fixture
def hasher(registry):
    """Delegating hasher preferring bcrypt-style, failing closed on bare credentials."""
    return DelegatingPasswordHasher(registry, preferred_id="bcrypt-style")
