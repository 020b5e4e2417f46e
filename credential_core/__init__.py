"""
Credential Core Library
=======================
Algorithm-agile password hashing and verification.

Stored credentials carry the id of the algorithm that produced them,
``{bcrypt}$2b$12$...``, so the preferred algorithm and its cost can change
without invalidating credentials already issued.
"""

__version__ = "0.1.0"

# Codec
from credential_core.codec import decode, encode, extract_id

# Errors
from credential_core.exceptions import (
    CredentialError,
    ConfigurationError,
    UnresolvedCredentialError,
    MalformedPayloadError,
    PasswordPolicyError,
)

# Models
from credential_core.models import MatchResult, Resolution, ResolvedCredential

# Hashers
from credential_core.hashers import (
    BasePasswordHasher,
    BcryptHasher,
    Pbkdf2Hasher,
    ScryptHasher,
    Argon2Hasher,
    NoOpHasher,
)

# Registry & delegation
from credential_core.registry import AlgorithmRegistry
from credential_core.delegating import DelegatingPasswordHasher
from credential_core.config import HashingConfig
from credential_core.factories import (
    create_delegating_hasher,
    create_registry,
    default_hashers,
)

# Async & migration
from credential_core.async_ops import ahash_password, amatches
from credential_core.migration import (
    verify_and_maybe_upgrade,
    averify_and_maybe_upgrade,
)

# Policy
from credential_core.policy import PasswordPolicy

# Logging
from credential_core.log import setup_logging

__all__ = [
    # Codec
    "decode",
    "encode",
    "extract_id",
    # Errors
    "CredentialError",
    "ConfigurationError",
    "UnresolvedCredentialError",
    "MalformedPayloadError",
    "PasswordPolicyError",
    # Models
    "MatchResult",
    "Resolution",
    "ResolvedCredential",
    # Hashers
    "BasePasswordHasher",
    "BcryptHasher",
    "Pbkdf2Hasher",
    "ScryptHasher",
    "Argon2Hasher",
    "NoOpHasher",
    # Registry & delegation
    "AlgorithmRegistry",
    "DelegatingPasswordHasher",
    "HashingConfig",
    "create_delegating_hasher",
    "create_registry",
    "default_hashers",
    # Async & migration
    "ahash_password",
    "amatches",
    "verify_and_maybe_upgrade",
    "averify_and_maybe_upgrade",
    # Policy
    "PasswordPolicy",
    # Logging
    "setup_logging",
]
