"""
Delegating Password Hasher
==========================
Root component: encodes new credentials with the preferred algorithm and
routes verification to whichever algorithm produced a stored credential.

Stored credentials look like ``{bcrypt}$2b$12$...``. The id in braces
selects the hasher, the rest is handed to it untouched.

Usage:
    hasher = DelegatingPasswordHasher(registry, preferred_id="bcrypt")
    stored = hasher.encode("Secr3t!")

    result = hasher.matches("Secr3t!", stored)
    if result.matched and result.needs_upgrade:
        save(hasher.encode("Secr3t!"))
"""

from typing import Optional

import structlog

from . import codec
from .exceptions import ConfigurationError, MalformedPayloadError, UnresolvedCredentialError
from .models import MatchResult, Resolution, ResolvedCredential
from .registry import AlgorithmRegistry

logger = structlog.get_logger(__name__)


class DelegatingPasswordHasher:
    """
    Algorithm-agile password hasher.

    All startup invariants are checked in the constructor, so an instance
    that exists is always able to encode.
    """

    def __init__(
        self,
        registry: AlgorithmRegistry,
        preferred_id: str,
        default_for_matches: Optional[str] = None,
        allow_insecure: bool = False,
        verify_timeout: Optional[float] = None,
    ):
        """
        Args:
            registry: Frozen id -> hasher registry
            preferred_id: Id used for every new credential
            default_for_matches: Id used to verify credentials without an
                ``{id}`` prefix. None rejects them.
            allow_insecure: Permit an insecure (no-op) preferred hasher
            verify_timeout: Seconds an async verification may take before it
                counts as a failed authentication. None waits for completion.
        """
        preferred = registry.lookup(preferred_id)
        if preferred is None:
            raise ConfigurationError(
                f"Preferred algorithm {preferred_id!r} is not registered "
                f"(known: {sorted(registry.ids)})"
            )
        if registry.is_deprecated(preferred_id):
            raise ConfigurationError(
                f"Preferred algorithm {preferred_id!r} is deprecated"
            )
        if preferred.insecure:
            if not allow_insecure:
                raise ConfigurationError(
                    f"Preferred algorithm {preferred_id!r} stores plaintext; "
                    "enable insecure mode to use it"
                )
            logger.warning("insecure_preferred_algorithm", algorithm_id=preferred_id)
        if default_for_matches is not None and default_for_matches not in registry:
            raise ConfigurationError(
                f"Default algorithm for matches {default_for_matches!r} is not registered"
            )
        if verify_timeout is not None and verify_timeout <= 0:
            raise ConfigurationError("Verification timeout must be positive")

        self._registry = registry
        self._preferred_id = preferred_id
        self._preferred = preferred
        self._default_for_matches = default_for_matches
        self._verify_timeout = verify_timeout

    @property
    def registry(self) -> AlgorithmRegistry:
        return self._registry

    @property
    def preferred_id(self) -> str:
        return self._preferred_id

    @property
    def default_for_matches(self) -> Optional[str]:
        return self._default_for_matches

    @property
    def verify_timeout(self) -> Optional[float]:
        return self._verify_timeout

    def encode(self, plaintext: str) -> str:
        """Hash a password with the preferred algorithm and prefix its id."""
        payload = self._preferred.encode(plaintext)
        return codec.encode(self._preferred_id, payload)

    def resolve(self, stored: str) -> ResolvedCredential:
        """
        Decide which hasher verifies a stored credential.

        Credentials without a prefix fall back to ``default_for_matches``
        when one is configured.
        """
        algorithm_id, payload = codec.decode(stored)
        unprefixed = algorithm_id is None

        if unprefixed:
            if self._default_for_matches is None:
                return ResolvedCredential(Resolution.UNRESOLVED_NULL_ID, None, payload)
            algorithm_id = self._default_for_matches

        hasher = self._registry.lookup(algorithm_id)
        if hasher is None:
            return ResolvedCredential(
                Resolution.UNRESOLVED_UNKNOWN_ID, algorithm_id, payload
            )
        return ResolvedCredential(
            Resolution.RESOLVED,
            algorithm_id,
            payload,
            hasher,
            unprefixed=unprefixed,
        )

    def matches(self, plaintext: str, stored: str) -> MatchResult:
        """
        Verify a password against a stored credential.

        Returns:
            MatchResult. ``needs_upgrade`` is True when the credential
            matched but was produced by a non-preferred algorithm.

        Raises:
            UnresolvedCredentialError: If no hasher is registered for the
                stored credential. Never reported as a mismatch.
        """
        resolved = self.resolve(stored)
        if not resolved.is_resolved:
            raise self._unresolved(resolved)

        try:
            matched = resolved.hasher.matches(plaintext, resolved.payload)
        except MalformedPayloadError as e:
            logger.warning(
                "malformed_credential_payload",
                algorithm_id=resolved.algorithm_id,
                error=str(e),
            )
            return MatchResult(False, False, resolved.algorithm_id)

        if not matched:
            return MatchResult(False, False, resolved.algorithm_id)

        needs_upgrade = self._needs_upgrade(resolved)
        if needs_upgrade:
            logger.info(
                "credential_needs_upgrade",
                algorithm_id=resolved.algorithm_id,
                preferred_id=self._preferred_id,
            )
        return MatchResult(True, needs_upgrade, resolved.algorithm_id)

    def upgrade_encoding(self, stored: str) -> bool:
        """
        Check whether a stored credential should be re-encoded.

        Needs no plaintext, so it can report migration progress across an
        account store. Unresolvable credentials always need upgrading.
        """
        resolved = self.resolve(stored)
        if not resolved.is_resolved:
            return True
        return self._needs_upgrade(resolved)

    def _needs_upgrade(self, resolved: ResolvedCredential) -> bool:
        return resolved.unprefixed or resolved.algorithm_id != self._preferred_id

    def _unresolved(self, resolved: ResolvedCredential) -> UnresolvedCredentialError:
        if resolved.resolution == Resolution.UNRESOLVED_NULL_ID:
            message = (
                "Stored credential has no {id} prefix and no default "
                "algorithm for matches is configured"
            )
        else:
            message = (
                f"No password hasher is registered for id {resolved.algorithm_id!r}"
            )

        logger.error(
            "unresolved_credential",
            resolution=resolved.resolution.value,
            algorithm_id=resolved.algorithm_id,
        )
        return UnresolvedCredentialError(
            message,
            resolution=resolved.resolution,
            algorithm_id=resolved.algorithm_id,
        )

    def __repr__(self) -> str:
        return (
            f"DelegatingPasswordHasher(preferred_id={self._preferred_id!r}, "
            f"registry={self._registry!r})"
        )
