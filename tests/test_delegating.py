"""
Tests for the delegating password hasher.
"""

import pytest
from structlog.testing import capture_logs

from credential_core import (
    AlgorithmRegistry,
    DelegatingPasswordHasher,
    MatchResult,
    NoOpHasher,
    Resolution,
)
from credential_core.exceptions import ConfigurationError, UnresolvedCredentialError

PASSWORD = "Secr3t!"


class TestStartupChecks:
    """Configuration invariants enforced at construction."""

    def test_unregistered_preferred_id(self, registry):
        """Preferred id must be registered."""
        with pytest.raises(ConfigurationError):
            DelegatingPasswordHasher(registry, preferred_id="md5")

    def test_noop_preferred_refused(self, registry):
        """No-op hasher cannot be preferred without insecure mode."""
        with pytest.raises(ConfigurationError):
            DelegatingPasswordHasher(registry, preferred_id="noop")

    def test_noop_preferred_with_insecure_mode(self, registry):
        """Insecure mode allows the no-op hasher as preferred."""
        with capture_logs() as logs:
            hasher = DelegatingPasswordHasher(
                registry, preferred_id="noop", allow_insecure=True
            )

        assert hasher.encode("plain") == "{noop}plain"
        assert logs[0]["event"] == "insecure_preferred_algorithm"
        assert logs[0]["log_level"] == "warning"

    def test_deprecated_preferred_refused(self, fast_hashers):
        """Deprecated ids verify but may not be preferred."""
        registry = AlgorithmRegistry(fast_hashers, deprecated=["pbkdf2-style"])
        with pytest.raises(ConfigurationError):
            DelegatingPasswordHasher(registry, preferred_id="pbkdf2-style")

    def test_unregistered_default_for_matches(self, registry):
        """Default id for matches must be registered."""
        with pytest.raises(ConfigurationError):
            DelegatingPasswordHasher(
                registry, preferred_id="bcrypt-style", default_for_matches="md5"
            )

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_non_positive_verify_timeout(self, registry, timeout):
        """Verification timeout must be positive when set."""
        with pytest.raises(ConfigurationError):
            DelegatingPasswordHasher(
                registry, preferred_id="bcrypt-style", verify_timeout=timeout
            )


class TestEncode:
    """Tests for encoding new credentials."""

    def test_scenario_bcrypt_preferred(self, hasher):
        """New credentials carry the preferred id and verify without upgrade."""
        stored = hasher.encode(PASSWORD)

        assert stored.startswith("{bcrypt-style}")
        assert hasher.matches(PASSWORD, stored) == MatchResult(True, False, "bcrypt-style")

    def test_salt_uniqueness(self, hasher):
        """Two encodings of the same password differ."""
        assert hasher.encode(PASSWORD) != hasher.encode(PASSWORD)

    @pytest.mark.parametrize(
        "preferred", ["bcrypt-style", "pbkdf2-style", "scrypt-style", "argon2-style"]
    )
    def test_soundness_and_separation(self, registry, preferred):
        """Every algorithm matches its own password and rejects others."""
        hasher = DelegatingPasswordHasher(registry, preferred_id=preferred)
        stored = hasher.encode(PASSWORD)

        assert hasher.matches(PASSWORD, stored).matched is True
        assert hasher.matches("Secr3t?", stored).matched is False


class TestMatches:
    """Tests for verifying stored credentials."""

    def test_scenario_upgrade_detected(self, hasher, fast_hashers):
        """Credential from a registered non-preferred algorithm needs upgrade."""
        stored = "{pbkdf2-style}" + fast_hashers["pbkdf2-style"].encode(PASSWORD)

        result = hasher.matches(PASSWORD, stored)

        assert result.matched is True
        assert result.needs_upgrade is True
        assert result.algorithm_id == "pbkdf2-style"

    @pytest.mark.parametrize("algorithm_id", ["scrypt-style", "argon2-style", "noop"])
    def test_every_registered_algorithm_resolves(self, hasher, fast_hashers, algorithm_id):
        """Non-preferred algorithms verify and flag an upgrade."""
        stored = "{%s}%s" % (algorithm_id, fast_hashers[algorithm_id].encode(PASSWORD))
        assert hasher.matches(PASSWORD, stored) == MatchResult(True, True, algorithm_id)

    def test_scenario_wrong_password(self, hasher):
        """Wrong password is a plain mismatch, not an exception."""
        stored = hasher.encode(PASSWORD)
        result = hasher.matches("wrong", stored)

        assert result == MatchResult(False, False, "bcrypt-style")
        assert not result

    def test_mismatch_never_needs_upgrade(self, hasher, fast_hashers):
        """needs_upgrade is only reported for matched credentials."""
        stored = "{pbkdf2-style}" + fast_hashers["pbkdf2-style"].encode(PASSWORD)
        assert hasher.matches("wrong", stored).needs_upgrade is False

    def test_scenario_unprefixed_fails_closed(self, hasher):
        """Bare credentials are unresolved when no default is configured."""
        with capture_logs() as logs:
            with pytest.raises(UnresolvedCredentialError) as exc_info:
                hasher.matches("plainpassword", "plainpassword")

        assert exc_info.value.resolution == Resolution.UNRESOLVED_NULL_ID
        assert exc_info.value.algorithm_id is None
        assert logs[0]["event"] == "unresolved_credential"
        assert logs[0]["log_level"] == "error"

    def test_unknown_id(self, hasher):
        """Unregistered ids raise instead of reporting a match result."""
        with pytest.raises(UnresolvedCredentialError) as exc_info:
            hasher.matches(PASSWORD, "{md5}5f4dcc3b5aa765d61d8327deb882cf99")

        assert exc_info.value.resolution == Resolution.UNRESOLVED_UNKNOWN_ID
        assert exc_info.value.algorithm_id == "md5"

    def test_empty_id_is_unknown(self, hasher):
        """{} names the empty id, which is not registered."""
        with pytest.raises(UnresolvedCredentialError) as exc_info:
            hasher.matches(PASSWORD, "{}" + PASSWORD)

        assert exc_info.value.resolution == Resolution.UNRESOLVED_UNKNOWN_ID
        assert exc_info.value.algorithm_id == ""

    def test_default_for_matches(self, registry):
        """Bare credentials use the configured default and need upgrade."""
        hasher = DelegatingPasswordHasher(
            registry, preferred_id="bcrypt-style", default_for_matches="noop"
        )

        assert hasher.matches("plainpassword", "plainpassword") == MatchResult(
            True, True, "noop"
        )
        assert hasher.matches("other", "plainpassword").matched is False

    def test_unprefixed_default_equal_to_preferred_needs_upgrade(self, registry, fast_hashers):
        """Bare credentials always need the prefix added, even for the preferred algorithm."""
        hasher = DelegatingPasswordHasher(
            registry, preferred_id="bcrypt-style", default_for_matches="bcrypt-style"
        )
        bare = fast_hashers["bcrypt-style"].encode(PASSWORD)

        assert hasher.matches(PASSWORD, bare) == MatchResult(True, True, "bcrypt-style")

    def test_malformed_payload_is_mismatch(self, hasher):
        """Corrupt payloads fail verification and are logged distinctly."""
        with capture_logs() as logs:
            result = hasher.matches(PASSWORD, "{bcrypt-style}corrupted")

        assert result == MatchResult(False, False, "bcrypt-style")
        assert logs[0]["event"] == "malformed_credential_payload"
        assert logs[0]["log_level"] == "warning"

    @pytest.mark.parametrize(
        "stored",
        [
            "{pbkdf2-style}$pbkdf2-sha256$\u00b2$c2FsdHNhbHQ$aGFzaA",
            "{pbkdf2-style}$pbkdf2-sha256$99999999999999$c2FsdHNhbHQ$aGFzaA",
            "{scrypt-style}$0x40801$c2FsdHNhbHQ$aGFzaGhhc2g",
            "{argon2-style}$argon2id$v=19$m=8,t=1,p=1$c2FsdHNhbHQ\u00e9$aGFzaA",
        ],
    )
    def test_corrupt_parameters_are_mismatch(self, hasher, stored):
        """Out-of-range or non-ASCII payload fields never escape as raw errors."""
        result = hasher.matches(PASSWORD, stored)

        assert result.matched is False
        assert result.needs_upgrade is False

    def test_logs_never_contain_secrets(self, hasher, fast_hashers):
        """Neither password nor payload appears in log events."""
        payload = fast_hashers["pbkdf2-style"].encode(PASSWORD)
        with capture_logs() as logs:
            hasher.matches(PASSWORD, "{pbkdf2-style}" + payload)
            hasher.matches(PASSWORD, "{bcrypt-style}corrupted")

        rendered = repr(logs)
        assert PASSWORD not in rendered
        assert payload not in rendered
        assert "corrupted" not in rendered


class TestResolveAndUpgradeEncoding:
    """Tests for resolution without verification."""

    def test_resolve(self, hasher, fast_hashers):
        """resolve binds the payload to its hasher."""
        resolved = hasher.resolve("{noop}secret")

        assert resolved.is_resolved
        assert resolved.hasher is fast_hashers["noop"]
        assert resolved.payload == "secret"

    def test_upgrade_encoding(self, hasher):
        """Only preferred-id credentials are up to date."""
        assert hasher.upgrade_encoding(hasher.encode(PASSWORD)) is False
        assert hasher.upgrade_encoding("{noop}secret") is True
        assert hasher.upgrade_encoding("{md5}abc") is True
        assert hasher.upgrade_encoding("bare") is True

    def test_registry_shared_across_hashers(self, registry):
        """One registry can back several delegating hashers."""
        old = DelegatingPasswordHasher(registry, preferred_id="pbkdf2-style")
        new = DelegatingPasswordHasher(registry, preferred_id="argon2-style")

        stored = old.encode(PASSWORD)
        assert new.matches(PASSWORD, stored) == MatchResult(True, True, "pbkdf2-style")
        assert old.matches(PASSWORD, stored) == MatchResult(True, False, "pbkdf2-style")

    def test_single_id_registry(self):
        """Registry with only the no-op hasher works in insecure mode."""
        registry = AlgorithmRegistry({"noop": NoOpHasher()})
        hasher = DelegatingPasswordHasher(registry, "noop", allow_insecure=True)

        assert hasher.matches("x", "{noop}x").matched
