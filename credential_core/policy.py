"""
Password Policy
===============
Strength rules for plaintext passwords, checked on registration and
password change before a password is ever encoded.
"""

from dataclasses import dataclass
from typing import List, Optional

from . import codec
from .exceptions import PasswordPolicyError
from .registry import AlgorithmRegistry


@dataclass(frozen=True)
class PasswordPolicy:
    """Length and character-class requirements."""
    min_length: int = 8
    max_length: int = 100
    min_uppercase: int = 1
    min_lowercase: int = 1
    min_digits: int = 1
    min_special: int = 1
    allow_whitespace: bool = False

    def validate(self, plaintext: str) -> List[str]:
        """
        Check a password against the policy.

        Returns:
            Human-readable violation messages, empty if the password is valid
        """
        violations = []

        if not self.min_length <= len(plaintext) <= self.max_length:
            violations.append(
                f"Password must be {self.min_length} to {self.max_length} characters in length."
            )

        counts = {"upper": 0, "lower": 0, "digit": 0, "special": 0, "space": 0}
        for char in plaintext:
            if char.isspace():
                counts["space"] += 1
            elif char.isupper():
                counts["upper"] += 1
            elif char.islower():
                counts["lower"] += 1
            elif char.isdigit():
                counts["digit"] += 1
            elif not char.isalnum():
                counts["special"] += 1

        for key, minimum, label in (
            ("upper", self.min_uppercase, "uppercase"),
            ("lower", self.min_lowercase, "lowercase"),
            ("digit", self.min_digits, "digit"),
            ("special", self.min_special, "special"),
        ):
            if counts[key] < minimum:
                violations.append(
                    f"Password must contain {minimum} or more {label} characters."
                )

        if counts["space"] and not self.allow_whitespace:
            violations.append("Password contains a whitespace character.")

        return violations

    def check(self, plaintext: str) -> None:
        """
        Raises:
            PasswordPolicyError: If the password violates the policy
        """
        violations = self.validate(plaintext)
        if violations:
            raise PasswordPolicyError(violations)

    def validate_unless_encoded(
        self,
        value: str,
        registry: Optional[AlgorithmRegistry] = None,
    ) -> List[str]:
        """
        Validate a value unless it is already an encoded credential.

        Seed data and imports may carry ready-made ``{id}payload`` values;
        those are accepted when the id is registered.
        """
        algorithm_id = codec.extract_id(value)
        if algorithm_id and registry is not None and algorithm_id in registry:
            return []
        return self.validate(value)
