"""
Encoded Credential Codec
========================
Parse and produce the ``{id}payload`` storage format.

Only the leading character decides whether an id is present, so payloads
may contain braces freely.
"""

from typing import Optional, Tuple

PREFIX = "{"
SUFFIX = "}"


def decode(stored: str) -> Tuple[Optional[str], str]:
    """
    Split a stored credential into algorithm id and payload.

    Args:
        stored: Encoded credential as persisted by the account store

    Returns:
        Tuple of (algorithm_id, payload). ``algorithm_id`` is ``None`` when
        the credential carries no ``{id}`` prefix, and ``""`` for ``{}``.
    """
    if not stored.startswith(PREFIX):
        return None, stored

    end = stored.find(SUFFIX, len(PREFIX))
    if end < 0:
        # An opening brace with no closing one is not a prefix
        return None, stored

    return stored[len(PREFIX):end], stored[end + len(SUFFIX):]


def encode(algorithm_id: str, payload: str) -> str:
    """
    Prefix a payload with its algorithm id.

    Raises:
        ValueError: If the id contains a brace and could not be decoded back
    """
    if PREFIX in algorithm_id or SUFFIX in algorithm_id:
        raise ValueError(f"Algorithm id may not contain braces: {algorithm_id!r}")
    return f"{PREFIX}{algorithm_id}{SUFFIX}{payload}"


def extract_id(stored: str) -> Optional[str]:
    """Return just the algorithm id of a stored credential."""
    return decode(stored)[0]
