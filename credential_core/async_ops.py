"""
Async Password Operations
=========================
Async-safe wrappers around the delegating hasher.

Hashing is deliberately slow CPU (and for scrypt/Argon2, memory) bound
work, so it runs in a thread pool executor and never on the event loop.
"""

import asyncio
from concurrent.futures import Executor
from typing import Optional

import structlog

from . import codec
from .delegating import DelegatingPasswordHasher
from .models import MatchResult

logger = structlog.get_logger(__name__)


async def ahash_password(
    hasher: DelegatingPasswordHasher,
    plaintext: str,
    executor: Optional[Executor] = None,
) -> str:
    """
    Encode a password with the preferred algorithm.

    Args:
        hasher: Delegating hasher
        plaintext: Plain text password to hash
        executor: Executor to run in (default: the loop's default executor)

    Returns:
        Encoded credential, ``{id}payload``
    """
    loop = asyncio.get_event_loop()

    # Run in executor to avoid blocking the event loop
    return await loop.run_in_executor(executor, hasher.encode, plaintext)


async def amatches(
    hasher: DelegatingPasswordHasher,
    plaintext: str,
    stored: str,
    executor: Optional[Executor] = None,
    timeout: Optional[float] = None,
) -> MatchResult:
    """
    Verify a password against a stored credential.

    A verification that does not finish within ``timeout`` seconds counts
    as a failed authentication. ``timeout`` defaults to the hasher's
    ``verify_timeout``. The hash computation itself cannot be
    interrupted and completes in the background.

    Raises:
        UnresolvedCredentialError: If no hasher is registered for the
            stored credential
    """
    if timeout is None:
        timeout = hasher.verify_timeout

    loop = asyncio.get_event_loop()
    future = loop.run_in_executor(executor, hasher.matches, plaintext, stored)

    if timeout is None:
        return await future

    try:
        return await asyncio.wait_for(future, timeout)
    except asyncio.TimeoutError:
        algorithm_id = codec.extract_id(stored)
        logger.warning(
            "credential_verification_timeout",
            algorithm_id=algorithm_id,
            timeout=timeout,
        )
        return MatchResult(False, False, algorithm_id)
