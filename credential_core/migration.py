"""
Credential Migration
====================
Opportunistic re-encoding of credentials on successful login.

The plaintext only exists during the login request, so upgrading happens
there and then: verify, and if the stored credential came from a
non-preferred algorithm, hand a freshly encoded credential to the
caller's ``persist`` callback before returning.

Example:
    >>> ok = verify_and_maybe_upgrade(
    ...     hasher, password, user.password,
    ...     persist=lambda encoded: repo.update_password(user.id, encoded),
    ... )
"""

import inspect
from concurrent.futures import Executor
from typing import Awaitable, Callable, Optional, Union

import structlog

from .async_ops import ahash_password, amatches
from .delegating import DelegatingPasswordHasher

logger = structlog.get_logger(__name__)

PersistCallback = Callable[[str], None]
AsyncPersistCallback = Callable[[str], Union[None, Awaitable[None]]]


def verify_and_maybe_upgrade(
    hasher: DelegatingPasswordHasher,
    plaintext: str,
    stored: str,
    persist: PersistCallback,
) -> bool:
    """
    Verify a password and re-encode the credential if it needs upgrading.

    Args:
        hasher: Delegating hasher
        plaintext: Password supplied by the user
        stored: Credential loaded from the account store
        persist: Called with the new credential, synchronously, when the
            password matched and the algorithm is not the preferred one

    Returns:
        True if the password matched

    Raises:
        UnresolvedCredentialError: If no hasher is registered for ``stored``
    """
    result = hasher.matches(plaintext, stored)

    if result.matched and result.needs_upgrade:
        persist(hasher.encode(plaintext))
        logger.info(
            "credential_upgraded",
            from_algorithm=result.algorithm_id,
            to_algorithm=hasher.preferred_id,
        )

    return result.matched


async def averify_and_maybe_upgrade(
    hasher: DelegatingPasswordHasher,
    plaintext: str,
    stored: str,
    persist: AsyncPersistCallback,
    executor: Optional[Executor] = None,
    timeout: Optional[float] = None,
) -> bool:
    """
    Async version of verify_and_maybe_upgrade.

    Hashing runs in ``executor``. ``persist`` may be a plain function or a
    coroutine function; it is awaited before returning.
    """
    result = await amatches(hasher, plaintext, stored, executor=executor, timeout=timeout)

    if result.matched and result.needs_upgrade:
        encoded = await ahash_password(hasher, plaintext, executor=executor)
        outcome = persist(encoded)
        if inspect.isawaitable(outcome):
            await outcome
        logger.info(
            "credential_upgraded",
            from_algorithm=result.algorithm_id,
            to_algorithm=hasher.preferred_id,
        )

    return result.matched
