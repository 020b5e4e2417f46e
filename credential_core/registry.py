"""
Algorithm Registry
==================
Immutable mapping from algorithm id to password hasher.

Built once at startup and shared by reference. An id never changes
meaning: new cost parameters are registered under a new id so that every
credential issued under the old one keeps verifying.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple

import structlog

from .codec import PREFIX, SUFFIX
from .exceptions import ConfigurationError
from .hashers import BasePasswordHasher

logger = structlog.get_logger(__name__)


class AlgorithmRegistry(Mapping):
    """
    Read-only registry of hashers keyed by algorithm id.

    Deprecated ids stay resolvable for verification but can never be
    chosen as the preferred id for new credentials.
    """

    __slots__ = ("_hashers", "_deprecated")

    def __init__(
        self,
        hashers: Mapping[str, BasePasswordHasher],
        deprecated: Iterable[str] = (),
    ):
        entries: Dict[str, BasePasswordHasher] = {}
        for algorithm_id, hasher in hashers.items():
            _check_id(algorithm_id)
            if not isinstance(hasher, BasePasswordHasher):
                raise ConfigurationError(
                    f"Hasher for {algorithm_id!r} must be a BasePasswordHasher"
                )
            entries[algorithm_id] = hasher

        deprecated_ids = frozenset(deprecated)
        unknown = deprecated_ids - entries.keys()
        if unknown:
            raise ConfigurationError(
                f"Deprecated ids are not registered: {sorted(unknown)}"
            )

        object.__setattr__(self, "_hashers", MappingProxyType(entries))
        object.__setattr__(self, "_deprecated", deprecated_ids)

        logger.debug(
            "registry_built",
            algorithms=sorted(entries),
            deprecated=sorted(deprecated_ids),
        )

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[str, BasePasswordHasher]],
        deprecated: Iterable[str] = (),
    ) -> "AlgorithmRegistry":
        """Build a registry from (id, hasher) pairs, rejecting duplicate ids."""
        entries: Dict[str, BasePasswordHasher] = {}
        for algorithm_id, hasher in pairs:
            if algorithm_id in entries:
                raise ConfigurationError(
                    f"Algorithm id registered twice: {algorithm_id!r}"
                )
            entries[algorithm_id] = hasher
        return cls(entries, deprecated=deprecated)

    def __setattr__(self, name, value):
        raise AttributeError("AlgorithmRegistry is immutable")

    def __delattr__(self, name):
        raise AttributeError("AlgorithmRegistry is immutable")

    def __getitem__(self, algorithm_id: str) -> BasePasswordHasher:
        return self._hashers[algorithm_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._hashers)

    def __len__(self) -> int:
        return len(self._hashers)

    def __repr__(self) -> str:
        return f"AlgorithmRegistry(ids={sorted(self._hashers)!r})"

    @property
    def ids(self) -> FrozenSet[str]:
        return frozenset(self._hashers)

    @property
    def deprecated(self) -> FrozenSet[str]:
        return self._deprecated

    def is_deprecated(self, algorithm_id: str) -> bool:
        return algorithm_id in self._deprecated

    def lookup(self, algorithm_id: Optional[str]) -> Optional[BasePasswordHasher]:
        """Return the hasher for an id, or None if it is not registered."""
        if algorithm_id is None:
            return None
        return self._hashers.get(algorithm_id)


def _check_id(algorithm_id) -> None:
    if not isinstance(algorithm_id, str):
        raise ConfigurationError(f"Algorithm id must be str: {algorithm_id!r}")
    if PREFIX in algorithm_id or SUFFIX in algorithm_id:
        raise ConfigurationError(
            f"Algorithm id may not contain braces: {algorithm_id!r}"
        )
