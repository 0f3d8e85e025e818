"""Case-insensitive lookup from level tokens to canonical level names."""

import logging
from collections.abc import Mapping, Iterable
from types import MappingProxyType

logger = logging.getLogger(__name__)


class LevelAliasResolver:
    """Reverse index of ``alias.lower() -> canonical`` built once from config.

    When the same alias is listed under two canonical levels the first one
    registered keeps it. The collision is logged, not raised.
    """

    def __init__(self, levels: Mapping[str, Iterable[str]]):
        index: dict[str, str] = {}
        for canonical, aliases in levels.items():
            for alias in aliases:
                key = alias.lower()
                if key in index:
                    if index[key] != canonical:
                        logger.warning(
                            "Level alias %r listed under both %s and %s; keeping %s",
                            alias, index[key], canonical, index[key],
                        )
                    continue
                index[key] = canonical
        self._index = MappingProxyType(index)
        self._canonical = tuple(levels.keys())

    @property
    def canonical_levels(self) -> tuple[str, ...]:
        return self._canonical

    def resolve(self, token: str | None) -> str | None:
        """Return the canonical level for *token*, or None if it is unknown."""
        if token is None:
            return None
        return self._index.get(token.lower())

    def __len__(self) -> int:
        return len(self._index)
