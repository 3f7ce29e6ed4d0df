"""Bounded id partition for a single memory tier."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tiermem.models import Tier


class TierStore:
    """Insertion-ordered set of record ids with a fixed capacity.

    Records themselves live in the engine's arena; a tier only tracks
    membership.
    """

    def __init__(self, tier: Tier, capacity: int) -> None:
        self.tier = tier
        self.capacity = capacity
        self._ids: dict[str, None] = {}

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __contains__(self, memory_id: object) -> bool:
        return memory_id in self._ids

    @property
    def is_full(self) -> bool:
        return len(self._ids) >= self.capacity

    @property
    def usage(self) -> float:
        """Occupancy as a fraction of capacity."""
        return len(self._ids) / self.capacity

    def add(self, memory_id: str) -> None:
        self._ids[memory_id] = None

    def discard(self, memory_id: str) -> None:
        self._ids.pop(memory_id, None)

    def clear(self) -> None:
        self._ids.clear()
