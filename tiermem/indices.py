"""Secondary indices kept consistent with every engine mutation."""

from __future__ import annotations

import bisect
import itertools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tiermem.models import MemoryKind, MemoryRecord


class TypeIndex:
    """Maps each supported kind to the ids currently stored under it.

    Id sets are insertion-ordered (dict keys) so scans stay deterministic.
    """

    def __init__(self, kinds: Iterable[MemoryKind]) -> None:
        self._ids: dict[str, dict[str, None]] = {str(k): {} for k in kinds}

    def supports(self, kind: str) -> bool:
        return kind in self._ids

    def add(self, kind: str, memory_id: str) -> None:
        self._ids[kind][memory_id] = None

    def remove(self, kind: str, memory_id: str) -> None:
        self._ids.get(kind, {}).pop(memory_id, None)

    def ids(self, kind: str) -> list[str]:
        """Return ids for *kind*; an unknown kind has none."""
        return list(self._ids.get(kind, {}))

    def count(self, kind: str) -> int:
        return len(self._ids.get(kind, {}))

    def clear(self) -> None:
        for ids in self._ids.values():
            ids.clear()


class ImportanceIndex:
    """All stored ids ordered by descending importance.

    Maintained with binary search on insert and remove instead of resorting
    the whole view. Ties keep insertion order via a monotonic sequence number.
    """

    def __init__(self) -> None:
        self._keys: list[tuple[float, int, str]] = []
        self._key_by_id: dict[str, tuple[float, int, str]] = {}
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return (key[2] for key in self._keys)

    def __contains__(self, memory_id: object) -> bool:
        return memory_id in self._key_by_id

    def add(self, record: MemoryRecord) -> None:
        if record.id in self._key_by_id:
            return
        key = (-record.importance, next(self._seq), record.id)
        bisect.insort(self._keys, key)
        self._key_by_id[record.id] = key

    def remove(self, memory_id: str) -> None:
        key = self._key_by_id.pop(memory_id, None)
        if key is None:
            return
        pos = bisect.bisect_left(self._keys, key)
        del self._keys[pos]

    def top(self, limit: int) -> list[str]:
        return [key[2] for key in self._keys[: max(0, limit)]]

    def clear(self) -> None:
        self._keys.clear()
        self._key_by_id.clear()
