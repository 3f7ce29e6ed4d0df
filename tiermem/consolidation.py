"""Promotion rule for the consolidation pass."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiermem import policy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tiermem.models import MemoryRecord


def should_promote(record: MemoryRecord) -> bool:
    """A short-term record is promoted when it is retrieved often or rated highly."""
    return record.retrieval_count >= policy.PROMOTION_RETRIEVALS or record.importance >= policy.PROMOTION_IMPORTANCE


def promotion_candidates(records: Iterable[MemoryRecord]) -> list[MemoryRecord]:
    """Filter *records* down to those due for promotion, preserving order."""
    return [r for r in records if should_promote(r)]


def over_watermark(usage: float) -> bool:
    """True when a tier's occupancy ratio calls for capacity management."""
    return usage > policy.CAPACITY_WATERMARK
