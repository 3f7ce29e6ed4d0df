"""Relevance scorer: importance + recency + retrieval frequency.

Score = (w_importance * importance) + (w_recency * recency) + (w_retrieval * retrieval)

recency   = 1 / (1 + hours_since_creation)
retrieval = min(1, retrieval_count / RETRIEVAL_SATURATION)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiermem import policy
from tiermem.models import ScoreWeights

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from tiermem.models import MemoryRecord

_DEFAULT_WEIGHTS = ScoreWeights()


def hours_since(created_at: datetime, now: datetime) -> float:
    """Elapsed wall-clock hours, never negative."""
    return max(0.0, (now - created_at).total_seconds() / 3600)


def relevance_score(record: MemoryRecord, now: datetime, weights: ScoreWeights | None = None) -> float:
    """Compute the composite relevance of *record* at *now*. Pure."""
    w = weights or _DEFAULT_WEIGHTS
    recency = 1.0 / (1.0 + hours_since(record.created_at, now))
    retrieval = min(1.0, record.retrieval_count / policy.RETRIEVAL_SATURATION)
    return w.importance * record.importance + w.recency * recency + w.retrieval * retrieval


class RelevanceScorer:
    """Ranks memory records by composite relevance."""

    def __init__(self, weights: ScoreWeights | None = None) -> None:
        self.weights = weights or ScoreWeights()

    def score(self, record: MemoryRecord, now: datetime) -> float:
        return relevance_score(record, now, self.weights)

    def rank(self, records: Iterable[MemoryRecord], now: datetime, *, descending: bool = True) -> list[MemoryRecord]:
        """Sort records by score; ties keep their enumeration order.

        Each record is scored once, so the ordering is consistent even if the
        sort compares a record many times.
        """
        scored = [(self.score(r, now), r) for r in records]
        # sorted() is stable in both directions, reverse=True included.
        scored.sort(key=lambda pair: pair[0], reverse=descending)
        return [r for _, r in scored]
