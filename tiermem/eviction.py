"""Per-tier eviction policies.

Both policies only select victims; the engine removes them so the tier
stores and indices change together.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from tiermem import policy

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from tiermem.models import MemoryRecord
    from tiermem.scorer import RelevanceScorer


def eviction_quota(population: int, fraction: float) -> int:
    """Records to consider for eviction: ``ceil(population * fraction)``, at least one."""
    if population <= 0:
        return 0
    return max(1, math.ceil(population * fraction))


def select_short_term_victims(
    records: Sequence[MemoryRecord],
    scorer: RelevanceScorer,
    now: datetime,
) -> list[MemoryRecord]:
    """Lowest-relevance 20% of short-term, rounded up."""
    quota = eviction_quota(len(records), policy.SHORT_TERM_EVICTION_FRACTION)
    return scorer.rank(records, now, descending=False)[:quota]


def select_long_term_victims(
    records: Sequence[MemoryRecord],
    scorer: RelevanceScorer,
    now: datetime,
) -> list[MemoryRecord]:
    """Lowest-relevance 10% of long-term, rounded up, minus protected records.

    A record with importance at or above ``PROTECTED_IMPORTANCE`` is never a
    victim, so the result may be shorter than the quota or empty.
    """
    quota = eviction_quota(len(records), policy.LONG_TERM_EVICTION_FRACTION)
    lowest = scorer.rank(records, now, descending=False)[:quota]
    return [r for r in lowest if r.importance < policy.PROTECTED_IMPORTANCE]
