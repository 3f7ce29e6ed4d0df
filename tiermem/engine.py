"""MemoryEngine: two-tier in-process memory with relevance-ranked retrieval.

Records live in a single arena keyed by id. The short-term and long-term
tiers, the kind index and the importance view are all views over that arena
and are updated together under one lock.
"""

from __future__ import annotations

import copy
import json
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from tiermem import policy
from tiermem.consolidation import over_watermark, promotion_candidates
from tiermem.errors import CapacityExceededError, UnsupportedKindError
from tiermem.eviction import select_long_term_victims, select_short_term_victims
from tiermem.indices import ImportanceIndex, TypeIndex
from tiermem.models import (
    CapacityUsage,
    ConsolidationReport,
    MemoryCapabilities,
    MemoryQuery,
    MemoryRecord,
    MemoryStats,
    Tier,
)
from tiermem.scorer import RelevanceScorer
from tiermem.tiers import TierStore

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from tiermem.models import MemoryKind

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _serialize_content(content: Any) -> str:
    """Lower-cased JSON form of *content* used for substring search."""
    return json.dumps(content, default=str, ensure_ascii=False).lower()


class MemoryEngine:
    """Stores, ranks, promotes and forgets an agent's memories."""

    def __init__(
        self,
        capabilities: MemoryCapabilities | None = None,
        scorer: RelevanceScorer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.capabilities = capabilities or MemoryCapabilities()
        self._scorer = scorer or RelevanceScorer()
        self._clock = clock or _utcnow
        self._lock = threading.RLock()

        self._records: dict[str, MemoryRecord] = {}
        self._tiers = {
            Tier.SHORT_TERM: TierStore(Tier.SHORT_TERM, self.capabilities.short_term_capacity),
            Tier.LONG_TERM: TierStore(Tier.LONG_TERM, self.capabilities.long_term_capacity),
        }
        self._by_kind = TypeIndex(self.capabilities.supported_kinds)
        self._by_importance = ImportanceIndex()

        logger.info(
            "memory engine initialized",
            short_term_capacity=self.capabilities.short_term_capacity,
            long_term_capacity=self.capabilities.long_term_capacity,
            can_forget=self.capabilities.can_forget,
        )

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, memory_id: object) -> bool:
        return memory_id in self._records

    # -- Public API -----------------------------------------------------------

    def store(
        self,
        kind: MemoryKind | str,
        content: Any,
        importance: float,
        metadata: Mapping[str, Any] | None = None,
    ) -> str:
        """Store a new memory and return its id.

        Importance is clamped to [0, 1]. Records at or above
        ``LONG_TERM_IMPORTANCE`` go to long-term, the rest to short-term.
        A full short-term tier always evicts to make room; a full long-term
        tier raises ``CapacityExceededError`` when nothing may be evicted.
        Content and metadata are copied, so later changes by the caller do
        not reach the stored record.
        """
        with self._lock:
            if not self._by_kind.supports(kind):
                raise UnsupportedKindError(str(kind), [str(k) for k in self.capabilities.supported_kinds])

            now = self._clock()
            record = MemoryRecord(
                kind=kind,
                content=copy.deepcopy(content),
                importance=importance,
                created_at=now,
                metadata=copy.deepcopy(dict(metadata or {})),
            )
            tier = Tier.LONG_TERM if record.importance >= policy.LONG_TERM_IMPORTANCE else Tier.SHORT_TERM

            self._make_room(tier, now)
            self._insert(record, tier)

            logger.debug(
                "memory stored",
                memory_id=record.id,
                kind=record.kind,
                importance=record.importance,
                tier=tier,
            )
            return record.id

    def retrieve(self, query: MemoryQuery | None = None, **filters: Any) -> list[MemoryRecord]:
        """Return the most relevant memories matching *query*.

        Filters may be given as a ``MemoryQuery`` or as its field names in
        keyword form. Every returned record has its retrieval count bumped
        once; the returned objects are snapshots.
        """
        if query is None:
            query = MemoryQuery(**filters)
        elif filters:
            raise TypeError("pass either a MemoryQuery or filter keywords, not both")

        with self._lock:
            now = self._clock()
            candidates = self._filter(self._candidates(query), query)
            ranked = self._scorer.rank(candidates, now)[: query.limit]
            for record in ranked:
                record.retrieval_count += 1
            return [self._snapshot(r) for r in ranked]

    def consolidate(self) -> ConsolidationReport:
        """Promote qualifying short-term memories and rebalance both tiers."""
        with self._lock:
            now = self._clock()
            report = ConsolidationReport()
            logger.info(
                "starting memory consolidation",
                short_term_count=len(self._tiers[Tier.SHORT_TERM]),
                long_term_count=len(self._tiers[Tier.LONG_TERM]),
            )

            short_term = [self._records[i] for i in self._tiers[Tier.SHORT_TERM]]
            for record in promotion_candidates(short_term):
                try:
                    report.evicted_long_term += self._make_room(Tier.LONG_TERM, now)
                except CapacityExceededError:
                    logger.warning(
                        "promotion skipped, long-term memory full",
                        memory_id=record.id,
                        capacity=self.capabilities.long_term_capacity,
                    )
                    report.skipped += 1
                    continue
                self._move(record, Tier.LONG_TERM)
                report.promoted += 1

            if self.capabilities.can_forget:
                if over_watermark(self._tiers[Tier.SHORT_TERM].usage):
                    report.evicted_short_term += self._evict(Tier.SHORT_TERM, now)
                if over_watermark(self._tiers[Tier.LONG_TERM].usage):
                    report.evicted_long_term += self._evict(Tier.LONG_TERM, now)

            logger.info("memory consolidation complete", **report.model_dump())
            return report

    def clear(self) -> None:
        """Forget everything in both tiers."""
        with self._lock:
            self._records.clear()
            for store in self._tiers.values():
                store.clear()
            self._by_kind.clear()
            self._by_importance.clear()
            logger.info("all memories cleared")

    def get_stats(self) -> MemoryStats:
        with self._lock:
            short_term = self._tiers[Tier.SHORT_TERM]
            long_term = self._tiers[Tier.LONG_TERM]
            return MemoryStats(
                short_term_count=len(short_term),
                long_term_count=len(long_term),
                total_count=len(short_term) + len(long_term),
                capacity_usage=CapacityUsage(short_term=short_term.usage, long_term=long_term.usage),
            )

    def get(self, memory_id: str) -> MemoryRecord | None:
        """Look up a single memory by id without counting it as a retrieval."""
        with self._lock:
            record = self._records.get(memory_id)
            return self._snapshot(record) if record is not None else None

    def most_important(self, limit: int = policy.DEFAULT_RETRIEVE_LIMIT) -> list[MemoryRecord]:
        """Highest-importance memories across both tiers, ties in insertion order."""
        with self._lock:
            return [self._snapshot(self._records[i]) for i in self._by_importance.top(limit)]

    # -- Internals ------------------------------------------------------------

    def _candidates(self, query: MemoryQuery) -> list[MemoryRecord]:
        if query.kind is not None:
            return [self._records[i] for i in self._by_kind.ids(query.kind)]
        ids = [*self._tiers[Tier.SHORT_TERM], *self._tiers[Tier.LONG_TERM]]
        return [self._records[i] for i in ids]

    def _filter(self, records: list[MemoryRecord], query: MemoryQuery) -> list[MemoryRecord]:
        if query.min_importance is not None:
            records = [r for r in records if r.importance >= query.min_importance]
        if query.time_range is not None:
            records = [r for r in records if query.time_range.contains(r.created_at)]
        if query.search_term:
            term = query.search_term.lower()
            records = [r for r in records if term in _serialize_content(r.content)]
        return records

    def _make_room(self, tier: Tier, now: datetime) -> int:
        """Evict from a full *tier* until it can take one more record.

        Returns the number of records evicted. Raises ``CapacityExceededError``
        when the tier is still full afterwards.
        """
        store = self._tiers[tier]
        if not store.is_full:
            return 0
        evicted = self._evict(tier, now)
        if store.is_full:
            raise CapacityExceededError(tier.value, store.capacity)
        return evicted

    def _evict(self, tier: Tier, now: datetime) -> int:
        records = [self._records[i] for i in self._tiers[tier]]
        if tier is Tier.SHORT_TERM:
            victims = select_short_term_victims(records, self._scorer, now)
        elif self.capabilities.can_forget:
            victims = select_long_term_victims(records, self._scorer, now)
        else:
            victims = []

        for record in victims:
            self._remove(record)
        if victims:
            logger.info("memories evicted", tier=tier, count=len(victims), remaining=len(self._tiers[tier]))
        return len(victims)

    def _insert(self, record: MemoryRecord, tier: Tier) -> None:
        record.tier = tier
        self._records[record.id] = record
        self._tiers[tier].add(record.id)
        self._by_kind.add(record.kind, record.id)
        self._by_importance.add(record)

    def _move(self, record: MemoryRecord, tier: Tier) -> None:
        self._tiers[record.tier].discard(record.id)
        self._tiers[tier].add(record.id)
        record.tier = tier

    def _remove(self, record: MemoryRecord) -> None:
        self._records.pop(record.id, None)
        self._tiers[record.tier].discard(record.id)
        self._by_kind.remove(record.kind, record.id)
        self._by_importance.remove(record.id)

    @staticmethod
    def _snapshot(record: MemoryRecord) -> MemoryRecord:
        return record.model_copy(deep=True)
