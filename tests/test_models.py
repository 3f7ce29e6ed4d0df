"""Tests for memory domain models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from tiermem.models import (
    MemoryCapabilities,
    MemoryKind,
    MemoryQuery,
    MemoryRecord,
    RetrievalMethod,
    Tier,
    TimeRange,
)


def test_memory_kind_values() -> None:
    """MemoryKind should expose the three supported categories."""
    assert MemoryKind.EPISODIC == "episodic"
    assert MemoryKind.SEMANTIC == "semantic"
    assert MemoryKind.PROCEDURAL == "procedural"


def test_tier_values() -> None:
    assert Tier.SHORT_TERM == "short_term"
    assert Tier.LONG_TERM == "long_term"


@pytest.mark.parametrize(
    ("given", "expected"),
    [(1.7, 1.0), (-0.3, 0.0), (0.42, 0.42), (1.0, 1.0), (0.0, 0.0)],
)
def test_record_importance_is_clamped(given: float, expected: float) -> None:
    """Out-of-range importance should be clamped, not rejected."""
    record = MemoryRecord(kind=MemoryKind.EPISODIC, importance=given)
    assert record.importance == expected


def test_record_defaults() -> None:
    """A fresh record has an id, zero retrievals and empty metadata."""
    record = MemoryRecord(kind=MemoryKind.SEMANTIC, content={"fact": "water is wet"})
    assert record.id
    assert record.retrieval_count == 0
    assert record.metadata == {}
    assert record.tier is Tier.SHORT_TERM
    assert record.created_at.tzinfo is not None


def test_record_ids_are_unique() -> None:
    ids = {MemoryRecord(kind=MemoryKind.EPISODIC).id for _ in range(50)}
    assert len(ids) == 50


def test_record_naive_timestamp_treated_as_utc() -> None:
    record = MemoryRecord(kind=MemoryKind.EPISODIC, created_at=datetime(2026, 3, 1, 8, 0))
    assert record.created_at == datetime(2026, 3, 1, 8, 0, tzinfo=UTC)


def test_record_metadata_none_coerced() -> None:
    record = MemoryRecord(kind=MemoryKind.EPISODIC, metadata=None)
    assert record.metadata == {}


def test_record_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        MemoryRecord(kind="dream")


def test_capabilities_defaults() -> None:
    """Default capabilities support every kind and retrieval method."""
    caps = MemoryCapabilities()
    assert caps.short_term_capacity == 50
    assert caps.long_term_capacity == 1000
    assert caps.can_forget is True
    assert set(caps.supported_kinds) == set(MemoryKind)
    assert set(caps.retrieval_methods) == set(RetrievalMethod)


def test_capabilities_are_frozen() -> None:
    caps = MemoryCapabilities()
    with pytest.raises(ValidationError):
        caps.can_forget = False  # type: ignore[misc]


def test_capabilities_reject_zero_capacity() -> None:
    with pytest.raises(ValidationError):
        MemoryCapabilities(short_term_capacity=0)
    with pytest.raises(ValidationError):
        MemoryCapabilities(long_term_capacity=0)


def test_capabilities_reject_empty_kinds() -> None:
    with pytest.raises(ValidationError):
        MemoryCapabilities(supported_kinds=())


def test_capabilities_dedupe_kinds() -> None:
    caps = MemoryCapabilities(supported_kinds=("episodic", "episodic", "semantic"))
    assert caps.supported_kinds == (MemoryKind.EPISODIC, MemoryKind.SEMANTIC)


def test_capabilities_capacity_by_tier() -> None:
    caps = MemoryCapabilities(short_term_capacity=7, long_term_capacity=70)
    assert caps.capacity(Tier.SHORT_TERM) == 7
    assert caps.capacity(Tier.LONG_TERM) == 70


def test_query_defaults() -> None:
    query = MemoryQuery()
    assert query.kind is None
    assert query.min_importance is None
    assert query.time_range is None
    assert query.search_term is None
    assert query.limit == 10


def test_query_accepts_unknown_kind() -> None:
    """An unknown kind is a valid query that simply matches nothing."""
    assert MemoryQuery(kind="dream").kind == "dream"


def test_query_rejects_negative_limit() -> None:
    with pytest.raises(ValidationError):
        MemoryQuery(limit=-1)


def test_time_range_is_inclusive() -> None:
    start = datetime(2026, 1, 1, tzinfo=UTC)
    end = datetime(2026, 1, 2, tzinfo=UTC)
    window = TimeRange(start=start, end=end)
    assert window.contains(start)
    assert window.contains(end)
    assert not window.contains(datetime(2026, 1, 3, tzinfo=UTC))
