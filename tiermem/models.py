"""Pydantic models for the tiered memory engine."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tiermem import policy


class MemoryKind(StrEnum):
    """Categorizes the type of memory entry."""

    EPISODIC = "episodic"
    SEMANTIC = "semantic"
    PROCEDURAL = "procedural"


class Tier(StrEnum):
    """Bounded partition a record lives in."""

    SHORT_TERM = "short_term"
    LONG_TERM = "long_term"


class RetrievalMethod(StrEnum):
    """Retrieval strategies an agent advertises for its memory."""

    EXACT = "exact"
    SEMANTIC = "semantic"
    TEMPORAL = "temporal"


def _as_utc(v: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix the two."""
    return v.replace(tzinfo=UTC) if v.tzinfo is None else v


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ScoreWeights(BaseModel):
    """Weights for composite relevance scoring."""

    model_config = ConfigDict(frozen=True)

    importance: float = policy.IMPORTANCE_WEIGHT
    recency: float = policy.RECENCY_WEIGHT
    retrieval: float = policy.RETRIEVAL_WEIGHT


class MemoryCapabilities(BaseModel):
    """Immutable policy an owning agent hands to its memory engine."""

    model_config = ConfigDict(frozen=True)

    short_term_capacity: int = Field(default=50, ge=1)
    long_term_capacity: int = Field(default=1000, ge=1)
    can_forget: bool = True
    supported_kinds: tuple[MemoryKind, ...] = tuple(MemoryKind)
    # Advertised to collaborators only; retrieval always uses exact filters.
    retrieval_methods: tuple[RetrievalMethod, ...] = tuple(RetrievalMethod)

    @field_validator("supported_kinds")
    @classmethod
    def _dedupe_kinds(cls, v: tuple[MemoryKind, ...]) -> tuple[MemoryKind, ...]:
        if not v:
            raise ValueError("supported_kinds must not be empty")
        return tuple(dict.fromkeys(v))

    def capacity(self, tier: Tier) -> int:
        """Return the configured capacity for *tier*."""
        if tier is Tier.SHORT_TERM:
            return self.short_term_capacity
        return self.long_term_capacity


class MemoryRecord(BaseModel):
    """A single stored experience.

    Only ``retrieval_count`` and ``tier`` change after creation, and only the
    engine changes them.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    kind: MemoryKind
    content: Any = None
    importance: float = 0.5
    created_at: datetime = Field(default_factory=_utcnow)
    retrieval_count: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)
    tier: Tier = Tier.SHORT_TERM

    @field_validator("importance")
    @classmethod
    def _clamp_importance(cls, v: float) -> float:
        """Out-of-range importance is clamped to [0, 1], never rejected."""
        return max(0.0, min(1.0, v))

    @field_validator("metadata", mode="before")
    @classmethod
    def _coerce_metadata_none(cls, v: dict[str, Any] | None) -> dict[str, Any]:
        return v if v is not None else {}

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class TimeRange(BaseModel):
    """Inclusive bounds on a record's ``created_at``."""

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _bounds_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end


class MemoryQuery(BaseModel):
    """Filters for retrieve(); all given filters are AND-combined."""

    # Plain str so a kind outside the enum yields no hits instead of a validation error.
    kind: str | None = None
    min_importance: float | None = None
    time_range: TimeRange | None = None
    search_term: str | None = None
    limit: int = Field(default=policy.DEFAULT_RETRIEVE_LIMIT, ge=0)


class CapacityUsage(BaseModel):
    """Occupancy divided by configured capacity, per tier."""

    short_term: float = 0.0
    long_term: float = 0.0


class MemoryStats(BaseModel):
    """Snapshot of engine occupancy."""

    short_term_count: int = 0
    long_term_count: int = 0
    total_count: int = 0
    capacity_usage: CapacityUsage = Field(default_factory=CapacityUsage)


class ConsolidationReport(BaseModel):
    """Outcome of one consolidation pass."""

    promoted: int = 0
    skipped: int = 0
    evicted_short_term: int = 0
    evicted_long_term: int = 0
