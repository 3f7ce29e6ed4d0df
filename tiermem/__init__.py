"""Tiered experiential memory: short-term/long-term storage with relevance-based forgetting."""

from tiermem.config import MemorySettings, build_engine
from tiermem.engine import MemoryEngine
from tiermem.errors import CapacityExceededError, MemoryEngineError, UnsupportedKindError
from tiermem.models import (
    CapacityUsage,
    ConsolidationReport,
    MemoryCapabilities,
    MemoryKind,
    MemoryQuery,
    MemoryRecord,
    MemoryStats,
    RetrievalMethod,
    ScoreWeights,
    Tier,
    TimeRange,
)
from tiermem.profiles import PROFILES, get_profile
from tiermem.scorer import RelevanceScorer, relevance_score

__all__ = [
    "PROFILES",
    "CapacityExceededError",
    "CapacityUsage",
    "ConsolidationReport",
    "MemoryCapabilities",
    "MemoryEngine",
    "MemoryEngineError",
    "MemoryKind",
    "MemorySettings",
    "MemoryQuery",
    "MemoryRecord",
    "MemoryStats",
    "RetrievalMethod",
    "ScoreWeights",
    "RelevanceScorer",
    "Tier",
    "TimeRange",
    "UnsupportedKindError",
    "build_engine",
    "get_profile",
    "relevance_score",
]
