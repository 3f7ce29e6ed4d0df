"""Exceptions raised by the memory engine."""

from __future__ import annotations


class MemoryEngineError(Exception):
    """Base class for memory engine failures."""


class CapacityExceededError(MemoryEngineError):
    """Raised when a tier is full and nothing in it may be evicted."""

    def __init__(self, tier: str, capacity: int) -> None:
        self.tier = tier
        self.capacity = capacity
        super().__init__(f"{tier} memory is full (capacity={capacity}) and no record can be evicted")


class UnsupportedKindError(MemoryEngineError, ValueError):
    """Raised when storing a memory kind the engine was not configured for."""

    def __init__(self, kind: str, supported: list[str]) -> None:
        self.kind = kind
        self.supported = supported
        super().__init__(f"unsupported memory kind {kind!r}; supported: {', '.join(supported)}")
