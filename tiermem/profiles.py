"""Capability profiles for the agent types that own a memory engine."""

from __future__ import annotations

from tiermem.models import MemoryCapabilities, MemoryKind, RetrievalMethod

PROFILES: dict[str, MemoryCapabilities] = {
    "default": MemoryCapabilities(),
    # Security monitoring: long threat history, incidents must never be forgotten.
    "guardian": MemoryCapabilities(
        short_term_capacity=100,
        long_term_capacity=2000,
        can_forget=False,
    ),
    # Ethical review: past decisions must stay on record.
    "ethics": MemoryCapabilities(
        short_term_capacity=50,
        long_term_capacity=1000,
        can_forget=False,
    ),
    # Local example for research-style agents that may forget; not taken from an existing agent.
    "explorer": MemoryCapabilities(
        short_term_capacity=100,
        long_term_capacity=500,
        can_forget=True,
        supported_kinds=(MemoryKind.EPISODIC, MemoryKind.SEMANTIC),
        retrieval_methods=(RetrievalMethod.EXACT, RetrievalMethod.TEMPORAL),
    ),
}


def get_profile(name: str) -> MemoryCapabilities:
    """Return the named profile; raises KeyError listing known names."""
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"unknown memory profile {name!r}; known: {', '.join(sorted(PROFILES))}") from None
