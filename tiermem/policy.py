"""Centralized policy constants for the tiered memory engine.

Every threshold the engine applies lives here so it can be promoted into
``MemoryCapabilities`` later without touching the algorithms.
"""

from __future__ import annotations

# -- Placement ---------------------------------------------------------------
LONG_TERM_IMPORTANCE = 0.7  # store(): importance >= this goes straight to long-term.

# -- Consolidation -----------------------------------------------------------
PROMOTION_IMPORTANCE = 0.6  # Short-term records at or above this are promoted.
PROMOTION_RETRIEVALS = 3  # ...or those returned by retrieve() at least this often.
CAPACITY_WATERMARK = 0.9  # Occupancy ratio above which a tier is rebalanced.

# -- Eviction ----------------------------------------------------------------
SHORT_TERM_EVICTION_FRACTION = 0.2  # Lowest-relevance share dropped from short-term.
LONG_TERM_EVICTION_FRACTION = 0.1  # Lowest-relevance share considered in long-term.
PROTECTED_IMPORTANCE = 0.5  # Long-term records at or above this are never evicted.

# -- Relevance scoring -------------------------------------------------------
IMPORTANCE_WEIGHT = 0.5
RECENCY_WEIGHT = 0.3
RETRIEVAL_WEIGHT = 0.2
RETRIEVAL_SATURATION = 10  # Retrieval count at which the frequency term maxes out.

# -- Retrieval ---------------------------------------------------------------
DEFAULT_RETRIEVE_LIMIT = 10
