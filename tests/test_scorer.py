"""Tests for the relevance scorer."""

from __future__ import annotations

from datetime import timedelta

import pytest

from tests.fake_clock import EPOCH
from tiermem.models import MemoryKind, MemoryRecord, ScoreWeights
from tiermem.scorer import RelevanceScorer, hours_since, relevance_score


def _record(importance: float = 0.5, hours_old: float = 0.0, retrievals: int = 0) -> MemoryRecord:
    return MemoryRecord(
        kind=MemoryKind.EPISODIC,
        importance=importance,
        created_at=EPOCH - timedelta(hours=hours_old),
        retrieval_count=retrievals,
    )


def test_hours_since_fractional() -> None:
    assert hours_since(EPOCH - timedelta(minutes=90), EPOCH) == pytest.approx(1.5)


def test_hours_since_never_negative() -> None:
    assert hours_since(EPOCH + timedelta(hours=2), EPOCH) == 0.0


def test_fresh_record_score() -> None:
    """A brand-new unretrieved record scores 0.5*importance + 0.3."""
    assert relevance_score(_record(importance=1.0), EPOCH) == pytest.approx(0.8)
    assert relevance_score(_record(importance=0.0), EPOCH) == pytest.approx(0.3)


def test_recency_decays_with_age() -> None:
    # One hour old: recency = 1 / (1 + 1) = 0.5
    assert relevance_score(_record(importance=0.4, hours_old=1), EPOCH) == pytest.approx(0.2 + 0.15)
    # Three hours old: recency = 0.25
    assert relevance_score(_record(importance=0.4, hours_old=3), EPOCH) == pytest.approx(0.2 + 0.075)


def test_retrieval_term_saturates() -> None:
    base = relevance_score(_record(importance=0.0), EPOCH)
    assert relevance_score(_record(importance=0.0, retrievals=5), EPOCH) == pytest.approx(base + 0.1)
    assert relevance_score(_record(importance=0.0, retrievals=10), EPOCH) == pytest.approx(base + 0.2)
    assert relevance_score(_record(importance=0.0, retrievals=40), EPOCH) == pytest.approx(base + 0.2)


def test_score_is_deterministic() -> None:
    record = _record(importance=0.6, hours_old=5, retrievals=2)
    assert relevance_score(record, EPOCH) == relevance_score(record, EPOCH)
    assert record.retrieval_count == 2


def test_custom_weights() -> None:
    scorer = RelevanceScorer(ScoreWeights(importance=1.0, recency=0.0, retrieval=0.0))
    assert scorer.score(_record(importance=0.37, hours_old=12), EPOCH) == pytest.approx(0.37)


def test_rank_descending() -> None:
    scorer = RelevanceScorer()
    low, high, mid = _record(0.1), _record(0.9), _record(0.5)
    assert scorer.rank([low, high, mid], EPOCH) == [high, mid, low]


def test_rank_ascending() -> None:
    scorer = RelevanceScorer()
    low, high, mid = _record(0.1), _record(0.9), _record(0.5)
    assert scorer.rank([low, high, mid], EPOCH, descending=False) == [low, mid, high]


def test_rank_ties_keep_enumeration_order() -> None:
    scorer = RelevanceScorer()
    records = [_record(0.5) for _ in range(5)]
    assert scorer.rank(records, EPOCH) == records
    assert scorer.rank(records, EPOCH, descending=False) == records
