"""Shared pytest fixtures for ghostscore tests."""

from __future__ import annotations

import datetime
from collections.abc import Callable

import pytest

from ghostscore.config import DEFAULT_CONFIG, ScoringConfig
from ghostscore.core import GhostScoreEngine
from ghostscore.models import SignalCategory, SourceScore

#: Fixed reference time so decay is deterministic.
FROZEN_NOW = datetime.datetime(2026, 10, 18, 12, 0, tzinfo=datetime.UTC)

SourceFactory = Callable[..., SourceScore]


# ---------------------------------------------------------------------------
# Clock / engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def now() -> datetime.datetime:
    """The fixed reference time used across tests."""
    return FROZEN_NOW


@pytest.fixture()
def config() -> ScoringConfig:
    """The canonical scoring configuration."""
    return DEFAULT_CONFIG


@pytest.fixture()
def engine(config: ScoringConfig) -> GhostScoreEngine:
    """GhostScoreEngine with the canonical configuration."""
    return GhostScoreEngine(config)


# ---------------------------------------------------------------------------
# Source builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_source(now: datetime.datetime) -> SourceFactory:
    """Factory for fresh sources with a pre-computed decay factor of 1.0.

    Positional order:
    ``(raw_score, weight, confidence, data_points, time_decay_factor)``.
    """

    def _make(
        raw_score: float,
        weight: float = 0.30,
        confidence: float = 1.0,
        data_points: int = 100,
        time_decay_factor: float | None = 1.0,
        last_updated: datetime.datetime | None = None,
    ) -> SourceScore:
        return SourceScore(
            raw_score=raw_score,
            weight=weight,
            confidence=confidence,
            data_points=data_points,
            time_decay_factor=time_decay_factor,
            last_updated=last_updated or now,
        )

    return _make


@pytest.fixture()
def perfect_sources(
    make_source: SourceFactory, config: ScoringConfig
) -> dict[SignalCategory, SourceScore]:
    """All eight categories at the maximum raw score with full confidence."""
    return {
        category: make_source(10_000, config.weights.for_category(category), 1.0, 100, 1.0)
        for category in SignalCategory
    }


@pytest.fixture()
def mixed_sources(
    make_source: SourceFactory, config: ScoringConfig
) -> dict[SignalCategory, SourceScore]:
    """A realistic agent: strong payments, partial coverage elsewhere."""
    w = config.weights
    return {
        SignalCategory.payment_activity: make_source(8000, w.payment_activity, 0.9, 50),
        SignalCategory.staking_commitment: make_source(6000, w.staking_commitment, 0.8, 10),
        SignalCategory.credential_verifications: make_source(
            7000, w.credential_verifications, 0.7, 5
        ),
        SignalCategory.user_reviews: make_source(5000, w.user_reviews, 0.6, 20),
        SignalCategory.on_chain_activity: make_source(5000, w.on_chain_activity, 0.5, 1),
        SignalCategory.governance_participation: make_source(
            0, w.governance_participation, 0.0, 0
        ),
        SignalCategory.api_quality_metrics: make_source(5000, w.api_quality_metrics, 0.5, 30),
        SignalCategory.endorsement_graph: make_source(0, w.endorsement_graph, 0.0, 0),
    }
