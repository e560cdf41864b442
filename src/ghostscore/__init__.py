"""Ghostscore — reputation scoring for autonomous agents.

Public API::

    from ghostscore import (
        Badge,
        GhostScoreEngine,
        GhostScoreReport,
        GhostScoreResult,
        ScoringConfig,
        SignalCategory,
        SourceScore,
        Tier,
        # building blocks
        aggregate,
        classify_tier,
        compute_badges,
        confidence_interval,
        decay_factor,
        interval_width,
        resolve_sources,
        sample_confidence,
    )
"""

from ghostscore.aggregation import aggregate, effective_weight
from ghostscore.badges import compute_badges
from ghostscore.confidence import confidence_interval, interval_width
from ghostscore.config import (
    DEFAULT_CONFIG,
    CategoryWeights,
    DecayHalfLives,
    IntervalSettings,
    ScoringConfig,
    TierThresholds,
    load_config,
)
from ghostscore.core import GhostScoreEngine
from ghostscore.decay import decay_factor, resolve_sources, sample_confidence
from ghostscore.models import (
    SCORE_MAX,
    SCORE_MIN,
    Badge,
    GhostScoreReport,
    GhostScoreResult,
    SignalCategory,
    SourceScore,
    Tier,
)
from ghostscore.tiers import classify_tier

__version__ = "0.1.0"

__all__ = [
    # package metadata
    "__version__",
    # models
    "SCORE_MAX",
    "SCORE_MIN",
    "Badge",
    "GhostScoreReport",
    "GhostScoreResult",
    "SignalCategory",
    "SourceScore",
    "Tier",
    # config
    "DEFAULT_CONFIG",
    "CategoryWeights",
    "DecayHalfLives",
    "IntervalSettings",
    "ScoringConfig",
    "TierThresholds",
    "load_config",
    # engine
    "GhostScoreEngine",
    # building blocks
    "aggregate",
    "classify_tier",
    "compute_badges",
    "confidence_interval",
    "decay_factor",
    "effective_weight",
    "interval_width",
    "resolve_sources",
    "sample_confidence",
]
