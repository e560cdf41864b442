"""Scoring configuration for ghostscore.

Category weights, decay half-lives and tier thresholds are plain data held in
frozen pydantic models.  A :class:`ScoringConfig` is passed explicitly to every
operation; :data:`DEFAULT_CONFIG` carries the canonical values.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ghostscore.models import SCORE_MAX, SignalCategory, SourceScore, Tier

# Canonical weights may drift from 1.0 by this much (rounding in published tables).
_WEIGHT_SUM_TOLERANCE: float = 0.01


class CategoryWeights(BaseModel):
    """Static importance of each signal category.

    Weights must each lie in [0, 1], sum to 1.0 within ±0.01, and no category
    may outweigh ``payment_activity``.

    Example::

        weights = CategoryWeights(
            payment_activity=0.35,
            staking_commitment=0.15,
        )
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Primary signals: hard to fake.
    payment_activity: float = Field(default=0.30, ge=0.0, le=1.0)
    staking_commitment: float = Field(default=0.20, ge=0.0, le=1.0)
    credential_verifications: float = Field(default=0.15, ge=0.0, le=1.0)
    user_reviews: float = Field(default=0.15, ge=0.0, le=1.0)
    # Secondary signals.
    on_chain_activity: float = Field(default=0.10, ge=0.0, le=1.0)
    governance_participation: float = Field(default=0.05, ge=0.0, le=1.0)
    api_quality_metrics: float = Field(default=0.03, ge=0.0, le=1.0)
    # Tertiary.
    endorsement_graph: float = Field(default=0.02, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_are_balanced(self) -> CategoryWeights:
        """Reject tables that don't sum to 1.0 or that demote payment activity."""
        table = self.as_dict()
        total = sum(table.values())
        if abs(total - 1.0) > _WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"CategoryWeights must sum to 1.0 (±{_WEIGHT_SUM_TOLERANCE}), "
                f"but sum is {total:.6f}."
            )
        payment = table[SignalCategory.payment_activity]
        for category, weight in table.items():
            if weight > payment:
                raise ValueError(
                    f"Weight for {category.value} ({weight}) exceeds the "
                    f"payment_activity weight ({payment})."
                )
        return self

    def for_category(self, category: SignalCategory | str) -> float:
        """Return the weight for *category*."""
        return float(getattr(self, SignalCategory(category).value))

    def as_dict(self) -> dict[SignalCategory, float]:
        """Return the weight table keyed by category."""
        return {category: getattr(self, category.value) for category in SignalCategory}


class DecayHalfLives(BaseModel):
    """Per-category half-life, in days, of a signal's freshness.

    Durable commitments (credentials) fade slowly; volatile behaviour (API
    quality) fades fast.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    payment_activity: float = Field(default=30.0, gt=0.0)
    staking_commitment: float = Field(default=90.0, gt=0.0)
    credential_verifications: float = Field(default=365.0, gt=0.0)
    user_reviews: float = Field(default=60.0, gt=0.0)
    on_chain_activity: float = Field(default=45.0, gt=0.0)
    governance_participation: float = Field(default=30.0, gt=0.0)
    api_quality_metrics: float = Field(default=14.0, gt=0.0)
    endorsement_graph: float = Field(default=180.0, gt=0.0)

    def for_category(self, category: SignalCategory | str) -> float:
        """Return the half-life in days for *category*."""
        return float(getattr(self, SignalCategory(category).value))


class TierThresholds(BaseModel):
    """Inclusive lower score bound of each tier.

    ``newcomer`` must be 0 and the bounds must be strictly increasing.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    newcomer: float = Field(default=0.0, ge=0.0, le=SCORE_MAX)
    bronze: float = Field(default=2000.0, ge=0.0, le=SCORE_MAX)
    silver: float = Field(default=5000.0, ge=0.0, le=SCORE_MAX)
    gold: float = Field(default=7500.0, ge=0.0, le=SCORE_MAX)
    platinum: float = Field(default=9000.0, ge=0.0, le=SCORE_MAX)
    diamond: float = Field(default=9500.0, ge=0.0, le=SCORE_MAX)

    @model_validator(mode="after")
    def bounds_strictly_increase(self) -> TierThresholds:
        """Reject tables that don't start at 0 or that overlap."""
        if self.newcomer != 0.0:
            raise ValueError(f"NEWCOMER threshold must be 0, got {self.newcomer}.")
        bounds = self.bounds()
        for (low_tier, low), (high_tier, high) in zip(bounds, bounds[1:]):
            if high <= low:
                raise ValueError(
                    f"{high_tier.value} threshold ({high}) must be greater than "
                    f"{low_tier.value} threshold ({low})."
                )
        return self

    def for_tier(self, tier: Tier | str) -> float:
        """Return the inclusive lower bound of *tier*."""
        return float(getattr(self, Tier(tier).value.lower()))

    def bounds(self) -> list[tuple[Tier, float]]:
        """Return ``(tier, lower_bound)`` pairs, lowest tier first."""
        return [(tier, self.for_tier(tier)) for tier in Tier]


class IntervalSettings(BaseModel):
    """Parameters of the confidence interval estimate."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    max_half_width: float = Field(
        default=float(SCORE_MAX),
        gt=0.0,
        le=SCORE_MAX,
        description="Half-width before evidence narrows it; the width is twice this",
    )


class ScoringConfig(BaseModel):
    """Everything the engine needs besides the source map itself."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    weights: CategoryWeights = Field(default_factory=CategoryWeights)
    half_lives: DecayHalfLives = Field(default_factory=DecayHalfLives)
    tiers: TierThresholds = Field(default_factory=TierThresholds)
    interval: IntervalSettings = Field(default_factory=IntervalSettings)
    future_tolerance_seconds: float = Field(
        default=300.0,
        ge=0.0,
        description="How far last_updated may lie in the future before rejection",
    )

    def build_source(self, category: SignalCategory | str, **fields: Any) -> SourceScore:
        """Build a :class:`SourceScore`, filling ``weight`` from this config.

        Example::

            source = DEFAULT_CONFIG.build_source(
                "user_reviews", raw_score=7400, confidence=0.8, data_points=32
            )
        """
        fields.setdefault("weight", self.weights.for_category(category))
        return SourceScore(**fields)


DEFAULT_CONFIG: ScoringConfig = ScoringConfig()


def load_config(path: str | Path) -> ScoringConfig:
    """Load a :class:`ScoringConfig` from a JSON file.

    Sections missing from the document keep their defaults.  Malformed JSON or
    out-of-domain values raise :class:`ValueError` (``ValidationError`` for
    schema violations).
    """
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    return ScoringConfig.model_validate(data)


__all__ = [
    "DEFAULT_CONFIG",
    "CategoryWeights",
    "DecayHalfLives",
    "IntervalSettings",
    "ScoringConfig",
    "TierThresholds",
    "load_config",
]
