"""Score -> tier classification."""

from __future__ import annotations

import math

from ghostscore.config import DEFAULT_CONFIG, TierThresholds
from ghostscore.models import SCORE_MAX, SCORE_MIN, Tier


def classify_tier(score: float, thresholds: TierThresholds | None = None) -> Tier:
    """Return the tier *score* falls into.

    Each threshold is the inclusive lower bound of its tier, so a score equal
    to a threshold belongs to the higher tier (5000 is SILVER, 4999 BRONZE).

    Raises:
        ValueError: If *score* is NaN or outside [0, 10000].
    """
    if math.isnan(score) or not SCORE_MIN <= score <= SCORE_MAX:
        raise ValueError(f"score must lie in [{SCORE_MIN}, {SCORE_MAX}], got {score!r}.")
    table = thresholds or DEFAULT_CONFIG.tiers
    for tier, lower_bound in reversed(table.bounds()):
        if score >= lower_bound:
            return tier
    return Tier.NEWCOMER


__all__ = ["classify_tier"]
