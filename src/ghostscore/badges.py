"""Achievement badges derived from a scored agent."""

from __future__ import annotations

from collections.abc import Mapping

from ghostscore.models import Badge, SignalCategory, SourceScore, Tier

# ---------------------------------------------------------------------------
# Badge thresholds
# ---------------------------------------------------------------------------

# Payment activity data points (completed jobs), highest first.
_JOB_MILESTONES: tuple[tuple[int, Badge], ...] = (
    (1000, Badge.THOUSAND_JOBS),
    (100, Badge.HUNDRED_JOBS),
    (10, Badge.TEN_JOBS),
)

# Staking commitment raw score, highest first.
_STAKING_LEVELS: tuple[tuple[float, Badge], ...] = (
    (8000.0, Badge.WHALE_STAKER),
    (5000.0, Badge.MAJOR_STAKER),
    (2000.0, Badge.COMMITTED_STAKER),
)

_PERFECT_PAYMENT_SCORE: float = 9900.0
_VERIFIED_MEAN_CONFIDENCE: float = 0.9

_TIER_BADGES: dict[Tier, Badge] = {
    Tier.BRONZE: Badge.BRONZE_TIER,
    Tier.SILVER: Badge.SILVER_TIER,
    Tier.GOLD: Badge.GOLD_TIER,
    Tier.PLATINUM: Badge.PLATINUM_TIER,
    Tier.DIAMOND: Badge.DIAMOND_TIER,
}


def compute_badges(tier: Tier, sources: Mapping[SignalCategory, SourceScore]) -> list[Badge]:
    """Return the badges earned by an agent in *tier* with *sources*.

    Rules:

    - one tier badge for every tier above NEWCOMER
    - the highest job milestone reached by payment-activity ``data_points``
      (10 / 100 / 1000)
    - the highest staking level reached by staking-commitment ``raw_score``
      (2000 / 5000 / 8000)
    - ``PERFECT_PERFORMER`` for a payment-activity ``raw_score`` of 9900+
    - ``VERIFIED_AGENT`` when the mean confidence of present sources is 0.9+

    Categories absent from *sources* earn nothing.
    """
    badges: list[Badge] = []

    tier_badge = _TIER_BADGES.get(tier)
    if tier_badge is not None:
        badges.append(tier_badge)

    payment = sources.get(SignalCategory.payment_activity)
    if payment is not None:
        for minimum, badge in _JOB_MILESTONES:
            if payment.data_points >= minimum:
                badges.append(badge)
                break

    staking = sources.get(SignalCategory.staking_commitment)
    if staking is not None:
        for minimum_score, badge in _STAKING_LEVELS:
            if staking.raw_score >= minimum_score:
                badges.append(badge)
                break

    if payment is not None and payment.raw_score >= _PERFECT_PAYMENT_SCORE:
        badges.append(Badge.PERFECT_PERFORMER)

    if sources:
        mean_confidence = sum(s.confidence for s in sources.values()) / len(sources)
        if mean_confidence >= _VERIFIED_MEAN_CONFIDENCE:
            badges.append(Badge.VERIFIED_AGENT)

    return badges


__all__ = ["compute_badges"]
