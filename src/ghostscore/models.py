"""Pydantic models for ghostscore."""

from __future__ import annotations

import datetime
import enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

#: Inclusive lower bound of every score produced by the engine.
SCORE_MIN: int = 0
#: Inclusive upper bound of every score produced by the engine.
SCORE_MAX: int = 10_000


def utc_now() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.UTC)


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Return *value* as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.UTC)
    return value.astimezone(datetime.UTC)


class SignalCategory(str, enum.Enum):
    """The eight canonical sources of trust evidence about an agent."""

    payment_activity = "payment_activity"
    staking_commitment = "staking_commitment"
    credential_verifications = "credential_verifications"
    user_reviews = "user_reviews"
    on_chain_activity = "on_chain_activity"
    governance_participation = "governance_participation"
    api_quality_metrics = "api_quality_metrics"
    endorsement_graph = "endorsement_graph"


class Tier(str, enum.Enum):
    """Ordered trust tiers, lowest first.

    Members compare by rank rather than by their string value, so
    ``Tier.GOLD < Tier.SILVER`` is ``False`` even though ``"GOLD" < "SILVER"``.
    """

    NEWCOMER = "NEWCOMER"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"

    @property
    def rank(self) -> int:
        """0-based position of this tier, NEWCOMER being 0."""
        return list(Tier).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank


class Badge(str, enum.Enum):
    """Achievement labels derived from a score report."""

    BRONZE_TIER = "BRONZE_TIER"
    SILVER_TIER = "SILVER_TIER"
    GOLD_TIER = "GOLD_TIER"
    PLATINUM_TIER = "PLATINUM_TIER"
    DIAMOND_TIER = "DIAMOND_TIER"
    TEN_JOBS = "TEN_JOBS"
    HUNDRED_JOBS = "HUNDRED_JOBS"
    THOUSAND_JOBS = "THOUSAND_JOBS"
    COMMITTED_STAKER = "COMMITTED_STAKER"
    MAJOR_STAKER = "MAJOR_STAKER"
    WHALE_STAKER = "WHALE_STAKER"
    PERFECT_PERFORMER = "PERFECT_PERFORMER"
    VERIFIED_AGENT = "VERIFIED_AGENT"


class SourceScore(BaseModel):
    """Summary of one signal category for one agent, supplied by the caller.

    ``time_decay_factor`` may be pre-computed by the caller or left as
    ``None``, in which case the engine derives it from ``last_updated`` and
    the category's half-life.

    Example::

        source = SourceScore(
            raw_score=8200,
            weight=0.30,
            confidence=0.95,
            data_points=140,
            last_updated=datetime.datetime(2026, 10, 1, tzinfo=datetime.UTC),
        )
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    raw_score: float = Field(
        ...,
        ge=SCORE_MIN,
        le=SCORE_MAX,
        description="The category's own trust estimate in [0, 10000]",
    )
    weight: float = Field(
        ..., ge=0.0, le=1.0, description="Static importance of the category in [0, 1]"
    )
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="How far the caller trusts raw_score, in [0, 1]",
    )
    data_points: int = Field(
        default=0, ge=0, description="Number of observations backing raw_score"
    )
    time_decay_factor: float | None = Field(
        default=None,
        ge=0.1,
        le=1.0,
        description="Freshness multiplier in [0.1, 1.0]; None to derive it",
    )
    last_updated: datetime.datetime = Field(
        default_factory=utc_now,
        description="Timestamp of the most recent observation",
    )

    @field_validator("last_updated")
    @classmethod
    def _normalise_timezone(cls, value: datetime.datetime) -> datetime.datetime:
        """Store every timestamp as aware UTC."""
        return as_utc(value)


class GhostScoreResult(BaseModel):
    """Aggregate score and its confidence interval."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    confidence: tuple[int, int] = Field(
        ..., description="(lower, upper) bounds around score, both in [0, 10000]"
    )

    @model_validator(mode="after")
    def interval_contains_score(self) -> GhostScoreResult:
        """Reject intervals that are out of range, inverted, or miss the score."""
        lower, upper = self.confidence
        if not SCORE_MIN <= lower <= self.score <= upper <= SCORE_MAX:
            raise ValueError(
                f"confidence interval ({lower}, {upper}) must satisfy "
                f"{SCORE_MIN} <= lower <= score ({self.score}) <= upper <= {SCORE_MAX}"
            )
        return self

    @property
    def lower(self) -> int:
        return self.confidence[0]

    @property
    def upper(self) -> int:
        return self.confidence[1]

    @property
    def width(self) -> int:
        """Distance between the interval bounds."""
        return self.confidence[1] - self.confidence[0]


class GhostScoreReport(GhostScoreResult):
    """Full scoring outcome for one agent: result, tier, badges and inputs."""

    agent_id: str = Field(..., description="Identifier of the scored agent")
    tier: Tier
    badges: list[Badge] = Field(default_factory=list)
    sources: dict[SignalCategory, SourceScore] = Field(
        default_factory=dict,
        description="Sources as scored, with decay factors filled in",
    )
    computed_at: datetime.datetime = Field(default_factory=utc_now)

    def result(self) -> GhostScoreResult:
        """Return the bare score/interval pair."""
        return GhostScoreResult(score=self.score, confidence=self.confidence)

    def __repr__(self) -> str:
        """Return a compact, human-readable representation.

        Example::

            GhostScoreReport(agent_id='agent-42', score=8125, tier='GOLD')
        """
        return (
            f"GhostScoreReport(agent_id={self.agent_id!r}, "
            f"score={self.score}, tier={self.tier.value!r})"
        )


__all__ = [
    "SCORE_MAX",
    "SCORE_MIN",
    "Badge",
    "GhostScoreReport",
    "GhostScoreResult",
    "SignalCategory",
    "SourceScore",
    "Tier",
    "as_utc",
    "utc_now",
]
