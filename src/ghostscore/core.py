"""Ghost score engine: the single entry point for scoring an agent."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from typing import Any

from ghostscore.aggregation import round_score, weighted_mean
from ghostscore.badges import compute_badges
from ghostscore.confidence import confidence_interval
from ghostscore.config import DEFAULT_CONFIG, ScoringConfig
from ghostscore.decay import resolve_sources
from ghostscore.models import (
    GhostScoreReport,
    GhostScoreResult,
    SignalCategory,
    SourceScore,
    Tier,
    as_utc,
    utc_now,
)
from ghostscore.tiers import classify_tier

logger = logging.getLogger(__name__)


class GhostScoreEngine:
    """Turn per-category trust signals into a score, interval and tier.

    The engine is stateless apart from its immutable
    :class:`~ghostscore.config.ScoringConfig`; one instance can be shared
    by any number of callers.

    :meth:`score` runs the pipeline decay -> aggregation -> confidence
    interval.  :meth:`tier` classifies a score on its own, so a stored score
    can be re-tiered without the source map.

    Example::

        engine = GhostScoreEngine()
        result = engine.score({
            "payment_activity": SourceScore(
                raw_score=9100, weight=0.30, confidence=0.97, data_points=240,
            ),
            "user_reviews": SourceScore(
                raw_score=8600, weight=0.15, confidence=0.80, data_points=31,
            ),
        })
        print(result.score, result.confidence, engine.tier(result.score))
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> ScoringConfig:
        """The configuration this engine scores with."""
        return self._config

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(
        self,
        sources: Mapping[Any, SourceScore],
        *,
        now: datetime.datetime | None = None,
    ) -> GhostScoreResult:
        """Score *sources* and return the score with its confidence interval.

        Args:
            sources: Category -> :class:`~ghostscore.models.SourceScore`
                mapping covering any subset of the eight categories.
            now: Reference time for decay.  Defaults to the current UTC time.

        Returns:
            A :class:`~ghostscore.models.GhostScoreResult`.

        Raises:
            ValueError: On an unknown category, an invalid source or a
                far-future ``last_updated``.
        """
        current = as_utc(now) if now is not None else utc_now()
        resolved = resolve_sources(sources, self._config, now=current)
        return self._score_resolved(resolved, current)

    def tier(self, score: float) -> Tier:
        """Return the tier of *score* under this engine's thresholds."""
        return classify_tier(score, self._config.tiers)

    def report(
        self,
        sources: Mapping[Any, SourceScore],
        *,
        agent_id: str = "unknown",
        now: datetime.datetime | None = None,
    ) -> GhostScoreReport:
        """Score *sources* and bundle the result with tier, badges and inputs.

        Args:
            sources: Category -> source mapping, as for :meth:`score`.
            agent_id: Identifier of the agent being scored.
            now: Reference time for decay and the report timestamp.

        Returns:
            A :class:`~ghostscore.models.GhostScoreReport`.
        """
        current = as_utc(now) if now is not None else utc_now()
        resolved = resolve_sources(sources, self._config, now=current)
        result = self._score_resolved(resolved, current)
        tier = self.tier(result.score)

        return GhostScoreReport(
            agent_id=agent_id,
            score=result.score,
            confidence=result.confidence,
            tier=tier,
            badges=compute_badges(tier, resolved),
            sources=resolved,
            computed_at=current,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _score_resolved(
        self,
        resolved: dict[SignalCategory, SourceScore],
        now: datetime.datetime,
    ) -> GhostScoreResult:
        score = round_score(weighted_mean(resolved.values()))
        interval = confidence_interval(resolved, self._config, score=score, now=now)
        logger.debug(
            "Scored %d source(s): score=%d interval=%s",
            len(resolved),
            score,
            interval,
        )
        return GhostScoreResult(score=score, confidence=interval)


__all__ = ["GhostScoreEngine"]
