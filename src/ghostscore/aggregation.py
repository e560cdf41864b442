"""Weighted aggregation of per-category source scores."""

from __future__ import annotations

import datetime
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from ghostscore.config import DEFAULT_CONFIG, ScoringConfig
from ghostscore.decay import resolve_sources
from ghostscore.models import SCORE_MAX, SCORE_MIN, SourceScore

logger = logging.getLogger(__name__)


def effective_weight(source: SourceScore) -> float:
    """Return ``weight * confidence * time_decay_factor`` for *source*.

    Raises:
        ValueError: If the decay factor has not been resolved yet.
    """
    return source.weight * source.confidence * _decay_of(source)


def aggregate(
    sources: Mapping[Any, SourceScore],
    config: ScoringConfig | None = None,
    *,
    now: datetime.datetime | None = None,
) -> float:
    """Combine *sources* into one score in [0, 10000].

    The score is the mean of ``raw_score`` weighted by each source's
    :func:`effective_weight`.  Only present categories enter the denominator,
    so partial evidence is not diluted by missing categories.  There is no
    outlier rejection: a dissenting category is absorbed by the mean and the
    result always lies between the smallest and largest contributing raw
    score.

    An empty map, or one where every effective weight is zero, scores 0.0.

    Args:
        sources: Category -> source mapping.  Missing decay factors are
            derived from ``last_updated`` using *config*'s half-lives.
        config: Scoring configuration.  Defaults to :data:`DEFAULT_CONFIG`.
        now: Reference time for decay.  Defaults to the current UTC time.

    Returns:
        The weighted mean, unrounded.
    """
    resolved = resolve_sources(sources, config or DEFAULT_CONFIG, now=now)
    return weighted_mean(resolved.values())


def weighted_mean(sources: Iterable[SourceScore]) -> float:
    """Return the effective-weight mean of already-resolved *sources*."""
    weighted_score_sum = 0.0
    total_effective_weight = 0.0

    for source in sources:
        w = effective_weight(source)
        weighted_score_sum += source.raw_score * w
        total_effective_weight += w

    if total_effective_weight == 0.0:
        logger.debug("No source carries effective weight; aggregate is 0.")
        return 0.0

    return _clamp(weighted_score_sum / total_effective_weight)


def round_score(value: float) -> int:
    """Round *value* half-up to an integer score."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Private math helpers
# ---------------------------------------------------------------------------


def _decay_of(source: SourceScore) -> float:
    """Return the resolved ``time_decay_factor`` of *source*."""
    if source.time_decay_factor is None:
        raise ValueError(
            "time_decay_factor is unresolved; pass the source through "
            "resolve_sources() first."
        )
    return source.time_decay_factor


def _clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    """Clamp *value* to [*low*, *high*]."""
    return float(max(low, min(high, value)))


__all__ = ["aggregate", "effective_weight", "round_score", "weighted_mean"]
