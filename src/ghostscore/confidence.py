"""Confidence interval around the aggregate score.

The evidence half-width is

    H = max_half_width / sqrt(1 + C * N)

where ``C`` is the mean per-source confidence weighted by ``weight *
time_decay_factor`` and ``N`` is the total ``data_points`` of the sources
carrying weight.  The interval width is ``W = round(min(10000, 2 * H))``.

``W`` is split around the score in proportion to the room on each side:

    lower = round(score - score * W / 10000)
    upper = lower + W

so the bounds never leave [0, 10000] and the width depends on the evidence
alone, not on where the score sits.  ``H`` never grows when any confidence or
data-point count grows, so thinner evidence never yields a narrower interval.
With no usable evidence the interval is the full range (0, 10000).
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Iterable, Mapping
from typing import Any

from ghostscore.aggregation import _decay_of, effective_weight, round_score, weighted_mean
from ghostscore.config import DEFAULT_CONFIG, ScoringConfig
from ghostscore.decay import resolve_sources
from ghostscore.models import SCORE_MAX, SCORE_MIN, SourceScore

_FULL_RANGE: tuple[int, int] = (SCORE_MIN, SCORE_MAX)


def confidence_interval(
    sources: Mapping[Any, SourceScore],
    config: ScoringConfig | None = None,
    *,
    score: float | None = None,
    now: datetime.datetime | None = None,
) -> tuple[int, int]:
    """Return ``(lower, upper)`` bounds around the aggregate score.

    Args:
        sources: Category -> source mapping, as for
            :func:`~ghostscore.aggregation.aggregate`.
        config: Scoring configuration.  Defaults to :data:`DEFAULT_CONFIG`.
        score: Point score the interval must contain.  Computed from
            *sources* if omitted.
        now: Reference time for decay.  Defaults to the current UTC time.

    Returns:
        Integer bounds with ``0 <= lower <= round(score) <= upper <= 10000``.

    Raises:
        ValueError: If *score* lies outside [0, 10000].
    """
    cfg = config or DEFAULT_CONFIG
    resolved = list(resolve_sources(sources, cfg, now=now).values())

    if score is None:
        score = weighted_mean(resolved)
    elif math.isnan(score) or not SCORE_MIN <= score <= SCORE_MAX:
        raise ValueError(f"score must lie in [{SCORE_MIN}, {SCORE_MAX}], got {score!r}.")

    if sum(effective_weight(source) for source in resolved) == 0.0:
        return _FULL_RANGE

    point = round_score(score)
    width = interval_width(resolved, cfg.interval.max_half_width)
    lower = round_score(point - point * width / SCORE_MAX)
    # Float guards only; lower + width already stays in range.
    lower = max(SCORE_MIN, min(point, lower))
    upper = min(SCORE_MAX, max(point, lower + width))
    return lower, upper


def interval_width(sources: Iterable[SourceScore], max_half_width: float) -> int:
    """Return the integer interval width for resolved *sources*.

    Depends only on the evidence, never on the point score.
    """
    resolved = list(sources)
    confidence = aggregate_confidence(resolved)
    volume = evidence_volume(resolved)
    half_width = max_half_width / math.sqrt(1.0 + confidence * volume)
    return round_score(min(float(SCORE_MAX), 2.0 * half_width))


def aggregate_confidence(sources: Iterable[SourceScore]) -> float:
    """Return the mean confidence weighted by ``weight * time_decay_factor``.

    Sources with zero weight do not count.  Returns 0.0 when nothing does.
    """
    weighted_confidence = 0.0
    total_evidence_weight = 0.0
    for source in sources:
        w = _evidence_weight(source)
        weighted_confidence += source.confidence * w
        total_evidence_weight += w
    if total_evidence_weight == 0.0:
        return 0.0
    return weighted_confidence / total_evidence_weight


def evidence_volume(sources: Iterable[SourceScore]) -> int:
    """Return the total ``data_points`` of sources that carry any weight."""
    return sum(source.data_points for source in sources if _evidence_weight(source) > 0.0)


def _evidence_weight(source: SourceScore) -> float:
    """``weight * time_decay_factor``: the effective weight without confidence."""
    return source.weight * _decay_of(source)


__all__ = [
    "aggregate_confidence",
    "confidence_interval",
    "evidence_volume",
    "interval_width",
]
