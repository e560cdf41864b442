"""Time decay of trust signals.

A signal loses half of its weight every ``half_life_days`` but never drops
below :data:`DECAY_FLOOR`: stale evidence is weak evidence, not no evidence.
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Mapping
from typing import Any

from ghostscore.config import ScoringConfig
from ghostscore.models import SignalCategory, SourceScore, as_utc, utc_now

#: Smallest decay factor ever returned.
DECAY_FLOOR: float = 0.1

_SECONDS_PER_DAY: float = 86_400.0


def decay_factor(
    last_updated: datetime.datetime,
    half_life_days: float,
    *,
    now: datetime.datetime | None = None,
    future_tolerance_seconds: float = 300.0,
) -> float:
    """Return the freshness multiplier of a signal last seen at *last_updated*.

    ``factor = max(0.1, 0.5 ** (age_days / half_life_days))``.  Timestamps up
    to *future_tolerance_seconds* ahead of *now* count as age zero.

    Args:
        last_updated: Time of the most recent observation.  Naive values are
            taken as UTC.
        half_life_days: Age, in days, at which the factor reaches 0.5.
        now: Reference time.  Defaults to the current UTC time.
        future_tolerance_seconds: Allowed clock skew for future timestamps.

    Returns:
        A value in [0.1, 1.0], non-increasing in age.

    Raises:
        ValueError: If *half_life_days* is not a positive finite number, or if
            *last_updated* lies further in the future than the tolerance.
    """
    if not math.isfinite(half_life_days) or half_life_days <= 0:
        raise ValueError(
            f"half_life_days must be a positive finite number, got {half_life_days!r}."
        )
    age_days = _age_days(last_updated, now, future_tolerance_seconds)
    return max(DECAY_FLOOR, 0.5 ** (age_days / half_life_days))


def resolve_sources(
    sources: Mapping[Any, SourceScore | Mapping[str, Any]],
    config: ScoringConfig,
    *,
    now: datetime.datetime | None = None,
) -> dict[SignalCategory, SourceScore]:
    """Validate a caller's source map and fill in missing decay factors.

    Keys are normalised to :class:`~ghostscore.models.SignalCategory`; values
    may be :class:`~ghostscore.models.SourceScore` instances or plain mappings
    of their fields.  Every ``last_updated`` that feeds the decay, or that the
    caller set explicitly, is checked against the configured future
    tolerance.  Pre-computed ``time_decay_factor`` values are kept, and a
    defaulted ``last_updated`` next to one is ignored.

    Raises:
        ValueError: On an unknown category, an invalid source, or a
            far-future timestamp.
    """
    current = as_utc(now) if now is not None else utc_now()
    resolved: dict[SignalCategory, SourceScore] = {}
    for key, value in sources.items():
        category = _as_category(key)
        source = value if isinstance(value, SourceScore) else SourceScore.model_validate(value)
        if source.time_decay_factor is None:
            factor = decay_factor(
                source.last_updated,
                config.half_lives.for_category(category),
                now=current,
                future_tolerance_seconds=config.future_tolerance_seconds,
            )
            source = source.model_copy(update={"time_decay_factor": factor})
        elif "last_updated" in source.model_fields_set:
            _age_days(source.last_updated, current, config.future_tolerance_seconds)
        resolved[category] = source
    return resolved


def sample_confidence(count: int, midpoint: float = 25.0, scale: float = 10.0) -> float:
    """Return a logistic confidence value for *count* observations.

    ``1 / (1 + exp(-(count - midpoint) / scale))``: about 0.5 at *midpoint*
    observations, approaching 1.0 beyond it.  Zero or negative counts give 0.0.
    Intended for callers deriving ``SourceScore.confidence`` from sample size.

    Raises:
        ValueError: If *scale* is not positive.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale!r}.")
    if count <= 0:
        return 0.0
    exponent = -(count - midpoint) / scale
    if exponent > 700.0:
        # math.exp overflows past ~709.
        return 0.0
    return 1.0 / (1.0 + math.exp(exponent))


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _age_days(
    last_updated: datetime.datetime,
    now: datetime.datetime | None,
    future_tolerance_seconds: float,
) -> float:
    """Return the non-negative age of *last_updated* in days."""
    current = as_utc(now) if now is not None else utc_now()
    age_seconds = (current - as_utc(last_updated)).total_seconds()
    if age_seconds < -future_tolerance_seconds:
        raise ValueError(
            f"last_updated {as_utc(last_updated).isoformat()} is "
            f"{-age_seconds:.0f}s in the future (tolerance "
            f"{future_tolerance_seconds:.0f}s)."
        )
    return max(0.0, age_seconds) / _SECONDS_PER_DAY


def _as_category(key: Any) -> SignalCategory:
    """Return *key* as a :class:`SignalCategory` or raise ``ValueError``."""
    try:
        return SignalCategory(key)
    except ValueError:
        known = ", ".join(category.value for category in SignalCategory)
        raise ValueError(
            f"Unknown signal category {key!r}; expected one of: {known}."
        ) from None


__all__ = ["DECAY_FLOOR", "decay_factor", "resolve_sources", "sample_confidence"]
