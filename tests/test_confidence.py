"""Tests for ghostscore.confidence."""

from __future__ import annotations

import datetime
import math
from collections.abc import Callable

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from ghostscore.aggregation import effective_weight
from ghostscore.config import IntervalSettings, ScoringConfig
from ghostscore.confidence import (
    aggregate_confidence,
    confidence_interval,
    evidence_volume,
    interval_width,
)
from ghostscore.models import SignalCategory, SourceScore

FROZEN_NOW = datetime.datetime(2026, 10, 18, 12, 0, tzinfo=datetime.UTC)

SourceFactory = Callable[..., SourceScore]


def _single(
    confidence: float = 1.0, data_points: int = 100, raw_score: float = 5000.0
) -> dict[SignalCategory, SourceScore]:
    return {
        SignalCategory.payment_activity: SourceScore(
            raw_score=raw_score,
            weight=0.3,
            confidence=confidence,
            data_points=data_points,
            time_decay_factor=1.0,
            last_updated=FROZEN_NOW,
        )
    }


def _width(interval: tuple[int, int]) -> int:
    return interval[1] - interval[0]


# ===========================================================================
# Degenerate inputs
# ===========================================================================


class TestNoEvidence:
    """Without usable evidence the interval spans the whole range."""

    def test_empty_map_is_full_range(self) -> None:
        assert confidence_interval({}) == (0, 10_000)

    def test_zero_confidence_is_full_range(self) -> None:
        assert confidence_interval(_single(confidence=0.0), now=FROZEN_NOW) == (0, 10_000)

    def test_zero_weight_is_full_range(self, make_source: SourceFactory) -> None:
        sources = {SignalCategory.user_reviews: make_source(7000, 0.0, 1.0)}
        assert confidence_interval(sources, now=FROZEN_NOW) == (0, 10_000)


# ===========================================================================
# Interval shape
# ===========================================================================


class TestIntervalShape:
    """Exact values and bounds of the interval."""

    def test_hand_computed_interval(self) -> None:
        # W = round(2 * 10000 / sqrt(1 + 1.0 * 100)) = 1990, split evenly at 5000
        assert confidence_interval(_single(), now=FROZEN_NOW) == (4005, 5995)

    def test_zero_data_points_is_max_width(self) -> None:
        lower, upper = confidence_interval(_single(data_points=0), now=FROZEN_NOW)
        assert (lower, upper) == (0, 10_000)

    def test_bounds_clamped_at_top(self) -> None:
        lower, upper = confidence_interval(
            _single(raw_score=9900.0, data_points=3), now=FROZEN_NOW
        )
        assert upper == 10_000
        assert lower < 9900

    def test_bounds_clamped_at_bottom(self) -> None:
        lower, upper = confidence_interval(
            _single(raw_score=100.0, data_points=3), now=FROZEN_NOW
        )
        assert lower == 0
        assert upper > 100

    def test_narrower_max_half_width(self) -> None:
        config = ScoringConfig(interval=IntervalSettings(max_half_width=1000.0))
        lower, upper = confidence_interval(_single(), config, now=FROZEN_NOW)
        # W = round(2 * 1000 / sqrt(101)) = 199; lower = round(5000 - 99.5)
        assert (lower, upper) == (4901, 5100)

    def test_explicit_score_sets_the_split(self) -> None:
        lower, upper = confidence_interval(_single(), score=6000.0, now=FROZEN_NOW)
        # Width 1990 split 60/40 below and above the score.
        assert (lower, upper) == (4806, 6796)

    @pytest.mark.parametrize("score", [-1.0, 10_000.5, math.nan])
    def test_invalid_score_raises(self, score: float) -> None:
        with pytest.raises(ValueError, match="score must lie"):
            confidence_interval(_single(), score=score, now=FROZEN_NOW)

    def test_unknown_category_raises(self, make_source: SourceFactory) -> None:
        with pytest.raises(ValueError):
            confidence_interval({"karma": make_source(100)}, now=FROZEN_NOW)


# ===========================================================================
# Monotonicity
# ===========================================================================


class TestWidthMonotonicity:
    """More or better evidence never widens the interval."""

    def test_low_confidence_wider_than_high_confidence(self) -> None:
        low = confidence_interval(_single(confidence=0.2, data_points=5), now=FROZEN_NOW)
        high = confidence_interval(_single(confidence=0.95, data_points=200), now=FROZEN_NOW)
        assert _width(low) > _width(high)

    @given(
        a=st.floats(min_value=0.01, max_value=1.0, allow_nan=False),
        b=st.floats(min_value=0.01, max_value=1.0, allow_nan=False),
        data_points=st.integers(min_value=0, max_value=10_000),
    )
    def test_property_width_non_increasing_in_confidence(
        self, a: float, b: float, data_points: int
    ) -> None:
        low, high = sorted((a, b))
        wide = confidence_interval(_single(low, data_points), now=FROZEN_NOW)
        narrow = confidence_interval(_single(high, data_points), now=FROZEN_NOW)
        assert _width(narrow) <= _width(wide)

    @given(
        a=st.integers(min_value=0, max_value=100_000),
        b=st.integers(min_value=0, max_value=100_000),
        confidence=st.floats(min_value=0.01, max_value=1.0, allow_nan=False),
    )
    def test_property_width_non_increasing_in_data_points(
        self, a: int, b: int, confidence: float
    ) -> None:
        fewer, more = sorted((a, b))
        wide = confidence_interval(_single(confidence, fewer), now=FROZEN_NOW)
        narrow = confidence_interval(_single(confidence, more), now=FROZEN_NOW)
        assert _width(narrow) <= _width(wide)

    def test_second_agreeing_source_narrows(self, make_source: SourceFactory) -> None:
        one = {SignalCategory.payment_activity: make_source(6000, 0.3, 0.8, 20)}
        two = dict(one)
        two[SignalCategory.user_reviews] = make_source(6000, 0.15, 0.8, 20)
        assert _width(confidence_interval(two, now=FROZEN_NOW)) < _width(
            confidence_interval(one, now=FROZEN_NOW)
        )

    @pytest.mark.parametrize("high_raw", [10_000.0, 9000.0])
    def test_doubting_a_high_scorer_never_narrows(
        self, make_source: SourceFactory, high_raw: float
    ) -> None:
        # Less confidence pulls the score towards the middle of the range;
        # the width must not shrink with it.
        def interval(confidence: float) -> tuple[int, int]:
            sources = {
                SignalCategory.payment_activity: make_source(0, 0.3, 1.0, 3),
                SignalCategory.user_reviews: make_source(high_raw, 0.3, confidence, 0),
            }
            return confidence_interval(sources, now=FROZEN_NOW)

        assert _width(interval(0.01)) >= _width(interval(1.0))

    def test_doubting_one_source_widens_multi_source_interval(
        self, make_source: SourceFactory
    ) -> None:
        sources = {
            SignalCategory.payment_activity: make_source(9500, 0.3, 1.0, 400),
            SignalCategory.user_reviews: make_source(2000, 0.15, 1.0, 400),
        }
        doubted = dict(sources)
        doubted[SignalCategory.user_reviews] = make_source(2000, 0.15, 0.1, 400)
        assert _width(confidence_interval(doubted, now=FROZEN_NOW)) > _width(
            confidence_interval(sources, now=FROZEN_NOW)
        )


# ===========================================================================
# Properties
# ===========================================================================


@st.composite
def _sources(draw: st.DrawFn) -> dict[SignalCategory, SourceScore]:
    categories = draw(
        st.lists(st.sampled_from(list(SignalCategory)), min_size=1, max_size=8, unique=True)
    )
    return {
        category: SourceScore(
            raw_score=draw(st.floats(min_value=0.0, max_value=10_000.0, allow_nan=False)),
            weight=draw(st.floats(min_value=0.0, max_value=1.0, allow_nan=False)),
            confidence=draw(st.floats(min_value=0.0, max_value=1.0, allow_nan=False)),
            data_points=draw(st.integers(min_value=0, max_value=10_000)),
            time_decay_factor=draw(st.floats(min_value=0.1, max_value=1.0, allow_nan=False)),
            last_updated=FROZEN_NOW,
        )
        for category in categories
    }


class TestIntervalProperties:
    @given(sources=_sources(), score=st.floats(min_value=0.0, max_value=10_000.0))
    def test_property_bounds_contain_rounded_score(
        self, sources: dict[SignalCategory, SourceScore], score: float
    ) -> None:
        lower, upper = confidence_interval(sources, score=score, now=FROZEN_NOW)
        centre = math.floor(score + 0.5)
        assert 0 <= lower <= upper <= 10_000
        assert lower <= centre <= upper

    @given(sources=_sources(), data=st.data())
    def test_property_lowering_one_confidence_never_narrows(
        self, sources: dict[SignalCategory, SourceScore], data: st.DataObject
    ) -> None:
        category = data.draw(st.sampled_from(sorted(sources)))
        factor = data.draw(st.floats(min_value=0.0, max_value=1.0))
        source = sources[category]
        lowered = dict(sources)
        lowered[category] = source.model_copy(
            update={"confidence": source.confidence * factor}
        )
        before = confidence_interval(sources, now=FROZEN_NOW)
        after = confidence_interval(lowered, now=FROZEN_NOW)
        assert _width(after) >= _width(before)

    @given(sources=_sources(), data=st.data())
    def test_property_fewer_data_points_never_narrows(
        self, sources: dict[SignalCategory, SourceScore], data: st.DataObject
    ) -> None:
        category = data.draw(st.sampled_from(sorted(sources)))
        source = sources[category]
        fewer = data.draw(st.integers(min_value=0, max_value=source.data_points))
        lowered = dict(sources)
        lowered[category] = source.model_copy(update={"data_points": fewer})
        before = confidence_interval(sources, now=FROZEN_NOW)
        after = confidence_interval(lowered, now=FROZEN_NOW)
        assert _width(after) >= _width(before)

    @given(
        sources=_sources(),
        a=st.floats(min_value=0.0, max_value=10_000.0),
        b=st.floats(min_value=0.0, max_value=10_000.0),
    )
    def test_property_width_independent_of_score(
        self, sources: dict[SignalCategory, SourceScore], a: float, b: float
    ) -> None:
        assume(sum(effective_weight(source) for source in sources.values()) > 0.0)
        expected = interval_width(sources.values(), 10_000.0)
        assert _width(confidence_interval(sources, score=a, now=FROZEN_NOW)) == expected
        assert _width(confidence_interval(sources, score=b, now=FROZEN_NOW)) == expected


# ===========================================================================
# aggregate_confidence / evidence_volume
# ===========================================================================


class TestEvidenceSummaries:
    def test_aggregate_confidence_weighted_by_weight_and_decay(
        self, make_source: SourceFactory
    ) -> None:
        sources = [
            make_source(5000, 0.3, 1.0, 10, 1.0),
            make_source(5000, 0.1, 0.2, 10, 0.5),
        ]
        # (1.0*0.3 + 0.2*0.05) / 0.35
        assert abs(aggregate_confidence(sources) - 0.31 / 0.35) < 1e-12

    def test_aggregate_confidence_of_nothing_is_zero(self) -> None:
        assert aggregate_confidence([]) == 0.0

    def test_evidence_volume_skips_weightless_sources(
        self, make_source: SourceFactory
    ) -> None:
        sources = [
            make_source(5000, 0.3, 1.0, 40),
            make_source(5000, 0.0, 1.0, 1000),
            make_source(5000, 0.1, 0.0, 7),
        ]
        assert evidence_volume(sources) == 47

    def test_unresolved_source_raises(self) -> None:
        source = SourceScore(raw_score=1.0, weight=0.3, confidence=1.0)
        with pytest.raises(ValueError, match="unresolved"):
            evidence_volume([source])
