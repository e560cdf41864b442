"""Quickstart examples for ghostscore.

This script walks through the main uses of ghostscore: scoring a
well-established agent, scoring a newcomer with thin evidence, watching
stale evidence lose influence, and serialising a report.

Run directly to verify your installation:

    python examples/quickstart.py

All examples use fictional agent data and require no external services.
"""

from __future__ import annotations

import datetime
import json

from ghostscore import (
    DEFAULT_CONFIG,
    GhostScoreEngine,
    GhostScoreReport,
    ScoringConfig,
    SourceScore,
    TierThresholds,
    sample_confidence,
)

NOW = datetime.datetime.now(datetime.UTC)


def _days_ago(days: float) -> datetime.datetime:
    return NOW - datetime.timedelta(days=days)


# ---------------------------------------------------------------------------
# Demo 1: Score an established agent
# ---------------------------------------------------------------------------


def demo_established_agent() -> GhostScoreReport:
    """Score an agent with strong, recent evidence in most categories."""
    print("\n" + "=" * 60)
    print("Demo 1: Established agent (expected tier: GOLD or better)")
    print("=" * 60)

    engine = GhostScoreEngine()
    build = DEFAULT_CONFIG.build_source

    sources = {
        # 1,240 settled payments, almost no disputes
        "payment_activity": build(
            "payment_activity",
            raw_score=9400,
            confidence=sample_confidence(1240),
            data_points=1240,
            last_updated=_days_ago(2),
        ),
        # Large stake locked for a long time
        "staking_commitment": build(
            "staking_commitment",
            raw_score=8200,
            confidence=0.95,
            data_points=1,
            last_updated=_days_ago(20),
        ),
        # Verified operator identity
        "credential_verifications": build(
            "credential_verifications",
            raw_score=9000,
            confidence=0.9,
            data_points=3,
            last_updated=_days_ago(120),
        ),
        "user_reviews": build(
            "user_reviews",
            raw_score=8700,
            confidence=sample_confidence(64),
            data_points=64,
            last_updated=_days_ago(5),
        ),
    }

    report = engine.report(sources, agent_id="settlement-bot-7", now=NOW)
    lower, upper = report.confidence

    print(f"\nScore            : {report.score}")
    print(f"Interval         : [{lower}, {upper}]  (width {report.width})")
    print(f"Tier             : {report.tier.value}")
    print(f"Badges           : {', '.join(b.value for b in report.badges) or '-'}")
    print(f"Repr             : {report!r}")
    return report


# ---------------------------------------------------------------------------
# Demo 2: Score a newcomer
# ---------------------------------------------------------------------------


def demo_newcomer() -> None:
    """Score an agent with a handful of observations.

    The point score can be high while the interval stays wide: few data
    points and low confidence mean the engine is unsure.
    """
    print("\n" + "=" * 60)
    print("Demo 2: Newcomer with thin evidence (expected: wide interval)")
    print("=" * 60)

    engine = GhostScoreEngine()
    sources = {
        "payment_activity": SourceScore(
            raw_score=9000,
            weight=0.30,
            confidence=sample_confidence(3),
            data_points=3,
            last_updated=_days_ago(1),
        ),
    }
    result = engine.score(sources, now=NOW)

    print(f"\nScore            : {result.score}")
    print(f"Interval         : [{result.lower}, {result.upper}]  (width {result.width})")
    print(f"Tier             : {engine.tier(result.score).value}")


# ---------------------------------------------------------------------------
# Demo 3: Freshness
# ---------------------------------------------------------------------------


def demo_decay() -> None:
    """Show the same payment history scored at increasing ages."""
    print("\n" + "=" * 60)
    print("Demo 3: Stale evidence loses influence")
    print("=" * 60)

    engine = GhostScoreEngine()
    reviews = SourceScore(
        raw_score=3000, weight=0.15, confidence=0.9, data_points=40, last_updated=NOW
    )

    print(f"\n{'Age (days)':>10}  {'Score':>6}  {'Tier':>9}")
    print("-" * 30)
    for age in (0, 15, 30, 60, 120, 365):
        payments = SourceScore(
            raw_score=9500,
            weight=0.30,
            confidence=0.95,
            data_points=400,
            last_updated=_days_ago(age),
        )
        result = engine.score(
            {"payment_activity": payments, "user_reviews": reviews}, now=NOW
        )
        print(f"{age:>10}  {result.score:>6}  {engine.tier(result.score).value:>9}")

    print("\nPayment evidence halves in influence every 30 days, down to a")
    print("floor of one tenth, so the review score gradually dominates.")


# ---------------------------------------------------------------------------
# Demo 4: Re-tiering and serialisation
# ---------------------------------------------------------------------------


def demo_serialization(report: GhostScoreReport) -> None:
    """Round-trip a report through JSON and re-tier it under new thresholds."""
    print("\n" + "=" * 60)
    print("Demo 4: Serialisation and re-tiering")
    print("=" * 60)

    payload = report.model_dump(mode="json")
    print("\nJSON (truncated):")
    print(json.dumps({k: payload[k] for k in ("agent_id", "score", "confidence", "tier")}))

    restored = GhostScoreReport.model_validate(payload)
    print(f"\nRound trip equal : {restored == report}")

    stricter = GhostScoreEngine(
        ScoringConfig(tiers=TierThresholds(gold=8500.0, platinum=9300.0, diamond=9800.0))
    )
    print(f"Canonical tier   : {report.tier.value}")
    print(f"Stricter tier    : {stricter.tier(restored.score).value}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run all quickstart demos in sequence."""
    print("ghostscore quickstart examples")
    print("=" * 60)

    report = demo_established_agent()
    demo_newcomer()
    demo_decay()
    demo_serialization(report)

    print("\n" + "=" * 60)
    print("All demos complete.")


if __name__ == "__main__":
    main()
