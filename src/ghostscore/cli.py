"""CLI entry point for ghostscore."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from ghostscore.config import DEFAULT_CONFIG, ScoringConfig, load_config
from ghostscore.core import GhostScoreEngine
from ghostscore.models import GhostScoreReport, SignalCategory, SourceScore, Tier

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(package_name="ghostscore")
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for this run.",
)
def main(log_level: str) -> None:
    """Ghostscore — reputation scoring for autonomous agents.

    Use 'ghostscore --help' to see available sub-commands.
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# score
# ---------------------------------------------------------------------------


@main.command("score")
@click.option(
    "--sources",
    "sources_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="Path to a JSON object mapping signal categories to source fields.",
)
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="Path to a JSON ScoringConfig. Uses the canonical config if absent.",
)
@click.option(
    "--output",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
@click.option(
    "--agent-id",
    "agent_id",
    default=None,
    help="Override agent ID (defaults to the sources file name without suffix).",
)
def score_command(
    sources_file: str,
    config_file: str | None,
    output_format: str,
    agent_id: str | None,
) -> None:
    """Score an agent from a JSON file of per-category signals.

    The sources file maps category names to SourceScore fields:

    \b
      {
        "payment_activity": {"raw_score": 9100, "confidence": 0.97,
                             "data_points": 240,
                             "last_updated": "2026-10-01T00:00:00Z"},
        "user_reviews":     {"raw_score": 8600, "confidence": 0.8}
      }

    'weight' may be omitted and is then taken from the config.
    'time_decay_factor' may be omitted and is then derived from
    'last_updated' and the category's half-life.
    """
    sources_path = Path(sources_file)
    resolved_agent_id = agent_id or sources_path.stem

    try:
        config = _load_config(config_file)
        sources = _load_sources(sources_path, config)
        report = GhostScoreEngine(config).report(sources, agent_id=resolved_agent_id)
    except (OSError, ValueError) as exc:
        click.echo(click.style(f"error scoring agent: {exc}", fg="red"), err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(mode="json"), indent=2, default=str))
        return

    _print_report(report)


# ---------------------------------------------------------------------------
# tier
# ---------------------------------------------------------------------------


@main.command("tier")
@click.argument("score", type=float)
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="Path to a JSON ScoringConfig whose tier thresholds to use.",
)
def tier_command(score: float, config_file: str | None) -> None:
    """Print the tier a SCORE in [0, 10000] falls into."""
    try:
        config = _load_config(config_file)
        tier = GhostScoreEngine(config).tier(score)
    except (OSError, ValueError) as exc:
        click.echo(click.style(f"error classifying score: {exc}", fg="red"), err=True)
        sys.exit(1)

    click.echo(click.style(tier.value, fg=_tier_color(tier), bold=True))


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


@main.command("report")
@click.option(
    "--input",
    "input_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="Path to a report JSON file (produced by 'score --output json').",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    show_default=True,
    help="Output format for the report.",
)
def report_command(input_file: str, output_format: str) -> None:
    """Render a previously saved score report.

    Reads a report generated by 'score --output json' and formats it for
    human consumption or further processing.
    """
    try:
        raw: Any = json.loads(Path(input_file).read_text(encoding="utf-8"))
        report = GhostScoreReport.model_validate(raw)
    except (OSError, ValueError) as exc:
        click.echo(click.style(f"error loading report: {exc}", fg="red"), err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(mode="json"), indent=2, default=str))
    else:
        _print_report(report)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _load_config(config_file: str | None) -> ScoringConfig:
    """Load a ScoringConfig from a JSON file or return the canonical config."""
    if config_file is None:
        return DEFAULT_CONFIG
    return load_config(config_file)


def _load_sources(path: Path, config: ScoringConfig) -> dict[SignalCategory, SourceScore]:
    """Read a category -> fields JSON object and build SourceScores from it."""
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a JSON object, got {type(data).__name__}.")

    sources: dict[SignalCategory, SourceScore] = {}
    for key, fields in data.items():
        try:
            category = SignalCategory(key)
        except ValueError:
            raise ValueError(f"unknown signal category {key!r} in {path.name}") from None
        if not isinstance(fields, dict):
            raise ValueError(f"entry for {key!r} must be a JSON object.")
        sources[category] = config.build_source(category, **fields)
    return sources


def _print_report(report: GhostScoreReport) -> None:
    """Print a formatted score report to stdout."""
    lower, upper = report.confidence

    click.echo()
    click.echo(click.style("=" * 62, fg="cyan"))
    click.echo(click.style("  Ghostscore — Agent Reputation Report", fg="cyan", bold=True))
    click.echo(click.style("=" * 62, fg="cyan"))
    click.echo(f"  Agent ID   : {report.agent_id}")
    click.echo(f"  Computed   : {report.computed_at.isoformat()}")
    click.echo(
        "  Score      : "
        + click.style(
            f"{report.score}  (Tier: {report.tier.value})",
            fg=_tier_color(report.tier),
            bold=True,
        )
    )
    click.echo(f"  Interval   : [{lower}, {upper}]")
    if report.badges:
        click.echo(f"  Badges     : {', '.join(badge.value for badge in report.badges)}")
    click.echo(click.style("-" * 62, fg="cyan"))
    click.echo("  Sources:")
    click.echo()

    for category in SignalCategory:
        source = report.sources.get(category)
        if source is None:
            continue
        decay = source.time_decay_factor if source.time_decay_factor is not None else 1.0
        click.echo(
            f"  {category.value:26s} {source.raw_score:7.0f}  "
            + click.style(_score_bar(source.raw_score), fg=_score_color(source.raw_score))
        )
        click.echo(
            click.style(
                f"      weight={source.weight:.2f}  conf={source.confidence:.2f}  "
                f"decay={decay:.2f}  points={source.data_points}",
                fg="bright_black",
            )
        )

    click.echo()
    click.echo(click.style("=" * 62, fg="cyan"))
    click.echo()


def _score_bar(score: float, width: int = 20) -> str:
    """Return a simple ASCII bar representing a 0-10000 *score*."""
    filled = round(score / 10_000 * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _score_color(score: float) -> str:
    """Return a click color name based on a 0-10000 score."""
    if score >= 7500:
        return "bright_green"
    if score >= 5000:
        return "green"
    if score >= 2000:
        return "yellow"
    return "red"


def _tier_color(tier: Tier) -> str:
    """Return a click color name for *tier*."""
    return {
        Tier.DIAMOND: "bright_cyan",
        Tier.PLATINUM: "bright_white",
        Tier.GOLD: "bright_yellow",
        Tier.SILVER: "white",
        Tier.BRONZE: "yellow",
        Tier.NEWCOMER: "bright_black",
    }[tier]


if __name__ == "__main__":
    main()
