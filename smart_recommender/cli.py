"""
Smart Recommender — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build the collaborators (``InteractionStore``, ``RecommendationEngine``)
     from config.
  4. Execute the action.
  5. Report result to stdout.

Install and run::

    pip install -e .
    smart-recommender --help
    smart-recommender validate-config
    smart-recommender record item1 --kind liked
    smart-recommender recommend --threshold 1.0 --limit 10
    smart-recommender scores --decay --normalize
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="smart-recommender",
    help="Smart Recommender — rank items from a user's interaction history.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from smart_recommender.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from smart_recommender.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_store(config):
    from smart_recommender.storage.interaction_store import InteractionStore
    return InteractionStore(Path(config.storage.interactions_file))


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    weights = ", ".join(f"{k}={v:g}" for k, v in config.scoring.weights.items())
    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Interactions file: {config.storage.interactions_file}")
    typer.echo(f"  Weights:           {weights}")
    typer.echo(f"  Decay factor:      {config.scoring.decay_factor}")
    typer.echo(f"  Score threshold:   {config.display.score_threshold}")
    typer.echo(f"  Max results:       {config.display.max_results}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("record")
def record(
    item_id: str = typer.Argument(..., help="Identifier of the item acted upon."),
    kind: str = typer.Option(
        ...,
        "--kind",
        help="Interaction kind: viewed, liked, dismissed, shared, purchased.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Append one interaction (timestamped now) to the interactions file."""
    from pydantic import ValidationError

    from smart_recommender.models.interaction import InteractionEvent
    from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        event = InteractionEvent(item_id=item_id, kind=InteractionKind(kind.strip().lower()))
    except (ValueError, ValidationError) as exc:
        valid = ", ".join(k.value for k in InteractionKind)
        typer.echo(f"[ERROR] Invalid interaction: {exc}\n  Valid kinds: {valid}", err=True)
        raise typer.Exit(code=1)

    store = _build_store(config)
    history = store.append([event])

    typer.echo(f"  Recorded {event.kind.value} on {event.item_id}.")
    typer.echo(f"  History size: {len(history)} event(s) in {store.path}")


@app.command("recommend")
def recommend(
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        help="Minimum score to include (default: [display] score_threshold).",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        help="Max results (default: [display] max_results).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Also write the filtered list as recommendations_{date}.json here.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank stored interactions and print the top recommendations."""
    from smart_recommender.recommendations.engine import RecommendationEngine
    from smart_recommender.recommendations.ranker import apply_filters
    from smart_recommender.recommendations.reporter import write_recommendation_json
    from smart_recommender.reporting.formatters import format_recommendation_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    min_score   = config.display.score_threshold if threshold is None else threshold
    max_results = config.display.max_results if limit is None else limit

    store  = _build_store(config)
    engine = RecommendationEngine(weights=config.scoring.weight_table())
    recommendations = engine.ingest(store.load())
    scores = engine.scores

    top_ids = apply_filters(scores, min_score, max_results)

    typer.echo(
        f"Recommendations from {engine.history_size} interaction(s) "
        f"| threshold={min_score:g} | limit={max_results}"
    )
    typer.echo("")
    typer.echo(
        format_recommendation_table(
            top_ids, scores, high_cutoff=config.display.high_score_cutoff
        )
    )

    if output_dir:
        selected = set(top_ids)
        path = write_recommendation_json(
            [rec for rec in recommendations if rec.item_id in selected],
            Path(output_dir),
        )
        typer.echo("")
        typer.echo(f"  Written: {path}")


@app.command("scores")
def scores(
    decay: bool = typer.Option(
        False,
        "--decay/--no-decay",
        help="Apply exponential per-day time decay.",
    ),
    decay_factor: Optional[float] = typer.Option(
        None,
        "--decay-factor",
        help="Per-day decay multiplier > 0 (default: [scoring] decay_factor).",
    ),
    normalize_scores: bool = typer.Option(
        False,
        "--normalize",
        help="Min-max scale scores into [0, 1].",
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        help="Drop items scoring below this (applied after normalization).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the raw score map for all stored interactions."""
    from smart_recommender.recommendations.scorer import (
        analyze,
        analyze_with_decay,
        filter_above_threshold,
        normalize,
    )
    from smart_recommender.reporting.formatters import format_score_map

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    events  = _build_store(config).load()
    weights = config.scoring.weight_table()

    if decay:
        factor = config.scoring.decay_factor if decay_factor is None else decay_factor
        try:
            result = analyze_with_decay(events, weights, decay_factor=factor)
        except ValueError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)
    else:
        result = analyze(events, weights)

    if normalize_scores:
        result = normalize(result)
    if threshold is not None:
        result = filter_above_threshold(result, threshold)

    mode = f"decay={factor:g}" if decay else "no decay"
    typer.echo(
        f"Scores for {len(result)} item(s) | {mode}"
        f"{' | normalized' if normalize_scores else ''}"
    )
    typer.echo(format_score_map(result))
