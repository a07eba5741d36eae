"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``SMART_RECOMMENDER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI and dashboard receive an ``AppConfig`` instance and hand the pieces
the engine needs (``WeightTable``, ``InteractionStore`` path, threshold and
max results) to it explicitly; the engine never reads config itself.
"""

from __future__ import annotations

import math
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from smart_recommender.models.weights import DEFAULT_WEIGHTS, WeightTable
from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind

# ── Sub-config models ─────────────────────────────────────────────────────────


class ScoringConfig(BaseModel):
    """Weights and decay used by the scorer."""

    model_config = ConfigDict(frozen=True)

    weights: dict[str, float] = {k.value: v for k, v in DEFAULT_WEIGHTS.items()}
    decay_factor: float = 0.9

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, v: dict[str, float]) -> dict[str, float]:
        valid = {k.value for k in InteractionKind}
        unknown = sorted(set(v) - valid)
        if unknown:
            raise ValueError(
                f"Unknown interaction kinds in weights: {unknown}. "
                f"Must be among {sorted(valid)}."
            )
        for kind, weight in v.items():
            if not math.isfinite(weight):
                raise ValueError(f"Weight for '{kind}' must be finite, got {weight}.")
        return v

    @field_validator("decay_factor")
    @classmethod
    def validate_decay_factor(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError(f"decay_factor must be > 0, got {v}.")
        return v

    def weight_table(self) -> WeightTable:
        """Build the immutable ``WeightTable`` for the engine."""
        return WeightTable(self.weights)


class StorageConfig(BaseModel):
    """Filesystem location of the interaction history."""

    model_config = ConfigDict(frozen=True)

    interactions_file: str = "data/interactions.json"


class DisplayConfig(BaseModel):
    """Filter defaults and bounds for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    score_threshold: float = 0.0
    threshold_min: float = -5.0
    threshold_max: float = 5.0
    threshold_step: float = 0.5
    max_results: int = 20
    max_results_min: int = 5
    max_results_max: int = 50
    max_results_step: int = 5
    high_score_cutoff: float = 3.0

    @model_validator(mode="after")
    def validate_bounds(self) -> "DisplayConfig":
        if self.threshold_min > self.threshold_max:
            raise ValueError(
                f"threshold_min ({self.threshold_min}) must be <= "
                f"threshold_max ({self.threshold_max})."
            )
        if not self.threshold_min <= self.score_threshold <= self.threshold_max:
            raise ValueError(
                f"score_threshold ({self.score_threshold}) must be within "
                f"[{self.threshold_min}, {self.threshold_max}]."
            )
        if not 1 <= self.max_results_min <= self.max_results_max:
            raise ValueError(
                f"max_results bounds invalid: [{self.max_results_min}, {self.max_results_max}]."
            )
        if not self.max_results_min <= self.max_results <= self.max_results_max:
            raise ValueError(
                f"max_results ({self.max_results}) must be within "
                f"[{self.max_results_min}, {self.max_results_max}]."
            )
        if self.threshold_step <= 0 or self.max_results_step <= 0:
            raise ValueError("threshold_step and max_results_step must be > 0.")
        return self


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/recommender.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    ``AppConfig()`` on its own gives the built-in defaults.
    """

    model_config = ConfigDict(frozen=True)

    scoring: ScoringConfig = ScoringConfig()
    storage: StorageConfig = StorageConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply SMART_RECOMMENDER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply SMART_RECOMMENDER_* env vars to the raw config dict.

    Supported overrides:
      SMART_RECOMMENDER_INTERACTIONS_FILE → raw["storage"]["interactions_file"]
      SMART_RECOMMENDER_LOG_LEVEL         → raw["logging"]["level"]
      SMART_RECOMMENDER_DEBUG             → raw["debug"]
    """
    if interactions_file := os.environ.get("SMART_RECOMMENDER_INTERACTIONS_FILE"):
        raw.setdefault("storage", {})["interactions_file"] = interactions_file

    if log_level := os.environ.get("SMART_RECOMMENDER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("SMART_RECOMMENDER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        scoring=ScoringConfig(**raw.get("scoring", {})),
        storage=StorageConfig(**raw.get("storage", {})),
        display=DisplayConfig(**raw.get("display", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
