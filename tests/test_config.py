"""
Tests for smart_recommender/config.py.

What we test
------------
1. AppConfig() defaults match the built-in weight table and display bounds.
2. load_config() reads a TOML file; missing file -> FileNotFoundError.
3. config/local.toml next to the file is deep-merged over it.
4. SMART_RECOMMENDER_* environment variables override TOML values.
5. Validation: unknown kinds, non-finite weights, bad decay factor,
   out-of-range display defaults and bad log levels are rejected.
6. The committed config/default.toml loads cleanly.
"""

from __future__ import annotations

import math
from pathlib import Path

import pytest
from pydantic import ValidationError

from smart_recommender.config import (
    AppConfig,
    DisplayConfig,
    LoggingConfig,
    ScoringConfig,
    _deep_merge,
    load_config,
)
from smart_recommender.models.weights import WeightTable
from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind

_ENV_VARS = (
    "SMART_RECOMMENDER_INTERACTIONS_FILE",
    "SMART_RECOMMENDER_LOG_LEVEL",
    "SMART_RECOMMENDER_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_toml(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


# ── Defaults ──────────────────────────────────────────────────────────────────

class TestDefaults:
    def test_default_weights(self):
        cfg = AppConfig()
        assert cfg.scoring.weights == {"viewed": 1.0, "liked": 2.0, "dismissed": -1.0}
        assert cfg.scoring.weight_table() == WeightTable.default()

    def test_default_decay_and_display(self):
        cfg = AppConfig()
        assert cfg.scoring.decay_factor == 0.9
        assert cfg.display.score_threshold == 0.0
        assert cfg.display.max_results == 20
        assert cfg.debug is False

    def test_frozen(self):
        cfg = AppConfig()
        with pytest.raises(ValidationError):
            cfg.debug = True  # type: ignore[misc]

    def test_committed_default_toml_loads(self):
        cfg = load_config()
        assert cfg.scoring.weight_table().weight_for(InteractionKind.LIKED) == 2.0
        assert cfg.storage.interactions_file.endswith("interactions.json")


# ── Loading ───────────────────────────────────────────────────────────────────

class TestLoadConfig:
    def test_reads_toml(self, tmp_path):
        path = _write_toml(tmp_path / "app.toml", """
[scoring]
decay_factor = 0.5

[scoring.weights]
viewed = 0.5
liked = 4.0

[storage]
interactions_file = "custom/history.json"

[display]
score_threshold = 1.0
max_results = 10
""")
        cfg = load_config(path)
        assert cfg.scoring.decay_factor == 0.5
        assert cfg.scoring.weights == {"viewed": 0.5, "liked": 4.0}
        assert cfg.storage.interactions_file == "custom/history.json"
        assert cfg.display.score_threshold == 1.0
        assert cfg.display.max_results == 10

    def test_omitted_kinds_weigh_zero(self, tmp_path):
        path = _write_toml(tmp_path / "app.toml", "[scoring.weights]\nliked = 2.0\n")
        table = load_config(path).scoring.weight_table()
        assert table.weight_for(InteractionKind.DISMISSED) == 0.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_local_toml_is_merged(self, tmp_path):
        path = _write_toml(tmp_path / "default.toml", """
[scoring]
decay_factor = 0.9

[storage]
interactions_file = "a.json"
""")
        _write_toml(tmp_path / "local.toml", "[storage]\ninteractions_file = \"b.json\"\n")

        cfg = load_config(path)
        assert cfg.storage.interactions_file == "b.json"
        assert cfg.scoring.decay_factor == 0.9

    def test_project_debug_flag(self, tmp_path):
        path = _write_toml(tmp_path / "app.toml", "[project]\ndebug = true\n")
        assert load_config(path).debug is True


class TestEnvOverrides:
    def test_interactions_file(self, tmp_path, monkeypatch):
        path = _write_toml(tmp_path / "app.toml", "")
        monkeypatch.setenv("SMART_RECOMMENDER_INTERACTIONS_FILE", "/tmp/x.json")
        assert load_config(path).storage.interactions_file == "/tmp/x.json"

    def test_log_level_is_upper_cased(self, tmp_path, monkeypatch):
        path = _write_toml(tmp_path / "app.toml", "[logging]\nlevel = \"INFO\"\n")
        monkeypatch.setenv("SMART_RECOMMENDER_LOG_LEVEL", "debug")
        assert load_config(path).logging.level == "DEBUG"

    @pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("0", False)])
    def test_debug(self, tmp_path, monkeypatch, value, expected):
        path = _write_toml(tmp_path / "app.toml", "")
        monkeypatch.setenv("SMART_RECOMMENDER_DEBUG", value)
        assert load_config(path).debug is expected


# ── Validation ────────────────────────────────────────────────────────────────

class TestValidation:
    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError, match="Unknown interaction kinds"):
            ScoringConfig(weights={"bookmarked": 1.0})

    def test_non_finite_weight_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            ScoringConfig(weights={"liked": math.inf})

    @pytest.mark.parametrize("factor", [0.0, -1.0, math.nan])
    def test_bad_decay_factor_rejected(self, factor):
        with pytest.raises(ValidationError, match="decay_factor"):
            ScoringConfig(decay_factor=factor)

    def test_threshold_outside_bounds_rejected(self):
        with pytest.raises(ValidationError, match="score_threshold"):
            DisplayConfig(score_threshold=9.0)

    def test_max_results_outside_bounds_rejected(self):
        with pytest.raises(ValidationError, match="max_results"):
            DisplayConfig(max_results=100)

    def test_inverted_threshold_bounds_rejected(self):
        with pytest.raises(ValidationError, match="threshold_min"):
            DisplayConfig(threshold_min=2.0, threshold_max=1.0, score_threshold=1.5)

    def test_bad_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Log level"):
            LoggingConfig(level="LOUD")

    def test_invalid_toml_value_surfaces(self, tmp_path):
        path = _write_toml(tmp_path / "app.toml", "[scoring]\ndecay_factor = -0.1\n")
        with pytest.raises(ValidationError):
            load_config(path)


def test_deep_merge_nested():
    merged = _deep_merge(
        {"a": {"x": 1, "y": 2}, "b": 1},
        {"a": {"y": 3}, "c": 4},
    )
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
