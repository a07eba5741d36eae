"""
Dashboard data loader.

Functions are decorated with ``@st.cache_data`` so Streamlit only re-reads
the interactions file when it changes on disk (the file's mtime is part of
the cache key).

Nothing here raises for missing data: an absent or corrupt interactions
file produces an empty history, exactly like ``InteractionStore.load()``.
"""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from smart_recommender.config import AppConfig, load_config
from smart_recommender.models.interaction import InteractionEvent
from smart_recommender.recommendations.engine import RecommendationEngine
from smart_recommender.storage.interaction_store import InteractionStore


def file_mtime(path: str) -> float | None:
    """Modification time of ``path``, or None when it does not exist."""
    p = Path(path)
    return p.stat().st_mtime if p.exists() else None


@st.cache_resource
def load_app_config() -> AppConfig:
    """Load config/default.toml, falling back to built-in defaults if absent."""
    try:
        return load_config()
    except FileNotFoundError:
        return AppConfig()


@st.cache_data(ttl=300)
def load_interactions(path: str, mtime: float | None) -> list[InteractionEvent]:
    """Load the stored history.  ``mtime`` only busts the cache."""
    return InteractionStore(Path(path)).load()


def build_engine(config: AppConfig, events: list[InteractionEvent]) -> RecommendationEngine:
    """Fresh engine with ``events`` already ingested."""
    engine = RecommendationEngine(weights=config.scoring.weight_table())
    engine.ingest(events)
    return engine
