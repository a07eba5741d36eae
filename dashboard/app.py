"""
Smart Recommender — Streamlit Dashboard
=======================================

Optional local UI.  Reads the interactions file only; it never writes to it.

App structure (2 tabs)
----------------------
  1. Top Picks — ranked item list with colour-coded score badges.
  2. Filters   — minimum score slider and max results stepper; "Apply
                 Filters" recomputes the Top Picks list.

Slider/stepper bounds and defaults come from ``[display]`` in
config/default.toml.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="Smart Recommender",
    layout="wide",
    initial_sidebar_state="expanded",
)

import pandas as pd

from dashboard.data_loader import build_engine, file_mtime, load_app_config, load_interactions
from smart_recommender.recommendations.ranker import apply_filters
from smart_recommender.reporting.formatters import BAND_COLOURS, score_band

config  = load_app_config()
display = config.display


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("Smart Recommender")
    st.caption("Reads the interactions file only")
    st.divider()

    interactions_file = st.text_input(
        "Interactions file",
        value=str(_ROOT / config.storage.interactions_file),
    )

    if st.button("Clear cache", help="Force re-read of the interactions file."):
        st.cache_data.clear()
        st.rerun()

    st.divider()
    st.caption("Record interactions from the terminal:")
    st.code("smart-recommender record item1 --kind liked")


# ── Data ──────────────────────────────────────────────────────────────────────

events = load_interactions(interactions_file, file_mtime(interactions_file))
engine = build_engine(config, events)
scores = engine.scores

if "score_threshold" not in st.session_state:
    st.session_state.score_threshold = display.score_threshold
    st.session_state.max_results     = display.max_results

top_ids = apply_filters(
    scores, st.session_state.score_threshold, st.session_state.max_results
)


def _badge(score: float) -> str:
    colour = BAND_COLOURS[score_band(score, display.high_score_cutoff)]
    return f":{colour}[{score:.1f}]"


# ── Tabs ──────────────────────────────────────────────────────────────────────

tab_top, tab_filters = st.tabs(["Top Picks", "Filters"])


# ══════════════════════════════════════════════════════════════════════════════
# Tab 1 — Top Picks
# ══════════════════════════════════════════════════════════════════════════════

with tab_top:
    st.header("Recommendations")
    st.caption(
        f"{engine.history_size} interaction(s) | "
        f"min score {st.session_state.score_threshold:.1f} | "
        f"max {st.session_state.max_results} results"
    )

    if not engine.has_history:
        st.info(
            "No interactions recorded yet. "
            "Run `smart-recommender record <item> --kind liked` to add some."
        )
    else:
        if not top_ids:
            st.info("No items match the current filters.")
        for item_id in top_ids:
            left, right = st.columns([4, 1])
            left.markdown(f"**{item_id}**")
            right.markdown(_badge(scores[item_id]))

        with st.expander("Score table"):
            df = pd.DataFrame(
                [{"item": i, "score": scores[i]} for i in top_ids],
                columns=["item", "score"],
            )
            st.dataframe(df, use_container_width=True, hide_index=True)


# ══════════════════════════════════════════════════════════════════════════════
# Tab 2 — Filters
# ══════════════════════════════════════════════════════════════════════════════

with tab_filters:
    st.header("Recommendation Filters")

    threshold = st.slider(
        "Minimum score",
        min_value=display.threshold_min,
        max_value=display.threshold_max,
        value=float(st.session_state.score_threshold),
        step=display.threshold_step,
        format="%.1f",
    )
    max_results = st.number_input(
        "Max results",
        min_value=display.max_results_min,
        max_value=display.max_results_max,
        value=int(st.session_state.max_results),
        step=display.max_results_step,
    )

    if st.button("Apply Filters", type="primary", use_container_width=True):
        st.session_state.score_threshold = threshold
        st.session_state.max_results     = int(max_results)
        st.rerun()
