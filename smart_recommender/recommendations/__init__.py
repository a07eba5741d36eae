"""
Recommendation engine: turns interaction history into a ranked item list.

Modules
-------
scorer   : analyze() + analyze_with_decay() + normalize() +
           filter_above_threshold() — pure functions, no I/O.
ranker   : top_items() + rank_recommendations() + apply_filters().
engine   : RecommendationEngine — owns history, recomputes on ingest(),
           notifies listeners.
reporter : write_recommendation_json() — file output.
"""
