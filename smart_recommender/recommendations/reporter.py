"""
Recommendation report writer: JSON export of a ranked snapshot.

Pure I/O over in-memory ``Recommendation`` lists; nothing is recomputed.

Output file
-----------
  <output_dir>/recommendations_{date}.json
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from smart_recommender.models.recommendation import Recommendation

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1"


def write_recommendation_json(
    recommendations: Sequence[Recommendation],
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write a ranked recommendation list to a structured JSON file.

    Rank is the 1-based position in ``recommendations`` (the caller's order
    is kept as-is).

    Args:
        recommendations: Ranked snapshot, e.g. from ``RecommendationEngine.ingest``.
        output_dir:      Target directory (created if missing).
        run_date:        Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{run_date}.json"

    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "generated_at":   run_date.isoformat(),
        "recommendations": [
            {
                "rank":   rank,
                "id":     str(rec.id),
                "itemID": rec.item_id,
                "score":  rec.score,
            }
            for rank, rec in enumerate(recommendations, start=1)
        ],
    }

    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Recommendation JSON written: %s (%d rows)", json_path, len(recommendations))
    return json_path
