"""Leaderboard rendering helpers for ranked play records."""

from __future__ import annotations

import csv
import json
from io import StringIO
from typing import Sequence

from playrank.config import OUTPUT_FORMATS
from playrank.ingest import format_timestamp
from playrank.ranking import RankedEntry


CSV_HEADER = ("rank", "player_id", "mean_score")


def format_rankings_csv(entries: Sequence[RankedEntry]) -> str:
    """Render rankings as ``rank,player_id,mean_score`` rows."""

    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow([entry.rank, entry.player_id, entry.rounded_score])
    return buffer.getvalue()


def format_rankings_json(entries: Sequence[RankedEntry]) -> str:
    payload = [
        {
            "rank": entry.rank,
            "player_id": entry.player_id,
            "mean_score": entry.rounded_score,
            "raw_mean_score": entry.record.score,
            "created_at": format_timestamp(entry.record.created_at),
        }
        for entry in entries
    ]
    return json.dumps(payload, indent=2) + "\n"


def render_rankings(entries: Sequence[RankedEntry], fmt: str = "csv") -> str:
    if fmt == "csv":
        return format_rankings_csv(entries)
    if fmt == "json":
        return format_rankings_json(entries)
    raise ValueError(f"Unknown output format {fmt!r}, expected one of {OUTPUT_FORMATS}")


__all__ = [
    "OUTPUT_FORMATS",
    "format_rankings_csv",
    "format_rankings_json",
    "render_rankings",
]
