"""Input adapters that turn play-log CSVs into play records."""

from .plays import (
    IngestReport,
    PlayRow,
    RowError,
    format_timestamp,
    load_play_csv,
    parse_play_csv,
    parse_timestamp,
)

__all__ = [
    "IngestReport",
    "PlayRow",
    "RowError",
    "format_timestamp",
    "load_play_csv",
    "parse_play_csv",
    "parse_timestamp",
]
