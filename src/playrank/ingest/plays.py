"""Helpers to load play-log CSVs and emit canonical records."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from playrank.errors import IngestError
from playrank.models import PlayRecord


logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

TIMESTAMP_COLUMN = "create_timestamp"
PLAYER_COLUMN = "player_id"
SCORE_COLUMN = "score"
REQUIRED_COLUMNS = (TIMESTAMP_COLUMN, PLAYER_COLUMN, SCORE_COLUMN)


class PlayRow(BaseModel):
    """Raw cell values for one data row, before type conversion."""

    raw_timestamp: Optional[str] = None
    raw_player_id: Optional[str] = None
    raw_score: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Optional[str]]) -> "PlayRow":
        def extract(column: str) -> Optional[str]:
            value = row.get(column)
            return value.strip() if value is not None else None

        return cls(
            raw_timestamp=extract(TIMESTAMP_COLUMN),
            raw_player_id=extract(PLAYER_COLUMN),
            raw_score=extract(SCORE_COLUMN),
        )

    def to_record(self) -> PlayRecord:
        if self.raw_timestamp is None:
            raise ValueError(f"missing {TIMESTAMP_COLUMN}")
        if self.raw_player_id is None:
            raise ValueError(f"missing {PLAYER_COLUMN}")
        if self.raw_score is None:
            raise ValueError(f"missing {SCORE_COLUMN}")
        return PlayRecord(
            player_id=self.raw_player_id,
            score=_parse_score(self.raw_score),
            created_at=parse_timestamp(self.raw_timestamp),
        )


@dataclass(frozen=True)
class RowError:
    index: int
    message: str


@dataclass(frozen=True)
class IngestReport:
    total_rows: int
    loaded_rows: int
    errors: Tuple[RowError, ...]

    @property
    def skipped_rows(self) -> int:
        return len(self.errors)


def parse_timestamp(text: str) -> datetime:
    """Parse ``YYYY/MM/DD HH:MM:SS`` allowing trailing time parts to be omitted.

    Missing hour, minute or second components are zero-filled. The result is
    interpreted as local time and returned timezone-aware.
    """

    value = text.strip()
    if " " not in value:
        value = f"{value} 00"
    colon_count = value.count(":")
    while colon_count < 2:
        value += ":00"
        colon_count += 1
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        raise ValueError(f"timestamp '{text}' does not match {TIMESTAMP_FORMAT}") from None
    return parsed.astimezone()


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def _parse_score(raw_score: str) -> float:
    text = raw_score.strip()
    if not text:
        raise ValueError("score is empty")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"score '{raw_score}' is not numeric") from None


def _normalize_header(fieldnames: Optional[Iterable[str]]) -> List[str]:
    if fieldnames is None:
        raise IngestError("input has no header row")
    header = [name.strip() for name in fieldnames]
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise IngestError(f"input header is missing columns: {', '.join(missing)}")
    return header


def parse_play_csv(lines: Iterable[str]) -> Tuple[List[PlayRecord], IngestReport]:
    """Read play rows from CSV text, skipping and reporting malformed rows."""

    records: List[PlayRecord] = []
    errors: List[RowError] = []
    total = 0
    try:
        reader = csv.DictReader(lines)
        reader.fieldnames = _normalize_header(reader.fieldnames)
        for index, raw in enumerate(reader):
            total += 1
            try:
                record = PlayRow.from_mapping(raw).to_record()
            except ValueError as exc:
                logger.error("Failed to parse data row %d: %s", index, exc)
                errors.append(RowError(index=index, message=str(exc)))
                continue
            records.append(record)
    except (UnicodeDecodeError, csv.Error) as exc:
        raise IngestError(f"input is not readable CSV near data row {total}: {exc}") from exc

    report = IngestReport(total_rows=total, loaded_rows=len(records), errors=tuple(errors))
    if report.skipped_rows:
        logger.warning("Skipped %d of %d rows", report.skipped_rows, report.total_rows)
    return records, report


def load_play_csv(path: Path) -> Tuple[List[PlayRecord], IngestReport]:
    with path.open(newline="", encoding="utf-8") as f:
        records, report = parse_play_csv(f)
    logger.info("Loaded %d play records from %s", report.loaded_rows, path)
    return records, report
