"""Command-line interface for ranking players from a play-log CSV."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from playrank.config import LOG_LEVELS, OUTPUT_FORMATS, Settings, load_settings
from playrank.errors import PlayrankError
from playrank.export import render_rankings
from playrank.ingest import IngestReport, load_play_csv
from playrank.ranking import mean, top_rankings


logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _parse_args(argv: Optional[Sequence[str]], settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank players by mean score from a play-log CSV")
    parser.add_argument("path", type=Path, help="Path to play-log CSV (create_timestamp,player_id,score)")
    parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=settings.top_k,
        help="Number of leaderboard places to print; ties at the cutoff are included",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=settings.output_format,
        help="Output format for the leaderboard",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write ingest summary JSON",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=settings.log_level,
        help="Logging verbosity (logs go to stderr)",
    )
    return parser.parse_args(argv)


def _write_report(path: Path, report: IngestReport) -> None:
    payload = {
        "total_rows": report.total_rows,
        "loaded_rows": report.loaded_rows,
        "skipped_rows": report.skipped_rows,
        "errors": [{"index": error.index, "message": error.message} for error in report.errors],
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Wrote ingest report to %s", path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings()
    args = _parse_args(argv, settings)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        records, report = load_play_csv(args.path)
    except OSError as exc:
        logger.error("Unable to read %s: %s", args.path, exc)
        return 1
    except PlayrankError as exc:
        logger.error("Unable to load %s: %s", args.path, exc)
        return 1

    if args.report:
        try:
            _write_report(args.report, report)
        except OSError as exc:
            logger.error("Unable to write report %s: %s", args.report, exc)
            return 1

    try:
        rankings = top_rankings(mean(records), args.top)
    except PlayrankError as exc:
        logger.error("Ranking failed: %s", exc)
        return 1

    print(render_rankings(rankings, args.format), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
