"""Tie-aware top-K leaderboard selection."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from playrank.errors import RankingError
from playrank.models import PlayRecord


logger = logging.getLogger(__name__)

_INTEGRAL = Decimal(1)
# Floats at or beyond 2**52 carry no fractional part.
_WHOLE_FLOAT_MIN = float(2**52)


def round_score(score: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""

    if not math.isfinite(score):
        raise RankingError(f"score {score!r} is not finite")
    if abs(score) >= _WHOLE_FLOAT_MIN:
        return int(score)
    # Decimal(float) is the exact binary value, so only true halves round up.
    return int(Decimal(score).quantize(_INTEGRAL, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class RankedEntry:
    """Leaderboard row: competition rank plus the aggregated record."""

    rank: int
    record: PlayRecord

    @property
    def player_id(self) -> str:
        return self.record.player_id

    @property
    def rounded_score(self) -> int:
        return round_score(self.record.score)


def top_rankings(records: Sequence[PlayRecord], top_k: int) -> List[RankedEntry]:
    """Rank records by descending rounded score and keep the top ``top_k``.

    Ranks follow competition ("1224") ordering. Every record tied with the
    score at position ``top_k`` is also returned, so the result may be longer
    than ``top_k``. Records with equal rounded scores keep their input order.
    """

    if top_k < 0:
        raise ValueError(f"top_k must be >= 0, got {top_k}")
    if top_k == 0 or not records:
        return []

    keyed = [(round_score(record.score), record) for record in records]
    keyed.sort(key=lambda item: item[0], reverse=True)

    result: List[RankedEntry] = []
    prev_score: int | None = None
    prev_rank = 0
    for position, (score, record) in enumerate(keyed):
        if position >= top_k and score != prev_score:
            break
        rank = prev_rank if score == prev_score else position + 1
        result.append(RankedEntry(rank=rank, record=record))
        prev_score = score
        prev_rank = rank

    logger.debug(
        "Ranked %d of %d records for top_k=%d", len(result), len(keyed), top_k
    )
    return result
