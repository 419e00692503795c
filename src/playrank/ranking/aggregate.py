"""Per-player score aggregation."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from playrank.models import PlayRecord


logger = logging.getLogger(__name__)


def mean(records: Iterable[PlayRecord]) -> List[PlayRecord]:
    """Fold play records into one mean-score record per player.

    Players are returned in the order they were first observed. Each output
    record keeps the first-seen record's ``created_at``; only ``score`` is
    replaced. The running mean is updated incrementally as
    ``m * (k / (k + 1)) + s / (k + 1)`` so a player's records are never
    revisited.
    """

    first_seen: Dict[str, PlayRecord] = {}
    running: Dict[str, Tuple[float, int]] = {}
    total = 0

    for record in records:
        total += 1
        key = record.player_id
        if key not in running:
            first_seen[key] = record
            running[key] = (record.score, 1)
            continue
        current, count = running[key]
        updated = current * (count / (count + 1)) + record.score / (count + 1)
        running[key] = (updated, count + 1)

    result: List[PlayRecord] = []
    for key, record in first_seen.items():
        score, count = running[key]
        if count == 1:
            result.append(record)
        else:
            result.append(record.model_copy(update={"score": score}))

    logger.debug("Aggregated %d records into %d players", total, len(result))
    return result
