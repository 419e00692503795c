"""Mean-score leaderboards from timestamped play logs."""

from playrank.errors import IngestError, PlayrankError, RankingError
from playrank.models import PlayRecord
from playrank.ranking import RankedEntry, mean, top_rankings

__all__ = [
    "IngestError",
    "PlayRecord",
    "PlayrankError",
    "RankedEntry",
    "RankingError",
    "mean",
    "top_rankings",
]
