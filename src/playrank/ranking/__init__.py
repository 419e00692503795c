"""Aggregation and leaderboard ranking."""

from .aggregate import mean
from .ranker import RankedEntry, round_score, top_rankings

__all__ = ["RankedEntry", "mean", "round_score", "top_rankings"]
