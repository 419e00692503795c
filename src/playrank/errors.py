"""Exception hierarchy shared by the ingest and ranking layers."""

from __future__ import annotations


class PlayrankError(Exception):
    """Base class for errors raised by playrank."""


class IngestError(PlayrankError):
    """Raised when an input file cannot be read as play records at all."""


class RankingError(PlayrankError, RuntimeError):
    """Raised when records cannot be totally ordered for ranking."""
