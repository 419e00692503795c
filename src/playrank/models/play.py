"""Canonical play models shared across ingestion and ranking layers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayRecord(BaseModel):
    """Single observed score for a player."""

    player_id: str = Field(..., min_length=1)
    score: float = Field(..., allow_inf_nan=False)
    created_at: datetime

    model_config = ConfigDict(frozen=True)
