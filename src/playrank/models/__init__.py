"""Data models for play records."""

from .play import PlayRecord

__all__ = ["PlayRecord"]
