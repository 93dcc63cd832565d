"""Pydantic models for code360stats."""

from code360stats.models.stats import RawProfileStats, NormalizedProfileStats
from code360stats.models.response import PublicProfileResponse

__all__ = [
    "RawProfileStats",
    "NormalizedProfileStats",
    "PublicProfileResponse",
]
