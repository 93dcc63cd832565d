"""Mapping of normalized statistics onto the public response schema."""

from code360stats.models.response import PublicProfileResponse
from code360stats.models.stats import NormalizedProfileStats


def format_response(
    stats: NormalizedProfileStats,
    username: str,
    message: str = "retrieved",
) -> PublicProfileResponse:
    """
    Build the flat API response for a profile.

    Falsy source values fall back to 0 (counts) or None (text). Metrics the
    page does not expose keep the model's placeholder defaults.

    Args:
        stats: NormalizedProfileStats from the profile fetcher
        username: Requested username, echoed as-is
        message: Status message for the response

    Returns:
        PublicProfileResponse
    """
    return PublicProfileResponse(
        status="success",
        message=message,
        username=username,
        joined_date=stats.joined_date or None,
        total_solved=stats.total_solved or 0,
        easy_solved=stats.easy_solved or 0,
        medium_solved=stats.moderate_solved or 0,
        hard_solved=stats.hard_solved or 0,
        ninja_solved=stats.ninja_solved or 0,
        current_streak=stats.current_streak or 0,
        longest_streak=stats.longest_streak or 0,
        streak_freeze_left=stats.streak_freeze_left or 0,
        expcount=stats.expcount or 0,
        badge=stats.badge or None,
    )
