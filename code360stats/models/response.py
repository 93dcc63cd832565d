"""Public API response model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PublicProfileResponse(BaseModel):
    """
    Flat profile schema served by the API.

    Fields the profile page does not expose (per-difficulty totals,
    acceptance rate, ranking, reputation, submission calendar) are always
    present with neutral defaults so consumers see a stable schema.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = "success"
    message: str = "retrieved"
    username: str
    joined_date: str | None = None
    total_solved: int = 0
    total_questions: int = 0
    easy_solved: int = 0
    total_easy: int = 0
    medium_solved: int = 0
    total_medium: int = 0
    hard_solved: int = 0
    total_hard: int = 0
    ninja_solved: int = 0
    acceptance_rate: float = 0.0
    ranking: int = 0
    contribution_points: int = 0
    reputation: int = 0
    submission_calendar: dict[str, int] = Field(default_factory=dict)
    current_streak: int = 0
    longest_streak: int = 0
    streak_freeze_left: int = 0
    expcount: int = 0
    badge: str | None = None
