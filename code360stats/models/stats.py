"""Profile statistics models."""

from pydantic import BaseModel, Field

NUMERIC_FIELDS = (
    "total_solved",
    "easy_solved",
    "moderate_solved",
    "hard_solved",
    "ninja_solved",
    "current_streak",
    "longest_streak",
    "streak_freeze_left",
    "expcount",
)


class RawProfileStats(BaseModel):
    """Text extracted from the rendered profile page, before coercion."""

    total_solved: str | None = "0"
    easy_solved: str | None = "0"
    moderate_solved: str | None = "0"
    hard_solved: str | None = "0"
    ninja_solved: str | None = "0"
    current_streak: str | None = "0"
    longest_streak: str | None = "0"
    streak_freeze_left: str | None = "0"
    joined_date: str | None = None
    expcount: str | None = "0"
    badge: str | None = None

    # Diagnostics
    page_title: str | None = None
    url: str | None = None
    page_content: str = ""
    missing_fields: list[str] = Field(default_factory=list)


class NormalizedProfileStats(BaseModel):
    """Typed profile statistics."""

    total_solved: int = 0
    easy_solved: int = 0
    moderate_solved: int = 0
    hard_solved: int = 0
    ninja_solved: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    streak_freeze_left: int = 0
    joined_date: str | None = None
    expcount: int = 0
    badge: str | None = None

    page_title: str | None = None
    url: str | None = None
    debug: str = ""

    @property
    def is_empty(self) -> bool:
        """True when nothing at all was extracted from the page."""
        return (
            all(getattr(self, name) == 0 for name in NUMERIC_FIELDS)
            and not self.joined_date
            and not self.badge
        )
