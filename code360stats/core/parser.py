"""BeautifulSoup-based extraction of Code360 profile statistics."""

import re
from dataclasses import dataclass
from typing import Callable, Sequence

from bs4 import BeautifulSoup, Tag

from code360stats.exceptions import ProfileNotFoundError
from code360stats.logging import get_logger
from code360stats.models.stats import RawProfileStats

log = get_logger("parser")


# Selectors - centralized for easy updates when Code360 changes its DOM
SELECTORS = {
    "total": ".problems-solved .total",
    "difficulty": ".difficulty-wise .difficulty",
    "difficulty_value": ".value",
    "difficulty_title": ".title",
    "streak_container": ".current-and-longest-text-container",
    "current_streak": ".text-container.ml-8 .day-count-text p",
    "longest_streak": ".text-container:nth-of-type(2) .day-count-text p",
    "streak_freeze_left": ".text-container:nth-of-type(3) .day-count-text p",
    "xp_points": ".xp-points",
}

# Tried in order, first match wins
JOINED_DATE_SELECTORS = [
    ".profile-header-meta .member-since-text",
    ".some-class-for-joined-date-text",
    ".profile-details-section p.join-date",
]

# Case-sensitive substrings of the page text
NOT_FOUND_MARKERS = ("Profile not found", "404", "User not found")

DIFFICULTY_FIELDS = {
    "easy": "easy_solved",
    "moderate": "moderate_solved",
    "hard": "hard_solved",
    "ninja": "ninja_solved",
}

BADGE_KEYWORDS = ("achiever", "badge", "rank")

_LEADING_NUMBER_WORD = re.compile(r"^\d+\s+\w+")
_FIRST_NUMBER = re.compile(r"\d+")


def _element_text(element: Tag) -> str:
    return element.get_text().strip()


@dataclass(frozen=True)
class BadgeRule:
    """
    One badge detection strategy.

    Candidates are the elements matching ``selector`` in document order;
    the first candidate accepted by ``predicate`` is passed to ``extractor``.
    """

    name: str
    selector: str
    predicate: Callable[[Tag], bool]
    extractor: Callable[[Tag], str] = _element_text

    def apply(self, soup: BeautifulSoup) -> str | None:
        for element in soup.select(self.selector):
            if self.predicate(element):
                return self.extractor(element)
        return None


def looks_like_badge(element: Tag) -> bool:
    """Text such as "5 Star Achiever": leading number, a word, and a badge keyword."""
    text = _element_text(element)
    if not _LEADING_NUMBER_WORD.match(text):
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in BADGE_KEYWORDS)


BADGE_RULES: list[BadgeRule] = [
    BadgeRule(name="achievement_text", selector="div", predicate=looks_like_badge),
]


def find_badge(soup: BeautifulSoup, rules: Sequence[BadgeRule] = BADGE_RULES) -> str | None:
    """
    Evaluate badge rules in priority order.

    Returns:
        Badge text from the first rule that matches, None if none do
    """
    for rule in rules:
        badge = rule.apply(soup)
        if badge is not None:
            log.debug("badge_matched", rule=rule.name, badge=badge)
            return badge
    return None


def page_text(soup: BeautifulSoup) -> str:
    """Full text content of the page body."""
    body = soup.body or soup
    return body.get_text()


def check_profile_exists(text: str) -> None:
    """
    Raise if the page text carries a not-found marker.

    Raises:
        ProfileNotFoundError: If any marker is present
    """
    for marker in NOT_FOUND_MARKERS:
        if marker in text:
            raise ProfileNotFoundError(f"Code360 profile not found (page contains {marker!r})")


def parse_profile(
    soup: BeautifulSoup,
    joined_date_selectors: Sequence[str] = JOINED_DATE_SELECTORS,
    badge_rules: Sequence[BadgeRule] = BADGE_RULES,
) -> dict:
    """
    Extract raw statistic strings from parsed HTML.

    Each field is located independently; a field whose element is absent
    is left out of the result and listed under "missing_fields".

    Args:
        soup: BeautifulSoup object of the rendered page
        joined_date_selectors: Fallback selectors for the joined date
        badge_rules: Ordered badge detection rules

    Returns:
        Dict of raw field values (not yet coerced)
    """
    profile: dict = {}
    missing: list[str] = []

    # Total problems solved
    total_el = soup.select_one(SELECTORS["total"])
    if total_el:
        match = _FIRST_NUMBER.search(_element_text(total_el))
        if match:
            profile["total_solved"] = match.group(0)
    else:
        missing.append("total_solved")

    # Easy / moderate / hard / ninja
    seen = set()
    for difficulty_el in soup.select(SELECTORS["difficulty"]):
        value_el = difficulty_el.select_one(SELECTORS["difficulty_value"])
        title_el = difficulty_el.select_one(SELECTORS["difficulty_title"])
        if not (value_el and title_el):
            continue
        field_name = DIFFICULTY_FIELDS.get(_element_text(title_el).lower())
        if field_name:
            profile[field_name] = _element_text(value_el)
            seen.add(field_name)
    missing.extend(f for f in DIFFICULTY_FIELDS.values() if f not in seen)

    # Streaks
    streak_fields = ("current_streak", "longest_streak", "streak_freeze_left")
    streak_container = soup.select_one(SELECTORS["streak_container"])
    if streak_container:
        for field_name in streak_fields:
            el = streak_container.select_one(SELECTORS[field_name])
            if el:
                profile[field_name] = _element_text(el)
            else:
                missing.append(field_name)
    else:
        missing.extend(streak_fields)

    # Joined date
    for selector in joined_date_selectors:
        joined_el = soup.select_one(selector)
        if joined_el:
            profile["joined_date"] = _element_text(joined_el)
            break
    else:
        missing.append("joined_date")

    # Experience points
    xp_el = soup.select_one(SELECTORS["xp_points"])
    if xp_el:
        profile["expcount"] = _element_text(xp_el)
    else:
        missing.append("expcount")

    # Badge
    badge = find_badge(soup, badge_rules)
    if badge is not None:
        profile["badge"] = badge
    else:
        missing.append("badge")

    profile["missing_fields"] = missing
    return profile


def parse_page(
    html: str,
    username: str | None = None,
    page_title: str | None = None,
    url: str | None = None,
    joined_date_selectors: Sequence[str] = JOINED_DATE_SELECTORS,
    content_chars: int = 1000,
) -> RawProfileStats:
    """
    Full page parsing - not-found check, then field extraction.

    Args:
        html: Rendered HTML content
        username: Profile username, for log context
        page_title: Document title reported by the browser
        url: Resolved page URL
        joined_date_selectors: Fallback selectors for the joined date
        content_chars: Length of the page text prefix kept for debugging

    Returns:
        RawProfileStats with extracted strings and diagnostics

    Raises:
        ProfileNotFoundError: If the page reports a missing profile
    """
    soup = BeautifulSoup(html, "lxml")
    text = page_text(soup)

    check_profile_exists(text)

    profile = parse_profile(soup, joined_date_selectors)
    for field_name in profile["missing_fields"]:
        log.warning("field_not_found", username=username, field=field_name)

    if page_title is None and soup.title and soup.title.string:
        page_title = soup.title.string.strip()

    return RawProfileStats(
        **profile,
        page_title=page_title,
        url=url,
        page_content=text[:content_chars],
    )
