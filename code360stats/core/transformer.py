"""Text coercion and normalization of extracted profile data."""

import re

from code360stats.models.stats import NUMERIC_FIELDS, RawProfileStats, NormalizedProfileStats

_NON_DIGITS = re.compile(r"[^0-9]")
_DATE_PREFIX = re.compile(r"^(joined on|member since):?\s*", re.IGNORECASE)


def parse_number(text: str | None) -> int:
    """
    Convert free-form count text to a non-negative integer.

    Every character other than ASCII 0-9 is dropped, including a leading
    minus sign; the tracked counts are never negative. A digit run too long
    for int() conversion yields 0.

    Examples:
        "1,234 pts" -> 1234
        "3400 XP" -> 3400
        "-5" -> 5
        "abc" -> 0
        Arabic-Indic digits -> 0
    """
    if not text:
        return 0

    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return 0
    try:
        return int(digits)
    except ValueError:
        return 0


def parse_joined_date(text: str | None) -> str | None:
    """
    Clean a joined-date label.

    Examples:
        "Joined on: March 2021" -> "March 2021"
        "  Member since:June 2020" -> "June 2020"
        "March 2021" -> "March 2021"
    """
    if not text:
        return None

    return _DATE_PREFIX.sub("", text.strip()).strip()


def normalize_stats(raw: RawProfileStats) -> NormalizedProfileStats:
    """
    Coerce raw page text into typed statistics.

    Args:
        raw: RawProfileStats from the page extractor

    Returns:
        NormalizedProfileStats with integer counts
    """
    counts = {name: parse_number(getattr(raw, name)) for name in NUMERIC_FIELDS}

    return NormalizedProfileStats(
        **counts,
        joined_date=parse_joined_date(raw.joined_date),
        badge=raw.badge,
        page_title=raw.page_title,
        url=raw.url,
        debug=raw.page_content,
    )
