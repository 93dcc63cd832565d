"""Unit tests for HTML extraction - uses cached fixtures, no internet required."""

import pytest
from pathlib import Path
from unittest.mock import patch

from bs4 import BeautifulSoup
from structlog.testing import capture_logs

from code360stats.core import parser
from code360stats.core.parser import (
    BADGE_RULES,
    BadgeRule,
    check_profile_exists,
    find_badge,
    looks_like_badge,
    parse_page,
    parse_profile,
)
from code360stats.exceptions import ProfileNotFoundError


FIXTURES_DIR = Path(__file__).parent / "fixtures"

ALL_FIELDS = {
    "total_solved",
    "easy_solved",
    "moderate_solved",
    "hard_solved",
    "ninja_solved",
    "current_streak",
    "longest_streak",
    "streak_freeze_left",
    "joined_date",
    "expcount",
    "badge",
}


def get_fixture_html(name: str) -> str:
    """Load HTML fixture."""
    fixture_path = FIXTURES_DIR / f"{name}.html"
    if not fixture_path.exists():
        pytest.skip(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text(encoding="utf-8")


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestParserWithFixture:
    """Test extraction against the cached profile fixture."""

    def test_extracts_problem_counts(self):
        raw = parse_page(get_fixture_html("codushan"), "Codushan")

        assert raw.total_solved == "120"
        assert raw.easy_solved == "50"
        assert raw.moderate_solved == "40"
        assert raw.hard_solved == "30"
        assert raw.ninja_solved == "0"

    def test_extracts_streaks(self):
        raw = parse_page(get_fixture_html("codushan"), "Codushan")

        assert raw.current_streak == "5"
        assert raw.longest_streak == "12 days"
        assert raw.streak_freeze_left == "2"

    def test_extracts_date_xp_badge(self):
        raw = parse_page(get_fixture_html("codushan"), "Codushan")

        assert raw.joined_date == "Joined on: Jan 2022"
        assert raw.expcount == "3400 XP"
        assert raw.badge == "5 Star Achiever"
        assert raw.missing_fields == []

    def test_diagnostics(self):
        raw = parse_page(
            get_fixture_html("codushan"),
            "Codushan",
            url="https://www.naukri.com/code360/profile/Codushan",
            content_chars=50,
        )

        assert raw.page_title == "Codushan | Code360 by Coding Ninjas"
        assert raw.url == "https://www.naukri.com/code360/profile/Codushan"
        assert len(raw.page_content) == 50
        assert "Codushan" in raw.page_content

    def test_browser_title_takes_precedence(self):
        raw = parse_page(get_fixture_html("codushan"), page_title="From browser")
        assert raw.page_title == "From browser"


class TestMissingFields:
    """Absent elements keep defaults without aborting other fields."""

    def test_empty_page_keeps_defaults(self):
        raw = parse_page("<html><body><div>Nothing here</div></body></html>")

        assert raw.total_solved == "0"
        assert raw.easy_solved == "0"
        assert raw.current_streak == "0"
        assert raw.expcount == "0"
        assert raw.joined_date is None
        assert raw.badge is None
        assert set(raw.missing_fields) == ALL_FIELDS

    def test_one_missing_field_does_not_affect_others(self):
        html = get_fixture_html("codushan").replace('class="xp-points"', 'class="xp-gone"')
        raw = parse_page(html)

        assert raw.expcount == "0"
        assert raw.missing_fields == ["expcount"]
        assert raw.total_solved == "120"
        assert raw.badge == "5 Star Achiever"

    def test_missing_field_logged(self):
        html = get_fixture_html("codushan").replace('class="xp-points"', 'class="xp-gone"')
        with capture_logs() as logs:
            parse_page(html, username="Codushan")

        events = [e for e in logs if e["event"] == "field_not_found"]
        assert len(events) == 1
        assert events[0]["field"] == "expcount"
        assert events[0]["username"] == "Codushan"
        assert events[0]["log_level"] == "warning"

    def test_empty_page_logs_every_field(self):
        with capture_logs() as logs:
            parse_page("<html><body></body></html>", username="ghost_page")

        fields = {e["field"] for e in logs if e["event"] == "field_not_found"}
        assert fields == ALL_FIELDS

    def test_complete_page_logs_nothing_missing(self):
        with capture_logs() as logs:
            parse_page(get_fixture_html("codushan"), username="Codushan")

        assert not [e for e in logs if e["event"] == "field_not_found"]

    def test_total_without_digits_stays_default(self):
        html = '<div class="problems-solved"><div class="total">none yet</div></div>'
        profile = parse_profile(soup_of(html))

        assert "total_solved" not in profile
        assert "total_solved" not in profile["missing_fields"]

    def test_unknown_difficulty_title_ignored(self):
        html = """
        <div class="difficulty-wise">
          <div class="difficulty"><div class="title">Easy</div><div class="value">7</div></div>
          <div class="difficulty"><div class="title">Legendary</div><div class="value">9</div></div>
          <div class="difficulty"><div class="value">3</div></div>
        </div>
        """
        profile = parse_profile(soup_of(html))

        assert profile["easy_solved"] == "7"
        assert "moderate_solved" in profile["missing_fields"]
        assert "ninja_solved" in profile["missing_fields"]

    def test_streak_container_missing(self):
        profile = parse_profile(soup_of("<div class='streaks'><p>5</p></div>"))

        for field_name in ("current_streak", "longest_streak", "streak_freeze_left"):
            assert field_name not in profile
            assert field_name in profile["missing_fields"]


class TestJoinedDateFallback:
    """Joined date locators are tried in priority order."""

    def test_last_fallback_used(self):
        html = '<div class="profile-details-section"><p class="join-date">Member since: June 2020</p></div>'
        profile = parse_profile(soup_of(html))
        assert profile["joined_date"] == "Member since: June 2020"

    def test_earlier_selector_wins(self):
        html = """
        <div class="profile-details-section"><p class="join-date">Third</p></div>
        <span class="some-class-for-joined-date-text">Second</span>
        """
        profile = parse_profile(soup_of(html))
        assert profile["joined_date"] == "Second"

    def test_custom_selectors(self):
        html = '<span class="joined">Joined on March 2021</span>'
        profile = parse_profile(soup_of(html), joined_date_selectors=[".joined"])
        assert profile["joined_date"] == "Joined on March 2021"


class TestNotFoundDetection:
    """Not-found markers abort before any field is extracted."""

    @pytest.mark.parametrize("marker", ["Profile not found", "404", "User not found"])
    def test_markers_raise(self, marker):
        with pytest.raises(ProfileNotFoundError):
            check_profile_exists(f"Oops. {marker}. Try again")

    def test_markers_are_case_sensitive(self):
        check_profile_exists("profile NOT FOUND in lowercase form is ignored")

    def test_parse_page_raises_before_extraction(self):
        html = "<html><body><h2>Profile not found</h2><div class='xp-points'>10</div></body></html>"

        with patch.object(parser, "parse_profile") as mock_parse:
            with pytest.raises(ProfileNotFoundError):
                parse_page(html, "ghost")
            mock_parse.assert_not_called()


class TestBadgeRules:
    """Badge heuristics as ordered rules."""

    @pytest.mark.parametrize("text", ["5 Star Achiever", "3 Badges earned", "12 Global Rank"])
    def test_looks_like_badge_accepts(self, text):
        tag = soup_of(f"<div>{text}</div>").div
        assert looks_like_badge(tag)

    @pytest.mark.parametrize("text", ["3400 XP", "Rank 5 badge", "5Star Achiever", ""])
    def test_looks_like_badge_rejects(self, text):
        tag = soup_of(f"<div>{text}</div>").div
        assert not looks_like_badge(tag)

    def test_first_matching_div_wins(self):
        html = "<div>10 XP</div><div>2 Gold Badges</div><div>7 Star Achiever</div>"
        assert find_badge(soup_of(html)) == "2 Gold Badges"

    def test_no_match_returns_none(self):
        assert find_badge(soup_of("<div>Hello</div><p>5 Star Achiever</p>")) is None

    def test_rule_priority(self):
        explicit = BadgeRule(
            name="explicit_badge",
            selector=".badge-name",
            predicate=lambda el: True,
        )
        html = '<div>5 Star Achiever</div><span class="badge-name">Specialist</span>'

        assert find_badge(soup_of(html), [explicit, *BADGE_RULES]) == "Specialist"
        assert find_badge(soup_of(html), BADGE_RULES) == "5 Star Achiever"

    def test_custom_extractor(self):
        rule = BadgeRule(
            name="title_attr",
            selector="img[title]",
            predicate=lambda el: "badge" in el["title"].lower(),
            extractor=lambda el: el["title"],
        )
        html = '<img title="Logo"><img title="Gold Badge">'
        assert rule.apply(soup_of(html)) == "Gold Badge"
