"""Tests for presentation helpers and pick breakdowns."""

from datetime import datetime, timezone

import pytest

from betbot.core.display import (
    build_pick_breakdown,
    factor_color,
    factor_label,
    factor_color_classes,
    factor_tooltip,
    format_game_time,
    grade_color_classes,
    key_strength,
    normalize_factor_score,
    unit_recommendation,
    updated_grade,
)
from betbot.models.analysis import FactorScores, Grade, Recommendation


@pytest.fixture
def yankees_rec() -> Recommendation:
    return Recommendation(
        game_id="game-1",
        selection="New York Yankees",
        odds=-150,
        grade=Grade.A_MINUS,
        confidence=75,
        reasoning="New York Yankees at home presents a grade A- opportunity.",
        analysis=FactorScores(
            offensive_production=70,
            pitching_matchup=91,
            situational_edge=84,
            team_momentum=65,
            market_inefficiency=57,
            system_confidence=72,
        ),
        game_time=datetime(2025, 7, 4, 23, 5, tzinfo=timezone.utc),
        home_team="New York Yankees",
        away_team="Boston Red Sox",
        is_home=True,
        venue="Yankee Stadium",
    )


class TestFactorDisplay:
    """Test normalized factor colouring."""

    @pytest.mark.parametrize(
        "raw,expected",
        [(0, 60), (100, 100), (50, 80), (70, 88), (-10, 60), (150, 100), (1.25, 61)],
    )
    def test_normalize(self, raw, expected):
        assert normalize_factor_score(raw) == expected

    def test_labels(self):
        assert factor_label("pitching_matchup") == "Pitching Matchup"
        assert factor_label("weather") == "weather"

    def test_colors_by_band(self):
        assert factor_color(95) == "#00FF00"
        assert factor_color(90) == "#33CC33"
        assert factor_color(85) == "#66FF66"
        assert factor_color(80) == "#CCCCCC"
        assert factor_color(75) == "#FF9999"
        assert factor_color(70) == "#FF6666"
        assert factor_color(69) == "#FF3333"

    def test_color_classes(self):
        classes = factor_color_classes(88)
        assert classes.text == "text-green-700"
        assert classes.bg == "bg-green-200"
        assert classes.border == "border-green-300"
        assert factor_color_classes(60).bg == "bg-red-400"

    def test_tooltip(self):
        assert factor_tooltip(88, "Pitching Matchup") == (
            "88 - Moderate advantage. Pitching Matchup shows positive trending signals."
        )
        assert factor_tooltip(62, "Team Momentum").startswith("62 - Strong disadvantage.")


class TestGradeDisplay:
    """Test grade badges and sizing."""

    def test_grade_colors(self):
        assert grade_color_classes(Grade.A_PLUS).bg == "bg-yellow-400"
        assert grade_color_classes("A").bg == "bg-green-400"
        assert grade_color_classes("B+").bg == "bg-blue-400"
        assert grade_color_classes("C").bg == "bg-orange-400"
        assert grade_color_classes("F").bg == "bg-red-400"
        assert grade_color_classes("B-").bg == "bg-gray-200"

    def test_updated_grade(self):
        assert updated_grade(95) == Grade.A_PLUS
        assert updated_grade(84.9) == Grade.B
        assert updated_grade(59) == Grade.F

    def test_unit_recommendation(self):
        assert unit_recommendation(Grade.A_PLUS) == "4-5 unit investment"
        assert unit_recommendation("B+") == "2-3 unit investment"
        assert unit_recommendation("C") == "0.5-1 unit investment"
        assert unit_recommendation("C-") == "0.5 unit investment"


class TestKeyStrength:
    """Test key-strength priority."""

    def scores(self, **overrides) -> dict:
        return FactorScores(**overrides).as_dict()

    def test_balanced(self):
        assert key_strength(self.scores()) == "balanced analytical factors"

    def test_market_first(self):
        values = self.scores(market_inefficiency=96, pitching_matchup=99)
        assert key_strength(values) == "exceptional market inefficiency of 96/100"

    def test_substantial(self):
        assert key_strength(self.scores(system_confidence=91)) == "substantial system confidence of 91/100"

    def test_below_threshold_skipped(self):
        values = self.scores(market_inefficiency=89, pitching_matchup=85)
        assert key_strength(values) == "strong pitching advantage"

    def test_solid(self):
        assert key_strength(self.scores(situational_edge=76)) == "solid situational edge"


class TestPickBreakdown:
    """Test the long-form pick write-up."""

    def test_numbers(self, yankees_rec):
        breakdown = build_pick_breakdown(yankees_rec)
        assert breakdown.implied_probability == pytest.approx(60.0)
        assert breakdown.model_probability == pytest.approx(65.0)
        assert breakdown.edge == pytest.approx(5.0)
        assert breakdown.elite_count == 1
        assert breakdown.strong_count == 1

    def test_text(self, yankees_rec):
        breakdown = build_pick_breakdown(yankees_rec)
        assert breakdown.title == "BetBot Pick of the Day Analysis: A- Grade"
        assert breakdown.pick_details.game == "Boston Red Sox @ New York Yankees"
        assert breakdown.pick_details.pick == "New York Yankees ML -150"
        assert breakdown.pick_details.venue == "Yankee Stadium"
        assert breakdown.pick_details.time == "Jul 4, 7:05 PM EDT"
        analysis = breakdown.grade_analysis
        assert "imply a 60.0% win probability" in analysis.market_analysis
        assert "projects 65.0%, a 5.0% edge" in analysis.market_analysis
        assert "1 elite scores (90+) and 1 strong scores (80+)" in analysis.factor_breakdown
        assert analysis.key_strength == "Key strengths include substantial pitching advantage of 91/100."
        assert "solid betting opportunity" in analysis.investment
        assert "2-3 unit investment" in analysis.investment

    def test_lock_pick_title(self, yankees_rec):
        breakdown = build_pick_breakdown(yankees_rec, venue="Neutral Site", is_lock_pick=True)
        assert breakdown.title == "BetBot Lock Pick Analysis: A- Grade"
        assert breakdown.pick_details.venue == "Neutral Site"

    def test_factor_rows(self, yankees_rec):
        breakdown = build_pick_breakdown(yankees_rec)
        rows = {row.name: row for row in breakdown.factors}
        assert len(rows) == 6
        assert rows["Pitching Matchup"].grade == Grade.A
        assert rows["Pitching Matchup"].score == 91
        assert rows["Situational Edge"].grade == Grade.A_MINUS
        assert rows["Market Edge"].grade == Grade.C_MINUS
        assert rows["Team Momentum"].grade == Grade.C_PLUS

    def test_timezone(self, yankees_rec):
        breakdown = build_pick_breakdown(yankees_rec, timezone="America/Los_Angeles")
        assert breakdown.pick_details.time == "Jul 4, 4:05 PM PDT"

    def test_unknown_time(self):
        assert format_game_time(None) == "TBD"

    def test_naive_time_treated_as_utc(self):
        assert format_game_time(datetime(2025, 1, 10, 18, 0)) == "Jan 10, 1:00 PM EST"
