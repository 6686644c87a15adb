"""
Presentation helpers: factor colouring, grade badges and pick breakdowns.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import numpy as np
import pytz

from betbot.core.grading import BREAKDOWN_FACTOR_LADDER, UPDATED_GRADE_LADDER
from betbot.core.odds_math import format_american, implied_percent, model_percent
from betbot.models.analysis import FACTOR_LABELS, Grade, Recommendation
from betbot.models.breakdown import (
    ColorClasses,
    FactorRow,
    GradeAnalysis,
    PickBreakdown,
    PickDetails,
)

DEFAULT_TIMEZONE = "America/New_York"

# (min normalized score, hex colour, text, bg, border, tooltip template)
_FACTOR_BANDS = (
    (95, "#00FF00", "text-green-900", "bg-green-400", "border-green-500",
     "{score} - Elite advantage. {name} shows exceptional positive signals."),
    (90, "#33CC33", "text-green-800", "bg-green-300", "border-green-400",
     "{score} - Strong advantage. {name} indicates very favorable conditions."),
    (85, "#66FF66", "text-green-700", "bg-green-200", "border-green-300",
     "{score} - Moderate advantage. {name} shows positive trending signals."),
    (80, "#CCCCCC", "text-gray-700", "bg-gray-200", "border-gray-300",
     "{score} - Neutral baseline. {name} shows balanced or average conditions."),
    (75, "#FF9999", "text-red-700", "bg-red-200", "border-red-300",
     "{score} - Mild disadvantage. {name} indicates slightly unfavorable conditions."),
    (70, "#FF6666", "text-red-800", "bg-red-300", "border-red-400",
     "{score} - Moderate disadvantage. {name} shows concerning negative signals."),
)
_FACTOR_FLOOR_BAND = (
    0, "#FF3333", "text-red-900", "bg-red-400", "border-red-500",
    "{score} - Strong disadvantage. {name} indicates significantly unfavorable conditions.",
)

_GRADE_COLORS: dict[str, ColorClasses] = {
    "A+": ColorClasses(text="text-yellow-900", bg="bg-yellow-400", border="border-yellow-500"),
    "A": ColorClasses(text="text-green-900", bg="bg-green-400", border="border-green-500"),
    "B+": ColorClasses(text="text-blue-900", bg="bg-blue-400", border="border-blue-500"),
    "B": ColorClasses(text="text-blue-900", bg="bg-blue-400", border="border-blue-500"),
    "C+": ColorClasses(text="text-orange-900", bg="bg-orange-400", border="border-orange-500"),
    "C": ColorClasses(text="text-orange-900", bg="bg-orange-400", border="border-orange-500"),
    "D": ColorClasses(text="text-red-900", bg="bg-red-400", border="border-red-500"),
    "F": ColorClasses(text="text-red-900", bg="bg-red-400", border="border-red-500"),
}
_DEFAULT_GRADE_COLOR = ColorClasses(text="text-gray-700", bg="bg-gray-200", border="border-gray-300")

UNIT_SIZING: dict[str, str] = {
    "A+": "4-5 unit",
    "A": "3-4 unit",
    "A-": "2-3 unit",
    "B+": "2-3 unit",
    "B": "1-2 unit",
    "B-": "1-2 unit",
    "C+": "1 unit",
    "C": "0.5-1 unit",
}
DEFAULT_UNIT_SIZING = "0.5 unit"

# (factor, label used in the sentence, threshold), in priority order
KEY_STRENGTH_PRIORITY = (
    ("market_inefficiency", "market inefficiency", 90),
    ("system_confidence", "system confidence", 85),
    ("pitching_matchup", "pitching advantage", 80),
    ("offensive_production", "offensive production", 80),
    ("situational_edge", "situational edge", 75),
    ("team_momentum", "team momentum", 75),
)

# Breakdown rows: (factor, row title, description)
BREAKDOWN_ROWS = (
    ("market_inefficiency", "Market Edge",
     "Compares the posted price with the model's win probability to find mispriced lines."),
    ("situational_edge", "Situational Edge",
     "Home field, ballpark dimensions and game-time weather."),
    ("pitching_matchup", "Pitching Matchup",
     "Starting pitcher comparison on ERA, WHIP and recent form."),
    ("team_momentum", "Team Momentum",
     "Recent win rate against season form, including hot and cold streaks."),
    ("system_confidence", "System Confidence",
     "Model certainty from data completeness; higher means a firmer analytical foundation."),
    ("offensive_production", "Offensive Production",
     "Run-scoring outlook from batting average, OPS, xwOBA and barrel rate."),
)


def normalize_factor_score(score: float) -> int:
    """Map a raw 0-100 score onto the 60-100 display range."""
    clamped = float(np.clip(score, 0, 100))
    return int(np.floor(60 + clamped * 0.4 + 0.5))


def _band(normalized: float) -> tuple:
    for band in _FACTOR_BANDS:
        if normalized >= band[0]:
            return band
    return _FACTOR_FLOOR_BAND


def factor_color(normalized: float) -> str:
    return _band(normalized)[1]


def factor_color_classes(normalized: float) -> ColorClasses:
    _, _, text, bg, border, _ = _band(normalized)
    return ColorClasses(text=text, bg=bg, border=border)


def factor_tooltip(normalized: float, factor_name: str) -> str:
    return _band(normalized)[5].format(score=normalized, name=factor_name)


def updated_grade(confidence: float) -> Grade:
    return UPDATED_GRADE_LADDER.grade_for(confidence)


def grade_color_classes(grade: Grade | str) -> ColorClasses:
    key = grade.value if isinstance(grade, Grade) else grade
    return _GRADE_COLORS.get(key, _DEFAULT_GRADE_COLOR)


def unit_recommendation(grade: Grade | str) -> str:
    key = grade.value if isinstance(grade, Grade) else grade
    return f"{UNIT_SIZING.get(key, DEFAULT_UNIT_SIZING)} investment"


def key_strength(values: dict[str, int]) -> str:
    for factor, label, threshold in KEY_STRENGTH_PRIORITY:
        score = values[factor]
        if score < threshold:
            continue
        if score >= 95:
            return f"exceptional {label} of {score}/100"
        if score >= 90:
            return f"substantial {label} of {score}/100"
        if score >= 80:
            return f"strong {label}"
        return f"solid {label}"
    return "balanced analytical factors"


def format_game_time(game_time: Optional[datetime], timezone: str = DEFAULT_TIMEZONE) -> str:
    """e.g. "Jul 4, 7:05 PM EDT"; "TBD" when unknown."""
    if game_time is None:
        return "TBD"
    if game_time.tzinfo is None:
        game_time = pytz.utc.localize(game_time)
    local = game_time.astimezone(pytz.timezone(timezone))
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {hour}:{local:%M} {local:%p} {local:%Z}"


def _opportunity_word(grade: str) -> str:
    if "+" in grade:
        return "strong"
    if "-" in grade:
        return "solid"
    return "exceptional"


def build_pick_breakdown(
    rec: Recommendation,
    venue: Optional[str] = None,
    is_lock_pick: bool = False,
    timezone: str = DEFAULT_TIMEZONE,
) -> PickBreakdown:
    """
    Assemble the long-form write-up for one recommendation.

    Probabilities and edge are in percent.
    """
    grade = rec.grade.value
    odds_text = format_american(rec.odds)
    values = rec.analysis.as_dict()

    implied = implied_percent(rec.odds)
    model = model_percent(implied, rec.confidence)
    edge = model - implied

    scores = list(values.values())
    elite = sum(1 for s in scores if s >= 90)
    strong = sum(1 for s in scores if 80 <= s < 90)

    label = "Lock Pick" if is_lock_pick else "Pick of the Day"

    return PickBreakdown(
        title=f"BetBot {label} Analysis: {grade} Grade",
        pick_details=PickDetails(
            game=f"{rec.away_team} @ {rec.home_team}",
            pick=f"{rec.selection} ML {odds_text}",
            venue=venue if venue is not None else rec.venue,
            time=format_game_time(rec.game_time, timezone),
        ),
        grade_analysis=GradeAnalysis(
            summary=(
                f"Our model rates {rec.selection} as a profitable pick with "
                f"{rec.confidence}% model certainty and {grade} value potential."
            ),
            market_analysis=(
                f"Market odds of {odds_text} imply a {implied:.1f}% win probability, "
                f"while our model projects {model:.1f}%, a {abs(edge):.1f}% edge."
            ),
            factor_breakdown=(
                f"The pick earned {elite} elite scores (90+) and {strong} strong scores (80+) "
                f"across six analytical factors."
            ),
            key_strength=f"Key strengths include {key_strength(values)}.",
            investment=(
                f"This qualifies as a {_opportunity_word(grade)} betting opportunity "
                f"suitable for a {unit_recommendation(grade)}."
            ),
        ),
        factors=[
            FactorRow(
                name=title,
                grade=BREAKDOWN_FACTOR_LADDER.grade_for(values[factor]),
                score=values[factor],
                description=description,
            )
            for factor, title, description in BREAKDOWN_ROWS
        ],
        implied_probability=implied,
        model_probability=model,
        edge=edge,
        elite_count=elite,
        strong_count=strong,
    )


def factor_label(factor: str) -> str:
    return FACTOR_LABELS.get(factor, factor)
