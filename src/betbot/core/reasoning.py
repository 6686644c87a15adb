"""Short, deterministic reasoning sentence for a recommendation."""

from __future__ import annotations

import structlog

from betbot.models.analysis import FactorScores, Grade

logger = structlog.get_logger()

SALIENCE_THRESHOLD = 75

# Factor -> clause, in sentence order
_CLAUSES = (
    ("offensive_production", "{team} shows strong offensive metrics"),
    ("pitching_matchup", "favorable pitching matchup"),
    ("situational_edge", "positive situational factors"),
    ("team_momentum", "good recent form"),
    ("market_inefficiency", "market value detected"),
)


def _grade_text(grade: Grade | str) -> str:
    return grade.value if isinstance(grade, Grade) else str(grade)


def build_reasoning(
    team: str,
    is_home: bool,
    grade: Grade | str,
    scores: FactorScores,
    salience_threshold: int = SALIENCE_THRESHOLD,
) -> str:
    """
    Describe why a side was graded the way it was.

    Example:
        "New York Yankees at home presents a grade A opportunity with
        favorable pitching matchup, good recent form. Analysis indicates
        78% system confidence."
    """
    grade_text = _grade_text(grade)
    try:
        values = scores.as_dict()
        clauses = [
            template.format(team=team)
            for factor, template in _CLAUSES
            if values[factor] >= salience_threshold
        ]

        location = "at home" if is_home else "on the road"
        reasoning = f"{team} {location} presents a grade {grade_text} opportunity"
        if clauses:
            reasoning += f" with {', '.join(clauses)}"
        reasoning += f". Analysis indicates {round(values['system_confidence'])}% system confidence."
        return reasoning
    except Exception as e:
        logger.warning("reasoning_generation_failed", team=team, error=str(e))
        return f"{team} shows favorable indicators for a grade {grade_text} recommendation."
