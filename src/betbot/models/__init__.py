"""Data models for games, statistics and graded picks."""

from betbot.models.odds import BookmakerQuote, Game, MarketType, Outcome
from betbot.models.stats import (
    MatchupContext,
    MatchupStatistics,
    RecentForm,
    TeamStatistics,
    WeatherConditions,
)
from betbot.models.analysis import (
    FACTOR_NAMES,
    NEUTRAL_SCORE,
    FactorScores,
    GameContext,
    Grade,
    PickKind,
    PickRecord,
    Recommendation,
)
from betbot.models.breakdown import ColorClasses, FactorRow, PickBreakdown

__all__ = [
    "BookmakerQuote",
    "Game",
    "MarketType",
    "Outcome",
    "MatchupContext",
    "MatchupStatistics",
    "RecentForm",
    "TeamStatistics",
    "WeatherConditions",
    "FACTOR_NAMES",
    "NEUTRAL_SCORE",
    "FactorScores",
    "GameContext",
    "Grade",
    "PickKind",
    "PickRecord",
    "Recommendation",
    "ColorClasses",
    "FactorRow",
    "PickBreakdown",
]
