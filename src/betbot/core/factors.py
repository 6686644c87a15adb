"""
Factor calculators.

Six independent scores, each built from a base value, threshold bands
over the relevant statistics and a little uniform noise, then rounded
and clamped to the calculator's range:

    offensive_production   base 60   clamp [50, 95]
    pitching_matchup       base 65   clamp [55, 90]
    situational_edge       base 60   clamp [55, 85]
    team_momentum          base 65   clamp [50, 95]
    market_inefficiency    base 65   clamp [55, 90]
    system_confidence      base 70   clamp [60, 85]

A calculator never raises: on any error it logs and returns the neutral
score (70).
"""

from __future__ import annotations

import functools
from typing import Callable, Optional

import numpy as np
import structlog

from betbot.core.odds_math import american_to_prob, relative_edge
from betbot.core.randomness import RandomSource, noise, uniform
from betbot.models.analysis import NEUTRAL_SCORE, FactorScores
from betbot.models.stats import (
    MatchupContext,
    MatchupStatistics,
    RecentForm,
    TeamStatistics,
    WeatherConditions,
)

logger = structlog.get_logger()

# League-average stand-ins for missing numbers
DEFAULT_BATTING_AVG = 0.260
DEFAULT_OPS = 0.750
DEFAULT_ERA = 4.20

HOME_FIELD_BONUS = 8
ROAD_PENALTY = -3
AWAY_BALLPARK_WEIGHT = 0.3

BALLPARK_EFFECTS: dict[str, float] = {
    "Coors Field": 6,       # Altitude, hitter friendly
    "Fenway Park": 3,       # Green Monster
    "Yankee Stadium": 2,    # Short porch
    "Petco Park": -3,       # Pitcher friendly
    "Marlins Park": -2,     # Large dimensions
}

TEAM_VENUES: dict[str, str] = {
    "New York Yankees": "Yankee Stadium",
    "Boston Red Sox": "Fenway Park",
    "Los Angeles Dodgers": "Dodger Stadium",
    "San Francisco Giants": "Oracle Park",
    "Chicago Cubs": "Wrigley Field",
    "Colorado Rockies": "Coors Field",
    "Philadelphia Phillies": "Citizens Bank Park",
    "Houston Astros": "Minute Maid Park",
    "Texas Rangers": "Globe Life Field",
    "San Diego Padres": "Petco Park",
    "Miami Marlins": "Marlins Park",
}
DEFAULT_VENUE = "MLB Stadium"

# Data-quality weight for each input the system-confidence factor looks at
DATA_QUALITY_WEIGHTS = {
    "home_batting_avg": 85,
    "home_era": 80,
    "home_ops": 75,
    "home_recent_form": 70,
    "away_recent_form": 70,
    "temperature": 60,
}
QUALITY_PULL = 0.3


def venue_for_team(team: str) -> str:
    return TEAM_VENUES.get(team, DEFAULT_VENUE)


def _bounded(score: float, low: int, high: int) -> int:
    """Round half up, then clamp."""
    rounded = float(np.floor(score + 0.5))
    return int(np.clip(rounded, low, high))


def neutral_on_error(func: Callable[..., int]) -> Callable[..., int]:
    """Return the neutral score instead of propagating calculator errors."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> int:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.warning(
                "factor_calculation_failed",
                factor=func.__name__,
                error=str(e),
                fallback=NEUTRAL_SCORE,
            )
            return NEUTRAL_SCORE

    return wrapper


@neutral_on_error
def offensive_production(stats: TeamStatistics, rng: RandomSource) -> int:
    """Run-scoring outlook for the pick side."""
    score = 60.0

    batting_avg = stats.batting_avg or DEFAULT_BATTING_AVG
    if batting_avg > 0.280:
        score += 8
    elif batting_avg > 0.270:
        score += 4
    elif batting_avg < 0.240:
        score -= 6

    ops = stats.ops or DEFAULT_OPS
    if ops > 0.820:
        score += 10
    elif ops > 0.780:
        score += 6
    elif ops < 0.700:
        score -= 8

    if stats.xwoba:
        if stats.xwoba > 0.340:
            score += 6
        elif stats.xwoba < 0.300:
            score -= 4

    if stats.barrel_pct:
        if stats.barrel_pct > 9.0:
            score += 4
        elif stats.barrel_pct < 6.0:
            score -= 3

    score += noise(rng, 8)
    return _bounded(score, 50, 95)


@neutral_on_error
def pitching_matchup(
    pick: TeamStatistics,
    opponent: TeamStatistics,
    rng: RandomSource,
) -> int:
    """Staff and probable-starter edge of the pick side over the opponent."""
    score = 65.0

    pick_era = pick.era or DEFAULT_ERA
    if pick_era < 3.50:
        score += 8
    elif pick_era < 4.00:
        score += 4
    elif pick_era > 5.00:
        score -= 8

    if pick.starter_era and opponent.starter_era:
        starter_advantage = opponent.starter_era - pick.starter_era
        score += float(np.clip(starter_advantage * 4, -10, 10))

    if pick.starter_whip:
        if pick.starter_whip < 1.20:
            score += 5
        elif pick.starter_whip > 1.50:
            score -= 5

    score += noise(rng, 6)
    return _bounded(score, 55, 90)


@neutral_on_error
def situational_edge(
    home_team: str,
    is_home: bool,
    weather: WeatherConditions,
    rng: RandomSource,
) -> int:
    """Home field, ballpark and weather."""
    score = 60.0
    score += HOME_FIELD_BONUS if is_home else ROAD_PENALTY

    effect = BALLPARK_EFFECTS.get(venue_for_team(home_team), 0)
    score += effect if is_home else effect * AWAY_BALLPARK_WEIGHT

    if weather.temperature:
        if weather.temperature > 85:
            score += 2  # Hot air carries
        elif weather.temperature < 55:
            score -= 2

    if weather.wind_speed is not None and weather.wind_speed > 10:
        # Wind can blow in or out
        score += 2 if rng.random() > 0.5 else -2

    score += noise(rng, 8)
    return _bounded(score, 55, 85)


@neutral_on_error
def team_momentum(recent_win_pct: Optional[float], rng: RandomSource) -> int:
    """Recent form plus simulated hot/cold streaks."""
    score = 65.0

    win_pct = recent_win_pct if recent_win_pct else uniform(rng, 0.40, 0.70)
    if win_pct > 0.65:
        score += 12
    elif win_pct > 0.55:
        score += 6
    elif win_pct < 0.35:
        score -= 10
    elif win_pct < 0.45:
        score -= 5

    hot_streak = rng.random() > 0.7
    cold_streak = rng.random() > 0.8
    if hot_streak:
        score += 8
    if cold_streak:
        score -= 8

    score += noise(rng, 6)
    return _bounded(score, 50, 95)


def market_edge(odds: float, is_home: bool, rng: RandomSource) -> float:
    """
    Relative edge of a crude "true" probability over the price.

    The true probability is a home/away baseline (.54/.46) nudged by up
    to 5 points either way and kept inside [0.3, 0.7].
    """
    implied = american_to_prob(odds)
    true_prob = 0.54 if is_home else 0.46
    true_prob = float(np.clip(true_prob + noise(rng, 0.1), 0.3, 0.7))
    return relative_edge(true_prob, implied)


@neutral_on_error
def market_inefficiency(odds: float, is_home: bool, rng: RandomSource) -> int:
    """Value of the posted price."""
    score = 65.0

    edge = market_edge(odds, is_home, rng)
    if edge > 0.10:
        score += 15
    elif edge > 0.05:
        score += 8
    elif edge > 0.02:
        score += 3
    elif edge < -0.10:
        score -= 15
    elif edge < -0.05:
        score -= 8

    score += noise(rng, 8)
    return _bounded(score, 55, 90)


def data_quality(
    stats: MatchupStatistics,
    recent_form: RecentForm,
    weather: WeatherConditions,
) -> Optional[float]:
    """Average quality weight of the inputs that are present, or None if none are."""
    present = {
        "home_batting_avg": stats.home.batting_avg is not None,
        "home_era": stats.home.era is not None,
        "home_ops": stats.home.ops is not None,
        "home_recent_form": recent_form.home is not None,
        "away_recent_form": recent_form.away is not None,
        "temperature": weather.temperature is not None,
    }
    weights = [DATA_QUALITY_WEIGHTS[key] for key, ok in present.items() if ok]
    if not weights:
        return None
    return sum(weights) / len(weights)


@neutral_on_error
def system_confidence(
    stats: MatchupStatistics,
    recent_form: RecentForm,
    weather: WeatherConditions,
    rng: RandomSource,
) -> int:
    """How much the model trusts its own inputs."""
    score = 70.0

    quality = data_quality(stats, recent_form, weather)
    if quality is not None:
        score = float(np.floor(score + (quality - 70) * QUALITY_PULL + 0.5))

    score += noise(rng, 6)
    return _bounded(score, 60, 85)


def calculate_factor_scores(
    context: Optional[MatchupContext],
    home_team: str,
    is_home: bool,
    odds: float,
    rng: RandomSource,
) -> FactorScores:
    """
    Run all six calculators for one side of a matchup.

    A missing context (stat lookup failed) yields all-neutral scores.
    """
    if context is None:
        return FactorScores.neutral()

    pick_stats, opponent_stats = context.stats.for_side(is_home)
    return FactorScores(
        offensive_production=offensive_production(pick_stats, rng),
        pitching_matchup=pitching_matchup(pick_stats, opponent_stats, rng),
        situational_edge=situational_edge(home_team, is_home, context.weather, rng),
        team_momentum=team_momentum(context.recent_form.for_side(is_home), rng),
        market_inefficiency=market_inefficiency(odds, is_home, rng),
        system_confidence=system_confidence(
            context.stats, context.recent_form, context.weather, rng
        ),
    )
