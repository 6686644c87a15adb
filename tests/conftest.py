"""
Pytest fixtures for testing.
"""

from datetime import datetime, timezone
from typing import Optional

import pytest

from betbot.models.odds import BookmakerQuote, Game, MarketType, Outcome
from betbot.models.stats import (
    MatchupStatistics,
    RecentForm,
    TeamStatistics,
    WeatherConditions,
)
from betbot.providers.base import BaseStatsProvider


class FixedRandom:
    """Random source that always returns the same value (0.5 = no noise)."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


class SequenceRandom:
    """Random source that cycles through a fixed sequence."""

    def __init__(self, values: list[float]):
        self.values = values
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


class StaticStatsProvider(BaseStatsProvider):
    """Returns canned matchup inputs."""

    def __init__(
        self,
        stats: Optional[MatchupStatistics] = None,
        form: Optional[RecentForm] = None,
        weather: Optional[WeatherConditions] = None,
    ):
        self.stats = stats or MatchupStatistics()
        self.form = form or RecentForm()
        self.weather = weather or WeatherConditions()
        self.calls: list[str] = []

    async def get_team_statistics(self, home_team: str, away_team: str) -> MatchupStatistics:
        self.calls.append("team_statistics")
        return self.stats

    async def get_recent_form(self, home_team: str, away_team: str) -> RecentForm:
        self.calls.append("recent_form")
        return self.form

    async def get_weather(self, home_team: str) -> WeatherConditions:
        self.calls.append("weather")
        return self.weather


class FailingWeatherProvider(StaticStatsProvider):
    """Weather lookup always fails."""

    async def get_weather(self, home_team: str) -> WeatherConditions:
        raise ConnectionError("weather service unavailable")


def make_game(
    home: str = "New York Yankees",
    away: str = "Boston Red Sox",
    home_price: Optional[float] = -150,
    away_price: Optional[float] = 130,
    game_id: str = "game-1",
    market_type: MarketType = MarketType.H2H,
) -> Game:
    outcomes = []
    if home_price is not None:
        outcomes.append(Outcome(name=home, price=home_price))
    if away_price is not None:
        outcomes.append(Outcome(name=away, price=away_price))
    return Game(
        id=game_id,
        home_team=home,
        away_team=away,
        commence_time=datetime(2025, 7, 4, 23, 5, tzinfo=timezone.utc),
        quotes=(
            BookmakerQuote(
                bookmaker="draftkings",
                title="DraftKings",
                market_type=market_type,
                outcomes=tuple(outcomes),
            ),
        ),
    )


@pytest.fixture
def fixed_rng() -> FixedRandom:
    """Midpoint random source: every noise term is zero."""
    return FixedRandom(0.5)


@pytest.fixture
def yankees_game() -> Game:
    """Yankees -150 at home against the Red Sox +130."""
    return make_game()


@pytest.fixture
def yankees_provider() -> StaticStatsProvider:
    """Yankees ERA 3.40 and OPS .830; nothing else known."""
    return StaticStatsProvider(
        stats=MatchupStatistics(
            home=TeamStatistics(era=3.40, ops=0.830),
            away=TeamStatistics(),
        ),
    )


@pytest.fixture
def sample_raw_events() -> list[dict]:
    """Two events as returned by The Odds API /odds endpoint."""
    return [
        {
            "id": "evt-1",
            "sport_key": "baseball_mlb",
            "sport_title": "MLB",
            "commence_time": "2025-07-04T23:05:00Z",
            "home_team": "New York Yankees",
            "away_team": "Boston Red Sox",
            "bookmakers": [
                {
                    "key": "draftkings",
                    "title": "DraftKings",
                    "markets": [
                        {
                            "key": "h2h",
                            "outcomes": [
                                {"name": "New York Yankees", "price": -150},
                                {"name": "Boston Red Sox", "price": 130},
                            ],
                        },
                        {
                            "key": "h2h_lay",
                            "outcomes": [{"name": "New York Yankees", "price": 140}],
                        },
                    ],
                },
                {
                    "key": "fanduel",
                    "title": "FanDuel",
                    "markets": [
                        {
                            "key": "h2h",
                            "outcomes": [
                                {"name": "New York Yankees", "price": -145},
                                {"name": "Boston Red Sox"},
                            ],
                        },
                    ],
                },
            ],
        },
        {
            "id": "evt-2",
            "sport_key": "baseball_mlb",
            "commence_time": "2025-07-05T00:10:00Z",
            "home_team": "Colorado Rockies",
            "away_team": "San Diego Padres",
            "bookmakers": [
                {
                    "key": "betmgm",
                    "title": "BetMGM",
                    "markets": [
                        {
                            "key": "h2h",
                            "outcomes": [
                                {"name": "Colorado Rockies", "price": 160},
                                {"name": "San Diego Padres", "price": -190},
                            ],
                        },
                        {
                            "key": "totals",
                            "outcomes": [
                                {"name": "Over", "price": -110, "point": 11.5},
                                {"name": "Under", "price": -110, "point": 11.5},
                            ],
                        },
                    ],
                },
            ],
        },
    ]
