"""
Simulated statistics provider.

Stands in for live stat feeds by drawing every number uniformly from a
realistic MLB range. Seed the random source for reproducible output.
"""

from __future__ import annotations

from typing import Optional

import structlog

from betbot.core.randomness import RandomSource, make_rng, uniform
from betbot.models.stats import (
    MatchupStatistics,
    RecentForm,
    TeamStatistics,
    WeatherConditions,
)
from betbot.providers.base import BaseStatsProvider

logger = structlog.get_logger()

# Reference ranges (low, high)
BATTING_AVG_RANGE = (0.240, 0.290)
ERA_RANGE = (3.80, 5.00)
OPS_RANGE = (0.720, 0.880)
STARTER_ERA_RANGE = (3.50, 5.00)
STARTER_WHIP_RANGE = (1.10, 1.50)
XWOBA_RANGE = (0.310, 0.350)
BARREL_PCT_RANGE = (7.0, 11.0)
RECENT_FORM_RANGE = (0.35, 0.70)
TEMPERATURE_RANGE = (65.0, 90.0)
WIND_SPEED_RANGE = (0.0, 15.0)


class SimulatedStatsProvider(BaseStatsProvider):
    """
    Draws matchup inputs from fixed reference ranges.

    Args:
        rng: Random source (defaults to an unseeded numpy generator)
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else make_rng()

    def _draw(self, bounds: tuple[float, float]) -> float:
        return uniform(self.rng, *bounds)

    def _team(self) -> TeamStatistics:
        return TeamStatistics(
            batting_avg=self._draw(BATTING_AVG_RANGE),
            era=self._draw(ERA_RANGE),
            ops=self._draw(OPS_RANGE),
            starter_era=self._draw(STARTER_ERA_RANGE),
            starter_whip=self._draw(STARTER_WHIP_RANGE),
            xwoba=self._draw(XWOBA_RANGE),
            barrel_pct=self._draw(BARREL_PCT_RANGE),
        )

    async def get_team_statistics(self, home_team: str, away_team: str) -> MatchupStatistics:
        logger.debug("simulated_team_statistics", home=home_team, away=away_team)
        return MatchupStatistics(home=self._team(), away=self._team())

    async def get_recent_form(self, home_team: str, away_team: str) -> RecentForm:
        return RecentForm(
            home=self._draw(RECENT_FORM_RANGE),
            away=self._draw(RECENT_FORM_RANGE),
        )

    async def get_weather(self, home_team: str) -> WeatherConditions:
        return WeatherConditions(
            temperature=self._draw(TEMPERATURE_RANGE),
            wind_speed=self._draw(WIND_SPEED_RANGE),
            conditions="clear",
        )
