"""Abstract base class for matchup statistics providers."""

from abc import ABC, abstractmethod

from betbot.models.stats import MatchupStatistics, RecentForm, WeatherConditions


class BaseStatsProvider(ABC):
    """
    Source of the per-game inputs the factor calculators consume.

    Implementations:
    - SimulatedStatsProvider: draws plausible numbers from reference ranges

    Any lookup may raise; the recommendation engine treats a failed
    lookup as "no data" for that game.
    """

    @abstractmethod
    async def get_team_statistics(self, home_team: str, away_team: str) -> MatchupStatistics:
        """Batting and pitching numbers for both sides."""
        pass

    @abstractmethod
    async def get_recent_form(self, home_team: str, away_team: str) -> RecentForm:
        """Recent win percentage for both sides."""
        pass

    @abstractmethod
    async def get_weather(self, home_team: str) -> WeatherConditions:
        """Game-time weather at the home team's venue."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        pass
