"""Team statistics snapshots fed into the factor calculators."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TeamStatistics(BaseModel):
    """
    Per-team batting and pitching numbers for one matchup.

    Every field is optional; calculators fall back to league-average
    defaults when a number is missing.
    """

    model_config = ConfigDict(frozen=True)

    batting_avg: Optional[float] = None
    era: Optional[float] = None
    ops: Optional[float] = None
    starter_era: Optional[float] = None
    starter_whip: Optional[float] = None
    xwoba: Optional[float] = Field(default=None, description="Expected weighted on-base average")
    barrel_pct: Optional[float] = Field(default=None, description="Barrel rate in percent (e.g. 8.5)")


class MatchupStatistics(BaseModel):
    """Home/away statistics pair."""

    model_config = ConfigDict(frozen=True)

    home: TeamStatistics = Field(default_factory=TeamStatistics)
    away: TeamStatistics = Field(default_factory=TeamStatistics)

    def for_side(self, is_home: bool) -> tuple[TeamStatistics, TeamStatistics]:
        """(pick side, opponent) statistics."""
        if is_home:
            return self.home, self.away
        return self.away, self.home


class RecentForm(BaseModel):
    """Recent win percentage (0-1) per side."""

    model_config = ConfigDict(frozen=True)

    home: Optional[float] = Field(default=None, ge=0, le=1)
    away: Optional[float] = Field(default=None, ge=0, le=1)

    def for_side(self, is_home: bool) -> Optional[float]:
        return self.home if is_home else self.away


class WeatherConditions(BaseModel):
    """Game-time weather at the home venue."""

    model_config = ConfigDict(frozen=True)

    temperature: Optional[float] = Field(default=None, description="Degrees Fahrenheit")
    wind_speed: Optional[float] = Field(default=None, description="Miles per hour")
    conditions: str = ""


class MatchupContext(BaseModel):
    """Everything the factor calculators need for one game."""

    model_config = ConfigDict(frozen=True)

    stats: MatchupStatistics = Field(default_factory=MatchupStatistics)
    recent_form: RecentForm = Field(default_factory=RecentForm)
    weather: WeatherConditions = Field(default_factory=WeatherConditions)
