"""Factor scores, grades and recommendation models."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NEUTRAL_SCORE = 70

FACTOR_NAMES = (
    "offensive_production",
    "pitching_matchup",
    "situational_edge",
    "team_momentum",
    "market_inefficiency",
    "system_confidence",
)

FACTOR_LABELS = {
    "offensive_production": "Offensive Production",
    "pitching_matchup": "Pitching Matchup",
    "situational_edge": "Situational Edge",
    "team_momentum": "Team Momentum",
    "market_inefficiency": "Market Inefficiency",
    "system_confidence": "System Confidence",
}


class Grade(str, Enum):
    """Letter grade, best first."""
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D_PLUS = "D+"
    D = "D"
    F = "F"

    @property
    def rank(self) -> int:
        """Total-order rank used for comparison and sorting only."""
        return GRADE_RANKS[self]


GRADE_RANKS: dict[Grade, int] = {
    Grade.A_PLUS: 12,
    Grade.A: 11,
    Grade.A_MINUS: 10,
    Grade.B_PLUS: 9,
    Grade.B: 8,
    Grade.B_MINUS: 7,
    Grade.C_PLUS: 6,
    Grade.C: 5,
    Grade.C_MINUS: 4,
    Grade.D_PLUS: 3,
    Grade.D: 2,
    Grade.F: 1,
}


class FactorScores(BaseModel):
    """
    The six factor scores for one pick.

    All six are always present; a calculator that could not run leaves
    the neutral default in place.
    """

    model_config = ConfigDict(frozen=True)

    offensive_production: int = Field(default=NEUTRAL_SCORE, ge=0, le=100)
    pitching_matchup: int = Field(default=NEUTRAL_SCORE, ge=0, le=100)
    situational_edge: int = Field(default=NEUTRAL_SCORE, ge=0, le=100)
    team_momentum: int = Field(default=NEUTRAL_SCORE, ge=0, le=100)
    market_inefficiency: int = Field(default=NEUTRAL_SCORE, ge=0, le=100)
    system_confidence: int = Field(default=NEUTRAL_SCORE, ge=0, le=100)

    @classmethod
    def neutral(cls) -> FactorScores:
        return cls()

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in FACTOR_NAMES}


class Recommendation(BaseModel):
    """
    A graded moneyline pick for one side of one game.
    """

    model_config = ConfigDict(frozen=True)

    game_id: str
    selection: str
    bet_type: str = "moneyline"
    odds: float
    grade: Grade
    confidence: int = Field(ge=0, le=100)
    reasoning: str
    analysis: FactorScores

    # Echoed game metadata
    game_time: Optional[datetime] = None
    home_team: str
    away_team: str
    is_home: bool
    venue: str = ""

    @property
    def opponent(self) -> str:
        return self.away_team if self.is_home else self.home_team


class GameContext(BaseModel):
    """Optional details the narrative generator weaves into its text."""

    opponent_handedness: Optional[str] = Field(default=None, description="'RHP' or 'LHP'")
    is_home_game: Optional[bool] = None
    park_factor: Optional[float] = Field(default=None, description="100 = neutral")
    starter_era: Optional[float] = None
    last10_record: Optional[str] = Field(default=None, description='e.g. "7-3"')
    pick_pitcher: Optional[str] = None
    opponent_pitcher: Optional[str] = None
    pick_pitcher_era: Optional[float] = None
    opponent_pitcher_era: Optional[float] = None
    xwoba: Optional[float] = None
    whip: Optional[float] = None
    streak: Optional[int] = Field(default=None, description="Positive = winning streak")


class PickKind(str, Enum):
    DAILY = "daily"
    LOCK = "lock"


PICK_ID_PREFIXES = {PickKind.DAILY: "pick", PickKind.LOCK: "lock"}


class PickRecord(BaseModel):
    """
    The published pick of the day (or lock) for one date.

    ``id`` is ``{prefix}_{YYYY-MM-DD}_{game_id}``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: PickKind
    pick_date: date
    status: str = "pending"
    venue: str
    recommendation: Recommendation
    created_at: datetime
