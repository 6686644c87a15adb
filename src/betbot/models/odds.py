"""Game and sportsbook odds models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MarketType(str, Enum):
    """Sportsbook market types."""
    H2H = "h2h"  # Head-to-head (moneyline)
    SPREADS = "spreads"
    TOTALS = "totals"


class Outcome(BaseModel):
    """A single priced selection inside a market."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Selection name (team, Over/Under)")
    price: float = Field(description="American odds, e.g. -150 or +130")
    point: Optional[float] = None  # spreads/totals only


class BookmakerQuote(BaseModel):
    """
    One bookmaker's quote for one market of a game.
    """

    model_config = ConfigDict(frozen=True)

    bookmaker: str = Field(description="Bookmaker key (e.g., 'draftkings')")
    title: str = ""
    market_type: MarketType
    outcomes: tuple[Outcome, ...] = ()

    def price_for(self, selection: str) -> Optional[float]:
        """Price of the named selection, or None if it isn't quoted."""
        for outcome in self.outcomes:
            if outcome.name == selection:
                return outcome.price
        return None


class Game(BaseModel):
    """
    A scheduled game with its bookmaker quotes.

    Quotes keep the order the odds provider returned them in, so the
    "first bookmaker" is meaningful.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    sport_key: str = "baseball_mlb"
    home_team: str
    away_team: str
    commence_time: Optional[datetime] = None
    quotes: tuple[BookmakerQuote, ...] = ()
    # Every bookmaker the provider listed, including ones with no usable market
    bookmaker_order: tuple[str, ...] = ()

    @property
    def bookmakers(self) -> list[str]:
        """Bookmaker keys in provider order, without duplicates."""
        seen: list[str] = []
        keys = self.bookmaker_order or tuple(q.bookmaker for q in self.quotes)
        for key in keys:
            if key not in seen:
                seen.append(key)
        return seen

    def moneyline_quote(self) -> Optional[BookmakerQuote]:
        """
        Moneyline quote from the first listed bookmaker only.

        Returns None when the first bookmaker has no h2h market, even if a
        later bookmaker does.
        """
        bookmakers = self.bookmakers
        if not bookmakers:
            return None
        first = bookmakers[0]
        for quote in self.quotes:
            if quote.bookmaker == first and quote.market_type == MarketType.H2H:
                return quote
        return None

    @property
    def label(self) -> str:
        return f"{self.away_team} @ {self.home_team}"
