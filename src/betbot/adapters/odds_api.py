"""
The Odds API adapter.

Fetches MLB moneyline prices from multiple sportsbooks via The Odds API.
https://the-odds-api.com/

Requires API key (free tier: 500 requests/month).
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Optional

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from betbot.models.odds import BookmakerQuote, Game, MarketType, Outcome

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://api.the-odds-api.com/v4"


def _parse_commence_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        logger.debug("commence_time_unparsed", value=value)
        return None


def parse_games(raw_events: list[dict]) -> list[Game]:
    """
    Parse The Odds API /odds response into Game records.

    Bookmaker order is preserved. Unknown market keys and outcomes
    without a price are skipped.
    """
    games: list[Game] = []

    for event in raw_events:
        quotes: list[BookmakerQuote] = []

        for bookmaker in event.get("bookmakers", []):
            bookmaker_key = bookmaker.get("key", "")

            for market in bookmaker.get("markets", []):
                try:
                    market_type = MarketType(market.get("key", ""))
                except ValueError:
                    continue  # Skip unknown market types

                outcomes = tuple(
                    Outcome(
                        name=outcome.get("name", ""),
                        price=float(outcome["price"]),
                        point=outcome.get("point"),  # For spreads/totals
                    )
                    for outcome in market.get("outcomes", [])
                    if outcome.get("price") is not None
                )

                quotes.append(BookmakerQuote(
                    bookmaker=bookmaker_key,
                    title=bookmaker.get("title", ""),
                    market_type=market_type,
                    outcomes=outcomes,
                ))

        games.append(Game(
            id=event.get("id", ""),
            sport_key=event.get("sport_key", "baseball_mlb"),
            home_team=event.get("home_team", ""),
            away_team=event.get("away_team", ""),
            commence_time=_parse_commence_time(event.get("commence_time")),
            quotes=tuple(quotes),
            bookmaker_order=tuple(b.get("key", "") for b in event.get("bookmakers", [])),
        ))

    return games


class OddsAPIAdapter:
    """
    The Odds API adapter for fetching sportsbook odds.

    Read-only, no execution capabilities.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        requests_per_second: float = 1.0,  # Conservative for free tier
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._min_delay = 1.0 / requests_per_second
        self._last_request_time = 0.0
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def connect(self) -> None:
        """Initialize connection."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(30.0, connect=10.0),
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _throttle(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_delay:
            await asyncio.sleep(self._min_delay - elapsed)
        self._last_request_time = time.monotonic()

    @retry(
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def _get(self, path: str, params: Optional[dict] = None) -> dict | list:
        assert self._client is not None
        await self._throttle()

        params = dict(params or {})
        params["apiKey"] = self._api_key

        resp = await self._client.get(path, params=params)
        if resp.status_code >= 400:
            logger.warning("odds_api_http_error", path=path, status=resp.status_code)
        resp.raise_for_status()

        remaining = resp.headers.get("x-requests-remaining")
        if remaining is not None:
            logger.debug("odds_api_quota", path=path, remaining=remaining)
        return resp.json()

    async def list_sports(self) -> list[dict]:
        """
        List available sports.

        Returns list of sport objects:
        [
            {"key": "baseball_mlb", "group": "Baseball", "title": "MLB", ...},
            ...
        ]
        """
        return await self._get("/sports")  # type: ignore

    async def get_odds(
        self,
        sport: str = "baseball_mlb",
        regions: str = "us",
        markets: str = "h2h",
        odds_format: str = "american",
        bookmakers: Optional[str] = None,
    ) -> list[dict]:
        """
        Get raw odds for all upcoming events in a sport.

        Args:
            sport: Sport key
            regions: Comma-separated regions (us, uk, eu, au)
            markets: Comma-separated markets (h2h, spreads, totals)
            odds_format: "american" or "decimal"
            bookmakers: Optional comma-separated bookmaker keys
        """
        params = {
            "regions": regions,
            "markets": markets,
            "oddsFormat": odds_format,
        }
        if bookmakers:
            params["bookmakers"] = bookmakers

        return await self._get(f"/sports/{sport}/odds", params=params)  # type: ignore

    async def fetch_games(
        self,
        sport: str = "baseball_mlb",
        regions: str = "us",
        bookmakers: Optional[str] = None,
    ) -> list[Game]:
        """Moneyline odds for a sport, parsed into games."""
        raw = await self.get_odds(sport, regions=regions, markets="h2h", bookmakers=bookmakers)
        games = parse_games(raw)
        logger.info("odds_fetched", sport=sport, events=len(raw), games=len(games))
        return games

    async def __aenter__(self) -> OddsAPIAdapter:
        await self.connect()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
