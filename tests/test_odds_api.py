"""Tests for The Odds API adapter."""

from datetime import datetime, timezone

import httpx
import pytest
from tenacity import wait_none

from betbot.adapters.odds_api import OddsAPIAdapter, parse_games
from betbot.models.odds import MarketType


class TestParseGames:
    """Test parsing raw /odds events."""

    def test_events_become_games(self, sample_raw_events):
        games = parse_games(sample_raw_events)
        assert [g.id for g in games] == ["evt-1", "evt-2"]
        game = games[0]
        assert game.home_team == "New York Yankees"
        assert game.away_team == "Boston Red Sox"
        assert game.commence_time == datetime(2025, 7, 4, 23, 5, tzinfo=timezone.utc)
        assert game.label == "Boston Red Sox @ New York Yankees"

    def test_bookmaker_order_preserved(self, sample_raw_events):
        game = parse_games(sample_raw_events)[0]
        assert game.bookmakers == ["draftkings", "fanduel"]
        quote = game.moneyline_quote()
        assert quote.bookmaker == "draftkings"
        assert quote.title == "DraftKings"
        assert quote.price_for("New York Yankees") == -150
        assert quote.price_for("Boston Red Sox") == 130

    def test_unknown_markets_skipped(self, sample_raw_events):
        game = parse_games(sample_raw_events)[0]
        assert all(q.market_type == MarketType.H2H for q in game.quotes)
        assert len(game.quotes) == 2

    def test_outcomes_without_price_skipped(self, sample_raw_events):
        fanduel = parse_games(sample_raw_events)[0].quotes[1]
        assert [o.name for o in fanduel.outcomes] == ["New York Yankees"]
        assert fanduel.price_for("Boston Red Sox") is None

    def test_totals_keep_points(self, sample_raw_events):
        game = parse_games(sample_raw_events)[1]
        totals = [q for q in game.quotes if q.market_type == MarketType.TOTALS][0]
        assert totals.outcomes[0].point == 11.5

    def test_bad_commence_time(self):
        games = parse_games([{"id": "x", "home_team": "A", "away_team": "B", "commence_time": "soon"}])
        assert games[0].commence_time is None
        assert games[0].moneyline_quote() is None

    def test_first_bookmaker_without_h2h(self):
        raw = [{
            "id": "x",
            "home_team": "A",
            "away_team": "B",
            "bookmakers": [
                {"key": "book1", "markets": [{"key": "spreads", "outcomes": [{"name": "A", "price": -110, "point": -1.5}]}]},
                {"key": "book2", "markets": [{"key": "h2h", "outcomes": [{"name": "A", "price": -120}]}]},
            ],
        }]
        assert parse_games(raw)[0].moneyline_quote() is None

    @pytest.mark.parametrize(
        "first_markets",
        [
            [{"key": "h2h_lay", "outcomes": [{"name": "A", "price": 140}]}],
            [],
        ],
    )
    def test_first_bookmaker_without_known_markets(self, first_markets):
        raw = [{
            "id": "x",
            "home_team": "A",
            "away_team": "B",
            "bookmakers": [
                {"key": "book1", "markets": first_markets},
                {"key": "book2", "markets": [{"key": "h2h", "outcomes": [
                    {"name": "A", "price": -150},
                    {"name": "B", "price": 130},
                ]}]},
            ],
        }]
        game = parse_games(raw)[0]
        assert game.bookmakers == ["book1", "book2"]
        assert game.moneyline_quote() is None


class TestOddsAPIAdapter:
    """Test HTTP behaviour against a mock transport."""

    @pytest.mark.asyncio
    async def test_fetch_games(self, sample_raw_events):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=sample_raw_events, headers={"x-requests-remaining": "499"})

        async with OddsAPIAdapter(
            api_key="secret",
            requests_per_second=1000,
            transport=httpx.MockTransport(handler),
        ) as adapter:
            games = await adapter.fetch_games("baseball_mlb", bookmakers="draftkings")

        assert len(games) == 2
        request = seen[0]
        assert request.url.path == "/v4/sports/baseball_mlb/odds"
        assert request.url.params["apiKey"] == "secret"
        assert request.url.params["markets"] == "h2h"
        assert request.url.params["oddsFormat"] == "american"
        assert request.url.params["regions"] == "us"
        assert request.url.params["bookmakers"] == "draftkings"

    @pytest.mark.asyncio
    async def test_list_sports(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v4/sports"
            return httpx.Response(200, json=[{"key": "baseball_mlb", "title": "MLB"}])

        async with OddsAPIAdapter(
            api_key="secret",
            requests_per_second=1000,
            transport=httpx.MockTransport(handler),
        ) as adapter:
            sports = await adapter.list_sports()

        assert sports == [{"key": "baseball_mlb", "title": "MLB"}]

    @pytest.mark.asyncio
    async def test_http_errors_retried_then_raised(self, monkeypatch):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401, json={"message": "bad key"})

        adapter = OddsAPIAdapter(
            api_key="bad",
            requests_per_second=1000,
            transport=httpx.MockTransport(handler),
        )
        monkeypatch.setattr(OddsAPIAdapter._get.retry, "wait", wait_none())
        await adapter.connect()
        try:
            with pytest.raises(httpx.HTTPStatusError):
                await adapter.get_odds()
        finally:
            await adapter.close()
        assert len(calls) == 3
