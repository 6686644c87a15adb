"""Tests for the simulated stats provider."""

import pytest

from betbot.core.randomness import make_rng
from betbot.providers.simulated import SimulatedStatsProvider

from conftest import FixedRandom


class TestSimulatedStatsProvider:
    """Test draws from reference ranges."""

    @pytest.mark.asyncio
    async def test_midpoint_values(self):
        provider = SimulatedStatsProvider(FixedRandom(0.5))
        stats = await provider.get_team_statistics("New York Yankees", "Boston Red Sox")
        assert stats.home.batting_avg == pytest.approx(0.265)
        assert stats.home.era == pytest.approx(4.40)
        assert stats.home.ops == pytest.approx(0.800)
        assert stats.home.starter_era == pytest.approx(4.25)
        assert stats.home.starter_whip == pytest.approx(1.30)
        assert stats.home.xwoba == pytest.approx(0.330)
        assert stats.home.barrel_pct == pytest.approx(9.0)
        assert stats.away == stats.home

    @pytest.mark.asyncio
    async def test_weather_and_form(self):
        provider = SimulatedStatsProvider(FixedRandom(0.0))
        weather = await provider.get_weather("Colorado Rockies")
        form = await provider.get_recent_form("Colorado Rockies", "San Diego Padres")
        assert weather.temperature == pytest.approx(65.0)
        assert weather.wind_speed == pytest.approx(0.0)
        assert weather.conditions == "clear"
        assert form.home == pytest.approx(0.35)
        assert form.away == pytest.approx(0.35)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", range(10))
    async def test_seeded_draws_in_range(self, seed):
        provider = SimulatedStatsProvider(make_rng(seed))
        stats = await provider.get_team_statistics("A", "B")
        form = await provider.get_recent_form("A", "B")
        weather = await provider.get_weather("A")

        for team in (stats.home, stats.away):
            assert 0.240 <= team.batting_avg <= 0.290
            assert 3.80 <= team.era <= 5.00
            assert 0.720 <= team.ops <= 0.880
            assert 3.50 <= team.starter_era <= 5.00
            assert 1.10 <= team.starter_whip <= 1.50
            assert 0.310 <= team.xwoba <= 0.350
            assert 7.0 <= team.barrel_pct <= 11.0
        assert 0.35 <= form.home <= 0.70
        assert 0.35 <= form.away <= 0.70
        assert 65 <= weather.temperature <= 90
        assert 0 <= weather.wind_speed <= 15

    @pytest.mark.asyncio
    async def test_same_seed_same_numbers(self):
        first = await SimulatedStatsProvider(make_rng(42)).get_team_statistics("A", "B")
        second = await SimulatedStatsProvider(make_rng(42)).get_team_statistics("A", "B")
        assert first == second
