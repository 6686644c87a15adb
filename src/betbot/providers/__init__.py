"""Matchup statistics providers."""

from betbot.providers.base import BaseStatsProvider
from betbot.providers.simulated import SimulatedStatsProvider

__all__ = ["BaseStatsProvider", "SimulatedStatsProvider"]
