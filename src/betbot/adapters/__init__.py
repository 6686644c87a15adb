"""Venue adapters for data ingestion."""

from betbot.adapters.odds_api import OddsAPIAdapter, parse_games

__all__ = ["OddsAPIAdapter", "parse_games"]
