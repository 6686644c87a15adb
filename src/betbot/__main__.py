"""
Entry point for running BetBot as a module.

Usage:
    python -m betbot recommend --file odds.json
    python -m betbot detail 1
"""

from betbot.cli import app

if __name__ == "__main__":
    app()
