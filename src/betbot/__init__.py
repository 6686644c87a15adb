"""BetBot: six-factor grading of MLB moneyline picks."""

__version__ = "0.1.0"
