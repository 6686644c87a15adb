"""
Moneyline price math.

American prices look like -150 (favorite) or +130 (underdog).
Probabilities are decimals in [0, 1] unless a name says percent.
"""

from __future__ import annotations

# Each confidence point above 50 adds this many percentage points to the
# model's win probability
MODEL_CONFIDENCE_SLOPE = 0.2


def american_to_prob(odds: float) -> float:
    """
    Implied win probability of an American price.

    Examples:
        >>> american_to_prob(-150)
        0.6
        >>> american_to_prob(+150)
        0.4
    """
    if odds > 0:
        return 100 / (odds + 100)
    # Even money (+/-100) lands here too
    return abs(odds) / (abs(odds) + 100)


def implied_percent(odds: float) -> float:
    return american_to_prob(odds) * 100


def relative_edge(true_prob: float, implied_prob: float) -> float:
    """
    Edge as a fraction of the implied probability.

    0.10 means the side wins 10% more often than the price assumes.
    """
    if implied_prob <= 0:
        raise ValueError(f"Implied probability must be positive, got {implied_prob}")
    return (true_prob - implied_prob) / implied_prob


def model_percent(implied_pct: float, confidence: float) -> float:
    """Model win probability (percent) for a pick graded at ``confidence``."""
    return implied_pct + (confidence - 50) * MODEL_CONFIDENCE_SLOPE


def format_american(odds: float) -> str:
    """Render odds the way books print them: +130, -150."""
    value = int(round(odds))
    return f"+{value}" if value > 0 else str(value)
