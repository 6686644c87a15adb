"""Tests for moneyline price math."""

import pytest

from betbot.core.odds_math import (
    american_to_prob,
    format_american,
    implied_percent,
    model_percent,
    relative_edge,
)


class TestAmericanOdds:
    """Test implied probabilities."""

    def test_favorite_odds(self):
        # -150 implies 60%
        assert american_to_prob(-150) == pytest.approx(0.6)
        assert american_to_prob(-110) == pytest.approx(0.5238, abs=0.001)

    def test_underdog_odds(self):
        # +130 implies ~43.48%
        assert american_to_prob(+130) == pytest.approx(0.4348, abs=0.001)
        assert american_to_prob(+200) == pytest.approx(0.3333, abs=0.001)

    def test_even_odds(self):
        assert american_to_prob(+100) == pytest.approx(0.5)
        assert american_to_prob(-100) == pytest.approx(0.5)

    def test_percent(self):
        assert implied_percent(-150) == pytest.approx(60.0)


class TestEdge:
    """Test edge and model probability."""

    def test_overpriced_favorite(self):
        # True 0.54 against a -150 price (0.60 implied)
        assert relative_edge(0.54, 0.60) == pytest.approx(-0.1)

    def test_underdog_edge(self):
        assert relative_edge(0.46, american_to_prob(130)) == pytest.approx(0.058, abs=0.001)

    def test_rejects_zero_implied(self):
        with pytest.raises(ValueError):
            relative_edge(0.5, 0.0)

    def test_model_percent(self):
        # 75% confidence adds 5 points
        assert model_percent(60.0, 75) == pytest.approx(65.0)
        assert model_percent(60.0, 50) == pytest.approx(60.0)


class TestFormatting:
    """Test odds display."""

    def test_positive_gets_plus_sign(self):
        assert format_american(130) == "+130"

    def test_negative_keeps_minus_sign(self):
        assert format_american(-150) == "-150"

    def test_float_prices_are_rounded(self):
        assert format_american(-149.6) == "-150"
