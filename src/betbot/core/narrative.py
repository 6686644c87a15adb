"""
Analyst-style narratives for individual factor scores.

Text is picked at random from a small phrase table per factor and score
bucket, then extended with clauses drawn from whatever game context is
known. The output is deliberately non-deterministic; inject a seeded
random source for repeatable text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import structlog

from betbot.core.randomness import RandomSource, make_rng
from betbot.models.analysis import FACTOR_LABELS, FACTOR_NAMES, FactorScores, GameContext

logger = structlog.get_logger()


class ScoreCategory(str, Enum):
    ELITE = "elite"
    STRONG = "strong"
    NEUTRAL = "neutral"
    WEAK = "weak"


def score_category(score: float) -> ScoreCategory:
    if score >= 90:
        return ScoreCategory.ELITE
    if score >= 80:
        return ScoreCategory.STRONG
    if score >= 75:
        return ScoreCategory.NEUTRAL
    return ScoreCategory.WEAK


ELITE, STRONG, NEUTRAL, WEAK = ScoreCategory

PHRASES: dict[str, dict[ScoreCategory, tuple[str, ...]]] = {
    "offensive_production": {
        ELITE: (
            "The lineup sits near the top of the league in expected on-base quality, pairing patient at-bats with hard contact.",
            "Barrel and exit-velocity trends point to a lineup that turns contact into runs with unusual consistency.",
            "Power and speed indicators are both running well above league norms.",
        ),
        STRONG: (
            "The offense makes above-average contact and barrels the ball well against this style of pitching.",
            "Recent at-bats show sharper selectivity and more hard-hit balls than the season baseline.",
        ),
        NEUTRAL: (
            "The lineup profiles as league average in both contact and power.",
            "Offensive output has tracked season expectations without notable swings either way.",
        ),
        WEAK: (
            "Contact quality has lagged, with barrel rates below average against comparable pitching.",
            "Chase rates are up and exit velocity is down over recent games.",
            "The lineup has produced little power and struggled with runners in scoring position.",
        ),
    },
    "pitching_matchup": {
        ELITE: (
            "The probable starter is missing bats at an elite rate while keeping opponents off the barrel.",
            "Velocity and movement readings suggest the starter is at peak form, allowing little hard contact lately.",
        ),
        STRONG: (
            "The starter brings sound command and a favorable history against lineups built like this one.",
            "Walk rates are down and quality starts are up for the probable starter.",
            "The starter's pitch mix lines up well against the opposing lineup's contact tendencies.",
        ),
        NEUTRAL: (
            "The two starters grade out similarly on peripherals and recent results.",
            "Neither starter holds a clear edge in stuff or command.",
        ),
        WEAK: (
            "The starter has allowed more hard contact recently and shows a dip in velocity.",
            "Command has slipped, with walks rising and swing-and-miss falling.",
        ),
    },
    "situational_edge": {
        ELITE: (
            "Venue, conditions and schedule all line up in this team's favor.",
            "Park characteristics and game-time conditions suit this roster's strengths well.",
        ),
        STRONG: (
            "Playing at home offers familiar conditions and crowd support.",
            "Ballpark dimensions and expected weather favor this team's approach.",
        ),
        NEUTRAL: (
            "Situational factors look balanced, with no meaningful environmental edge for either side.",
            "Standard home-road dynamics in a park that plays close to neutral.",
        ),
        WEAK: (
            "The road setting adds unfamiliar conditions and a hostile crowd.",
            "Park and weather conditions work against this team's style.",
            "A compressed travel schedule may weigh on execution.",
        ),
    },
    "team_momentum": {
        ELITE: (
            "The club is winning well above its season rate and has taken several recent series.",
            "Key contributors are hot at the same time, and the results show it.",
        ),
        STRONG: (
            "The team has been winning close games with steady bullpen work.",
            "Recent series results point upward across most team metrics.",
        ),
        NEUTRAL: (
            "Recent results mirror the season-long record.",
            "Wins and losses have traded off with no clear trend.",
        ),
        WEAK: (
            "The club has dropped several recent series and execution has suffered.",
            "Late-inning results have slipped and several team metrics trail season averages.",
        ),
    },
    "market_inefficiency": {
        ELITE: (
            "The posted price sits well away from the projected win probability, leaving substantial value.",
            "Line behaviour suggests the market is mispricing this team's underlying strength.",
        ),
        STRONG: (
            "The current price offers real value against the projected win probability.",
            "The market looks slow to credit recent improvements and matchup advantages.",
        ),
        NEUTRAL: (
            "The price closely reflects the projected win probability.",
            "The line looks fair, with little edge available.",
        ),
        WEAK: (
            "The price offers poor value with the vig weighing heavily.",
            "The line looks inflated relative to projections, pointing to negative expected value.",
        ),
    },
    "system_confidence": {
        ELITE: (
            "Complete inputs and strong agreement between factors make this a high-certainty read.",
            "Independent signals line up consistently behind this projection.",
        ),
        STRONG: (
            "A solid data foundation and good factor agreement support the projection.",
            "Most inputs agree, with enough depth for a confident read.",
        ),
        NEUTRAL: (
            "Data coverage and factor agreement are typical for this kind of matchup.",
            "Inputs meet the baseline with normal uncertainty.",
        ),
        WEAK: (
            "Thin data and conflicting signals widen the uncertainty around this projection.",
            "Gaps in the inputs call for a cautious reading of the projection.",
        ),
    },
}

GENERIC_PHRASES: dict[ScoreCategory, str] = {
    ELITE: "Indicators are exceptional across several statistical categories with strong fundamentals behind them.",
    STRONG: "Metrics run above average with solid fundamentals supporting a favorable outlook.",
    NEUTRAL: "A balanced profile with indicators close to typical expectations.",
    WEAK: "Indicators trail average across key categories.",
}


def factor_key(name: str) -> Optional[str]:
    """
    Normalize a factor name ("Pitching Matchup", "pitchingMatchup",
    "pitching_matchup") to its canonical key, or None if unknown.
    """
    squashed = name.lower().replace(" ", "").replace("_", "")
    for key in FACTOR_NAMES:
        if key.replace("_", "") == squashed:
            return key
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Context clauses
# ─────────────────────────────────────────────────────────────────────────────

def _offense_clauses(ctx: GameContext, category: ScoreCategory) -> list[str]:
    clauses = []
    positive = category in (ELITE, STRONG)
    if ctx.opponent_handedness and positive:
        hand = "right-handed" if ctx.opponent_handedness.upper() == "RHP" else "left-handed"
        clauses.append(f"The lineup has been especially productive against {hand} pitching.")
    if ctx.park_factor and ctx.park_factor > 105 and positive:
        clauses.append("The ballpark should boost run scoring.")
    if ctx.xwoba and ctx.xwoba > 0.340 and category is ELITE:
        clauses.append("Expected contact quality ranks among the best in baseball.")
    return clauses


def _pitching_clauses(ctx: GameContext, category: ScoreCategory) -> list[str]:
    clauses = []
    if ctx.pick_pitcher and ctx.opponent_pitcher:
        if category in (ELITE, STRONG):
            clauses.append(f"{ctx.pick_pitcher} holds a clear statistical edge over {ctx.opponent_pitcher} this season.")
        elif category is WEAK:
            clauses.append(f"{ctx.opponent_pitcher} has been noticeably more effective than {ctx.pick_pitcher} this season.")
        else:
            clauses.append(f"{ctx.pick_pitcher} and {ctx.opponent_pitcher} have posted similar season numbers.")

    if ctx.starter_era:
        if ctx.starter_era < 3.0 and category in (ELITE, STRONG):
            clauses.append("A sub-3.00 ERA reflects reliable quality starts.")
        elif ctx.starter_era > 5.0 and category is WEAK:
            clauses.append("An elevated ERA suggests trouble working deep into games.")

    if ctx.pick_pitcher_era and ctx.opponent_pitcher_era:
        gap = abs(ctx.pick_pitcher_era - ctx.opponent_pitcher_era)
        if gap > 0.5:
            if ctx.pick_pitcher_era < ctx.opponent_pitcher_era:
                clauses.append(f"An ERA advantage of {gap:.2f} favors the pick.")
            else:
                clauses.append(f"An ERA deficit of {gap:.2f} puts pressure on the offense.")

    if ctx.whip and ctx.whip < 1.15 and category is ELITE:
        clauses.append("Excellent command keeps runners off base.")
    return clauses


def _situational_clauses(ctx: GameContext, category: ScoreCategory) -> list[str]:
    clauses = []
    if ctx.is_home_game is not None:
        if ctx.is_home_game and category in (ELITE, STRONG):
            clauses.append("Home familiarity adds a tactical edge.")
        elif not ctx.is_home_game and category is WEAK:
            clauses.append("The road environment adds execution risk.")
    if ctx.park_factor:
        if ctx.park_factor > 110 and category is ELITE:
            clauses.append("An extreme hitter's park raises the scoring ceiling.")
        elif ctx.park_factor < 95 and category is WEAK:
            clauses.append("A pitcher-friendly park caps offensive upside.")
    return clauses


def _momentum_clauses(ctx: GameContext, category: ScoreCategory) -> list[str]:
    clauses = []
    if ctx.last10_record:
        try:
            wins = int(ctx.last10_record.split("-")[0])
        except ValueError:
            wins = None
        if wins is not None:
            if wins >= 8 and category is ELITE:
                clauses.append("Eight or more wins in the last ten shows outstanding current form.")
            elif wins <= 3 and category is WEAK:
                clauses.append("Three or fewer wins in the last ten is a worrying slide.")
    if ctx.streak and abs(ctx.streak) >= 4:
        if ctx.streak > 0 and category in (ELITE, STRONG):
            clauses.append("An extended winning streak is feeding confidence.")
        elif ctx.streak < 0 and category is WEAK:
            clauses.append("A prolonged losing streak adds pressure.")
    return clauses


def _market_clauses(ctx: GameContext, category: ScoreCategory) -> list[str]:
    if category is ELITE:
        return ["Public perception appears to lag the underlying numbers."]
    if category is WEAK:
        return ["An efficient market leaves little to exploit."]
    return []


def _confidence_clauses(ctx: GameContext, category: ScoreCategory) -> list[str]:
    if category is ELITE:
        return ["Several independent sources confirm the read."]
    if category is WEAK:
        return ["Missing inputs warrant caution."]
    return []


_ENHANCERS = {
    "offensive_production": _offense_clauses,
    "pitching_matchup": _pitching_clauses,
    "situational_edge": _situational_clauses,
    "team_momentum": _momentum_clauses,
    "market_inefficiency": _market_clauses,
    "system_confidence": _confidence_clauses,
}


class NarrativeGenerator:
    """
    Produces one narrative per factor score.

    Args:
        rng: Random source used to choose phrases (defaults to unseeded)
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else make_rng()

    def _choose(self, phrases: tuple[str, ...]) -> str:
        index = min(int(self.rng.random() * len(phrases)), len(phrases) - 1)
        return phrases[index]

    def generate(self, factor: str, score: float, context: Optional[GameContext] = None) -> str:
        category = score_category(score)
        key = factor_key(factor)
        if key is None:
            logger.debug("narrative_unknown_factor", factor=factor)
            return GENERIC_PHRASES[category]

        context = context or GameContext()
        parts = [self._choose(PHRASES[key][category])]
        parts.extend(_ENHANCERS[key](context, category))
        return " ".join(parts)

    def generate_all(
        self,
        scores: FactorScores | dict[str, float],
        context: Optional[GameContext] = None,
    ) -> dict[str, str]:
        """Narrative for every factor, keyed by display label where known."""
        values = scores.as_dict() if isinstance(scores, FactorScores) else scores
        return {
            FACTOR_LABELS.get(name, name): self.generate(name, score, context)
            for name, score in values.items()
        }
