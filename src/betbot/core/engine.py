"""
Recommendation engine.

Per game:
1. Read the first bookmaker's moneyline prices
2. Fetch matchup inputs (stats, recent form, weather) concurrently
3. Score, grade and explain each side
4. Keep the better side

Across games the surviving picks are filtered by minimum grade and
ranked best first.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Sequence

import numpy as np
import structlog

from betbot.core.factors import calculate_factor_scores, venue_for_team
from betbot.core.grading import STANDARD_PROFILE, GradeProfile
from betbot.core.randomness import RandomSource, make_rng
from betbot.core.reasoning import SALIENCE_THRESHOLD, build_reasoning
from betbot.models.analysis import PICK_ID_PREFIXES, Grade, PickKind, PickRecord, Recommendation
from betbot.models.odds import Game
from betbot.models.stats import MatchupContext
from betbot.observability.logging import run_context
from betbot.providers.base import BaseStatsProvider
from betbot.providers.simulated import SimulatedStatsProvider

logger = structlog.get_logger()

DEFAULT_MIN_GRADE = Grade.C_PLUS
LOCK_MIN_GRADE = Grade.B


def rank_recommendations(
    recommendations: Iterable[Recommendation],
    min_grade: Grade = DEFAULT_MIN_GRADE,
) -> list[Recommendation]:
    """
    Drop picks graded below ``min_grade`` and sort the rest by grade rank,
    then confidence, best first. Full ties keep their input order.
    """
    kept = [r for r in recommendations if r.grade.rank >= min_grade.rank]
    return sorted(kept, key=lambda r: (r.grade.rank, r.confidence), reverse=True)


def select_daily_pick(ranked: Sequence[Recommendation]) -> Optional[Recommendation]:
    """Pick of the day: the top of an already ranked list."""
    return ranked[0] if ranked else None


def select_lock_pick(
    ranked: Sequence[Recommendation],
    min_grade: Grade = LOCK_MIN_GRADE,
) -> Optional[Recommendation]:
    """
    Lock pick: the best pick graded ``min_grade`` or better. Without one,
    the second-best pick (or the only pick).
    """
    if not ranked:
        return None
    for rec in ranked:
        if rec.grade.rank >= min_grade.rank:
            return rec
    return ranked[min(1, len(ranked) - 1)]


def make_pick_record(
    rec: Recommendation,
    kind: PickKind = PickKind.DAILY,
    pick_date: Optional[date] = None,
    now: Optional[datetime] = None,
) -> PickRecord:
    """Wrap a recommendation as the published pick for ``pick_date`` (default today, UTC)."""
    now = now or datetime.now(timezone.utc)
    pick_date = pick_date or now.date()
    return PickRecord(
        id=f"{PICK_ID_PREFIXES[kind]}_{pick_date.isoformat()}_{rec.game_id}",
        kind=kind,
        pick_date=pick_date,
        venue=venue_for_team(rec.home_team),
        recommendation=rec,
        created_at=now,
    )


class RecommendationEngine:
    """
    Turns a slate of games into graded moneyline recommendations.

    Args:
        stats_provider: Source of matchup inputs (defaults to simulated)
        profile: Weight table and grade ladder
        rng: Random source for factor noise
        min_grade: Lowest grade kept in the final list
        reasoning_threshold: Factor score at which a reasoning clause is added
    """

    def __init__(
        self,
        stats_provider: Optional[BaseStatsProvider] = None,
        profile: GradeProfile = STANDARD_PROFILE,
        rng: Optional[RandomSource] = None,
        min_grade: Grade = DEFAULT_MIN_GRADE,
        reasoning_threshold: int = SALIENCE_THRESHOLD,
    ):
        self.rng = rng if rng is not None else make_rng()
        self.stats_provider = stats_provider or SimulatedStatsProvider(self.rng)
        self.profile = profile
        self.min_grade = min_grade
        self.reasoning_threshold = reasoning_threshold

    async def fetch_matchup(self, game: Game) -> Optional[MatchupContext]:
        """
        Run the three lookups concurrently.

        Returns None if any of them fails, which the calculators treat as
        "no data" (all-neutral scores).
        """
        stats, form, weather = await asyncio.gather(
            self.stats_provider.get_team_statistics(game.home_team, game.away_team),
            self.stats_provider.get_recent_form(game.home_team, game.away_team),
            self.stats_provider.get_weather(game.home_team),
            return_exceptions=True,
        )

        failures = {
            name: str(result)
            for name, result in (("team_statistics", stats), ("recent_form", form), ("weather", weather))
            if isinstance(result, BaseException)
        }
        if failures:
            logger.warning("matchup_lookup_failed", game_id=game.id, failures=failures)
            return None

        return MatchupContext(stats=stats, recent_form=form, weather=weather)

    def analyze_team_pick(
        self,
        game: Game,
        team: str,
        odds: float,
        context: Optional[MatchupContext],
    ) -> Optional[Recommendation]:
        """Score, grade and explain one side. Returns None on failure."""
        try:
            is_home = team == game.home_team
            scores = calculate_factor_scores(context, game.home_team, is_home, odds, self.rng)
            confidence = self.profile.confidence(scores)
            grade = self.profile.grade(confidence)
            reasoning = build_reasoning(team, is_home, grade, scores, self.reasoning_threshold)

            return Recommendation(
                game_id=game.id,
                selection=team,
                odds=odds,
                grade=grade,
                confidence=int(np.floor(confidence + 0.5)),
                reasoning=reasoning,
                analysis=scores,
                game_time=game.commence_time,
                home_team=game.home_team,
                away_team=game.away_team,
                is_home=is_home,
                venue=venue_for_team(game.home_team),
            )
        except Exception as e:
            logger.error("team_analysis_failed", game_id=game.id, team=team, error=str(e))
            return None

    @staticmethod
    def select_side(
        home: Optional[Recommendation],
        away: Optional[Recommendation],
    ) -> Optional[Recommendation]:
        """
        Better of the two sides: higher grade, then higher confidence,
        then the home side.
        """
        if home is None:
            return away
        if away is None:
            return home
        if home.grade.rank != away.grade.rank:
            return home if home.grade.rank > away.grade.rank else away
        if home.confidence != away.confidence:
            return home if home.confidence > away.confidence else away
        return home

    async def analyze_game(self, game: Game) -> Optional[Recommendation]:
        """Best recommendation for one game, or None if the game is skipped."""
        try:
            quote = game.moneyline_quote()
            if quote is None:
                logger.info("game_skipped_no_moneyline", game_id=game.id, game=game.label)
                return None

            home_odds = quote.price_for(game.home_team)
            away_odds = quote.price_for(game.away_team)
            if home_odds is None or away_odds is None:
                logger.info(
                    "game_skipped_missing_price",
                    game_id=game.id,
                    bookmaker=quote.bookmaker,
                    home_odds=home_odds,
                    away_odds=away_odds,
                )
                return None

            context = await self.fetch_matchup(game)
            home_rec = self.analyze_team_pick(game, game.home_team, home_odds, context)
            away_rec = self.analyze_team_pick(game, game.away_team, away_odds, context)

            best = self.select_side(home_rec, away_rec)
            if best is None:
                logger.warning("game_skipped_no_analysis", game_id=game.id)
            return best
        except Exception as e:
            logger.error("game_analysis_failed", game_id=game.id, error=str(e))
            return None

    async def generate_recommendations(self, games: Iterable[Game]) -> list[Recommendation]:
        """
        Graded picks for a slate, best first.

        Games are analyzed one after another. Never raises; a failure of
        the whole batch is logged and yields an empty list.
        """
        with run_context(profile=getattr(self.profile, "name", None)):
            try:
                games = list(games)
                logger.info("recommendation_run_started", games=len(games))

                picks = []
                for game in games:
                    rec = await self.analyze_game(game)
                    if rec is not None:
                        picks.append(rec)

                ranked = rank_recommendations(picks, self.min_grade)
                logger.info(
                    "recommendation_run_completed",
                    analyzed=len(games),
                    picks=len(picks),
                    kept=len(ranked),
                    min_grade=self.min_grade.value,
                )
                return ranked
            except Exception as e:
                logger.error("recommendation_run_failed", error=str(e))
                return []
