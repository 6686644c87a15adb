"""Scoring, grading and recommendation pipeline."""

from betbot.core.odds_math import american_to_prob, format_american, relative_edge
from betbot.core.factors import calculate_factor_scores
from betbot.core.grading import (
    BUILTIN_PROFILES,
    GradeLadder,
    GradeProfile,
    aggregate_confidence,
    confidence_to_grade,
    get_profile,
    load_profiles,
)
from betbot.core.reasoning import build_reasoning
from betbot.core.narrative import NarrativeGenerator

__all__ = [
    "american_to_prob",
    "format_american",
    "relative_edge",
    "calculate_factor_scores",
    "BUILTIN_PROFILES",
    "GradeLadder",
    "GradeProfile",
    "aggregate_confidence",
    "confidence_to_grade",
    "get_profile",
    "load_profiles",
    "build_reasoning",
    "NarrativeGenerator",
]
