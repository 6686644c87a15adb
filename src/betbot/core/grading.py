"""
Confidence aggregation and letter-grade mapping.

The weight tables and grade ladders are policy, not math: several
variants exist side by side as named profiles and are deliberately not
unified, since doing so would change observable grades.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import numpy as np
import structlog
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from betbot.models.analysis import FACTOR_NAMES, NEUTRAL_SCORE, FactorScores, Grade

logger = structlog.get_logger()

WEIGHT_TOLERANCE = 1e-9


class GradeThreshold(BaseModel):
    min_score: float
    grade: Grade


class GradeLadder(BaseModel):
    """
    Descending score thresholds, evaluated top-down; first match wins.
    """
    thresholds: tuple[GradeThreshold, ...]
    floor: Grade = Field(description="Grade for scores below every threshold")

    @field_validator("thresholds")
    @classmethod
    def validate_descending(cls, v: tuple[GradeThreshold, ...]) -> tuple[GradeThreshold, ...]:
        if not v:
            raise ValueError("ladder needs at least one threshold")
        scores = [t.min_score for t in v]
        if any(a <= b for a, b in zip(scores, scores[1:])):
            raise ValueError(f"ladder thresholds must be strictly descending, got {scores}")
        return v

    def grade_for(self, score: float) -> Grade:
        for threshold in self.thresholds:
            if score >= threshold.min_score:
                return threshold.grade
        return self.floor


def ladder(steps: Iterable[tuple[float, str]], floor: str) -> GradeLadder:
    return GradeLadder(
        thresholds=tuple(GradeThreshold(min_score=s, grade=Grade(g)) for s, g in steps),
        floor=Grade(floor),
    )


class GradeProfile(BaseModel):
    """
    A weight table plus the ladder that turns its confidence into a grade.

    confidence = clamp(floor, ceiling, offset + (weighted_sum - pivot) * scale)

    With ``scale`` unset the weighted sum itself is the confidence.
    """
    name: str
    weights: dict[str, float]
    scale: Optional[float] = 0.8
    pivot: float = 50.0
    offset: float = 60.0
    floor: float = 60.0
    ceiling: float = 95.0
    ladder: GradeLadder

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, v: dict[str, float]) -> dict[str, float]:
        missing = set(FACTOR_NAMES) - set(v)
        unknown = set(v) - set(FACTOR_NAMES)
        if missing or unknown:
            raise ValueError(f"weights must name every factor (missing={sorted(missing)}, unknown={sorted(unknown)})")
        total = sum(v.values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"weights must sum to 1.0, got {total}")
        return v

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.floor > self.ceiling:
            raise ValueError("floor must not exceed ceiling")
        return self

    def weighted_sum(self, scores: FactorScores) -> float:
        values = scores.as_dict()
        return sum(values.get(name, NEUTRAL_SCORE) * weight for name, weight in self.weights.items())

    def confidence(self, scores: FactorScores) -> float:
        weighted = self.weighted_sum(scores)
        if self.scale is None:
            raw = weighted
        else:
            raw = self.offset + (weighted - self.pivot) * self.scale
        return float(np.clip(raw, self.floor, self.ceiling))

    def grade(self, confidence: float) -> Grade:
        return self.ladder.grade_for(confidence)


# ─────────────────────────────────────────────────────────────────────────────
# Built-in profiles
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_WEIGHTS = {
    "offensive_production": 0.20,
    "pitching_matchup": 0.25,
    "situational_edge": 0.15,
    "team_momentum": 0.20,
    "market_inefficiency": 0.10,
    "system_confidence": 0.10,
}

STANDARD_PROFILE = GradeProfile(
    name="standard",
    weights=DEFAULT_WEIGHTS,
    scale=0.8,
    ladder=ladder(
        [(78.5, "A+"), (76.0, "A"), (73.5, "A-"), (71.0, "B+"), (68.5, "B"),
         (66.0, "B-"), (63.5, "C+"), (61.0, "C")],
        floor="C-",
    ),
)

PRO_ANALYSIS_PROFILE = GradeProfile(
    name="pro_analysis",
    weights=DEFAULT_WEIGHTS,
    scale=0.7,
    ladder=ladder(
        [(88, "A+"), (84, "A"), (80, "A-"), (76, "B+"), (72, "B"),
         (68, "B-"), (64, "C+"), (60, "C")],
        floor="C-",
    ),
)

BANDED_PROFILE = GradeProfile(
    name="banded",
    weights={
        "offensive_production": 0.15,
        "pitching_matchup": 0.15,
        "situational_edge": 0.15,
        "team_momentum": 0.15,
        "market_inefficiency": 0.25,
        "system_confidence": 0.15,
    },
    scale=None,
    floor=0.0,
    ceiling=100.0,
    ladder=ladder(
        [(88, "A+"), (83, "A"), (78, "A-"), (73, "B+"), (68, "B"), (63, "C+"), (58, "C")],
        floor="C-",
    ),
)

BUILTIN_PROFILES: dict[str, GradeProfile] = {
    p.name: p for p in (STANDARD_PROFILE, PRO_ANALYSIS_PROFILE, BANDED_PROFILE)
}

# Ladders used only for display of individual factor scores / confidence
FACTOR_DISPLAY_LADDER = ladder(
    [(95, "A+"), (88, "A"), (83, "B+"), (78, "B"), (73, "C+"), (68, "C"), (63, "D+")],
    floor="D",
)

BREAKDOWN_FACTOR_LADDER = ladder(
    [(95, "A+"), (88, "A"), (83, "A-"), (78, "B+"), (73, "B"), (68, "B-"),
     (63, "C+"), (58, "C"), (53, "C-"), (48, "D+")],
    floor="D",
)

UPDATED_GRADE_LADDER = ladder(
    [(95, "A+"), (90, "A"), (85, "B+"), (80, "B"), (75, "C+"), (70, "C"), (60, "D")],
    floor="F",
)


def aggregate_confidence(scores: FactorScores, profile: GradeProfile = STANDARD_PROFILE) -> float:
    """Weighted, rescaled confidence for a set of factor scores."""
    return profile.confidence(scores)


def confidence_to_grade(confidence: float, profile: GradeProfile = STANDARD_PROFILE) -> Grade:
    return profile.grade(confidence)


def factor_grade(score: float) -> Grade:
    """Display grade of a single factor score."""
    return FACTOR_DISPLAY_LADDER.grade_for(score)


def grade_rank(grade: Grade | str) -> int:
    return Grade(grade).rank


def _ladder_steps(path: Path, name: object, steps: object) -> list[tuple[float, str]]:
    """[[score, grade], ...] from YAML, as (float, str) pairs."""
    if not isinstance(steps, list):
        raise ValueError(f"{path}: profile {name!r} ladder must be a list of [score, grade] pairs")
    parsed = []
    for step in steps:
        if not isinstance(step, (list, tuple)) or len(step) != 2:
            raise ValueError(f"{path}: profile {name!r} ladder step {step!r} is not a [score, grade] pair")
        score, grade = step
        try:
            parsed.append((float(score), str(grade)))
        except (TypeError, ValueError):
            raise ValueError(f"{path}: profile {name!r} ladder score {score!r} is not a number")
    return parsed


def load_profiles(path: Optional[Path] = None) -> dict[str, GradeProfile]:
    """
    Built-in profiles, extended (or overridden) by a YAML file.

    File format::

        profiles:
          - name: conservative
            weights: {offensive_production: 0.2, ...}
            scale: 0.8
            ladder: [[80, "A+"], [77, "A"], ...]
            floor_grade: "C-"

    Raises:
        ValueError: malformed file or invalid profile
    """
    profiles = dict(BUILTIN_PROFILES)
    if path is None or not path.exists():
        return profiles

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping with a 'profiles' key")

    entries = data.get("profiles", [])
    if not isinstance(entries, list):
        raise ValueError(f"{path}: 'profiles' must be a list")

    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: each profile must be a mapping, got {entry!r}")
        entry = dict(entry)
        name = entry.get("name")
        steps = entry.pop("ladder", None)
        floor_grade = entry.pop("floor_grade", "C-")
        if not steps:
            raise ValueError(f"{path}: profile {name!r} has no ladder")
        entry["ladder"] = ladder(_ladder_steps(path, name, steps), floor=str(floor_grade))
        profile = GradeProfile.model_validate(entry)
        if profile.name in profiles:
            logger.info("grade_profile_overridden", profile=profile.name, source=str(path))
        profiles[profile.name] = profile

    return profiles


def get_profile(name: str, path: Optional[Path] = None) -> GradeProfile:
    profiles = load_profiles(path)
    if name not in profiles:
        raise ValueError(f"Unknown grade profile {name!r}; choose from {sorted(profiles)}")
    return profiles[name]
