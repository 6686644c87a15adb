"""Display-oriented models for pick breakdowns."""

from __future__ import annotations

from pydantic import BaseModel, Field

from betbot.models.analysis import Grade


class ColorClasses(BaseModel):
    """CSS utility classes for a badge."""
    text: str
    bg: str
    border: str


class FactorRow(BaseModel):
    """One factor line of a pick breakdown."""
    name: str
    grade: Grade
    score: int
    description: str


class PickDetails(BaseModel):
    game: str = Field(description='e.g. "Boston Red Sox @ New York Yankees"')
    pick: str = Field(description='e.g. "New York Yankees ML -150"')
    venue: str
    time: str


class GradeAnalysis(BaseModel):
    summary: str
    market_analysis: str
    factor_breakdown: str
    key_strength: str
    investment: str


class PickBreakdown(BaseModel):
    """
    Structured write-up of a single recommendation.
    """
    title: str
    pick_details: PickDetails
    grade_analysis: GradeAnalysis
    factors: list[FactorRow]

    # Numbers behind the market sentence, in percent
    implied_probability: float
    model_probability: float
    edge: float
    elite_count: int
    strong_count: int
