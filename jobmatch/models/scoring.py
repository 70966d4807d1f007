"""Pydantic models for deterministic match scoring output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jobmatch.models.job import NormalizedJob

PASS_THRESHOLD = 70
HARD_REJECT_CAP = 49


class ScoreBreakdown(BaseModel):
    """Per-category sub-scores, clamped but unrounded, plus skill details."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    skill_score: float = Field(ge=0, le=40)
    title_score: float = Field(ge=0, le=20)
    salary_score: float = Field(ge=0, le=20)
    location_work_score: float = Field(ge=0, le=20)
    industry_score: float = Field(ge=0, le=10)

    # Components of location_work_score
    work_type_score: float = Field(ge=0, le=10)
    location_score: float = Field(ge=0, le=10)

    must_have_ratio: float | None = None
    overall_skill_ratio: float = 0.0
    skills_matched: list[str] = Field(default_factory=list)
    must_have_matched: list[str] = Field(default_factory=list)
    must_have_missing: list[str] = Field(default_factory=list)

    # Sum of the five sub-scores before rounding and the hard-reject cap
    raw_score: float = Field(ge=0, le=110)


class ScoreResult(BaseModel):
    """Outcome of scoring one job for one candidate."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    score: int = Field(ge=0, le=100)
    passed: bool = Field(alias="pass")
    hard_reject: bool = False
    breakdown: ScoreBreakdown
    reasons: list[str] = Field(default_factory=list)


class ScoredJob(BaseModel):
    """A normalized job together with its match result."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    job: NormalizedJob
    result: ScoreResult
