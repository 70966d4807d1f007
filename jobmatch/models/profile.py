"""Pydantic model for the candidate profile jobs are scored against."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class PreferredWorkType(str, Enum):
    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"
    ANY = "any"


class CandidateProfile(BaseModel):
    """Structured candidate profile.

    Field names accept both snake_case and camelCase (``mustHaveSkills``).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    client_id: str = Field(min_length=1)

    full_name: str | None = Field(default=None, min_length=2)
    years_experience: float | None = Field(default=None, ge=0, le=60)

    # Skills
    skills: list[str] = Field(default_factory=list)
    must_have_skills: list[str] = Field(default_factory=list)
    nice_to_have_skills: list[str] = Field(default_factory=list)

    # Preferences
    preferred_titles: list[str] = Field(default_factory=list)
    preferred_industries: list[str] = Field(default_factory=list)
    preferred_countries: list[str] = Field(default_factory=list)
    preferred_cities: list[str] = Field(default_factory=list)

    work_type: PreferredWorkType = PreferredWorkType.ANY

    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)

    # Kept for future skill extraction; not used by scoring
    resume_text: str | None = Field(default=None, max_length=200_000)

    @field_validator(
        "skills",
        "must_have_skills",
        "nice_to_have_skills",
        "preferred_titles",
        "preferred_industries",
        "preferred_countries",
        "preferred_cities",
    )
    @classmethod
    def drop_blank(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item and item.strip()]

    @model_validator(mode="after")
    def check_salary_range(self) -> CandidateProfile:
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salary_max must be >= salary_min")
        return self
