"""Pydantic model for job search filters read from criteria.yaml."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Freshness(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ANY = "any"


class SearchWorkType(str, Enum):
    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"


class SearchCriteria(BaseModel):
    """Searcher filters applied before any match scoring."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    job_title: str = Field(min_length=2)
    industry: str | None = Field(default=None, min_length=2)

    # Compensation
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)

    work_type: SearchWorkType | None = None
    freshness: Freshness = Freshness.ANY

    # Location
    city: str | None = Field(default=None, min_length=2)
    country: str = Field(min_length=2)

    # Remote postings with no country still pass the country filter
    allow_remote_global: bool = True

    limit: int = Field(default=20, ge=1, le=100)

    @model_validator(mode="after")
    def check_salary_range(self) -> SearchCriteria:
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salary_max must be >= salary_min")
        return self
