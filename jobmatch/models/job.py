"""Pydantic model for normalized job postings."""

from __future__ import annotations

from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WorkType(str, Enum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"
    UNKNOWN = "unknown"


class SalaryPeriod(str, Enum):
    YEAR = "year"
    MONTH = "month"
    HOUR = "hour"
    UNKNOWN = "unknown"


class JobNormalizationError(ValueError):
    """Raised when a raw posting cannot be turned into a NormalizedJob."""


class NormalizedJob(BaseModel):
    """Job posting in the common schema every source is mapped into.

    Unknown fields are absent (None) rather than guessed.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(min_length=1)  # stable within its source
    source: str = Field(min_length=1)  # "greenhouse", "adzuna", ...
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)

    industry: str | None = None
    work_type: WorkType = WorkType.UNKNOWN

    country: str | None = None
    city: str | None = None

    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    salary_currency: str | None = None
    salary_period: SalaryPeriod = SalaryPeriod.UNKNOWN

    posted_at: str | None = None  # ISO-8601
    description: str | None = None

    source_url: str  # where the posting was found
    company_url: str | None = None  # original company job page, best effort

    @field_validator("source_url", "company_url")
    @classmethod
    def check_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("must be an http(s) URL")
        return v
