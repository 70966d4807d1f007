"""Deterministic search filters applied before match scoring."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from jobmatch.models.criteria import Freshness, SearchCriteria
from jobmatch.models.job import NormalizedJob, WorkType

logger = logging.getLogger(__name__)

FRESHNESS_DAYS = {
    Freshness.TODAY: 1.0,
    Freshness.WEEK: 7.0,
    Freshness.MONTH: 30.0,
}


def _ci(s: str | None) -> str:
    return (s or "").strip().lower()


def includes_ci(haystack: str | None, needle: str | None) -> bool:
    return _ci(needle) in _ci(haystack)


def is_fresh_enough(posted_at: str | None, freshness: Freshness, now: datetime | None = None) -> bool:
    """Missing or unparseable dates always pass."""
    max_days = FRESHNESS_DAYS.get(freshness)
    if not posted_at or max_days is None:
        return True
    try:
        posted = datetime.fromisoformat(posted_at.replace("Z", "+00:00"))
    except ValueError:
        return True
    if posted.tzinfo is None:
        posted = posted.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    age_days = (now - posted).total_seconds() / 86400
    return age_days <= max_days


def country_matches(job: NormalizedJob, country: str | None, allow_remote_unknown: bool = True) -> bool:
    target = _ci(country)
    if not target:
        return True
    job_country = _ci(job.country)
    if allow_remote_unknown and job.work_type == WorkType.REMOTE and not job_country:
        return True
    return job_country == target


def city_matches(job: NormalizedJob, city: str | None) -> bool:
    """An unknown job city never matches a requested city."""
    if not city:
        return True
    job_city = _ci(job.city)
    return bool(job_city) and job_city == _ci(city)


def salary_in_range(job: NormalizedJob, criteria: SearchCriteria) -> bool:
    if job.salary_max and criteria.salary_min and job.salary_max < criteria.salary_min:
        return False
    if job.salary_min and criteria.salary_max and job.salary_min > criteria.salary_max:
        return False
    return True


def job_passes(job: NormalizedJob, criteria: SearchCriteria, now: datetime | None = None) -> bool:
    # 1. Title must contain the searched text
    if not includes_ci(job.title, criteria.job_title):
        return False

    # 2. Industry is often unknown; when filtering, require it
    if criteria.industry:
        if not job.industry or not includes_ci(job.industry, criteria.industry):
            return False

    # 3. Work type
    if criteria.work_type:
        if job.work_type == WorkType.UNKNOWN or job.work_type.value != criteria.work_type.value:
            return False

    # 4. Freshness
    if not is_fresh_enough(job.posted_at, criteria.freshness, now):
        return False

    # 5. Location
    if not country_matches(job, criteria.country, criteria.allow_remote_global):
        return False
    if not city_matches(job, criteria.city):
        return False

    # 6. Salary (only when the job posts one)
    return salary_in_range(job, criteria)


def filter_jobs(
    jobs: list[NormalizedJob],
    criteria: SearchCriteria,
    now: datetime | None = None,
) -> list[NormalizedJob]:
    """Keep the jobs matching every search filter, preserving order."""
    filtered = [job for job in jobs if job_passes(job, criteria, now)]
    logger.info(
        "Search filter: %d → %d jobs (%d removed)",
        len(jobs), len(filtered), len(jobs) - len(filtered),
    )
    return filtered
