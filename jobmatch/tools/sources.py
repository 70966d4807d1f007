"""Job source normalizers: generic dumps, Greenhouse board JSON, Adzuna search JSON.

Fetching is done elsewhere; these helpers only map already-downloaded
postings into NormalizedJob.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jobmatch.models.job import JobNormalizationError, NormalizedJob, SalaryPeriod, WorkType

logger = logging.getLogger(__name__)

GREENHOUSE_API = "https://boards-api.greenhouse.io/v1/boards/{board}/jobs?content=true"
ADZUNA_API = "https://api.adzuna.com/v1/api/jobs/{country_code}/search/1"

ADZUNA_COUNTRY_CODES = {
    "united states": "us",
    "usa": "us",
    "uk": "gb",
    "united kingdom": "gb",
    "canada": "ca",
    "australia": "au",
    "india": "in",
    "france": "fr",
    "germany": "de",
    "netherlands": "nl",
    "new zealand": "nz",
    "singapore": "sg",
    "south africa": "za",
    "italy": "it",
    "spain": "es",
    "mexico": "mx",
    "brazil": "br",
    "poland": "pl",
    "belgium": "be",
    "switzerland": "ch",
    "austria": "at",
}


# =============================================================================
# Field helpers
# =============================================================================


def clean_str(value: Any) -> str:
    """Stringify and collapse whitespace; None becomes ''."""
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()


def _first(raw: dict, *keys: str) -> Any:
    """First truthy value among keys."""
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value) if value >= 0 else None
    return None


def to_iso(value: Any) -> str | None:
    """Normalize a date string to ISO-8601 (UTC if no zone), or None."""
    date_str = clean_str(value)
    if not date_str:
        return None

    try:
        dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        dt = None

    if dt is None:
        formats = [
            "%a, %d %b %Y %H:%M:%S %z",  # RFC 822
            "%a, %d %b %Y %H:%M:%S %Z",
            "%Y-%m-%d %H:%M:%S",
            "%d %b %Y",
            "%B %d, %Y",
        ]
        for fmt in formats:
            try:
                dt = datetime.strptime(date_str, fmt)
                break
            except ValueError:
                continue

    if dt is None:
        logger.debug("Could not parse date: %s", date_str)
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def map_work_type(value: Any) -> WorkType:
    s = clean_str(value).lower()
    if "remote" in s:
        return WorkType.REMOTE
    if "hybrid" in s:
        return WorkType.HYBRID
    if any(term in s for term in ("on-site", "onsite", "on site")):
        return WorkType.ONSITE
    return WorkType.UNKNOWN


def infer_salary_period(value: Any) -> SalaryPeriod:
    s = clean_str(value).lower()
    if "year" in s or "annual" in s:
        return SalaryPeriod.YEAR
    if "month" in s:
        return SalaryPeriod.MONTH
    if "hour" in s:
        return SalaryPeriod.HOUR
    return SalaryPeriod.UNKNOWN


# =============================================================================
# Generic normalization
# =============================================================================


def normalize_job(raw: dict, source: str) -> NormalizedJob:
    """Map any raw posting into NormalizedJob using best-effort key fallbacks.

    Raises:
        JobNormalizationError: if required fields (id, title, company,
            source URL) are missing or malformed.
    """
    data = {
        "id": clean_str(_first(raw, "id", "job_id", "uuid", "hash")),
        "source": clean_str(source),
        "title": clean_str(_first(raw, "title", "job_title", "position")),
        "company": clean_str(_first(raw, "company", "company_name", "employer_name")),
        "industry": clean_str(_first(raw, "industry", "category", "sector")) or None,
        "work_type": map_work_type(_first(raw, "workType", "work_type", "location_type")),
        "country": clean_str(
            _first(raw, "country", "candidate_required_location", "location_country")
        ) or None,
        "city": clean_str(_first(raw, "city", "location_city")) or None,
        "salary_min": _parse_int(_first(raw, "salaryMin", "salary_min")),
        "salary_max": _parse_int(_first(raw, "salaryMax", "salary_max")),
        "salary_currency": clean_str(_first(raw, "salaryCurrency", "currency")) or None,
        "salary_period": infer_salary_period(_first(raw, "salaryPeriod", "salary_period")),
        "posted_at": to_iso(_first(raw, "postedAt", "publication_date", "created_at", "updated_at")),
        "description": clean_str(_first(raw, "description", "job_description", "content")) or None,
        "source_url": clean_str(_first(raw, "sourceUrl", "url", "job_url", "apply_url")),
        "company_url": clean_str(
            _first(raw, "companyUrl", "company_job_url", "redirect_url")
        ) or None,
    }

    try:
        return NormalizedJob(**data)
    except ValidationError as e:
        issues = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'job'}: {err['msg']}"
            for err in e.errors()
        )
        raise JobNormalizationError(f"normalize_job failed ({source}): {issues}") from e


# =============================================================================
# Greenhouse
# =============================================================================


def parse_location(name: str | None) -> tuple[str | None, str | None, bool]:
    """Split a Greenhouse location name into (city, country, is_remote).

    Handles "New York City, United States", "Remote - United States",
    "Remote (Canada)" and "Remote".
    """
    raw = clean_str(name)
    if not raw:
        return None, None, False

    is_remote = "remote" in raw.lower()

    cleaned = re.sub(r"^remote\s*\(([^)]*)\)$", r"\1", raw, flags=re.IGNORECASE)
    cleaned = re.sub(r"\(.*remote.*\)", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"remote\s*[-–]\s*", "", cleaned, flags=re.IGNORECASE)
    cleaned = clean_str(cleaned)

    parts = [p.strip() for p in cleaned.split(",") if p.strip()]

    if len(parts) == 1 and parts[0].lower() == "remote":
        return None, None, True
    if len(parts) >= 2:
        return parts[0], parts[-1], is_remote
    if len(parts) == 1:
        return None, parts[0], is_remote
    return None, None, is_remote


def infer_work_type(location_name: str | None) -> WorkType:
    lower = clean_str(location_name).lower()
    if "remote" in lower:
        return WorkType.REMOTE
    if "hybrid" in lower:
        return WorkType.HYBRID
    return WorkType.ONSITE


def normalize_greenhouse_job(item: dict, board: str) -> NormalizedJob:
    """Normalize one entry of a Greenhouse board ``jobs`` array."""
    loc_data = item.get("location") or {}
    loc_name = clean_str(loc_data.get("name") if isinstance(loc_data, dict) else loc_data)
    city, country, is_remote = parse_location(loc_name)

    departments = item.get("departments") or []
    company = (
        clean_str((item.get("company") or {}).get("name"))
        or clean_str(departments[0].get("name") if departments else None)
        or clean_str(board)
    )

    return normalize_job(
        {
            "id": str(item.get("id") or ""),
            "title": item.get("title"),
            "company": company,
            "workType": "remote" if is_remote else infer_work_type(loc_name).value,
            "country": country,
            "city": city,
            "postedAt": item.get("updated_at") or item.get("created_at"),
            # Raw HTML stays; it is cleaned right before scoring
            "description": item.get("content"),
            "sourceUrl": GREENHOUSE_API.format(board=clean_str(board)),
            "companyUrl": item.get("absolute_url"),
        },
        "greenhouse",
    )


# =============================================================================
# Adzuna
# =============================================================================


def to_adzuna_country_code(country: str | None) -> str | None:
    return ADZUNA_COUNTRY_CODES.get(clean_str(country).lower())


def normalize_adzuna_job(item: dict, country: str, api_url: str | None = None) -> NormalizedJob:
    """Normalize one entry of an Adzuna search ``results`` array.

    Adzuna does not report work arrangement, so it stays unknown.
    """
    if api_url is None:
        code = to_adzuna_country_code(country)
        if not code:
            raise JobNormalizationError(f"Adzuna does not support country {country!r}")
        api_url = ADZUNA_API.format(country_code=code)

    company = clean_str((item.get("company") or {}).get("display_name")) or "unknown"
    location = clean_str((item.get("location") or {}).get("display_name")) or None
    category = clean_str((item.get("category") or {}).get("label")) or None

    return normalize_job(
        {
            "id": str(item.get("id") or ""),
            "title": item.get("title"),
            "company": company,
            "industry": category,
            "country": country,
            "city": location,
            "salaryMin": item.get("salary_min"),
            "salaryMax": item.get("salary_max"),
            # Commonly yearly ranges, not guaranteed
            "salaryPeriod": "year",
            "postedAt": item.get("created"),
            "description": item.get("description"),
            "sourceUrl": api_url,
            "companyUrl": item.get("redirect_url"),
            "workType": "unknown",
        },
        "adzuna",
    )


# =============================================================================
# Loading dumps
# =============================================================================


def load_jobs(filepath: str, source: str = "manual", country: str | None = None) -> list[NormalizedJob]:
    """Load raw postings from a JSON dump and normalize them.

    Accepts a Greenhouse board response (``{"jobs": [...]}``), an Adzuna
    search response (``{"results": [...]}``) or a plain list of postings.
    Postings that fail normalization are logged and skipped.
    """
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict) and "jobs" in data:
        items, kind = data["jobs"], "greenhouse"
    elif isinstance(data, dict) and "results" in data:
        items, kind = data["results"], "adzuna"
    elif isinstance(data, list):
        items, kind = data, "generic"
    else:
        raise ValueError(f"Unrecognized job dump format in {filepath}")

    if not isinstance(items, list):
        logger.warning("Expected a list of %s postings in %s, got %s", kind, filepath, type(items).__name__)
        items = []

    jobs: list[NormalizedJob] = []
    for item in items:
        try:
            if kind == "greenhouse":
                jobs.append(normalize_greenhouse_job(item, board=source))
            elif kind == "adzuna":
                jobs.append(normalize_adzuna_job(item, country=country or ""))
            else:
                jobs.append(normalize_job(item, item.get("source") or source))
        except (JobNormalizationError, AttributeError) as e:
            logger.warning("Failed to normalize %s job: %s", kind, e)
            continue

    logger.info(
        "Loaded %d jobs from %s (%s, %d skipped)",
        len(jobs), Path(filepath).name, kind, len(items) - len(jobs),
    )
    return jobs
