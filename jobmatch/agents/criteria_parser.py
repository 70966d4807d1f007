"""Config loaders — read criteria.yaml / profile.yaml into structured models."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from jobmatch.models.criteria import SearchCriteria
from jobmatch.models.profile import CandidateProfile

logger = logging.getLogger(__name__)


def _read_yaml(path: Path, section: str) -> dict:
    """Load a YAML mapping; a top-level ``section`` key is unwrapped if present."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a YAML mapping")
    nested = data.get(section)
    return nested if isinstance(nested, dict) else data


def load_search_criteria(filepath: str = "criteria.yaml", **overrides) -> SearchCriteria:
    """Parse search filters. A missing file is an error: country and title are required.

    Keyword overrides (e.g. ``limit=50`` from the CLI) win over the file;
    None values are ignored.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Search criteria file not found: {filepath}")

    data = _read_yaml(path, "search")
    data.update({k: v for k, v in overrides.items() if v is not None})

    criteria = SearchCriteria(**data)
    logger.info(
        "Loaded search criteria from %s: title=%r, country=%s, freshness=%s, limit=%d",
        filepath,
        criteria.job_title,
        criteria.country,
        criteria.freshness.value,
        criteria.limit,
    )
    return criteria


def load_profile(filepath: str | None = "profile.yaml") -> CandidateProfile | None:
    """Parse a candidate profile, or return None when there is none to score against."""
    if not filepath:
        return None
    path = Path(filepath)
    if not path.exists():
        logger.warning("Profile file not found at %s — results will not be scored", filepath)
        return None

    profile = CandidateProfile(**_read_yaml(path, "profile"))
    logger.info(
        "Loaded profile %s: %d skills (%d must-have), %d preferred titles, salary %s–%s",
        profile.client_id,
        len(profile.skills) + len(profile.must_have_skills) + len(profile.nice_to_have_skills),
        len(profile.must_have_skills),
        len(profile.preferred_titles),
        profile.salary_min,
        profile.salary_max,
    )
    return profile
