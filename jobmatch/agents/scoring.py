"""Deterministic candidate <-> job match scoring (0-100).

Every scorer is a pure function of (profile, job) returning its clamped
sub-score plus the reasons it wants to surface. The orchestrator runs them in
a fixed order (skills, title, salary, location/work type, industry), which is
also the order of the emitted reasons.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from jobmatch.models.job import NormalizedJob, WorkType
from jobmatch.models.profile import CandidateProfile, PreferredWorkType
from jobmatch.models.scoring import (
    HARD_REJECT_CAP,
    PASS_THRESHOLD,
    ScoreBreakdown,
    ScoredJob,
    ScoreResult,
)
from jobmatch.tools.html_cleaner import clean_html
from jobmatch.tools.text import jaccard, map_title_to_group, normalize_text, tokenize

logger = logging.getLogger(__name__)

SKILL_CAP = 40
TITLE_CAP = 20
SALARY_CAP = 20
LOCATION_WORK_CAP = 20
INDUSTRY_CAP = 10

MUST_HAVE_MIN_RATIO = 0.6
MAX_LISTED_MISSING = 8
MIN_SKILL_LENGTH = 2
TITLE_GROUP_BONUS = 0.25
SALARY_CEILING = 2**53 - 1  # open upper bound for unspecified salary ranges


@dataclass(frozen=True)
class SkillMatch:
    """Result of matching candidate skills against job text."""

    skill_set: tuple[str, ...]
    matched: tuple[str, ...]
    must_have: tuple[str, ...]
    must_have_matched: tuple[str, ...]
    must_have_missing: tuple[str, ...]

    @property
    def must_have_ratio(self) -> float | None:
        if not self.must_have:
            return None
        return len(self.must_have_matched) / len(self.must_have)

    @property
    def overall_ratio(self) -> float:
        return len(self.matched) / (len(self.skill_set) or 1)

    @property
    def hard_reject(self) -> bool:
        ratio = self.must_have_ratio
        return ratio is not None and ratio < MUST_HAVE_MIN_RATIO


@dataclass
class SubScore:
    value: float
    reasons: list[str] = field(default_factory=list)


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def round_half_up(n: float) -> int:
    """Round .5 away from zero for non-negative scores (not banker's rounding)."""
    return int(math.floor(n + 0.5))


# =============================================================================
# Skills (0-40) and the must-have gate
# =============================================================================


def build_skill_set(profile: CandidateProfile) -> tuple[str, ...]:
    """Normalized union of general, must-have and nice-to-have skills, in order."""
    skills = [*profile.skills, *profile.must_have_skills, *profile.nice_to_have_skills]
    ordered = dict.fromkeys(s for s in map(normalize_text, skills) if s)
    return tuple(ordered)


def match_skills(profile: CandidateProfile, job: NormalizedJob) -> SkillMatch:
    """Find which candidate skills appear in the job title + description.

    Matching is plain substring containment on normalized text, so "react"
    also hits "react native" and short skills can produce false positives.
    """
    skill_set = build_skill_set(profile)
    text = normalize_text(f"{job.title}\n{job.description or ''}")
    matched = tuple(s for s in skill_set if len(s) >= MIN_SKILL_LENGTH and s in text)

    must_have = tuple(s for s in map(normalize_text, profile.must_have_skills) if s)
    matched_lookup = set(matched)
    return SkillMatch(
        skill_set=skill_set,
        matched=matched,
        must_have=must_have,
        must_have_matched=tuple(s for s in must_have if s in matched_lookup),
        must_have_missing=tuple(s for s in must_have if s not in matched_lookup),
    )


def must_have_reasons(match: SkillMatch) -> list[str]:
    missing = match.must_have_missing
    if match.hard_reject:
        listed = ", ".join(missing[:MAX_LISTED_MISSING])
        more = "..." if len(missing) > MAX_LISTED_MISSING else ""
        return [f"Rejected: missing must-have skills ({listed}{more})"]
    if missing:
        return [f"Warning: missing some must-have skills ({', '.join(missing)})"]
    return []


def score_skills(match: SkillMatch) -> SubScore:
    ratio = match.must_have_ratio
    if ratio is not None:
        value = (ratio * 0.7 + match.overall_ratio * 0.3) * SKILL_CAP
    else:
        value = match.overall_ratio * SKILL_CAP
    value = clamp(value, 0, SKILL_CAP)

    shown = round_half_up(value)
    if shown >= 28:
        reason = "Strong skill match"
    elif shown >= 18:
        reason = "Moderate skill match"
    else:
        reason = "Weak skill match"
    return SubScore(value, [reason])


# =============================================================================
# Title similarity (0-20)
# =============================================================================


def title_similarity(job_title: str, preferred_title: str) -> float:
    """Token Jaccard plus the synonym-group bonus, clamped to [0, 1]."""
    sim = jaccard(tokenize(job_title), tokenize(preferred_title))
    job_group = map_title_to_group(job_title)
    bonus = TITLE_GROUP_BONUS if job_group and job_group == map_title_to_group(preferred_title) else 0.0
    return clamp(sim + bonus, 0, 1)


def score_title(profile: CandidateProfile, job: NormalizedJob) -> SubScore:
    if profile.preferred_titles:
        best = max(title_similarity(job.title, t) for t in profile.preferred_titles)
        value = clamp(best * TITLE_CAP, 0, TITLE_CAP)
    else:
        value = 10.0

    shown = round_half_up(value)
    if shown >= 16:
        reason = "Title matches preference well"
    elif shown >= 10:
        reason = "Title is somewhat relevant"
    else:
        reason = "Title relevance is low"
    return SubScore(value, [reason])


# =============================================================================
# Salary (0-20)
# =============================================================================


def score_salary(profile: CandidateProfile, job: NormalizedJob) -> SubScore:
    """Share of the job's posted band that falls inside the candidate's band.

    A zero salary counts as "not specified" on either side. A job posting only
    one bound is treated as the single point [bound, bound].
    """
    c_min, c_max = profile.salary_min, profile.salary_max
    j_min, j_max = job.salary_min, job.salary_max
    client_cares = bool(c_min or c_max)

    if client_cares and (j_min or j_max):
        client_low = c_min if c_min is not None else 0
        client_high = c_max if c_max is not None else SALARY_CEILING
        job_low = j_min if j_min is not None else (j_max if j_max is not None else 0)
        job_high = j_max if j_max is not None else (j_min if j_min is not None else SALARY_CEILING)

        overlap = max(0, min(client_high, job_high) - max(client_low, job_low))
        job_range = max(1, job_high - job_low)
        value = clamp(overlap / job_range * SALARY_CAP, 0, SALARY_CAP)

        if value >= 14:
            reason = "Salary range fits preference"
        elif value >= 8:
            reason = "Salary range partially fits"
        else:
            reason = "Salary likely outside preference"
        return SubScore(value, [reason])

    if client_cares:
        return SubScore(8.0, ["Salary unknown (cannot confirm fit)"])

    return SubScore(10.0)


# =============================================================================
# Location & work type (0-20 = 10 work type + 10 location)
# =============================================================================


def score_work_type(profile: CandidateProfile, job: NormalizedJob) -> SubScore:
    if profile.work_type == PreferredWorkType.ANY:
        return SubScore(10.0)
    if job.work_type == WorkType.UNKNOWN:
        return SubScore(6.0, ["Work type unknown (cannot confirm remote/onsite/hybrid)"])
    if job.work_type.value == profile.work_type.value:
        return SubScore(10.0, ["Work type matches preference"])
    return SubScore(0.0, ["Work type does not match preference"])


def score_location(profile: CandidateProfile, job: NormalizedJob) -> SubScore:
    value = 10.0
    reasons: list[str] = []

    countries = {normalize_text(c) for c in profile.preferred_countries}
    cities = {normalize_text(c) for c in profile.preferred_cities}
    job_country = normalize_text(job.country)
    job_city = normalize_text(job.city)

    if countries:
        if not job_country:
            value = 6.0
            reasons.append("Country unknown (cannot confirm location)")
        elif job_country in countries:
            value = 10.0
            reasons.append("Country matches preference")
        else:
            value = 0.0
            reasons.append("Country does not match preference")

    if value > 0 and cities:
        if not job_city:
            value = min(value, 8.0)
            reasons.append("City unknown (cannot confirm city)")
        elif job_city in cities:
            value = min(10.0, value + 2)
            reasons.append("City matches preference")
        else:
            value = max(0.0, value - 4)
            reasons.append("City differs from preference")

    return SubScore(value, reasons)


# =============================================================================
# Industry (0-10)
# =============================================================================


def score_industry(profile: CandidateProfile, job: NormalizedJob) -> SubScore:
    preferred = [p for p in map(normalize_text, profile.preferred_industries) if p]
    if not preferred:
        return SubScore(5.0)

    industry = normalize_text(job.industry)
    if not industry:
        return SubScore(4.0, ["Industry unknown (cannot confirm fit)"])
    if any(p in industry or industry in p for p in preferred):
        return SubScore(10.0, ["Industry matches preference"])
    return SubScore(2.0, ["Industry may not match preference"])


# =============================================================================
# Orchestrator
# =============================================================================


def score_job_for_client(profile: CandidateProfile, job: NormalizedJob) -> ScoreResult:
    """Score one job for one candidate.

    Never raises on validated input; missing data gets neutral defaults.
    A hard reject caps the score at 49 so it can never pass.
    """
    match = match_skills(profile, job)
    hard_reject = match.hard_reject

    skills = score_skills(match)
    title = score_title(profile, job)
    salary = score_salary(profile, job)
    work = score_work_type(profile, job)
    location = score_location(profile, job)
    location_work = clamp(work.value + location.value, 0, LOCATION_WORK_CAP)
    industry = score_industry(profile, job)

    reasons = [
        *must_have_reasons(match),
        *skills.reasons,
        *title.reasons,
        *salary.reasons,
        *work.reasons,
        *location.reasons,
        *industry.reasons,
    ]

    raw = skills.value + title.value + salary.value + location_work + industry.value
    score = min(100, round_half_up(raw))
    if hard_reject:
        score = min(HARD_REJECT_CAP, score)

    breakdown = ScoreBreakdown(
        skill_score=skills.value,
        title_score=title.value,
        salary_score=salary.value,
        location_work_score=location_work,
        industry_score=industry.value,
        work_type_score=work.value,
        location_score=location.value,
        must_have_ratio=match.must_have_ratio,
        overall_skill_ratio=match.overall_ratio,
        skills_matched=list(match.matched),
        must_have_matched=list(match.must_have_matched),
        must_have_missing=list(match.must_have_missing),
        raw_score=raw,
    )

    logger.debug(
        "Scored '%s' (%s) for %s: %d%s",
        job.title, job.id, profile.client_id, score, " [hard reject]" if hard_reject else "",
    )

    return ScoreResult(
        score=score,
        passed=score >= PASS_THRESHOLD and not hard_reject,
        hard_reject=hard_reject,
        breakdown=breakdown,
        reasons=reasons,
    )


def score_jobs_batch(profile: CandidateProfile, jobs: list[NormalizedJob]) -> list[ScoredJob]:
    """Score every job for the candidate, cleaning HTML out of descriptions first."""
    scored: list[ScoredJob] = []
    for job in jobs:
        job_for_scoring = job.model_copy(update={"description": clean_html(job.description)})
        scored.append(ScoredJob(job=job, result=score_job_for_client(profile, job_for_scoring)))

    passed = sum(1 for s in scored if s.result.passed)
    rejected = sum(1 for s in scored if s.result.hard_reject)
    logger.info(
        "Scoring complete: %d passed, %d hard-rejected out of %d total",
        passed, rejected, len(scored),
    )
    return scored


def rank_matches(
    profile: CandidateProfile,
    jobs: list[NormalizedJob],
    limit: int = 20,
) -> list[ScoredJob]:
    """Score jobs and keep passing matches, best first, at most ``limit``."""
    matches = [s for s in score_jobs_batch(profile, jobs) if s.result.passed]
    matches.sort(key=lambda s: s.result.score, reverse=True)
    return matches[:limit]
