"""LangGraph workflow — 6-node job search and match pipeline."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TypedDict

from langgraph.graph import END, StateGraph

from jobmatch.agents.criteria_parser import load_profile, load_search_criteria
from jobmatch.agents.scoring import rank_matches
from jobmatch.agents.search_filter import filter_jobs
from jobmatch.models.criteria import SearchCriteria
from jobmatch.models.job import NormalizedJob
from jobmatch.models.profile import CandidateProfile
from jobmatch.models.scoring import ScoredJob
from jobmatch.report.renderer import render_json, render_markdown, save_report
from jobmatch.tools.sources import load_jobs

logger = logging.getLogger(__name__)


# =============================================================================
# Pipeline State
# =============================================================================


class PipelineState(TypedDict, total=False):
    """State passed between nodes in the LangGraph pipeline."""

    # Config
    criteria_path: str
    profile_path: str | None
    jobs_path: str
    source: str
    limit: int | None
    reports_dir: str
    run_date: str

    # Data
    criteria: SearchCriteria
    profile: CandidateProfile | None
    jobs: list[NormalizedJob]
    filtered_jobs: list[NormalizedJob]
    matches: list[ScoredJob] | None

    # Stats
    total_loaded: int
    total_filtered: int
    total_matched: int
    errors: list[str]

    # Report
    report_md: str
    report_json: str


# =============================================================================
# Node 1: Load Search Criteria
# =============================================================================


def load_criteria_node(state: PipelineState) -> dict:
    """Read criteria.yaml into SearchCriteria (CLI limit wins over the file)."""
    logger.info("=== Node 1: Loading Search Criteria ===")

    criteria = load_search_criteria(
        state.get("criteria_path", "criteria.yaml"),
        limit=state.get("limit"),
    )
    return {"criteria": criteria}


# =============================================================================
# Node 2: Load Candidate Profile (optional)
# =============================================================================


def load_profile_node(state: PipelineState) -> dict:
    logger.info("=== Node 2: Loading Candidate Profile ===")
    return {"profile": load_profile(state.get("profile_path"))}


# =============================================================================
# Node 3: Load & Normalize Jobs
# =============================================================================


def load_jobs_node(state: PipelineState) -> dict:
    """Normalize the raw job dump into NormalizedJob records."""
    logger.info("=== Node 3: Loading Jobs ===")

    errors = list(state.get("errors", []))
    criteria = state["criteria"]

    try:
        jobs = load_jobs(
            state.get("jobs_path", "jobs.json"),
            source=state.get("source", "manual"),
            country=criteria.country,
        )
    except (OSError, ValueError) as e:
        logger.error("Failed to load jobs: %s", e)
        errors.append(f"Load error: {e}")
        jobs = []

    return {"jobs": jobs, "total_loaded": len(jobs), "errors": errors}


# =============================================================================
# Node 4: Search Filter
# =============================================================================


def hard_filter_node(state: PipelineState) -> dict:
    logger.info("=== Node 4: Search Filter ===")

    filtered = filter_jobs(state.get("jobs", []), state["criteria"])
    return {"filtered_jobs": filtered, "total_filtered": len(filtered)}


# =============================================================================
# Node 5: Match Score
# =============================================================================


def match_score_node(state: PipelineState) -> dict:
    """Score filtered jobs against the profile and keep 70+ matches, best first."""
    logger.info("=== Node 5: Match Scoring ===")

    profile = state.get("profile")
    filtered = state.get("filtered_jobs", [])
    criteria = state["criteria"]

    if profile is None:
        logger.info("No candidate profile — returning filtered jobs unscored")
        return {"matches": None, "total_matched": 0}

    matches = rank_matches(profile, filtered, limit=criteria.limit)
    return {"matches": matches, "total_matched": len(matches)}


# =============================================================================
# Node 6: Generate Report
# =============================================================================


def generate_report_node(state: PipelineState) -> dict:
    logger.info("=== Node 6: Generate Report ===")

    run_date = state.get("run_date", datetime.now().strftime("%Y-%m-%d"))
    criteria = state["criteria"]
    matches = state.get("matches")
    unscored = None if matches is not None else state.get("filtered_jobs", [])[: criteria.limit]

    stats = {
        "run_date": run_date,
        "total_loaded": state.get("total_loaded", 0),
        "total_filtered": state.get("total_filtered", 0),
        "total_matched": state.get("total_matched", 0),
    }

    report_md = render_markdown(matches, unscored, stats)
    report_json = render_json(matches, unscored, stats)
    save_report(report_md, report_json, run_date, state.get("reports_dir", "reports"))

    return {"report_md": report_md, "report_json": report_json}


# =============================================================================
# Build the Graph
# =============================================================================


def build_pipeline():
    """Build and compile the LangGraph pipeline."""

    graph = StateGraph(PipelineState)

    graph.add_node("load_criteria", load_criteria_node)
    graph.add_node("load_profile", load_profile_node)
    graph.add_node("load_jobs", load_jobs_node)
    graph.add_node("hard_filter", hard_filter_node)
    graph.add_node("match_score", match_score_node)
    graph.add_node("generate_report", generate_report_node)

    # Linear edges
    graph.set_entry_point("load_criteria")
    graph.add_edge("load_criteria", "load_profile")
    graph.add_edge("load_profile", "load_jobs")
    graph.add_edge("load_jobs", "hard_filter")
    graph.add_edge("hard_filter", "match_score")
    graph.add_edge("match_score", "generate_report")
    graph.add_edge("generate_report", END)

    return graph.compile()
