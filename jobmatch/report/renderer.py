"""Render search results as markdown and JSON reports."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from jobmatch.models.job import NormalizedJob
from jobmatch.models.scoring import ScoredJob

logger = logging.getLogger(__name__)


def _job_line(job: NormalizedJob) -> str:
    where = ", ".join(p for p in (job.city, job.country) if p) or "Location unknown"
    url = job.company_url or job.source_url
    return f"[{job.title}]({url}) — {job.company} · {where} · {job.work_type.value}"


def render_markdown(
    matches: list[ScoredJob] | None,
    unscored: list[NormalizedJob] | None,
    stats: dict,
) -> str:
    """Markdown report: scored matches (with reasons) or plain filtered jobs."""
    lines = [
        f"# Job Matches — {stats.get('run_date', '')}",
        "",
        f"- Jobs loaded: {stats.get('total_loaded', 0)}",
        f"- After search filters: {stats.get('total_filtered', 0)}",
    ]
    if matches is not None:
        lines.append(f"- Matches (score ≥ 70): {stats.get('total_matched', 0)}")
    lines.append("")

    if matches is not None:
        if not matches:
            lines.append("_No jobs passed the match threshold._")
        for i, scored in enumerate(matches, 1):
            result = scored.result
            lines.append(f"## {i}. {_job_line(scored.job)}")
            lines.append(f"**Score: {result.score}/100**")
            lines.append("")
            for reason in result.reasons:
                lines.append(f"- {reason}")
            lines.append("")
    else:
        if not unscored:
            lines.append("_No jobs matched the search filters._")
        for i, job in enumerate(unscored or [], 1):
            lines.append(f"{i}. {_job_line(job)}")

    return "\n".join(lines).rstrip() + "\n"


def render_json(
    matches: list[ScoredJob] | None,
    unscored: list[NormalizedJob] | None,
    stats: dict,
) -> str:
    """JSON report in the camelCase shape API consumers expect."""
    if matches is not None:
        results = [
            {
                **s.job.model_dump(mode="json", by_alias=True, exclude_none=True),
                "matchScore": s.result.score,
                "pass": s.result.passed,
                "reasons": s.result.reasons,
                "breakdown": s.result.breakdown.model_dump(mode="json", by_alias=True),
            }
            for s in matches
        ]
    else:
        results = [
            {
                **job.model_dump(mode="json", by_alias=True, exclude_none=True),
                "matchScore": None,
                "pass": None,
                "reasons": [],
                "breakdown": {},
            }
            for job in unscored or []
        ]
    payload = {"ok": True, "stats": stats, "count": len(results), "results": results}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def save_report(report_md: str, report_json: str, run_date: str, reports_dir: str = "reports") -> Path:
    """Write both reports under ``reports_dir`` and return the markdown path."""
    out = Path(reports_dir)
    out.mkdir(parents=True, exist_ok=True)

    md_path = out / f"matches_{run_date}.md"
    md_path.write_text(report_md, encoding="utf-8")
    (out / f"matches_{run_date}.json").write_text(report_json, encoding="utf-8")

    logger.info("Reports saved to %s", out)
    return md_path
