"""Tests for raw posting normalization and HTML cleaning."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jobmatch.models.job import JobNormalizationError, SalaryPeriod, WorkType
from jobmatch.tools.html_cleaner import clean_html
from jobmatch.tools.sources import (
    infer_work_type,
    load_jobs,
    map_work_type,
    normalize_adzuna_job,
    normalize_greenhouse_job,
    normalize_job,
    parse_location,
    to_adzuna_country_code,
    to_iso,
)

GREENHOUSE_ITEM = {
    "id": 123,
    "title": "Backend Engineer",
    "location": {"name": "Remote - Germany"},
    "updated_at": "2025-01-05T10:00:00-05:00",
    "absolute_url": "https://boards.greenhouse.io/acme/jobs/123",
    "content": "&lt;p&gt;Python&lt;/p&gt;",
}

ADZUNA_ITEM = {
    "id": "4455",
    "title": "Data Analyst",
    "company": {"display_name": "Globex"},
    "location": {"display_name": "London"},
    "category": {"label": "IT Jobs"},
    "salary_min": 45000.0,
    "salary_max": 55000.0,
    "created": "2025-01-03T12:00:00Z",
    "redirect_url": "https://www.adzuna.co.uk/jobs/land/ad/4455",
    "description": "SQL and Python",
}


class TestNormalizeJob:
    """Test suite for generic normalization."""

    def test_key_fallbacks(self) -> None:
        """Test that alternate raw keys map onto the normalized fields."""
        raw = {
            "job_id": 42,
            "position": "  Data   Engineer ",
            "company_name": "Acme",
            "category": "IT Jobs",
            "location_type": "Fully Remote",
            "salary_min": 90000,
            "salaryPeriod": "Annual",
            "publication_date": "2025-01-02T03:04:05Z",
            "url": "https://example.com/j/42",
        }

        job = normalize_job(raw, "remotive")

        assert job.id == "42"
        assert job.source == "remotive"
        assert job.title == "Data Engineer"
        assert job.company == "Acme"
        assert job.industry == "IT Jobs"
        assert job.work_type == WorkType.REMOTE
        assert job.salary_min == 90000
        assert job.salary_max is None
        assert job.salary_period == SalaryPeriod.YEAR
        assert job.posted_at == "2025-01-02T03:04:05+00:00"
        assert job.source_url == "https://example.com/j/42"
        assert job.country is None

    def test_missing_url_raises(self) -> None:
        """A posting without a URL raises JobNormalizationError."""
        with pytest.raises(JobNormalizationError, match="normalize_job failed \\(test\\)"):
            normalize_job({"id": "1", "title": "Engineer", "company": "Acme"}, "test")

    def test_missing_title_raises(self) -> None:
        """A posting without a title raises JobNormalizationError."""
        with pytest.raises(JobNormalizationError):
            normalize_job({"id": "1", "company": "Acme", "url": "https://example.com/1"}, "test")

    def test_unparseable_date_dropped(self) -> None:
        """Unparseable dates are dropped rather than failing the posting."""
        job = normalize_job(
            {"id": "1", "title": "E", "company": "A", "url": "https://example.com/1", "postedAt": "soon"},
            "test",
        )
        assert job.posted_at is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Remote", WorkType.REMOTE),
            ("Hybrid (3 days)", WorkType.HYBRID),
            ("On-site", WorkType.ONSITE),
            ("on site", WorkType.ONSITE),
            ("", WorkType.UNKNOWN),
            (None, WorkType.UNKNOWN),
        ],
    )
    def test_map_work_type(self, value: str | None, expected: WorkType) -> None:
        """Free-text work arrangements map onto WorkType."""
        assert map_work_type(value) == expected


class TestToIso:
    """Test suite for date normalization."""

    def test_date_only(self) -> None:
        """A bare date becomes UTC midnight."""
        assert to_iso("2025-01-02") == "2025-01-02T00:00:00+00:00"

    def test_rfc822(self) -> None:
        """RFC 822 dates, as used by feeds, are parsed."""
        assert to_iso("Mon, 06 Jan 2025 10:00:00 +0000") == "2025-01-06T10:00:00+00:00"

    def test_keeps_offset(self) -> None:
        """An explicit UTC offset is kept."""
        assert to_iso("2025-01-05T10:00:00-05:00") == "2025-01-05T10:00:00-05:00"

    @pytest.mark.parametrize("value", [None, "", "garbage"])
    def test_unparseable(self, value: str | None) -> None:
        """Empty or unparseable values give None."""
        assert to_iso(value) is None


class TestGreenhouse:
    """Test suite for Greenhouse board normalization."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("New York City, United States", ("New York City", "United States", False)),
            ("Remote - United States", (None, "United States", True)),
            ("Remote (Canada)", (None, "Canada", True)),
            ("Remote", (None, None, True)),
            ("Germany", (None, "Germany", False)),
            ("", (None, None, False)),
        ],
    )
    def test_parse_location(self, name: str, expected: tuple) -> None:
        """Test splitting Greenhouse location names into city and country."""
        assert parse_location(name) == expected

    def test_infer_work_type(self) -> None:
        """Locations without remote or hybrid default to onsite."""
        assert infer_work_type("Berlin, Germany") == WorkType.ONSITE
        assert infer_work_type("Hybrid - London") == WorkType.HYBRID

    def test_normalize_item(self) -> None:
        """Test normalizing one Greenhouse board entry."""
        job = normalize_greenhouse_job(GREENHOUSE_ITEM, board="acme")

        assert job.id == "123"
        assert job.source == "greenhouse"
        assert job.company == "acme"
        assert job.work_type == WorkType.REMOTE
        assert job.country == "Germany"
        assert job.city is None
        assert job.posted_at == "2025-01-05T10:00:00-05:00"
        assert job.source_url == "https://boards-api.greenhouse.io/v1/boards/acme/jobs?content=true"
        assert job.company_url == "https://boards.greenhouse.io/acme/jobs/123"
        assert clean_html(job.description) == "Python"

    def test_department_name_used_as_company_fallback(self) -> None:
        """The first department name is used when the company is not given."""
        item = {**GREENHOUSE_ITEM, "departments": [{"name": "Engineering"}]}
        assert normalize_greenhouse_job(item, board="acme").company == "Engineering"


class TestAdzuna:
    """Test suite for Adzuna search normalization."""

    def test_country_codes(self) -> None:
        """Country names map to Adzuna country codes."""
        assert to_adzuna_country_code("United Kingdom") == "gb"
        assert to_adzuna_country_code(" USA ") == "us"
        assert to_adzuna_country_code("Sri Lanka") is None

    def test_normalize_item(self) -> None:
        """Test normalizing one Adzuna search result."""
        job = normalize_adzuna_job(ADZUNA_ITEM, country="United Kingdom")

        assert job.id == "4455"
        assert job.source == "adzuna"
        assert job.company == "Globex"
        assert job.industry == "IT Jobs"
        assert job.country == "United Kingdom"
        assert job.city == "London"
        assert job.salary_min == 45000
        assert job.salary_max == 55000
        assert job.salary_period == SalaryPeriod.YEAR
        assert job.work_type == WorkType.UNKNOWN
        assert job.source_url == "https://api.adzuna.com/v1/api/jobs/gb/search/1"
        assert job.company_url == ADZUNA_ITEM["redirect_url"]

    def test_unsupported_country(self) -> None:
        """Countries Adzuna does not serve raise JobNormalizationError."""
        with pytest.raises(JobNormalizationError):
            normalize_adzuna_job(ADZUNA_ITEM, country="Sri Lanka")


class TestLoadJobs:
    """Test suite for loading JSON dumps."""

    def test_greenhouse_dump_skips_bad_items(self, tmp_path: Path) -> None:
        """A posting that fails normalization is skipped, not fatal."""
        path = tmp_path / "acme.json"
        path.write_text(json.dumps({"jobs": [GREENHOUSE_ITEM, {"id": 9, "title": ""}]}))

        jobs = load_jobs(str(path), source="acme")

        assert [j.id for j in jobs] == ["123"]

    def test_adzuna_dump(self, tmp_path: Path) -> None:
        """Test loading an Adzuna results dump."""
        path = tmp_path / "adzuna.json"
        path.write_text(json.dumps({"results": [ADZUNA_ITEM]}))

        jobs = load_jobs(str(path), country="UK")

        assert len(jobs) == 1
        assert jobs[0].source_url.endswith("/jobs/gb/search/1")

    def test_generic_list(self, tmp_path: Path) -> None:
        """Plain lists keep each posting's own source label."""
        path = tmp_path / "jobs.json"
        path.write_text(
            json.dumps([
                {"id": "a", "title": "Engineer", "company": "Acme", "url": "https://example.com/a", "source": "lever"},
                {"id": "b", "title": "Analyst", "company": "Acme", "url": "https://example.com/b"},
            ])
        )

        jobs = load_jobs(str(path))

        assert [(j.id, j.source) for j in jobs] == [("a", "lever"), ("b", "manual")]

    @pytest.mark.parametrize("payload", [{"jobs": None}, {"results": {"id": "1"}}, {"jobs": "none"}])
    def test_non_list_postings_load_nothing(self, tmp_path: Path, payload: dict) -> None:
        """A jobs or results value that is not a list loads no postings."""
        path = tmp_path / "broken.json"
        path.write_text(json.dumps(payload))

        assert load_jobs(str(path), source="stripe", country="UK") == []

    def test_unknown_format(self, tmp_path: Path) -> None:
        """A dump without jobs or results is rejected."""
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"data": []}))

        with pytest.raises(ValueError):
            load_jobs(str(path))


class TestCleanHtml:
    """Test suite for HTML cleaning."""

    def test_strips_tags_and_scripts(self) -> None:
        """Tags and script contents are removed."""
        assert clean_html("<p>Hello <b>World</b></p><script>x()</script>") == "Hello World"

    def test_escaped_markup(self) -> None:
        """Escaped markup is unescaped before stripping."""
        assert clean_html("&lt;p&gt;Python &amp;amp; Go&lt;/p&gt;") == "Python & Go"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value: str | None) -> None:
        """None and empty strings clean to an empty string."""
        assert clean_html(value) == ""
