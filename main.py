"""Job Match — CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging to both console and log file."""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    run_date = datetime.now().strftime("%Y-%m-%d")
    log_file = log_dir / f"run_{run_date}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def main() -> None:
    """Main CLI entrypoint for Job Match."""
    # Load environment variables before defaults are read from them
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Job Match — filter job postings and score them against a candidate profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --jobs stripe.json --source stripe          # Greenhouse board dump
  python main.py --jobs adzuna.json --profile profile.yaml   # Adzuna search dump, scored
  python main.py --jobs jobs.json --no-profile               # Filter only, no scoring
        """,
    )
    parser.add_argument(
        "--criteria",
        default=os.getenv("CRITERIA_PATH", "criteria.yaml"),
        help="Path to search criteria file. Default: criteria.yaml",
    )
    parser.add_argument(
        "--profile",
        default=os.getenv("PROFILE_PATH", "profile.yaml"),
        help="Path to candidate profile file. Default: profile.yaml",
    )
    parser.add_argument(
        "--no-profile",
        action="store_true",
        help="Skip match scoring and report the filtered jobs only",
    )
    parser.add_argument(
        "--jobs",
        default=os.getenv("JOBS_PATH", "jobs.json"),
        help="Path to a JSON dump of raw job postings. Default: jobs.json",
    )
    parser.add_argument(
        "--source",
        default="manual",
        help="Source label (Greenhouse board name for board dumps). Default: manual",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (overrides criteria file)",
    )
    parser.add_argument(
        "--output-dir",
        default=os.getenv("REPORTS_DIR", "reports"),
        help="Directory for markdown/JSON reports. Default: reports",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override (DEBUG, INFO, WARNING, ERROR)",
    )

    args = parser.parse_args()

    # Setup logging
    log_level = args.log_level or os.getenv("LOG_LEVEL", "INFO")
    setup_logging(log_level)

    logger = logging.getLogger("jobmatch")
    logger.info("=" * 60)
    logger.info("Job Match — Starting")
    logger.info("=" * 60)

    # Build and run the pipeline
    from jobmatch.graph import build_pipeline

    pipeline = build_pipeline()

    initial_state = {
        "criteria_path": args.criteria,
        "profile_path": None if args.no_profile else args.profile,
        "jobs_path": args.jobs,
        "source": args.source,
        "limit": args.limit,
        "reports_dir": args.output_dir,
        "run_date": datetime.now().strftime("%Y-%m-%d"),
        "errors": [],
    }

    start_time = time.time()

    try:
        result = pipeline.invoke(initial_state)
        duration = time.time() - start_time

        logger.info("=" * 60)
        logger.info("Pipeline complete in %.1f seconds", duration)
        logger.info(
            "Results: loaded=%d, filtered=%d, matched=%d",
            result.get("total_loaded", 0),
            result.get("total_filtered", 0),
            result.get("total_matched", 0),
        )
        if result.get("errors"):
            logger.warning("Errors: %s", result["errors"])
        logger.info("=" * 60)

    except Exception as e:
        duration = time.time() - start_time
        logger.error("Pipeline failed after %.1f seconds: %s", duration, e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
