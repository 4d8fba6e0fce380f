"""
Command line front end for the job matcher.

Usage:
    python run_matcher.py [options]

Examples:
    python run_matcher.py --min-score 50 --location paris
    python run_matcher.py --sort-by date --sort-order asc --top 20
    python run_matcher.py --contract-type CDI --output matches.json
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from jobmatch.config import get_env, load_profile
from jobmatch.log import configure as configure_logging, get_logger
from jobmatch.models import JobFilters, SortKey, SortOrder
from jobmatch.pipeline import match_jobs
from jobmatch.report import build_match_report, write_match_report
from jobmatch.service import fetch_all_jobs
from jobmatch.sources import get_sources

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch developer jobs and rank them against your profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--min-score", type=int, help="Keep jobs scoring at least this (0-100)")
    parser.add_argument("--location", "-l", help="Substring of the job location")
    parser.add_argument("--contract-type", "-c", help="Exact contract type, e.g. CDI")
    parser.add_argument(
        "--sort-by", choices=[k.value for k in SortKey], default=SortKey.SCORE.value,
    )
    parser.add_argument(
        "--sort-order", choices=[o.value for o in SortOrder], default=SortOrder.DESC.value,
    )
    parser.add_argument("--keywords", "-k", help="Keywords passed to the job sources")
    parser.add_argument("--top", "-t", type=int, default=15, help="Show top N matches")
    parser.add_argument("--output", "-o", help="Write all matches to this JSON file")
    parser.add_argument(
        "--report", action=argparse.BooleanOptionalAction, default=False,
        help="Write a markdown report under reports/",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log scoring details")
    return parser


def filters_from_args(args: argparse.Namespace) -> JobFilters:
    min_score = args.min_score if args.min_score is not None and args.min_score >= 0 else None
    return JobFilters(
        min_match_score=min_score,
        location=args.location or None,
        contract_type=args.contract_type or None,
        sort_by=SortKey(args.sort_by),
        sort_order=SortOrder(args.sort_order),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG")
    profile = load_profile()
    filters = filters_from_args(args)

    jobs = fetch_all_jobs(get_sources(get_env), args.keywords)
    matches = match_jobs(jobs, profile, filters)

    log.info("Jobs fetched: %d, matched: %d", len(jobs), len(matches))
    for i, m in enumerate(matches[: args.top], 1):
        log.info(
            "%2d. [%3d%%] %s @ %s (%s) — %s",
            i, m.match_score, m.job.title, m.job.company, m.job.location,
            ", ".join(m.matched_skills) or "no skill match",
        )

    if args.output:
        path = Path(args.output)
        path.write_text(
            json.dumps([m.to_dict() for m in matches], ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        log.info("Matches written → %s", path)

    if args.report:
        write_match_report(build_match_report(matches, profile))

    return 0
