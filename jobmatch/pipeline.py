"""Relevance gate -> scoring -> filters -> sort."""
from __future__ import annotations

import re
import unicodedata
from datetime import datetime, timezone
from typing import Iterable, Sequence

from jobmatch.log import get_logger
from jobmatch.models import JobFilters, JobPosting, MatchedJob, SortKey, SortOrder, UserProfile
from jobmatch.relevance import is_relevant
from jobmatch.scorer import calculate_match_score
from jobmatch.taxonomy import DEFAULT_TAXONOMY, SkillTaxonomy

log = get_logger(__name__)

OLDEST = datetime.min.replace(tzinfo=timezone.utc)
# fromisoformat on 3.10 only takes 3 or 6 fractional digits
_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def parse_posting_date(value: str | None) -> datetime:
    """ISO-8601 string to an aware datetime; unparsable input is the oldest instant."""
    if not value:
        return OLDEST
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def collation_key(text: str | None) -> str:
    """Accent- and case-insensitive sort key ("Île" sorts beside "Ivry")."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def apply_filters(jobs: Iterable[MatchedJob], filters: JobFilters) -> list[MatchedJob]:
    result = list(jobs)
    if filters.min_match_score is not None:
        result = [m for m in result if m.match_score >= filters.min_match_score]
    if filters.location:
        needle = filters.location.lower()
        result = [m for m in result if needle in (m.job.location or "").lower()]
    if filters.contract_type:
        wanted = filters.contract_type.lower()
        result = [m for m in result if (m.job.contract_type or "").lower() == wanted]
    return result


def sort_jobs(
    jobs: Iterable[MatchedJob],
    sort_by: SortKey = SortKey.SCORE,
    order: SortOrder = SortOrder.DESC,
) -> list[MatchedJob]:
    if sort_by is SortKey.DATE:
        key = lambda m: parse_posting_date(m.job.date_posted)  # noqa: E731
    elif sort_by is SortKey.LOCATION:
        key = lambda m: collation_key(m.job.location)  # noqa: E731
    else:
        key = lambda m: m.match_score  # noqa: E731
    # sorted() is stable in both directions, equal keys keep input order
    return sorted(jobs, key=key, reverse=order is SortOrder.DESC)


def match_jobs(
    jobs: Sequence[JobPosting],
    profile: UserProfile,
    filters: JobFilters | None = None,
    taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY,
) -> list[MatchedJob]:
    relevant = [j for j in jobs if is_relevant(j.title)]
    total_skills = len(profile.skills)

    matched: list[MatchedJob] = []
    for job in relevant:
        result = calculate_match_score(job, profile, taxonomy)
        matched.append(MatchedJob(
            job=job,
            match_score=result.score,
            matched_skills=result.matched_skills,
            total_skills=total_skills,
        ))

    if filters is None:
        ranked = sort_jobs(matched)
    else:
        ranked = sort_jobs(apply_filters(matched, filters), filters.sort_by, filters.sort_order)

    log.debug(
        "Matched %d jobs: %d relevant, %d after filters", len(jobs), len(relevant), len(ranked),
    )
    return ranked
