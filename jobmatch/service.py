"""
Job matches service.

Runs: fetch (all sources, in parallel, cached) → match_jobs → paginate → response mapping.
"""
from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Sequence

from jobmatch.cache import CacheEntry, ResultsCache
from jobmatch.config import cache_ttl_seconds, get_env, load_profile, page_size as default_page_size
from jobmatch.log import get_logger
from jobmatch.models import JobFilters, JobPosting, UserProfile
from jobmatch.pipeline import match_jobs
from jobmatch.sources import JobSearchBase, MockSource, get_sources

log = get_logger(__name__)

_cache = ResultsCache(cache_ttl_seconds())


def get_cache() -> ResultsCache:
    return _cache


def _search_source(source: JobSearchBase, keywords: str | None) -> list[JobPosting]:
    """Wrapper for parallel source searching."""
    name = source.__class__.__name__
    try:
        results = source.search(keywords)
        log.info("[%s] returned %d jobs", name, len(results))
        return results
    except Exception as exc:
        log.error("[%s] FAILED: %s", name, exc)
        return []


def fetch_all_jobs(
    sources: Sequence[JobSearchBase], keywords: str | None = None
) -> list[JobPosting]:
    all_jobs: list[JobPosting] = []
    seen: set[str] = set()

    if sources:
        log.info("Searching %d source(s) in parallel...", len(sources))
        with ThreadPoolExecutor(max_workers=len(sources)) as pool:
            futures = {pool.submit(_search_source, src, keywords): src for src in sources}
            # Collect in registration order so the merged list is deterministic
            results = {futures[f]: f.result() for f in as_completed(futures)}
        for src in sources:
            for job in results.get(src, []):
                if job.id not in seen:
                    seen.add(job.id)
                    all_jobs.append(job)

    log.info("Total unique jobs from sources: %d", len(all_jobs))
    if not all_jobs:
        log.warning("Falling back to MockSource (no real jobs returned)")
        all_jobs = MockSource().search(keywords)
    return all_jobs


def _load_jobs(
    cache: ResultsCache,
    sources: Sequence[JobSearchBase],
    keywords: str | None,
    refresh: bool,
) -> tuple[CacheEntry, bool]:
    if not refresh:
        entry = cache.get()
        if entry is not None:
            return entry, True
    with cache.refresh_lock:
        # Another request may have repopulated while we waited
        if not refresh:
            entry = cache.get()
            if entry is not None:
                return entry, True
        return cache.put(fetch_all_jobs(sources, keywords)), False


def paginate(items: Sequence[Any], page: int, size: int) -> tuple[list[Any], dict[str, int]]:
    size = max(1, size)
    total_pages = max(1, math.ceil(len(items) / size))
    page = max(1, page)
    start = (page - 1) * size
    return list(items[start:start + size]), {
        "page": page,
        "pageSize": size,
        "totalPages": total_pages,
    }


def get_job_matches(
    filters: JobFilters | None = None,
    *,
    page: int = 1,
    page_size: int | None = None,
    refresh: bool = False,
    keywords: str | None = None,
    profile: UserProfile | None = None,
    sources: Sequence[JobSearchBase] | None = None,
    cache: ResultsCache | None = None,
) -> dict[str, Any]:
    profile = profile or load_profile()
    cache = cache or _cache
    if sources is None:
        sources = get_sources(get_env)

    entry, from_cache = _load_jobs(cache, sources, keywords, refresh)
    matched = match_jobs(entry.jobs, profile, filters)
    page_items, pagination = paginate(matched, page, page_size or default_page_size())

    log.info(
        "Matches: fetched=%d, matched=%d, page=%d/%d, cached=%s",
        len(entry.jobs), len(matched), pagination["page"], pagination["totalPages"], from_cache,
    )
    return {
        "jobs": [m.to_dict() for m in page_items],
        "totalJobs": len(matched),
        "profile": profile.to_dict(),
        "pagination": pagination,
        "cache": {
            "cached": from_cache,
            "fetchedAt": entry.fetched_at_wall.isoformat(),
            "ageSeconds": cache.age_seconds(entry),
        },
    }
