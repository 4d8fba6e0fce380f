"""Adzuna job search — French endpoint, developer roles in Île-de-France.

Free tier: 250 requests/day.  Sign up at https://developer.adzuna.com/
"""
from __future__ import annotations

import math
import time

import requests

from jobmatch.log import get_logger
from jobmatch.models import JobPosting, JobSource
from jobmatch.retry import is_client_error, retry
from jobmatch.sources.base import JobSearchBase

log = get_logger(__name__)

COUNTRY = "fr"
BASE_URL = f"https://api.adzuna.com/v1/api/jobs/{COUNTRY}/search"

DEFAULT_KEYWORDS = "developer"
DEFAULT_LOCATION = "Île-de-France"
# Broadens the title search to the stacks the profile cares about.
WHAT_OR = "développeur react javascript frontend backend fullstack node typescript"
MAX_DAYS_OLD = 14

# Adzuna caps results_per_page at 50; two pages keep us under the rate limit.
PAGES_TO_FETCH = 2
PAGE_SIZE = 50
PAGE_DELAY_SECONDS = 0.3


def _thousands(amount: float) -> int:
    return math.floor(amount / 1000 + 0.5)


def format_salary(salary_min: float | None, salary_max: float | None) -> str | None:
    if salary_min and salary_max:
        return f"{_thousands(salary_min)}K€ - {_thousands(salary_max)}K€"
    if salary_min:
        return f"{_thousands(salary_min)}K€+"
    return None


def to_posting(hit: dict) -> JobPosting:
    return JobPosting(
        id=f"adzuna-{hit.get('id', '')}",
        title=hit.get("title", ""),
        company=(hit.get("company") or {}).get("display_name") or "Entreprise confidentielle",
        location=(hit.get("location") or {}).get("display_name") or "Non spécifié",
        description=hit.get("description") or "",
        url=hit.get("redirect_url", ""),
        date_posted=hit.get("created", ""),
        contract_type=hit.get("contract_type"),
        salary=format_salary(hit.get("salary_min"), hit.get("salary_max")),
        source=JobSource.ADZUNA,
    )


class AdzunaSource(JobSearchBase):
    name = "adzuna"

    def __init__(self, env_getter, location: str = DEFAULT_LOCATION) -> None:
        self.app_id: str = env_getter("ADZUNA_APP_ID")
        self.app_key: str = env_getter("ADZUNA_APP_KEY")
        self.location = location

    @retry(
        max_attempts=3,
        base_delay=2.0,
        retryable=(requests.RequestException, OSError),
        giveup=is_client_error,
    )
    def _fetch_page(self, keywords: str, page: int, per_page: int) -> list[JobPosting]:
        params: dict = {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "results_per_page": per_page,
            "what": keywords,
            "where": self.location,
            "what_or": WHAT_OR,
            "max_days_old": MAX_DAYS_OLD,
        }
        r = requests.get(
            f"{BASE_URL}/{page}",
            params=params,
            headers={"Accept": "application/json"},
            timeout=15,
        )
        r.raise_for_status()
        data = r.json()
        return [to_posting(hit) for hit in data.get("results") or []]

    def search(self, keywords: str | None = None, limit: int = 200) -> list[JobPosting]:
        if not (self.app_id and self.app_key):
            log.info("Adzuna credentials not configured, skipping")
            return []

        all_jobs: list[JobPosting] = []
        seen_ids: set[str] = set()
        for page in range(1, PAGES_TO_FETCH + 1):
            if len(all_jobs) >= limit:
                break
            if page > 1:
                time.sleep(PAGE_DELAY_SECONDS)
            try:
                batch = self._fetch_page(keywords or DEFAULT_KEYWORDS, page, PAGE_SIZE)
            except Exception as exc:
                log.warning("Adzuna page=%d error: %s", page, exc)
                break
            for j in batch:
                if j.id not in seen_ids:
                    seen_ids.add(j.id)
                    all_jobs.append(j)
            log.debug("Adzuna page=%d returned %d jobs", page, len(batch))

        return all_jobs[:limit]
