from __future__ import annotations

from abc import ABC, abstractmethod

from jobmatch.models import JobPosting


class JobSearchBase(ABC):
    name: str = "base"

    @abstractmethod
    def search(self, keywords: str | None = None, limit: int = 200) -> list[JobPosting]:
        """Fetch postings; implementations log failures and return [] instead of raising."""
