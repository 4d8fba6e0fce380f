"""Shared fixtures: a small profile, a posting factory and a fake clock."""
from __future__ import annotations

import os

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from jobmatch.models import JobPosting, JobSource, UserProfile
from jobmatch.sources import france_travail


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _fresh_token_providers():
    france_travail._providers.clear()
    yield
    france_travail._providers.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        name="Test Candidate",
        location="Nanterre",
        skills=("React", "TypeScript", "Node.js"),
        experience=("Front-End Developer",),
        preferred_contract_types=("CDI",),
    )


@pytest.fixture
def make_job():
    counter = {"n": 0}

    def _make(
        title: str = "Développeur React",
        description: str = "",
        location: str = "Paris",
        date_posted: str = "2024-05-01T10:00:00Z",
        contract_type: str | None = "CDI",
        job_id: str | None = None,
    ) -> JobPosting:
        counter["n"] += 1
        return JobPosting(
            id=job_id or f"mock-{counter['n']}",
            title=title,
            company="Acme",
            location=location,
            description=description,
            url=f"https://example.com/job/{counter['n']}",
            date_posted=date_posted,
            contract_type=contract_type,
            source=JobSource.MOCK,
        )

    return _make
