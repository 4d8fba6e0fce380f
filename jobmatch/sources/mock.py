"""Fixed development postings, used when no API credentials are configured."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jobmatch.log import get_logger
from jobmatch.models import JobPosting, JobSource
from jobmatch.sources.base import JobSearchBase

log = get_logger(__name__)

_MOCK_JOBS: list[dict] = [
    {
        "title": "Développeur Front-End React",
        "company": "TechCorp Paris",
        "location": "Paris 8e",
        "description": (
            "Nous recherchons un développeur Front-End expérimenté en React et TypeScript. "
            "Vous travaillerez sur des applications web modernes utilisant React, Redux, et "
            "TypeScript. Connaissance de Node.js et GraphQL appréciée. Environnement Agile/Scrum."
        ),
        "contract_type": "CDI",
        "salary": "45K€ - 55K€",
    },
    {
        "title": "Full-Stack Developer JavaScript",
        "company": "StartupHub",
        "location": "Nanterre",
        "description": (
            "Rejoignez notre équipe pour développer notre plateforme SaaS. Stack technique : "
            "React, Node.js, Express, PostgreSQL. Expérience avec Docker et CI/CD requise. "
            "Télétravail partiel possible."
        ),
        "contract_type": "CDI",
        "salary": "50K€ - 60K€",
    },
    {
        "title": "Développeur Web Cartographie",
        "company": "GeoTech Solutions",
        "location": "La Défense",
        "description": (
            "Développement d'applications de cartographie web avec MapboxGL et DeckGL. "
            "Expertise JavaScript/TypeScript requise. Visualisation de données avec D3.js. "
            "Travail sur des projets innovants de data visualization."
        ),
        "contract_type": "CDI",
        "salary": "48K€ - 58K€",
    },
    {
        "title": "Ingénieur Backend Python",
        "company": "DataCorp",
        "location": "Paris 12e",
        "description": (
            "Développement backend en Python avec Django. Base de données PostgreSQL. "
            "API REST. Connaissance de AWS appréciée."
        ),
        "contract_type": "CDD",
        "salary": "40K€ - 50K€",
    },
    {
        "title": "Lead Developer Front-End",
        "company": "Innovation Labs",
        "location": "Boulogne-Billancourt",
        "description": (
            "Lead technique pour équipe front-end. React, TypeScript, Next.js. Architecture de "
            "composants, tests Jest, code reviews. Méthodologie Agile. Management d'une équipe "
            "de 3-4 développeurs."
        ),
        "contract_type": "CDI",
        "salary": "55K€ - 70K€",
    },
]


class MockSource(JobSearchBase):
    name = "mock"

    def __init__(self, env_getter=None, now: datetime | None = None) -> None:
        self.now = now

    def search(self, keywords: str | None = None, limit: int = 200) -> list[JobPosting]:
        now = self.now or datetime.now(timezone.utc)
        log.info("MockSource generating sample jobs")
        jobs = [
            JobPosting(
                id=f"mock-{i}",
                url=f"https://example.com/job/{i}",
                date_posted=(now - timedelta(days=i - 1)).isoformat(),
                source=JobSource.MOCK,
                **fields,
            )
            for i, fields in enumerate(_MOCK_JOBS, start=1)
        ]
        return jobs[:limit]
