"""Data models for job postings, the user profile and match results."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class JobSource(str, Enum):
    FRANCE_TRAVAIL = "france-travail"
    ADZUNA = "adzuna"
    MOCK = "mock"


class SortKey(str, Enum):
    SCORE = "score"
    DATE = "date"
    LOCATION = "location"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Query-string spellings accepted for sortBy, including the browser client's legacy "matchScore".
_SORT_KEY_ALIASES: dict[str, SortKey] = {
    "score": SortKey.SCORE,
    "matchscore": SortKey.SCORE,
    "date": SortKey.DATE,
    "dateposted": SortKey.DATE,
    "location": SortKey.LOCATION,
}


@dataclass(frozen=True)
class JobPosting:
    id: str
    title: str
    company: str
    location: str
    description: str
    url: str
    date_posted: str
    contract_type: str | None = None
    salary: str | None = None
    source: JobSource = JobSource.MOCK

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "url": self.url,
            "datePosted": self.date_posted,
            "contractType": self.contract_type,
            "salary": self.salary,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class UserProfile:
    """The single candidate profile every job is scored against."""
    name: str
    location: str = ""
    skills: tuple[str, ...] = ()
    experience: tuple[str, ...] = ()
    preferred_contract_types: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserProfile:
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValueError("Profile is missing a name")
        for key in ("skills", "experience", "preferred_contract_types"):
            value = data.get(key)
            if value is not None and not isinstance(value, (list, tuple)):
                raise ValueError(f"Profile field {key!r} must be a list")
        return cls(
            name=name,
            location=str(data.get("location") or ""),
            skills=tuple(str(s) for s in data.get("skills") or []),
            experience=tuple(str(e) for e in data.get("experience") or []),
            preferred_contract_types=tuple(
                str(c) for c in data.get("preferred_contract_types") or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "location": self.location,
            "skills": list(self.skills),
            "experience": list(self.experience),
            "preferredContractTypes": list(self.preferred_contract_types),
        }


@dataclass(frozen=True)
class MatchedJob:
    job: JobPosting
    match_score: int
    matched_skills: tuple[str, ...] = ()
    total_skills: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = self.job.to_dict()
        data.update({
            "matchScore": self.match_score,
            "matchedSkills": list(self.matched_skills),
            "totalSkills": self.total_skills,
        })
        return data


@dataclass(frozen=True)
class JobFilters:
    min_match_score: int | None = None
    location: str | None = None
    contract_type: str | None = None
    sort_by: SortKey = SortKey.SCORE
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> JobFilters:
        """Build filters from request query parameters.

        Malformed values are dropped rather than rejected: a negative or
        non-numeric ``minMatchScore`` means "no threshold", an unknown
        ``sortBy`` falls back to score and an unknown ``sortOrder`` to desc.
        """
        min_score: int | None = None
        raw_score = _first(params.get("minMatchScore"))
        if raw_score not in (None, ""):
            try:
                min_score = int(str(raw_score).strip())
            except ValueError:
                min_score = None
            if min_score is not None and min_score < 0:
                min_score = None

        sort_by = _SORT_KEY_ALIASES.get(
            str(_first(params.get("sortBy")) or "").strip().lower(), SortKey.SCORE
        )
        raw_order = str(_first(params.get("sortOrder")) or "").strip().lower()
        sort_order = SortOrder.ASC if raw_order == SortOrder.ASC.value else SortOrder.DESC

        return cls(
            min_match_score=min_score,
            location=_blank_to_none(_first(params.get("location"))),
            contract_type=_blank_to_none(_first(params.get("contractType"))),
            sort_by=sort_by,
            sort_order=sort_order,
        )

    def to_query(self) -> dict[str, str]:
        query: dict[str, str] = {
            "sortBy": self.sort_by.value,
            "sortOrder": self.sort_order.value,
        }
        if self.min_match_score is not None:
            query["minMatchScore"] = str(self.min_match_score)
        if self.location:
            query["location"] = self.location
        if self.contract_type:
            query["contractType"] = self.contract_type
        return query


@dataclass(frozen=True)
class MatchResult:
    score: int
    matched_skills: tuple[str, ...] = field(default_factory=tuple)


def _first(value: Any) -> Any:
    """Query mappings may hold lists for repeated keys; keep the first."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _blank_to_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
