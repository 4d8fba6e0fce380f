"""Score a job posting against the user profile.

The score is the share of the job's detected skills that the profile
covers, scaled by a confidence cap that grows with the number of skills
detected: a posting where only one technology could be recognised is a
weaker signal than one listing four or more.

  detected skills   cap
  1                 50
  2                 70
  3                 85
  >= 4              100

When no taxonomy skill is detected at all, profile skills are looked up
as raw substrings instead and each hit is worth 10 points, capped at 30.
"""
from __future__ import annotations

import math

from jobmatch.log import get_logger
from jobmatch.models import JobPosting, MatchResult, UserProfile
from jobmatch.skills import extract_skills, normalize_user_skills
from jobmatch.taxonomy import DEFAULT_TAXONOMY, SkillTaxonomy

log = get_logger(__name__)

FALLBACK_POINTS = 10
FALLBACK_CAP = 30
CONFIDENCE_CAPS: dict[int, int] = {1: 50, 2: 70, 3: 85}
FULL_CONFIDENCE_CAP = 100


def confidence_cap(detected: int) -> int:
    if detected <= 0:
        return 0
    return CONFIDENCE_CAPS.get(detected, FULL_CONFIDENCE_CAP)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def job_text(job: JobPosting) -> str:
    return f"{job.title or ''} {job.description or ''}"


def _fallback_matches(text: str, raw_skills: tuple[str, ...]) -> list[str]:
    haystack = text.lower()
    hits: list[str] = []
    for skill in raw_skills:
        needle = skill.strip().lower()
        if needle and needle in haystack and skill not in hits:
            hits.append(skill)
    return hits


def calculate_match_score(
    job: JobPosting,
    profile: UserProfile,
    taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY,
) -> MatchResult:
    text = job_text(job)
    job_skills = extract_skills(text, taxonomy)

    if not job_skills:
        hits = _fallback_matches(text, profile.skills)
        score = min(FALLBACK_CAP, len(hits) * FALLBACK_POINTS)
        log.debug("Job %s: no taxonomy skills, fallback hits=%d score=%d", job.id, len(hits), score)
        return MatchResult(score=score, matched_skills=tuple(hits))

    user_skills = set(normalize_user_skills(profile.skills, taxonomy))
    matched = [s for s in job_skills if s in user_skills]

    ratio = len(matched) / len(job_skills)
    score = round_half_up(ratio * confidence_cap(len(job_skills)))
    score = max(0, min(FULL_CONFIDENCE_CAP, score))
    log.debug(
        "Job %s: detected=%d matched=%d score=%d", job.id, len(job_skills), len(matched), score,
    )
    return MatchResult(score=score, matched_skills=tuple(matched))
