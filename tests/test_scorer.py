import pytest

from jobmatch.models import UserProfile
from jobmatch.scorer import (
    FALLBACK_CAP,
    calculate_match_score,
    confidence_cap,
    round_half_up,
)


def _profile(*skills):
    return UserProfile(name="Tester", skills=tuple(skills))


def test_scenario_four_detected_three_matched(make_job, profile):
    job = make_job(
        title="Développeur Front-End React",
        description="Stack : React, TypeScript, Node.js, GraphQL.",
    )
    result = calculate_match_score(job, profile)
    assert result.score == 75
    assert result.matched_skills == ("TypeScript", "React", "Node.js")


@pytest.mark.parametrize("description, skills, expected", [
    ("Python", ("Python",), 50),
    ("Python, Django", ("Python", "Django"), 70),
    ("Python, Django, Docker", ("Python", "Django", "Docker"), 85),
    ("Python, Django, Docker, AWS", ("Python", "Django", "Docker", "AWS"), 100),
])
def test_full_match_respects_confidence_cap(make_job, description, skills, expected):
    job = make_job(title="Ingénieur logiciel", description=description)
    assert calculate_match_score(job, _profile(*skills)).score == expected


def test_partial_matches_scale_by_cap(make_job):
    job = make_job(title="Ingénieur logiciel", description="Python, Django")
    assert calculate_match_score(job, _profile("Python")).score == 35

    job = make_job(title="Ingénieur logiciel", description="Python, Django, Docker")
    assert calculate_match_score(job, _profile("Python")).score == 28


def test_confidence_cap_table():
    assert [confidence_cap(n) for n in range(0, 7)] == [0, 50, 70, 85, 100, 100, 100]


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_profile_aliases_are_normalized(make_job):
    job = make_job(title="Dev", description="NodeJS et Postgres")
    result = calculate_match_score(job, _profile("node.js", "postgresql"))
    assert result.score == 70
    assert result.matched_skills == ("Node.js", "PostgreSQL")


def test_fallback_when_no_taxonomy_skill(make_job):
    job = make_job(title="Développeur", description="Outils : Figma, Notion, Jira et Miro.")
    result = calculate_match_score(job, _profile("Figma", "Notion", "Jira", "Miro"))
    assert result.score == FALLBACK_CAP
    assert result.matched_skills == ("Figma", "Notion", "Jira", "Miro")


def test_fallback_counts_ten_per_hit(make_job):
    job = make_job(title="Développeur", description="Maquettes sur Figma")
    assert calculate_match_score(job, _profile("Figma", "Sketch")).score == 10


def test_fallback_is_substring_based(make_job):
    job = make_job(title="Développeur", description="Expert Figmatic")
    assert calculate_match_score(job, _profile("figma")).matched_skills == ("figma",)


def test_no_skills_anywhere_scores_zero(make_job):
    job = make_job(title="Développeur", description="")
    result = calculate_match_score(job, _profile())
    assert result.score == 0
    assert result.matched_skills == ()


def test_missing_description_is_empty(make_job):
    job = make_job(title="Développeur Python", description=None)
    assert calculate_match_score(job, _profile("Python")).score == 50


@pytest.mark.parametrize("description", [
    "",
    "Python",
    "React Angular Vue Svelte Ember",
    "Java Spring Kafka Docker Kubernetes AWS Terraform Linux Git Jenkins",
    "aucune compétence technique",
])
def test_score_is_bounded_int(make_job, profile, description):
    score = calculate_match_score(make_job(description=description), profile).score
    assert isinstance(score, int)
    assert 0 <= score <= 100
