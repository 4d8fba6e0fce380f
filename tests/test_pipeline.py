from datetime import timezone

import pytest

from jobmatch.models import JobFilters, MatchedJob, SortKey, SortOrder
from jobmatch.pipeline import (
    OLDEST,
    apply_filters,
    collation_key,
    match_jobs,
    parse_posting_date,
    sort_jobs,
)


def _matched(make_job, score, **job_kwargs):
    return MatchedJob(job=make_job(**job_kwargs), match_score=score, matched_skills=(), total_skills=3)


def test_irrelevant_titles_are_dropped_before_scoring(make_job, profile):
    accountant = make_job(
        title="Comptable Senior",
        description="React, TypeScript, Node.js, GraphQL",
    )
    developer = make_job(title="Développeur React", description="React")
    result = match_jobs([accountant, developer], profile)
    assert [m.job.id for m in result] == [developer.id]


def test_end_to_end_score_and_total_skills(make_job, profile):
    job = make_job(
        title="Développeur Front-End React",
        description="React, TypeScript, Node.js, GraphQL",
    )
    [result] = match_jobs([job], profile)
    assert result.match_score == 75
    assert result.total_skills == 3
    assert result.job is job


def test_min_score_filter_is_inclusive(make_job):
    jobs = [_matched(make_job, s) for s in (75, 90, 60, 80)]
    kept = apply_filters(jobs, JobFilters(min_match_score=80))
    assert [m.match_score for m in kept] == [90, 80]


def test_min_score_keeps_only_high_scores(make_job):
    jobs = [_matched(make_job, s) for s in (75, 90, 60)]
    kept = apply_filters(jobs, JobFilters(min_match_score=80))
    assert [m.match_score for m in kept] == [90]


def test_location_filter_is_case_insensitive_substring(make_job):
    jobs = [
        _matched(make_job, 10, location="Paris 8e"),
        _matched(make_job, 10, location="Nanterre"),
        _matched(make_job, 10, location="PARIS 12E"),
    ]
    kept = apply_filters(jobs, JobFilters(location="paris"))
    assert [m.job.location for m in kept] == ["Paris 8e", "PARIS 12E"]


def test_contract_filter_is_exact_case_insensitive(make_job):
    jobs = [
        _matched(make_job, 10, contract_type="CDI"),
        _matched(make_job, 10, contract_type="cdi"),
        _matched(make_job, 10, contract_type="CDI temps partiel"),
        _matched(make_job, 10, contract_type=None),
    ]
    kept = apply_filters(jobs, JobFilters(contract_type="Cdi"))
    assert len(kept) == 2


def test_sort_by_location_ascending(make_job, profile):
    jobs = [
        make_job(title="Développeur React", location=loc)
        for loc in ("Paris", "Nanterre", "Boulogne")
    ]
    filters = JobFilters(sort_by=SortKey.LOCATION, sort_order=SortOrder.ASC)
    result = match_jobs(jobs, profile, filters)
    assert [m.job.location for m in result] == ["Boulogne", "Nanterre", "Paris"]


def test_location_collation_ignores_accents_and_case():
    assert sorted(["Ivry", "Île-de-France", "issy"], key=collation_key) == [
        "Île-de-France", "issy", "Ivry",
    ]


def test_sort_by_date_puts_unparsable_dates_oldest(make_job):
    jobs = [
        _matched(make_job, 10, date_posted="not a date"),
        _matched(make_job, 10, date_posted="2024-05-02T08:00:00Z"),
        _matched(make_job, 10, date_posted="2024-05-03T08:00:00+02:00"),
    ]
    newest_first = sort_jobs(jobs, SortKey.DATE, SortOrder.DESC)
    assert [m.job.date_posted for m in newest_first] == [
        "2024-05-03T08:00:00+02:00", "2024-05-02T08:00:00Z", "not a date",
    ]
    oldest_first = sort_jobs(jobs, SortKey.DATE, SortOrder.ASC)
    assert oldest_first[0].job.date_posted == "not a date"


def test_parse_posting_date():
    assert parse_posting_date("2024-05-02T08:00:00Z").tzinfo == timezone.utc
    assert parse_posting_date("2024-05-02").year == 2024
    assert parse_posting_date("") == OLDEST
    assert parse_posting_date("yesterday") == OLDEST


@pytest.mark.parametrize("value", [
    "2024-05-02T08:00:00.5Z",
    "2024-05-02T08:00:00.12+00:00",
    "2024-05-02T08:00:00.1234Z",
    "2024-05-02T08:00:00.12345",
    "2024-05-02T08:00:00.1234567Z",
])
def test_parse_posting_date_accepts_any_fraction_length(value):
    parsed = parse_posting_date(value)
    assert parsed != OLDEST
    assert (parsed.year, parsed.hour, parsed.tzinfo) == (2024, 8, timezone.utc)


def test_sort_is_stable_for_equal_keys(make_job):
    jobs = [_matched(make_job, 50, job_id=f"job-{i}") for i in range(4)]
    for order in SortOrder:
        result = sort_jobs(jobs, SortKey.SCORE, order)
        assert [m.job.id for m in result] == ["job-0", "job-1", "job-2", "job-3"]


def test_default_sort_is_score_descending(make_job, profile):
    jobs = [
        make_job(title="Développeur Python", description="Python"),
        make_job(title="Développeur React", description="React TypeScript Node.js GraphQL"),
        make_job(title="Développeur React", description=""),
    ]
    scores = [m.match_score for m in match_jobs(jobs, profile)]
    assert scores == sorted(scores, reverse=True)
    assert scores == [75, 50, 0]


def test_filters_default_to_score_descending(make_job, profile):
    jobs = [
        make_job(title="Développeur Python", description="Python"),
        make_job(title="Développeur React", description="React TypeScript Node.js GraphQL"),
    ]
    result = match_jobs(jobs, profile, JobFilters(location="paris"))
    assert [m.match_score for m in result] == [75, 0]


def test_match_jobs_is_idempotent(make_job, profile):
    jobs = [
        make_job(title="Développeur React", description="React TypeScript", location="Paris"),
        make_job(title="Développeur Node", description="Node.js Express", location="Nanterre"),
        make_job(title="Comptable", description="React"),
        make_job(title="DevOps", description="Docker Kubernetes", location="Boulogne"),
    ]
    filters = JobFilters(sort_by=SortKey.LOCATION)
    assert match_jobs(jobs, profile, filters) == match_jobs(jobs, profile, filters)
    assert match_jobs(jobs, profile) == match_jobs(jobs, profile)


def test_empty_inputs(profile):
    assert match_jobs([], profile) == []
    assert match_jobs([], profile, JobFilters(min_match_score=10)) == []
