"""Streamlit UI: ranked developer jobs for the configured profile."""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobmatch.config import PROFILE_PATH, cache_ttl_seconds, load_profile
from jobmatch.log import get_logger
from jobmatch.models import JobFilters, SortKey, SortOrder
from jobmatch.pipeline import parse_posting_date, OLDEST
from jobmatch.service import get_job_matches

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

CONTRACT_TYPES: list[str] = ["", "CDI", "CDD", "Intérim", "Stage"]

SORT_LABELS: dict[SortKey, str] = {
    SortKey.SCORE: "Match Score",
    SortKey.DATE: "Date Posted",
    SortKey.LOCATION: "Location",
}

ORDER_LABELS: dict[SortOrder, str] = {
    SortOrder.DESC: "Descending",
    SortOrder.ASC: "Ascending",
}

FRENCH_MONTHS: list[str] = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]

DESCRIPTION_PREVIEW = 300

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
.job-card {
    padding: 1rem 1.25rem; margin-bottom: 1rem;
    background: rgba(255,255,255,0.65);
    border: 1px solid rgba(74,144,217,0.25);
    border-radius: 12px;
    box-shadow: 0 4px 16px rgba(0,0,0,0.05);
}
.score { float: right; font-size: 1.4rem; font-weight: 700; }
.score.high { color: #27ae60; }
.score.medium { color: #e67e22; }
.score.low { color: #95a5a6; }
.chip {
    display: inline-block; margin: 2px; padding: 2px 10px;
    border-radius: 12px; background: rgba(0,0,0,0.06); font-size: 0.85rem;
}
.chip.highlighted { background: #4a90d9; color: white; }
.meta { color: #555; font-size: 0.9rem; }
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _format_date(value: str) -> str:
    parsed = parse_posting_date(value)
    if parsed == OLDEST:
        return value or "—"
    return f"{parsed.day} {FRENCH_MONTHS[parsed.month - 1]} {parsed.year}"


def _score_class(score: int) -> str:
    if score >= 70:
        return "high"
    if score >= 40:
        return "medium"
    return "low"


def _current_page() -> int:
    try:
        return max(1, int(st.query_params.get("page", "1")))
    except ValueError:
        return 1


def _set_query(filters: JobFilters, page: int) -> None:
    query = filters.to_query()
    query["page"] = str(page)
    if st.query_params.to_dict() != query:
        st.query_params.from_dict(query)


def _chips(skills: list[str], highlighted: set[str]) -> str:
    html = []
    for skill in skills:
        cls = "chip highlighted" if skill.lower() in highlighted else "chip"
        html.append(f'<span class="{cls}">{skill}</span>')
    return "".join(html)


# ── Sidebar ──────────────────────────────────────────────────────────────


def sidebar_filters(initial: JobFilters) -> JobFilters:
    with st.sidebar:
        st.header("Filters")
        min_score = st.slider(
            "Minimum match score %", 0, 100, initial.min_match_score or 0,
        )
        location = st.text_input(
            "Location", value=initial.location or "", placeholder="e.g. Paris, Nanterre…",
        )
        contract = initial.contract_type or ""
        contract_options = CONTRACT_TYPES if contract in CONTRACT_TYPES else CONTRACT_TYPES + [contract]
        contract_type = st.selectbox(
            "Contract type",
            contract_options,
            index=contract_options.index(contract),
            format_func=lambda c: c or "All",
        )
        sort_keys = list(SORT_LABELS)
        sort_by = st.selectbox(
            "Sort by", sort_keys,
            index=sort_keys.index(initial.sort_by),
            format_func=SORT_LABELS.get,
        )
        orders = list(ORDER_LABELS)
        sort_order = st.selectbox(
            "Order", orders,
            index=orders.index(initial.sort_order),
            format_func=ORDER_LABELS.get,
        )

    return JobFilters(
        min_match_score=min_score or None,
        location=location.strip() or None,
        contract_type=contract_type or None,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def sidebar_profile(profile: dict, matched_skills: set[str]) -> None:
    with st.sidebar:
        st.divider()
        st.subheader(f"Your Skills ({len(profile['skills'])})")
        st.markdown(_chips(profile["skills"], matched_skills), unsafe_allow_html=True)


# ── Page: Matches ────────────────────────────────────────────────────────


def render_job(job: dict) -> None:
    score = job["matchScore"]
    meta = [job["location"]]
    if job.get("contractType"):
        meta.append(job["contractType"])
    if job.get("salary"):
        meta.append(job["salary"])
    meta.append(_format_date(job["datePosted"]))

    description = job["description"]
    if len(description) > DESCRIPTION_PREVIEW:
        description = description[:DESCRIPTION_PREVIEW] + "..."

    matched = job["matchedSkills"]
    skills_html = _chips(matched, {s.lower() for s in matched}) if matched else "<em>No direct skill matches</em>"

    st.markdown(
        f"""
<div class="job-card">
  <span class="score {_score_class(score)}">{score}%</span>
  <h4>{job['title']}</h4>
  <div>{job['company']}</div>
  <div class="meta">{' · '.join(meta)}</div>
  <p><strong>Matched skills ({len(matched)}):</strong> {skills_html}</p>
  <p>{description}</p>
</div>
""",
        unsafe_allow_html=True,
    )
    if job.get("url"):
        st.link_button("View original posting", job["url"])


def page_matches() -> None:
    st.header("Job Matcher")
    st.caption("Developer jobs in Île-de-France ranked against your skills")

    if not PROFILE_PATH.exists():
        st.warning(f"Profile not found — create `{PROFILE_PATH.relative_to(ROOT)}` first.")
        return

    initial = JobFilters.from_query(st.query_params.to_dict())
    filters = sidebar_filters(initial)
    page = _current_page() if filters == initial else 1

    c1, c2 = st.columns([3, 1])
    with c2:
        refresh = st.button("Refresh jobs", use_container_width=True)

    try:
        with st.spinner("Fetching and scoring jobs…"):
            result = get_job_matches(filters, page=page, refresh=refresh)
    except Exception as exc:
        log.error("Failed to load matches: %s", exc)
        st.error(f"Failed to fetch job matches: {exc}")
        return

    pagination = result["pagination"]
    _set_query(filters, pagination["page"])

    jobs = result["jobs"]
    sidebar_profile(result["profile"], {s.lower() for j in jobs for s in j["matchedSkills"]})

    cache = result["cache"]
    with c1:
        m1, m2, m3 = st.columns(3)
        m1.metric("Matching jobs", result["totalJobs"])
        m2.metric("Best score", f"{max((j['matchScore'] for j in jobs), default=0)}%")
        m3.metric("Data age", f"{cache['ageSeconds'] // 60} min")
    st.caption(
        f"Fetched {datetime.fromisoformat(cache['fetchedAt']).strftime('%H:%M:%S')} UTC, "
        f"refreshed every {cache_ttl_seconds() // 60} min"
    )

    tab_cards, tab_table = st.tabs(["Cards", "Table"])

    with tab_cards:
        if not jobs:
            st.info("No jobs match the current filters.")
        for job in jobs:
            render_job(job)

    with tab_table:
        if jobs:
            df = pd.DataFrame(jobs)
            df["matchedSkills"] = df["matchedSkills"].apply(", ".join)
            display_cols = ["title", "company", "location", "contractType", "matchScore", "matchedSkills", "url"]
            st.dataframe(
                df[display_cols],
                use_container_width=True,
                column_config={
                    "url": st.column_config.LinkColumn("Posting"),
                    "matchScore": st.column_config.ProgressColumn(
                        "Score", min_value=0, max_value=100, format="%d%%",
                    ),
                },
                hide_index=True,
            )

    if pagination["totalPages"] > 1:
        st.divider()
        p1, p2, p3 = st.columns([1, 2, 1])
        current = pagination["page"]
        with p1:
            if st.button("← Previous", disabled=current <= 1, use_container_width=True):
                _set_query(filters, current - 1)
                st.rerun()
        with p2:
            st.markdown(f"<center>Page {current} / {pagination['totalPages']}</center>", unsafe_allow_html=True)
        with p3:
            if st.button("Next →", disabled=current >= pagination["totalPages"], use_container_width=True):
                _set_query(filters, current + 1)
                st.rerun()


# ── Page: Profile ────────────────────────────────────────────────────────


def page_profile() -> None:
    st.header("Profile")
    try:
        profile = load_profile()
    except (FileNotFoundError, ValueError) as exc:
        st.error(str(exc))
        return

    c1, c2 = st.columns(2)
    c1.metric("Name", profile.name)
    c2.metric("Location", profile.location or "—")

    st.subheader(f"Skills ({len(profile.skills)})")
    st.markdown(_chips(list(profile.skills), set()), unsafe_allow_html=True)

    st.subheader("Experience")
    for role in profile.experience:
        st.markdown(f"- {role}")

    st.subheader("Preferred contracts")
    st.markdown(", ".join(profile.preferred_contract_types) or "—")
    st.caption(f"Edit `{PROFILE_PATH.relative_to(ROOT)}` and restart the app to change the profile.")


# ── Main ─────────────────────────────────────────────────────────────────


def _wrap_matches():
    st.markdown(_CSS, unsafe_allow_html=True)
    page_matches()


def _wrap_profile():
    st.markdown(_CSS, unsafe_allow_html=True)
    page_profile()


st.set_page_config(page_title="Job Matcher", page_icon="💼", layout="wide")

pages = [
    st.Page(_wrap_matches, title="Matches", icon="💼", url_path="matches", default=True),
    st.Page(_wrap_profile, title="Profile", icon="👤", url_path="profile"),
]

nav = st.navigation(pages)
nav.run()
