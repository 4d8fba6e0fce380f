"""Generate a markdown report of ranked job matches."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence
from urllib.parse import urlparse

from jobmatch.config import REPORTS_DIR
from jobmatch.log import get_logger
from jobmatch.models import MatchedJob, UserProfile

log = get_logger(__name__)

TOP_N = 15


def _short_url_label(url: str) -> str:
    host = (urlparse(url).hostname or "").replace("www.", "")
    parts = host.split(".")
    return parts[0].capitalize() if parts and parts[0] else "Link"


def _truncate(text: str, width: int) -> str:
    return text[:width] + ("…" if len(text) > width else "")


def build_match_report(matches: Sequence[MatchedJob], profile: UserProfile) -> str:
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    lines: list[str] = [f"# Job Matches — {date}", ""]

    top = list(matches[:TOP_N])
    strong = sum(1 for m in matches if m.match_score >= 70)
    lines.append(
        f"**{len(matches)}** relevant jobs | **{strong}** scored 70%+ | "
        f"profile: {profile.name} ({len(profile.skills)} skills)"
    )
    lines.append("")

    if not top:
        lines.append("_No developer postings matched the current filters._")
        lines.append("")
        return "\n".join(lines)

    lines.append("## Top Matches")
    lines.append("")
    for m in top:
        job = m.job
        lines.append(f"### {job.title} @ {job.company}")
        lines.append(f"- **Score:** {m.match_score}%")
        lines.append(f"- **Location:** {job.location}")
        if job.contract_type:
            lines.append(f"- **Contract:** {job.contract_type}")
        if job.salary:
            lines.append(f"- **Salary:** {job.salary}")
        skills = ", ".join(m.matched_skills) or "none"
        lines.append(f"- **Matched skills ({len(m.matched_skills)}/{m.total_skills}):** {skills}")
        if job.url:
            lines.append(f"- **Apply:** [{_short_url_label(job.url)}]({job.url})")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append("## Quick Reference")
    lines.append("")
    lines.append("| # | Role | Company | Location | Contract | Score | Link |")
    lines.append("|--:|------|---------|----------|----------|------:|------|")
    for i, m in enumerate(top, 1):
        job = m.job
        link = f"[{_short_url_label(job.url)}]({job.url})" if job.url else "—"
        lines.append(
            f"| {i} | {_truncate(job.title, 40)} | {_truncate(job.company, 22)} | "
            f"{job.location.split(',')[0][:18]} | {job.contract_type or '—'} | "
            f"{m.match_score}% | {link} |"
        )
    lines.append("")

    log.info("Built match report: %d jobs, %d strong", len(matches), strong)
    return "\n".join(lines)


def write_match_report(content: str) -> Path:
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    path = REPORTS_DIR / f"matches_{date}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path
