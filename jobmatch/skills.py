"""Detect canonical skills in free text and normalize profile skills."""
from __future__ import annotations

import functools
import re
from typing import Iterable, Pattern

from jobmatch.taxonomy import DEFAULT_TAXONOMY, SkillTaxonomy


def alias_pattern(alias: str) -> Pattern[str]:
    """Regex matching *alias* as a whole token.

    Lookarounds stand in for ``\\b`` so aliases that start or end with
    punctuation (".net", "c#", "ci/cd") still anchor correctly.
    """
    return re.compile(rf"(?<!\w){re.escape(alias)}(?!\w)")


@functools.lru_cache(maxsize=8)
def _compiled(taxonomy: SkillTaxonomy) -> tuple[tuple[str, tuple[Pattern[str], ...]], ...]:
    return tuple(
        (canonical, tuple(alias_pattern(a) for a in aliases))
        for canonical, aliases in taxonomy
    )


def extract_skills(text: str | None, taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY) -> list[str]:
    """Canonical skills mentioned in *text*, in taxonomy order, no duplicates."""
    if not text:
        return []
    haystack = text.lower()
    found: list[str] = []
    for canonical, patterns in _compiled(taxonomy):
        for pattern in patterns:
            if pattern.search(haystack):
                found.append(canonical)
                break
    return found


def normalize_user_skills(
    raw_skills: Iterable[str], taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY
) -> list[str]:
    """Map profile skills to canonical names; unknown skills pass through verbatim."""
    normalized: list[str] = []
    for raw in raw_skills:
        if not raw or not raw.strip():
            continue
        name = taxonomy.canonical_for(raw) or raw
        if name not in normalized:
            normalized.append(name)
    return normalized
