"""Title gate: keep developer/engineering postings, drop everything else.

A title is relevant when no EXCLUDE pattern matches and at least one
INCLUDE pattern does. Exclusions are checked first and win outright.
"""
from __future__ import annotations

import re
from typing import Pattern


def _token(pattern: str) -> Pattern[str]:
    """Compile *pattern* so it only matches on whole-word boundaries."""
    return re.compile(rf"(?<!\w)(?:{pattern})(?!\w)", re.IGNORECASE)


_TECH_QUALIFIER = (
    r"logiciels?|software|web|cloud|data|technique|technical|tech|solutions?|"
    r"syst[èe]mes?|it|si|front[- ]?end|back[- ]?end|full[- ]?stack|java|\.net|javascript"
)

INCLUDE_PATTERNS: tuple[Pattern[str], ...] = tuple(_token(p) for p in (
    # "developer" across languages
    r"d[ée]veloppeu(?:r|se|r\(se\)|r·se)s?",
    r"developers?",
    r"desarrollador(?:a|es)?",
    r"entwickler(?:in)?",
    r"sviluppatore",
    r"dev",
    r"programmeu(?:r|se)s?",
    r"programmers?",
    # role qualifiers
    r"front[- ]?end",
    r"back[- ]?end",
    r"full[- ]?stack",
    r"devops",
    r"devsecops",
    r"sre",
    r"site reliability",
    r"software engineers?",
    r"ing[ée]nieur(?:e)?\s+(?:en\s+)?(?:d[ée]veloppement|logiciel|informatique|" + _TECH_QUALIFIER + r")",
    # lead / architect only with a technical qualifier
    r"tech(?:nical)?\s+lead",
    r"lead\s+(?:tech|dev|developer|d[ée]veloppeur)",
    r"architecte?s?\s+(?:" + _TECH_QUALIFIER + r")",
    # technology named in the title
    r"react(?:\.?js)?",
    r"angular(?:js)?",
    r"vue(?:\.?js)?",
    r"node(?:\.?js)?",
    r"next\.?js",
    r"typescript",
    r"javascript",
    r"java",
    r"python",
    r"php",
    r"symfony",
    r"laravel",
    r"django",
    r"golang",
    r"ruby",
    r"\.net",
    r"c#",
))

EXCLUDE_PATTERNS: tuple[Pattern[str], ...] = tuple(_token(p) for p in (
    # commercial
    r"business\s+developers?",
    r"d[ée]veloppeu(?:r|se)s?\s+(?:commercial|d'affaires|business)",
    r"commercia(?:l|le|ux)",
    r"vendeu(?:r|se)s?",
    r"sales",
    r"account\s+(?:manager|executive)",
    r"chargée?\s+d'affaires",
    r"t[ée]l[ée]conseill(?:er|[èe]re)",
    # administrative / accounting
    r"comptables?",
    r"comptabilit[ée]",
    r"accountants?",
    r"assistante?s?",
    r"secr[ée]taires?",
    r"gestionnaire\s+(?:de\s+)?(?:paie|administratif|administrative|locatif|copropri[ée]t[ée])",
    r"(?:chargée?|technicien(?:ne)?|responsable)\s+(?:de\s+(?:la\s+)?)?paie",
    r"payroll\s+(?:manager|specialist|officer|administrator)",
    # HR
    r"(?:chargée?|gestionnaire|directeu(?:r|rice)|partenaire)\s+(?:des\s+)?rh",
    r"rh\s+(?:g[ée]n[ée]raliste|business\s+partner)",
    r"ressources\s+humaines",
    r"human\s+resources",
    r"recruteu(?:r|se)s?",
    r"chargée?\s+de\s+recrutement",
    r"talent\s+acquisition",
    # legal
    r"juristes?",
    r"avocate?s?",
    r"notaires?",
    r"legal",
    # real estate
    r"immobili(?:er|[èe]re)",
    r"n[ée]gociat(?:eur|rice)\s+immobili(?:er|[èe]re)",
    r"agent\s+immobilier",
    # "responsable" of a non-technical department
    r"responsable\s+(?:commercial(?:e)?|administratif|administrative|comptable|"
    r"rh|ressources\s+humaines|marketing|juridique|des\s+ventes|achats|paie|agence|magasin|boutique)",
))


def is_relevant(title: str | None) -> bool:
    if not title:
        return False
    for pattern in EXCLUDE_PATTERNS:
        if pattern.search(title):
            return False
    return any(pattern.search(title) for pattern in INCLUDE_PATTERNS)
