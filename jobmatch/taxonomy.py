"""Canonical skill names and the textual aliases used to detect them.

Declaration order is significant: extraction walks the table top to
bottom, so an ambiguous alias is absorbed by the first skill declaring it.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

# canonical name -> aliases (lowercase). Dotted/hyphenated aliases also
# match their unpunctuated form, see _punctuation_variants().
_RAW_TAXONOMY: dict[str, tuple[str, ...]] = {
    # Languages
    "Python": ("python", "python3"),
    "TypeScript": ("typescript",),
    "JavaScript": ("javascript", "ecmascript", "es6", "vanilla js"),
    "Java": ("java", "j2ee", "jee"),
    "PHP": ("php",),
    "Go": ("golang",),
    "C#": ("c#", "csharp"),
    "Ruby": ("ruby",),
    "Kotlin": ("kotlin",),
    "Swift": ("swift",),
    "Rust": ("rust",),
    # Frontend
    "React": ("react", "react.js", "reactjs"),
    "React Native": ("react native", "react-native"),
    "Next.js": ("next.js", "nextjs"),
    "Angular": ("angular", "angularjs"),
    "Vue.js": ("vue.js", "vuejs", "vue"),
    "Redux": ("redux",),
    "HTML": ("html", "html5"),
    "CSS": ("css", "css3", "scss", "sass"),
    "Tailwind": ("tailwind", "tailwindcss"),
    # Backend & runtime
    "Node.js": ("node.js", "nodejs", "node"),
    "Express": ("express.js", "expressjs", "express"),
    "NestJS": ("nestjs", "nest.js"),
    "FastAPI": ("fastapi",),
    "Django": ("django",),
    "Flask": ("flask",),
    "Spring": ("spring boot", "spring"),
    ".NET": (".net", "asp.net", "dotnet"),
    "Symfony": ("symfony",),
    "Laravel": ("laravel",),
    # APIs
    "GraphQL": ("graphql", "apollo"),
    "REST": ("rest api", "api rest", "apis rest", "restful", "rest"),
    # Maps & visualization
    "Mapbox": ("mapbox", "mapboxgl", "mapbox gl"),
    "DeckGL": ("deck.gl", "deckgl"),
    "D3": ("d3.js", "d3"),
    # Databases
    "PostgreSQL": ("postgresql", "postgres", "psql"),
    "MySQL": ("mysql", "mariadb"),
    "MongoDB": ("mongodb", "mongo"),
    "Redis": ("redis",),
    "Elasticsearch": ("elasticsearch", "elastic search", "elk"),
    "SQL": ("sql", "t-sql", "pl/sql"),
    # DevOps & cloud
    "Docker": ("docker", "dockerfile"),
    "Kubernetes": ("kubernetes", "k8s"),
    "AWS": ("aws", "amazon web services"),
    "GCP": ("gcp", "google cloud platform", "google cloud"),
    "Azure": ("azure",),
    "Terraform": ("terraform",),
    "Linux": ("linux", "unix"),
    "Git": ("git", "github", "gitlab"),
    "CI/CD": ("ci/cd", "ci-cd", "continuous integration", "intégration continue"),
    # Testing
    "Cypress": ("cypress",),
    "Jest": ("jest",),
    "Playwright": ("playwright",),
    # Methodologies
    "Agile": ("agile", "scrum", "kanban"),
}


def _punctuation_variants(alias: str) -> list[str]:
    """Forms of *alias* with interior dots/hyphens removed (node.js -> nodejs).

    Leading punctuation is kept so ".net" never degrades to "net".
    """
    if not alias or alias[0] in ".-":
        return []
    stripped = alias.replace(".", "").replace("-", "")
    if stripped != alias:
        return [stripped]
    return []


class SkillTaxonomy:
    """Immutable canonical-name <-> alias lookup.

    Built once from a mapping of canonical name to aliases. Every alias
    belongs to exactly one canonical skill; a table declaring the same
    alias twice is rejected at construction.
    """

    def __init__(self, table: Mapping[str, tuple[str, ...] | list[str]]) -> None:
        entries: dict[str, tuple[str, ...]] = {}
        index: dict[str, str] = {}

        declared: dict[str, list[str]] = {}
        for canonical, aliases in table.items():
            declared[canonical] = [a.strip().lower() for a in aliases if a and a.strip()]
            for alias in declared[canonical]:
                owner = index.get(alias)
                if owner is not None and owner != canonical:
                    raise ValueError(
                        f"Alias {alias!r} declared for both {owner!r} and {canonical!r}"
                    )
                index[alias] = canonical

        # Derived variants only fill slots no skill declared
        for canonical, own in declared.items():
            expanded = list(own)
            for alias in own:
                for variant in _punctuation_variants(alias):
                    if variant not in index:
                        index[variant] = canonical
                        expanded.append(variant)
            entries[canonical] = tuple(dict.fromkeys(expanded))

        for canonical in entries:
            index.setdefault(canonical.lower(), canonical)

        self._entries: Mapping[str, tuple[str, ...]] = MappingProxyType(entries)
        self._index: Mapping[str, str] = MappingProxyType(index)

    def __iter__(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        return iter(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def skills(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def resolve_aliases(self, canonical_name: str) -> tuple[str, ...]:
        """Aliases for a canonical skill (case-insensitive); empty if unknown."""
        canonical = self.canonical_for(canonical_name)
        if canonical is None:
            return ()
        return self._entries[canonical]

    def canonical_for(self, raw: str) -> str | None:
        """Canonical name for an alias or canonical spelling, else None."""
        if not raw:
            return None
        return self._index.get(raw.strip().lower())


SKILL_TAXONOMY: Mapping[str, tuple[str, ...]] = MappingProxyType(_RAW_TAXONOMY)
DEFAULT_TAXONOMY = SkillTaxonomy(SKILL_TAXONOMY)
