import pytest

from jobmatch.taxonomy import DEFAULT_TAXONOMY, SKILL_TAXONOMY, SkillTaxonomy


def test_canonical_for_is_case_insensitive():
    assert DEFAULT_TAXONOMY.canonical_for("NODEJS") == "Node.js"
    assert DEFAULT_TAXONOMY.canonical_for("  postgres ") == "PostgreSQL"
    assert DEFAULT_TAXONOMY.canonical_for("k8s") == "Kubernetes"


def test_canonical_name_resolves_to_itself():
    for canonical in SKILL_TAXONOMY:
        assert DEFAULT_TAXONOMY.canonical_for(canonical) == canonical


def test_unknown_skill_fails_lookup():
    assert DEFAULT_TAXONOMY.canonical_for("Underwater basket weaving") is None
    assert DEFAULT_TAXONOMY.canonical_for("") is None
    assert DEFAULT_TAXONOMY.resolve_aliases("Cobol") == ()


def test_dotted_names_match_unpunctuated_form():
    aliases = DEFAULT_TAXONOMY.resolve_aliases("d3")
    assert "d3.js" in aliases
    assert "d3js" in aliases
    assert "aspnet" in DEFAULT_TAXONOMY.resolve_aliases(".NET")


def test_leading_dot_is_not_stripped():
    assert "net" not in DEFAULT_TAXONOMY.resolve_aliases(".NET")
    assert DEFAULT_TAXONOMY.canonical_for("net") is None


def test_abbreviation_and_full_form_share_canonical():
    assert DEFAULT_TAXONOMY.canonical_for("gcp") == DEFAULT_TAXONOMY.canonical_for("google cloud platform")


def test_every_alias_has_one_owner():
    owners = {}
    for canonical, aliases in DEFAULT_TAXONOMY:
        for alias in aliases:
            assert owners.setdefault(alias, canonical) == canonical


def test_duplicate_alias_rejected():
    with pytest.raises(ValueError):
        SkillTaxonomy({"Go": ("golang", "go"), "Game": ("go",)})


def test_taxonomy_order_is_declaration_order():
    taxonomy = SkillTaxonomy({"B": ("b",), "A": ("a",)})
    assert taxonomy.skills() == ("B", "A")
    assert len(taxonomy) == 2


def test_declared_alias_wins_over_derived_variant_in_either_order():
    for table in ({"A": ("ab",), "B": ("a.b",)}, {"B": ("a.b",), "A": ("ab",)}):
        taxonomy = SkillTaxonomy(table)
        assert taxonomy.canonical_for("ab") == "A"
        assert taxonomy.canonical_for("a.b") == "B"
        assert "ab" not in taxonomy.resolve_aliases("B")
