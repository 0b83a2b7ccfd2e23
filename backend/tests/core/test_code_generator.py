"""Code Generator tests — pure candidate derivation for hierarchical codes.

Tests cover:
    - Name normalization (accents, stopwords)
    - Park prefix, area code and species code candidate order
    - Tree code prefixes, sequence parsing and formatting
    - Longest-prefix area matching
"""

from itertools import islice
from types import SimpleNamespace

import pytest

from parks_backoffice.core.code_generator import (
    PARK_STOPWORDS, area_code_candidates, area_code_preview, area_letters,
    format_tree_code, match_area_by_prefix, next_tree_sequence, normalize_name,
    park_prefix_candidates, species_code_candidates, strip_accents, tree_code_prefix,
)
from parks_backoffice.core.errors import CodeGenerationError


def _first(candidates, n):
    return list(islice(candidates, n))


# --- Normalization ------------------------------------------------------------

def test_strip_accents_removes_diacritics():
    assert strip_accents("Jardín Ñandú") == "Jardin Nandu"


def test_normalize_removes_repeated_leading_stopwords():
    assert normalize_name("Parque La Estrella", PARK_STOPWORDS) == "ESTRELLA"


def test_normalize_keeps_name_made_only_of_stopwords():
    assert normalize_name("El Parque", PARK_STOPWORDS) == "EL PARQUE"


def test_normalize_only_strips_leading_stopwords():
    assert normalize_name("Bosque de los Colomos", PARK_STOPWORDS) == "BOSQUE DE LOS COLOMOS"


# --- Park prefixes ------------------------------------------------------------

def test_park_prefix_natural_candidate_first():
    assert next(park_prefix_candidates("Parque Los Colomos")) == "CO"


def test_park_prefix_fallbacks_use_later_letters_then_alphabet():
    assert _first(park_prefix_candidates("Parque Los Colomos"), 5) == [
        "CO", "CL", "CM", "CS", "CA",
    ]


def test_park_prefix_candidates_never_repeat():
    candidates = list(park_prefix_candidates("Parque Alcalde"))
    assert len(candidates) == len(set(candidates))


def test_park_prefix_rejects_name_without_two_letters():
    with pytest.raises(CodeGenerationError):
        park_prefix_candidates("Parque 7")


# --- Area codes ---------------------------------------------------------------

def test_area_single_word_uses_first_two_letters():
    assert area_letters("Jardín") == ("JA", "JARDIN")


def test_area_multiple_words_use_initials():
    base, _ = area_letters("Zona Deportiva Norte")
    assert base == "DN"


def test_area_stopword_is_stripped():
    base, _ = area_letters("Área Infantil")
    assert base == "IN"


def test_area_code_candidates_are_prefixed_by_park():
    assert _first(area_code_candidates("Jardín", "CO"), 3) == [
        "CO-JA", "CO-JR", "CO-JD",
    ]


def test_area_code_preview():
    assert area_code_preview("Jardín", "CO") == "CO-JA"


def test_area_code_preview_without_inputs_is_empty():
    assert area_code_preview(None, "CO") == ""
    assert area_code_preview("Jardín", None) == ""


def test_area_code_preview_marks_unusable_names():
    assert area_code_preview("Z", "CO") == "CO-??"


# --- Species codes ------------------------------------------------------------

def test_species_single_word_sequence():
    assert _first(species_code_candidates("Jacaranda"), 7) == [
        "JA", "JAC", "JC", "JR", "JN", "JD", "JA1",
    ]


def test_species_multi_word_uses_initials():
    assert _first(species_code_candidates("Palma Washingtoniana"), 4) == [
        "PW", "PAL", "PA", "PL",
    ]


def test_species_initials_capped_at_three_words():
    assert next(species_code_candidates("Palo Dulce de Monte Alto")) == "PDD"


def test_species_falls_back_to_scientific_name():
    assert next(species_code_candidates(None, "Ficus benjamina")) == "FB"


def test_species_numbering_is_unbounded():
    numbered = [c for c in islice(species_code_candidates("Ceiba"), 40) if c[-1].isdigit()]
    assert numbered[:3] == ["CE1", "CE2", "CE3"]


def test_species_without_letters_raises():
    with pytest.raises(CodeGenerationError):
        species_code_candidates("", "  ")


# --- Tree codes ---------------------------------------------------------------

def test_tree_prefix_with_area():
    assert tree_code_prefix("JA", area_code="CO-JA") == "CO-JA-JA-"


def test_tree_prefix_at_park_level():
    assert tree_code_prefix("JA", park_prefix="CO") == "CO-XX-JA-"


def test_tree_prefix_area_wins_over_park():
    assert tree_code_prefix("JA", area_code="CO-DN", park_prefix="CO") == "CO-DN-JA-"


def test_tree_prefix_needs_area_or_park():
    with pytest.raises(CodeGenerationError):
        tree_code_prefix("JA")


def test_tree_prefix_needs_species_code():
    with pytest.raises(CodeGenerationError):
        tree_code_prefix("", area_code="CO-JA")


def test_next_sequence_continues_from_highest():
    codes = ["CO-JA-JA-0001", "CO-JA-JA-0007", "CO-JA-JA-0003"]
    assert next_tree_sequence(codes) == 8


def test_next_sequence_ignores_unparseable_codes():
    assert next_tree_sequence([None, "", "legacy", "CO-JA-JA-0002"]) == 3


def test_next_sequence_starts_at_one():
    assert next_tree_sequence([]) == 1


def test_format_tree_code_zero_pads():
    assert format_tree_code("CO-JA-JA-", 12) == "CO-JA-JA-0012"


def test_format_tree_code_grows_past_width():
    assert format_tree_code("CO-JA-JA-", 12345) == "CO-JA-JA-12345"


# --- Prefix matching ----------------------------------------------------------

def test_match_area_by_prefix_longest_wins():
    areas = [
        SimpleNamespace(id=1, code="CO-JA"),
        SimpleNamespace(id=2, code="CO-JA-N"),
    ]
    assert match_area_by_prefix("CO-JA-N-JA-0001", areas).id == 2


def test_match_area_by_prefix_requires_dash_boundary():
    areas = [SimpleNamespace(id=1, code="CO-J")]
    assert match_area_by_prefix("CO-JA-JA-0001", areas) is None


def test_match_area_by_prefix_without_code():
    assert match_area_by_prefix(None, [SimpleNamespace(id=1, code="CO-JA")]) is None
