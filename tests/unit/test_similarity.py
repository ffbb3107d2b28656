"""Unit tests for string similarity and location normalization."""
import pytest

from bsl_tracker.dedup.similarity import (
    normalize_municipality_name,
    normalize_state,
    same_municipality,
    string_similarity,
)

pytestmark = pytest.mark.unit


class TestStringSimilarity:
    """Test normalized edit-distance similarity."""

    def test_identical_strings(self):
        assert string_similarity("Denver", "Denver") == 1.0

    def test_case_and_whitespace_insensitive(self):
        assert string_similarity("  DENVER ", "denver") == 1.0

    def test_classic_edit_distance(self):
        # kitten -> sitting: two substitutions and one insertion
        assert string_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_single_insertion(self):
        assert string_similarity("overland", "overlands") == pytest.approx(8 / 9)

    def test_both_empty(self):
        assert string_similarity("", "") == 1.0

    def test_non_empty_vs_empty(self):
        assert string_similarity("abc", "") == 0.0
        assert string_similarity("", "abc") == 0.0

    def test_whitespace_only_counts_as_empty(self):
        assert string_similarity("   ", "") == 1.0

    def test_completely_different(self):
        assert string_similarity("abc", "xyz") == 0.0

    @pytest.mark.parametrize("a,b", [
        ("Springfield", "Springfeld"),
        ("St Louis", "Saint Louis"),
        ("Kansas", "Arkansas"),
        ("", "Overland"),
    ])
    def test_symmetry(self, a, b):
        assert string_similarity(a, b) == string_similarity(b, a)

    @pytest.mark.parametrize("value", ["Denver", "Miami-Dade County", "x", "Ünïcode"])
    def test_identity(self, value):
        assert string_similarity(value, value) == 1.0

    def test_bounds(self):
        for a, b in [("a", "bbbbbbbb"), ("short", "a much longer name"), ("same", "same")]:
            assert 0.0 <= string_similarity(a, b) <= 1.0


class TestMunicipalityNormalization:
    """Test municipality name normalization."""

    def test_saint_abbreviation(self):
        assert normalize_municipality_name("St. Louis") == "saint louis"
        assert normalize_municipality_name("Saint Louis") == "saint louis"

    def test_fort_and_mount(self):
        assert normalize_municipality_name("Ft. Worth") == "fort worth"
        assert normalize_municipality_name("Mt. Vernon") == "mount vernon"

    def test_type_words_removed(self):
        assert normalize_municipality_name("Kansas City") == "kansas"
        assert normalize_municipality_name("Prince George's County") == "prince georges"

    def test_punctuation_removed(self):
        assert normalize_municipality_name("Miami-Dade County") == "miamidade"

    def test_type_word_inside_name_kept(self):
        assert normalize_municipality_name("Townsend") == "townsend"

    def test_empty(self):
        assert normalize_municipality_name("") == ""
        assert normalize_municipality_name(None) == ""


class TestStateNormalization:
    """Test state name normalization."""

    def test_full_name(self):
        assert normalize_state("Colorado") == "CO"

    def test_multi_word_name(self):
        assert normalize_state("  new   york ") == "NY"
        assert normalize_state("District of Columbia") == "DC"

    def test_abbreviation_uppercased(self):
        assert normalize_state(" mo ") == "MO"

    def test_unknown_value_passes_through(self):
        assert normalize_state("Ontario") == "ONTARIO"

    def test_empty(self):
        assert normalize_state("") == ""


class TestSameMunicipality:
    def test_exact_ignoring_case(self):
        assert same_municipality("Denver ", "denver")

    def test_different_names(self):
        assert not same_municipality("St. Louis", "Saint Louis")
