"""Tests for series name processing and match scoring."""

from autoorganize.classification.text_processing import (
    comparable_name,
    get_match_score,
    normalize_accents,
    parse_series_name,
)
from autoorganize.config.settings import EXACT_MATCH_SCORE, YEAR_MATCH_BONUS
from autoorganize.models import Series


def make_series(name, year=None):
    return Series(id=name, name=name, production_year=year)


class TestNormalizeAccents:
    """Tests for normalize_accents function."""

    def test_removes_accents(self):
        assert normalize_accents("Pokémon") == "Pokemon"

    def test_expands_ligatures(self):
        assert normalize_accents("cœur") == "coeur"

    def test_empty_string(self):
        assert normalize_accents("") == ""


class TestParseSeriesName:
    """Tests for parse_series_name function."""

    def test_year_in_parentheses(self):
        assert parse_series_name("Doctor Who (2005)") == ("Doctor Who", 2005)

    def test_year_with_dots(self):
        assert parse_series_name("Doctor.Who.2005") == ("Doctor.Who", 2005)

    def test_no_year(self):
        assert parse_series_name("Breaking Bad") == ("Breaking Bad", None)

    def test_year_only_name_kept(self):
        """A name that is just a year is not emptied."""
        assert parse_series_name("1923") == ("1923", None)

    def test_empty(self):
        assert parse_series_name("") == ("", None)


class TestComparableName:
    """Tests for comparable_name function."""

    def test_case_and_separators(self):
        assert comparable_name("Show.Name") == comparable_name("show name")

    def test_ampersand(self):
        assert comparable_name("Law & Order") == comparable_name("Law and Order")

    def test_apostrophes_removed(self):
        assert comparable_name("Grey's Anatomy") == "greys anatomy"

    def test_accents_removed(self):
        assert comparable_name("Les Revenants Épisode") == "les revenants episode"


class TestGetMatchScore:
    """Tests for get_match_score function."""

    def test_exact_match(self):
        assert get_match_score("Show Name", None, make_series("Show Name")) == EXACT_MATCH_SCORE

    def test_exact_match_with_punctuation(self):
        assert get_match_score("show.name", None, make_series("Show Name")) == EXACT_MATCH_SCORE

    def test_year_bonus(self):
        score = get_match_score("Doctor Who", 2005, make_series("Doctor Who", 2005))
        assert score == EXACT_MATCH_SCORE + YEAR_MATCH_BONUS

    def test_year_mismatch_is_no_match(self):
        assert get_match_score("Doctor Who", 1963, make_series("Doctor Who", 2005)) == 0

    def test_unknown_year_ignored(self):
        assert get_match_score("Doctor Who", None, make_series("Doctor Who", 2005)) == EXACT_MATCH_SCORE

    def test_series_year_removed_from_name(self):
        score = get_match_score("Doctor Who", 2005, make_series("Doctor Who (2005)", 2005))
        assert score == EXACT_MATCH_SCORE + YEAR_MATCH_BONUS

    def test_close_name_scores_ratio(self):
        score = get_match_score("The Big Bang Theroy", None, make_series("The Big Bang Theory"))
        assert 0 < score < EXACT_MATCH_SCORE

    def test_different_name_is_no_match(self):
        assert get_match_score("Lost", None, make_series("Dexter")) == 0

    def test_empty_name(self):
        assert get_match_score("", None, make_series("Dexter")) == 0
