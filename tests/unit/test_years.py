"""
Unit tests for the registration-year expander (kdb_ingest.notation.years).
"""

from __future__ import annotations

import pytest

from kdb_ingest.exceptions import MalformedYearRangeError
from kdb_ingest.notation.years import expand_registration_years, normalize_year_text


class TestExpandRegistrationYears:
    """Tests for expand_registration_years()."""

    # -----------------------------------------------------------------
    # Ranges
    # -----------------------------------------------------------------

    def test_hyphen_range(self):
        assert expand_registration_years("1-3") == ["1", "2", "3"]

    @pytest.mark.parametrize("text", ["1・3", "1 - 3", "1～3", "1~3", "1ー3", "1〜3", "1　-　3"])
    def test_separator_variants(self, text: str):
        """Middle dot, wave dash, tilde and spaced hyphen all mean a range."""
        assert expand_registration_years(text) == expand_registration_years("1-3")

    def test_two_year_range(self):
        assert expand_registration_years("2・3") == ["2", "3"]

    def test_fullwidth_digits(self):
        assert expand_registration_years("１-４") == ["1", "2", "3", "4"]

    def test_reversed_range_is_empty(self):
        assert expand_registration_years("3-1") == []

    # -----------------------------------------------------------------
    # Single values
    # -----------------------------------------------------------------

    def test_single_year(self):
        assert expand_registration_years("1") == ["1"]

    def test_question_mark_kept(self):
        """'?' means any year and is kept as-is."""
        assert expand_registration_years("?") == ["?"]

    def test_single_year_with_spaces(self):
        assert expand_registration_years(" 4 ") == ["4"]

    # -----------------------------------------------------------------
    # Malformed input
    # -----------------------------------------------------------------

    def test_non_digit_text(self):
        with pytest.raises(MalformedYearRangeError):
            expand_registration_years("invalid")

    @pytest.mark.parametrize("text", ["", "1-", "12", "?-3", "1-?"])
    def test_missing_or_non_digit_endpoint(self, text: str):
        with pytest.raises(MalformedYearRangeError):
            expand_registration_years(text)


class TestNormalizeYearText:
    def test_unifies_separators(self):
        assert normalize_year_text("1 ・ 3") == "1-3"

    @pytest.mark.parametrize("dash", ["‐", "–", "—", "－", "−"])
    def test_dash_variants(self, dash: str):
        """Every dash the schedule parser accepts is also a year separator."""
        assert normalize_year_text(f"1{dash}3") == "1-3"
