"""
Unit tests for the credited-auditors flag parser
(kdb_ingest.notation.auditors).
"""

from __future__ import annotations

import pytest

from kdb_ingest.exceptions import InvalidAuditorFlagError
from kdb_ingest.notation.auditors import CreditedAuditors, parse_credited_auditors


class TestParseCreditedAuditors:
    """Tests for parse_credited_auditors()."""

    def test_cross(self):
        assert parse_credited_auditors("×") is CreditedAuditors.CROSS

    def test_triangle(self):
        assert parse_credited_auditors("△") is CreditedAuditors.TRIANGLE

    def test_empty(self):
        assert parse_credited_auditors("") is CreditedAuditors.EMPTY

    def test_stored_values(self):
        """Integer values are the ones stored downstream."""
        assert [int(f) for f in CreditedAuditors] == [0, 1, 2]

    @pytest.mark.parametrize("text", ["fdasfd", "○", "x", " ×"])
    def test_invalid(self, text: str):
        with pytest.raises(InvalidAuditorFlagError):
            parse_credited_auditors(text)
