"""
Registration-year (標準履修年次) expander for kdb-ingest.

The field holds a single year (``"1"``), the placeholder ``"?"`` meaning
"any year", or an inclusive range written with one of several separators:
``"1-3"``, ``"1・3"``, ``"1～3"``, ``"1 - 3"``. A range is expanded into
every year it covers.

Only a single two-endpoint range is understood. Multi-part lists such as
``"1,3"`` are read by position (first and third character) like any other
range, so they are not generalized here.
"""

from __future__ import annotations

from kdb_ingest.exceptions import MalformedYearRangeError
from kdb_ingest.notation._text import DASH_CHARS

RANGE_SEPARATOR = "-"

_SPACES = str.maketrans("", "", " 　")
_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")
_SEPARATORS = str.maketrans({c: RANGE_SEPARATOR for c in DASH_CHARS + "・"})


def normalize_year_text(text: str) -> str:
    """Strip spaces, fold full-width digits and unify range separators."""
    return (
        text.translate(_SPACES)
        .translate(_FULLWIDTH_DIGITS)
        .translate(_SEPARATORS)
    )


def _endpoint(chars: str, position: int, text: str) -> int:
    if position >= len(chars) or chars[position] not in "0123456789":
        raise MalformedYearRangeError(
            f"Invalid registration year {text!r}: "
            f"expected a digit at position {position}"
        )
    return int(chars[position])


def expand_registration_years(text: str) -> list[str]:
    """Expand a registration-year field into explicit year tokens.

    Args:
        text: Raw 標準履修年次 cell.

    Returns:
        ``["?"]`` or ``["2"]`` for single-character fields; otherwise every
        year from the start digit to the end digit inclusive, as strings.

    Raises:
        MalformedYearRangeError: If a multi-character field does not have
            decimal digits at positions 0 and 2 (after normalization).
    """
    normalized = normalize_year_text(text)

    if len(normalized) == 1:
        return [normalized]

    start = _endpoint(normalized, 0, text)
    end = _endpoint(normalized, 2, text)
    return [str(year) for year in range(start, end + 1)]
