"""
Schedule notation (曜時限) parser for kdb-ingest.

The catalog compresses a course's weekly timetable into a short string:

- ``月1``          Monday, period 1
- ``月12``         Monday, periods 1 and 2 (consecutive digits, no separator)
- ``月1-3,5``      Monday, periods 1, 2, 3 and 5
- ``月・木1-3``     Monday and Thursday, periods 1 to 3 each (cross-product)
- ``月1 火1``       two day groups (space, middle dot or nothing between them)
- ``応談`` ``随時`` ``集中``
                   "by arrangement", "anytime", "intensive"; no fixed slot,
                   optionally followed by periods (``応談78``)

Decoding is a chain of text rewrites that reduce every notation to groups of
``<letters>:<digits>``, followed by a cross-product of each group:

1. Strip all whitespace (half- and full-width).
2. Unify dash variants to ``-``.
3. Strip middle dots, merging ``月・木`` into one day group ``月木``.
4. Strip commas; ranges are expanded to explicit digit runs next, so
   ``1-3,5`` and ``1-35`` denote the same set.
5. Replace each special keyword by its one-letter placeholder plus ``0``
   (a synthetic "period zero" meaning "no explicit period").
6. Expand ranges ``a-b`` (1 <= a < b <= 8) to ``a a+1 .. b``.
7. Insert a group separator before a letter that follows a digit, and a
   day/period separator before a digit that follows a letter.
8. Split into groups; each must be exactly one non-empty letter run and one
   non-empty digit run.
9. Emit one token per (letter, digit) pair.
10. Turn placeholder pairs back into markers: digit 0 -> bare marker,
    digit d -> (marker, d).

All indexing is by character, never by encoded byte.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from kdb_ingest.exceptions import MalformedPeriodNotationError
from kdb_ingest.notation._text import DASH_CHARS

MIN_SLOT = 1
MAX_SLOT = 8


class Weekday(Enum):
    MON = "月"
    TUE = "火"
    WED = "水"
    THU = "木"
    FRI = "金"
    SAT = "土"
    SUN = "日"


class SpecialMarker(Enum):
    """Notations for courses without a fixed weekly slot."""

    BY_ARRANGEMENT = "応談"
    ANYTIME = "随時"
    INTENSIVE = "集中"

    @property
    def placeholder(self) -> str:
        """One-letter stand-in that flows through the weekday grammar."""
        return self.value[0]


_DAYS_BY_LETTER: dict[str, Weekday | SpecialMarker] = {
    **{day.value: day for day in Weekday},
    **{marker.placeholder: marker for marker in SpecialMarker},
}
_DAY_ORDER: dict[Weekday | SpecialMarker, int] = {
    day: i for i, day in enumerate([*Weekday, *SpecialMarker])
}


@dataclass(frozen=True)
class PeriodToken:
    """One normalized timetable entry.

    ``day`` is a weekday or a special marker. Weekday tokens always carry a
    slot in 1..8; marker tokens carry ``None`` (bare marker) or a slot.
    """

    day: Weekday | SpecialMarker
    slot: int | None = None

    def __post_init__(self) -> None:
        if self.slot is None:
            if isinstance(self.day, Weekday):
                raise ValueError(f"Weekday token needs a period slot: {self.day}")
        elif not MIN_SLOT <= self.slot <= MAX_SLOT:
            raise ValueError(f"Period slot out of range 1..8: {self.slot}")

    def sort_key(self) -> tuple[int, int]:
        """Weekdays Mon..Sun, then markers; bare marker before its slots."""
        return _DAY_ORDER[self.day], self.slot or 0

    def __str__(self) -> str:
        if self.slot is None:
            return self.day.value
        return f"{self.day.value}{self.slot}"


# ---------------------------------------------------------------------------
# Normalization tables
# ---------------------------------------------------------------------------

_DASHES = str.maketrans({c: "-" for c in DASH_CHARS})
_DROPPED = str.maketrans("", "", "・･,，、")

_KEYWORDS = {marker.value: f"{marker.placeholder}0" for marker in SpecialMarker}

_LETTERS = "".join(_DAYS_BY_LETTER)
_DIGITS = "".join(str(d) for d in range(0, MAX_SLOT + 1))

GROUP_SEPARATOR = ","
DAY_PERIOD_SEPARATOR = ":"

_GROUP_START_RE = re.compile(f"(?<=[{_DIGITS}])(?=[{_LETTERS}])")
_PERIOD_START_RE = re.compile(f"(?<=[{_LETTERS}])(?=[{_DIGITS}])")


def _expand_ranges(text: str) -> str:
    # Ascending (a, b) order: "1-3-5" -> "123-5" -> "12345".
    for start in range(MIN_SLOT, MAX_SLOT + 1):
        for end in range(start + 1, MAX_SLOT + 1):
            run = "".join(str(d) for d in range(start, end + 1))
            text = text.replace(f"{start}-{end}", run)
    return text


def normalize_period_text(text: str) -> str:
    """Apply rewrite steps 1-7, returning the segmented notation.

    ``"月・木1-3"`` -> ``"月木:123"``; ``"応談 木1"`` -> ``"応:0,木:1"``.
    """
    text = "".join(text.split())
    text = text.translate(_DASHES)
    text = text.translate(_DROPPED)
    for keyword, placeholder in _KEYWORDS.items():
        text = text.replace(keyword, placeholder)
    text = _expand_ranges(text)
    text = _GROUP_START_RE.sub(GROUP_SEPARATOR, text)
    text = _PERIOD_START_RE.sub(DAY_PERIOD_SEPARATOR, text)
    return text


def _split_group(group: str, notation: str) -> tuple[str, str]:
    parts = group.split(DAY_PERIOD_SEPARATOR)
    if len(parts) != 2:
        raise MalformedPeriodNotationError(group, notation)
    letters, digits = parts
    if (
        not letters
        or not digits
        or any(c not in _DAYS_BY_LETTER for c in letters)
        or any(c not in _DIGITS for c in digits)
    ):
        raise MalformedPeriodNotationError(group, notation)
    return letters, digits


def _make_token(letter: str, digit: str, group: str, notation: str) -> PeriodToken:
    day = _DAYS_BY_LETTER[letter]
    slot = int(digit)
    if slot == 0:
        if isinstance(day, Weekday):
            raise MalformedPeriodNotationError(group, notation)
        return PeriodToken(day)
    return PeriodToken(day, slot)


def parse_periods(text: str) -> set[PeriodToken]:
    """Decode a schedule notation into a set of period tokens.

    Args:
        text: Raw 曜時限 cell, e.g. ``"月・木1-3"`` or ``"応談78 木1"``.

    Returns:
        Set of ``PeriodToken``. Empty input (or input that is only
        whitespace and separators) yields an empty set.

    Raises:
        MalformedPeriodNotationError: If a day group lacks a period run, a
            period run lacks a day, or contains characters outside the
            grammar. The offending group is available on ``.substring``.
    """
    normalized = normalize_period_text(text)
    if not normalized:
        return set()

    tokens: set[PeriodToken] = set()
    for group in normalized.split(GROUP_SEPARATOR):
        letters, digits = _split_group(group, text)
        for letter in letters:
            for digit in digits:
                tokens.add(_make_token(letter, digit, group, text))
    return tokens


def sorted_periods(tokens: Iterable[PeriodToken]) -> list[PeriodToken]:
    return sorted(tokens, key=PeriodToken.sort_key)


def format_periods(tokens: Iterable[PeriodToken]) -> str:
    """Render tokens as canonical notation that ``parse_periods`` reads back.

    ``{月1, 月2, 応談}`` -> ``"月1,月2,応談"``.
    """
    return ",".join(str(token) for token in sorted_periods(tokens))
