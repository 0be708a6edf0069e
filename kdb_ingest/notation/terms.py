"""
Term (実施学期) tokenizer and term-code mapper for kdb-ingest.

The catalog writes the teaching term as free text such as ``"春AB"``,
``"秋C 夏季休業中"`` or ``"通年"``. Modules within a semester are the
letters A/B/C after the season character, and several modules can be
compressed into one code (``春AB``, ``春BA``, ``春ABC``, ...).

``parse_terms`` detects which of the eleven canonical labels appear in the
text; ``term_codes`` maps labels to the stable integer codes 1..11 used by
downstream storage.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from kdb_ingest.exceptions import UnknownTermLabelError


class TermLabel(Enum):
    """Canonical term labels, in vocabulary (and code) order."""

    SPRING_A = "春A"
    SPRING_B = "春B"
    SPRING_C = "春C"
    FALL_A = "秋A"
    FALL_B = "秋B"
    FALL_C = "秋C"
    SUMMER_BREAK = "夏季休業中"
    SPRING_BREAK = "春季休業中"
    FULL_YEAR = "通年"
    SPRING_SEMESTER = "春学期"
    FALL_SEMESTER = "秋学期"


# Static 1:1 table; codes follow the declaration order above.
TERM_CODES: dict[TermLabel, int] = {
    label: code for code, label in enumerate(TermLabel, start=1)
}
_LABELS_BY_CODE: dict[int, TermLabel] = {code: label for label, code in TERM_CODES.items()}

# A season character followed by a run of module letters, e.g. 春ABC.
_MODULE_RUN_RE = re.compile(r"([春秋])([ABC]+)")


def _module_labels(text: str) -> set[str]:
    """Expand every compressed module code into its base codes.

    ``"春AB 秋C"`` -> ``{"春A", "春B", "秋C"}``.
    """
    found: set[str] = set()
    for season, letters in _MODULE_RUN_RE.findall(text):
        found.update(season + letter for letter in letters)
    return found


def parse_terms(text: str) -> list[TermLabel]:
    """Detect the canonical term labels present in a term field.

    Each label is tested independently, so one field can yield several
    labels. The result follows vocabulary order and never contains
    duplicates. Empty input yields an empty list.

    Module labels (春A .. 秋C) match their base code or any compressed
    code containing the letter (``春BA`` matches both 春A and 春B). The
    remaining labels are matched by plain substring containment.

    Args:
        text: Raw 実施学期 cell, e.g. ``"春AB"``.

    Returns:
        List of ``TermLabel`` members.
    """
    if not text:
        return []

    modules = _module_labels(text)
    return [
        label
        for label in TermLabel
        if label.value in modules or label.value in text
    ]


def _coerce_label(label: TermLabel | str) -> TermLabel:
    if isinstance(label, TermLabel):
        return label
    try:
        return TermLabel(label)
    except ValueError:
        raise UnknownTermLabelError(f"Invalid term label: {label!r}") from None


def term_code(label: TermLabel | str) -> int:
    """Map one term label (member or notation string) to its integer code."""
    return TERM_CODES[_coerce_label(label)]


def term_codes(labels: Iterable[TermLabel | str]) -> list[int]:
    """Map term labels to their integer codes, preserving input order.

    Raises:
        UnknownTermLabelError: If a label is outside the fixed vocabulary.
    """
    return [term_code(label) for label in labels]


def term_label_for_code(code: int) -> TermLabel:
    """Reverse lookup of ``term_code``.

    Raises:
        UnknownTermLabelError: If ``code`` is not in 1..11.
    """
    try:
        return _LABELS_BY_CODE[code]
    except KeyError:
        raise UnknownTermLabelError(f"Invalid term code: {code!r}") from None
