"""
Credited-auditors flag (科目等履修生申請可否) parser for kdb-ingest.

The catalog marks whether credited auditors may apply with one glyph:
``×`` (not accepted), ``△`` (conditionally accepted) or an empty cell.
"""

from __future__ import annotations

from enum import IntEnum

from kdb_ingest.exceptions import InvalidAuditorFlagError


class CreditedAuditors(IntEnum):
    CROSS = 0
    TRIANGLE = 1
    EMPTY = 2


_FLAGS: dict[str, CreditedAuditors] = {
    "×": CreditedAuditors.CROSS,
    "△": CreditedAuditors.TRIANGLE,
    "": CreditedAuditors.EMPTY,
}


def parse_credited_auditors(text: str) -> CreditedAuditors:
    """Map the flag glyph to ``CreditedAuditors`` by exact match.

    Raises:
        InvalidAuditorFlagError: For any other input.
    """
    try:
        return _FLAGS[text]
    except KeyError:
        raise InvalidAuditorFlagError(
            f"Invalid credited auditors flag: {text!r}"
        ) from None
