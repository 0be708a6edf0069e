"""
Notation sub-package for kdb-ingest.

Contains the parsers that decode the catalog's abbreviated free-text
notations into structured values. Every parser is a pure function of its
input text: no I/O, no logging, no shared state, so rows can be parsed in
any order or in parallel.

- terms.py: 実施学期 -> TermLabel list, TermLabel -> integer code.
- years.py: 標準履修年次 -> list of year strings ("1", "2", ... or "?").
- periods.py: 曜時限 -> set of PeriodToken (weekday/marker x period).
- auditors.py: 科目等履修生申請可否 -> CreditedAuditors.
- instructors.py: 担当教員 -> list of names.
- dates.py: データ更新日 -> timezone-aware timestamp.

Each parser raises a subclass of ``NotationError`` on input outside its
grammar; deciding whether to skip or reject the row is left to the caller
(see builder.py).
"""

from kdb_ingest.notation.auditors import CreditedAuditors, parse_credited_auditors
from kdb_ingest.notation.dates import parse_updated_at
from kdb_ingest.notation.instructors import split_instructors
from kdb_ingest.notation.periods import (
    PeriodToken,
    SpecialMarker,
    Weekday,
    format_periods,
    parse_periods,
)
from kdb_ingest.notation.terms import (
    TERM_CODES,
    TermLabel,
    parse_terms,
    term_codes,
    term_label_for_code,
)
from kdb_ingest.notation.years import expand_registration_years

__all__ = [
    "CreditedAuditors",
    "PeriodToken",
    "SpecialMarker",
    "TERM_CODES",
    "TermLabel",
    "Weekday",
    "expand_registration_years",
    "format_periods",
    "parse_credited_auditors",
    "parse_periods",
    "parse_terms",
    "parse_updated_at",
    "split_instructors",
    "term_codes",
    "term_label_for_code",
]
