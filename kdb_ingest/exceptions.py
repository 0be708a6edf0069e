"""
Custom exception hierarchy for kdb-ingest.

Why a custom hierarchy:
- Callers can catch a single notation failure (e.g., MalformedPeriodNotationError)
  or every parser failure at once (NotationError) without relying on a bare
  ValueError.
- The row builder wraps parser failures in RowParsingError so the caller
  knows which field of which row was rejected, and with what raw value.
"""

from __future__ import annotations


class KdbIngestError(Exception):
    """Base exception for all kdb-ingest errors."""


class NotationError(KdbIngestError, ValueError):
    """Base class for failures raised by the notation parsers.

    Also a ``ValueError`` so generic callers that only know the builtin
    hierarchy still catch it.
    """


class UnknownTermLabelError(NotationError):
    """Raised when a term label (or term code) is outside the fixed vocabulary."""


class MalformedYearRangeError(NotationError):
    """Raised when a registration-year field is not a year, '?', or a range.

    For example ``"invalid"`` or ``"1-"``: the range endpoints must be
    single decimal digits.
    """


class MalformedPeriodNotationError(NotationError):
    """Raised when a schedule group has no single day/period boundary.

    The offending group (after normalization) is kept on ``substring`` for
    diagnostics, e.g. ``"月"`` for a weekday without a period, or ``"1"`` for
    a period without a weekday.
    """

    def __init__(self, substring: str, notation: str | None = None) -> None:
        self.substring = substring
        self.notation = notation
        message = f"Unexpected period notation: {substring!r}"
        if notation is not None:
            message += f" (in {notation!r})"
        super().__init__(message)


class InvalidAuditorFlagError(NotationError):
    """Raised when the credited-auditors field is not ×, △ or empty."""


class MalformedTimestampError(NotationError):
    """Raised when the catalog's data-updated timestamp cannot be parsed."""


class RowParsingError(KdbIngestError):
    """Raised by the row builder when one field of a catalog row fails to parse.

    Attributes:
        field: Name of the record field being built (e.g. ``"period"``).
        raw_value: The raw cell text that was rejected.
        row_index: Index of the row in the source DataFrame, if known.
    """

    def __init__(
        self,
        field: str,
        raw_value: str,
        row_index: object = None,
        reason: str = "",
    ) -> None:
        self.field = field
        self.raw_value = raw_value
        self.row_index = row_index
        where = f"row {row_index}" if row_index is not None else "row"
        message = f"{where}: cannot parse {field}={raw_value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CatalogFormatError(KdbIngestError):
    """Raised when the catalog export does not have the expected structure.

    Typically a missing header column; the message lists the columns found.
    """


class ConfigValidationError(KdbIngestError):
    """Raised when a kdb-ingest YAML config is empty or inconsistent."""
