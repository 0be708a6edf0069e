"""
Data-updated timestamp (データ更新日) parser for kdb-ingest.

The export stamps every row with the time its data was last updated, as
``YYYY-MM-DD HH:MM:SS`` in local (Japan) time with no offset.
"""

from __future__ import annotations

import pandas as pd

from kdb_ingest.exceptions import MalformedTimestampError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TIMEZONE = "Asia/Tokyo"


def parse_updated_at(text: str, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    """Parse a data-updated cell into a timezone-aware timestamp.

    Args:
        text: e.g. ``"2021-03-01 14:27:49"``.
        tz: IANA timezone the catalog's local times are in.

    Raises:
        MalformedTimestampError: If ``text`` does not match ``TIMESTAMP_FORMAT``,
            or names a local time that does not exist in ``tz`` (DST gap).
    """
    try:
        ts = pd.to_datetime(text.strip(), format=TIMESTAMP_FORMAT)
    except (ValueError, TypeError) as exc:
        raise MalformedTimestampError(
            f"Invalid data-updated timestamp: {text!r}"
        ) from exc
    # pandas maps an empty string to NaT instead of raising
    if pd.isna(ts):
        raise MalformedTimestampError(f"Invalid data-updated timestamp: {text!r}")
    try:
        return ts.tz_localize(tz)
    except ValueError as exc:
        raise MalformedTimestampError(
            f"Data-updated timestamp {text!r} does not exist in {tz}"
        ) from exc
