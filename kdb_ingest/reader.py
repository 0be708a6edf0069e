"""
Catalog export reading for kdb-ingest.

Reads the KdB course catalog CSV (already decoded to UTF-8 text) into a
DataFrame of raw string cells, one row per catalog entry.

The export wraps every field in double quotes but does not escape double
quotes that occur *inside* a field (course overviews quote titles, for
example), so a strict CSV reader splits those fields apart.
``repair_quotes()`` rewrites the text into valid CSV first:

1. Double every quote character (``"`` -> ``""``), which escapes the
   embedded quotes but also doubles the field delimiters' quotes.
2. Collapse the doubled quotes around the ``","`` field separators.
3. Collapse the doubled quotes around line breaks (end of one row,
   start of the next), tolerating stray spaces next to them.
4. Collapse the doubled quote at the very start and end of the text.

All cells are read as ``str``; empty cells stay ``""`` (no NaN), so the
notation parsers always receive text.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from kdb_ingest.exceptions import CatalogFormatError

logger = logging.getLogger(__name__)

_ROW_BREAK_RE = re.compile(r'"[ \t]*(\r?\n)[ \t]*"')
_TEXT_START_RE = re.compile(r'^\s*""')
_TEXT_END_RE = re.compile(r'""\s*$')


def repair_quotes(text: str) -> str:
    """Escape embedded double quotes in a fully-quoted catalog export.

    A quote inside a field is doubled, while the quotes that delimit each
    field are left single: the row ``"A1","say "hi" now"`` becomes
    ``"A1","say ""hi"" now"``.
    """
    text = text.replace('"', '""')
    text = text.replace('","', ",")
    text = _ROW_BREAK_RE.sub(r"\1", text)
    text = _TEXT_START_RE.sub('"', text)
    text = _TEXT_END_RE.sub('"', text)
    return text


def _check_columns(df: pd.DataFrame, required_columns: Iterable[str] | None) -> None:
    if required_columns is None:
        return
    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise CatalogFormatError(
            f"Expected columns {missing} not found. "
            f"Columns found: {list(df.columns[:20])}"
        )


def read_catalog_text(
    text: str,
    repair: bool = True,
    required_columns: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Decode catalog CSV text into a DataFrame of raw string cells.

    Args:
        text: Full CSV text, header row first.
        repair: If True, run ``repair_quotes()`` before decoding.
        required_columns: Header names that must be present.

    Returns:
        DataFrame with stripped header names and ``str`` cells.

    Raises:
        CatalogFormatError: If the text is empty, not decodable as CSV,
            or lacks a required column.
    """
    if not text.strip():
        raise CatalogFormatError("Catalog export is empty.")

    if repair:
        text = repair_quotes(text)

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=False,
        )
    except pd.errors.ParserError as exc:
        raise CatalogFormatError(f"Catalog export is not valid CSV: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    _check_columns(df, required_columns)

    logger.info("Read catalog: %d rows x %d columns", len(df), len(df.columns))
    return df


def read_catalog(
    path: str | Path,
    repair: bool = True,
    required_columns: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Read a catalog CSV file (UTF-8, BOM tolerated).

    See ``read_catalog_text()`` for arguments and errors.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog export not found: {path}")

    logger.info("Reading catalog export: %s", path)
    text = path.read_text(encoding="utf-8-sig")
    return read_catalog_text(text, repair=repair, required_columns=required_columns)
