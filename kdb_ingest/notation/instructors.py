"""
Instructor list (担当教員) splitter for kdb-ingest.
"""

from __future__ import annotations

import re

_DELIMITER_RE = re.compile(r"[,，、]")


def split_instructors(text: str) -> list[str]:
    """Split a comma-separated instructor field into names.

    Half-width and full-width commas and the ideographic comma all
    separate names. Whitespace around each name is stripped and empty
    entries are dropped, so an empty cell yields ``[]``.
    """
    names = (name.strip() for name in _DELIMITER_RE.split(text))
    return [name for name in names if name]
