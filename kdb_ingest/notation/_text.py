"""
Character classes shared by the notation parsers.
"""

from __future__ import annotations

# Dash-like characters the catalog uses for ranges (年次 1-3, 時限 1-3).
DASH_CHARS = "-ー－−‐–—～〜~"
