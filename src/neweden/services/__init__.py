"""
neweden Services.

Higher-level operations built on the space graph: route calculation
and range queries.
"""

from __future__ import annotations

__all__ = [
    "navigation",
]
