"""
System name search.

Fuzzy, case-insensitive lookup of systems by name using character 2- and
3-grams with ASCII folding, so "jta", "JITA" and "Jíta" all find Jita.
A purely numeric query also matches a system ID exactly.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass

from .types import System, SystemId

DEFAULT_LIMIT = 10
NGRAM_SIZES = (2, 3)

EXACT_MATCH_BONUS = 1.0
PREFIX_MATCH_BONUS = 0.5


@dataclass(frozen=True)
class SearchResult:
    system_id: SystemId
    score: float


def fold(text: str) -> str:
    """Lowercase and strip accents."""
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii").lower()


def ngrams(text: str) -> set[str]:
    grams: set[str] = set()
    for size in NGRAM_SIZES:
        grams.update(text[i : i + size] for i in range(len(text) - size + 1))
    return grams


class SystemNameIndex:
    """In-memory n-gram index over system names."""

    def __init__(self, systems: Iterable[System]) -> None:
        self._names: dict[SystemId, str] = {}
        self._grams: dict[SystemId, set[str]] = {}
        self._postings: dict[str, set[SystemId]] = {}

        for system in systems:
            folded = fold(system.name)
            grams = ngrams(folded)
            self._names[system.id] = folded
            self._grams[system.id] = grams
            for gram in grams:
                self._postings.setdefault(gram, set()).add(system.id)

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SearchResult]:
        """
        Find systems whose names resemble `query`.

        Args:
            query: Free text, or a system ID
            limit: Maximum number of results

        Returns:
            Results ordered by descending score, then ascending system ID
        """
        query = query.strip()
        if not query or limit <= 0:
            return []

        if query.isdecimal() and int(query) in self._names:
            return [SearchResult(int(query), EXACT_MATCH_BONUS * 2)]

        folded = fold(query)
        query_grams = ngrams(folded)

        candidates: set[SystemId] = set()
        for gram in query_grams:
            candidates.update(self._postings.get(gram, ()))
        # Single-character queries have no grams; fall back to prefix matching
        if not query_grams:
            candidates = {sid for sid, name in self._names.items() if name.startswith(folded)}

        results = []
        for system_id in candidates:
            results.append(SearchResult(system_id, self._score(system_id, folded, query_grams)))

        results.sort(key=lambda r: (-r.score, r.system_id))
        return results[:limit]

    def _score(self, system_id: SystemId, folded_query: str, query_grams: set[str]) -> float:
        name = self._names[system_id]
        grams = self._grams[system_id]
        union = query_grams | grams
        score = len(query_grams & grams) / len(union) if union else 0.0
        if name == folded_query:
            score += EXACT_MATCH_BONUS
        elif name.startswith(folded_query):
            score += PREFIX_MATCH_BONUS
        return score

    def __len__(self) -> int:
        return len(self._names)
