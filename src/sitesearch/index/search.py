"""Query interface over built search artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
from lunr.exceptions import QueryParseError
from lunr.index import Index

from sitesearch.errors import QuerySyntaxError
from sitesearch.index.storage import ArtifactStore
from sitesearch.models import MetadataEntry


@dataclass(slots=True)
class SearchResult:
    slug: str
    title: str
    category: str
    snippet: str
    score: float


class Searcher:
    """Runs lunr queries against a loaded index, as the browser client does.

    Queries use lunr syntax: ``term*`` prefix matches, ``title:term`` field
    scoping, ``+term``/``-term`` presence and ``term^2`` boosts.
    """

    def __init__(self, index: Index, entries: Sequence[MetadataEntry]) -> None:
        self.index = index
        self.entries: Dict[str, MetadataEntry] = {entry.slug: entry for entry in entries}
        self._positions = {entry.slug: pos for pos, entry in enumerate(entries)}

    @classmethod
    def from_store(cls, store: ArtifactStore) -> "Searcher":
        index, entries = store.load()
        return cls(index, entries)

    def search(self, query: str, *, top_k: int = 10) -> List[SearchResult]:
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        if not query.strip():
            return []
        try:
            matches = self.index.search(query)
        except QueryParseError as exc:
            raise QuerySyntaxError(query, str(exc)) from exc
        if not matches:
            return []

        scores = np.array([match["score"] for match in matches], dtype="float64")
        positions = np.array(
            [self._positions.get(match["ref"], len(self._positions)) for match in matches]
        )
        # Highest score first, equal scores in metadata (collector) order.
        order = np.lexsort((positions, -scores))

        results: List[SearchResult] = []
        for pos in order[:top_k]:
            slug = matches[pos]["ref"]
            entry = self.entries.get(slug)
            results.append(
                SearchResult(
                    slug=slug,
                    title=entry.title if entry else slug,
                    category=entry.category if entry else "",
                    snippet=entry.snippet if entry else "",
                    score=float(scores[pos]),
                )
            )
        return results
