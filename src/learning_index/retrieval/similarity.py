"""
Exact cosine-similarity ranking.

LinearScanIndex scores every candidate against the query. That is
linear in the candidate count, which is fine for the few thousand
documents this index is sized for. It implements the SimilarityIndex
protocol, so an approximate index can replace it without touching the
store or its callers.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from learning_index.core import ScoredDocument
from learning_index.retrieval.document import Document
from learning_index.retrieval.filters import MetadataFilter


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 instead of NaN when either vector has zero magnitude
    or the lengths differ.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(a, b) / (norm_a * norm_b))
    if not math.isfinite(score):
        return 0.0
    return score


class LinearScanIndex:
    """Ranks candidates by cosine similarity with a full scan."""

    def score(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
    ) -> list[ScoredDocument]:
        """Score every candidate, keeping candidate order."""
        return [
            ScoredDocument(document=doc, score=cosine_similarity(query, doc.embedding))
            for doc in candidates
        ]

    def _rank_scored(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
    ) -> list[ScoredDocument]:
        # sorted() is stable: equal scores keep insertion order.
        return sorted(self.score(query, candidates), key=lambda s: s.score, reverse=True)

    def rank(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
    ) -> list[Document]:
        """Order candidates by descending similarity."""
        return [scored.document for scored in self._rank_scored(query, candidates)]

    def search_scored(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
        metadata_filter: MetadataFilter | None = None,
        limit: int = 5,
    ) -> list[ScoredDocument]:
        """Filter, then rank, then truncate to `limit`."""
        if limit <= 0:
            return []

        # Non-matches are dropped before scoring, whatever their similarity.
        if metadata_filter is not None:
            candidates = [doc for doc in candidates if metadata_filter.matches(doc)]

        return self._rank_scored(query, candidates)[:limit]

    def search(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
        metadata_filter: MetadataFilter | None = None,
        limit: int = 5,
    ) -> list[Document]:
        """Filter, rank and truncate; documents only."""
        return [
            scored.document
            for scored in self.search_scored(query, candidates, metadata_filter, limit)
        ]
