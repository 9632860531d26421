"""
Core protocols defining the contracts between index components.

PATTERN: Protocol -> Implementations -> Factory
- EmbeddingProvider: HashingEmbeddings (local), OpenAIEmbeddings (remote),
  FallbackEmbeddings (remote with local degradation)
- SimilarityIndex: LinearScanIndex (exact cosine ranking)

The store only depends on these protocols, so an approximate index or a
different embedding service can be swapped in without touching callers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from learning_index.retrieval.document import Document
    from learning_index.retrieval.filters import MetadataFilter


# ---------------------------------------------------------------------------
# EMBEDDING PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    Every vector returned must have exactly `dimensions` components.
    """

    @property
    def dimensions(self) -> int:
        """Length of every vector this provider returns."""
        ...

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


# ---------------------------------------------------------------------------
# SIMILARITY INDEX PROTOCOL
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoredDocument:
    """A document paired with its similarity to a query."""

    document: Document
    score: float


@runtime_checkable
class SimilarityIndex(Protocol):
    """
    Contract for ranking candidate documents against a query vector.

    Implementations:
    - LinearScanIndex (exact, linear in the candidate count)
    """

    def rank(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
    ) -> list[Document]:
        """Order candidates by descending similarity to the query."""
        ...

    def search(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
        metadata_filter: MetadataFilter | None = None,
        limit: int = 5,
    ) -> list[Document]:
        """Filter, rank and truncate candidates."""
        ...

    def search_scored(
        self,
        query: np.ndarray,
        candidates: Sequence[Document],
        metadata_filter: MetadataFilter | None = None,
        limit: int = 5,
    ) -> list[ScoredDocument]:
        """Same as search, keeping the similarity scores."""
        ...
