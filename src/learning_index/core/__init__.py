"""
Core module - shared protocols for the learning index.

USAGE:
------
from learning_index.core import EmbeddingProvider, SimilarityIndex

class MyEmbeddings:
    '''Implements EmbeddingProvider protocol.'''
    ...
"""

from learning_index.core.protocols import (
    EmbeddingProvider,
    ScoredDocument,
    SimilarityIndex,
)

__all__ = [
    "EmbeddingProvider",
    "ScoredDocument",
    "SimilarityIndex",
]
