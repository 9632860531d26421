"""
Embeddings module - text embedding generation.

1. Protocol (EmbeddingProvider, in core) defines the interface
2. Remote implementation (OpenAIEmbeddings)
3. Local deterministic implementation (HashingEmbeddings)
4. Non-failing composition of the two (FallbackEmbeddings)
5. Factory function (get_embedding_provider)
"""

from learning_index.core import EmbeddingProvider
from learning_index.embeddings.fallback import (
    FallbackEmbeddings,
    get_embedding_provider,
)
from learning_index.embeddings.hashing import HashingEmbeddings, tokenize
from learning_index.embeddings.openai_embeddings import OpenAIEmbeddings

__all__ = [
    "EmbeddingProvider",
    "FallbackEmbeddings",
    "HashingEmbeddings",
    "OpenAIEmbeddings",
    "get_embedding_provider",
    "tokenize",
]
