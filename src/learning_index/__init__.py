"""
learning_index - semantic document index for personalized learning content.

Text is embedded into fixed-length vectors (OpenAI when available, a
deterministic local hashing algorithm otherwise), documents are ranked by
cosine similarity with metadata filters applied first, and learning
contexts are turned into top-K recommendations.

USAGE:
------
from learning_index import (
    LearningContext,
    RecommendationAssembler,
    create_document_store,
)

store = create_document_store()
assembler = RecommendationAssembler(store)
docs = assembler.recommend(LearningContext(goals=["build web apps"]), limit=5)
"""

from learning_index.config import IndexConfig, get_config, reset_config
from learning_index.embeddings import (
    FallbackEmbeddings,
    HashingEmbeddings,
    OpenAIEmbeddings,
    get_embedding_provider,
)
from learning_index.errors import (
    DimensionMismatchError,
    DuplicateIdError,
    LearningIndexError,
    ProviderUnavailableError,
)
from learning_index.recommendations import LearningContext, RecommendationAssembler
from learning_index.retrieval import (
    Difficulty,
    Document,
    DocumentDraft,
    DocumentKind,
    DocumentMetadata,
    DocumentStore,
    LinearScanIndex,
    MetadataFilter,
    cosine_similarity,
    create_document_store,
)

__all__ = [
    # Config
    "IndexConfig",
    "get_config",
    "reset_config",
    # Embeddings
    "FallbackEmbeddings",
    "HashingEmbeddings",
    "OpenAIEmbeddings",
    "get_embedding_provider",
    # Errors
    "DimensionMismatchError",
    "DuplicateIdError",
    "LearningIndexError",
    "ProviderUnavailableError",
    # Retrieval
    "Difficulty",
    "Document",
    "DocumentDraft",
    "DocumentKind",
    "DocumentMetadata",
    "DocumentStore",
    "LinearScanIndex",
    "MetadataFilter",
    "cosine_similarity",
    "create_document_store",
    # Recommendations
    "LearningContext",
    "RecommendationAssembler",
]
