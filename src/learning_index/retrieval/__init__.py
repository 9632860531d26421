"""
Retrieval module - the document store and similarity search.

This module provides:
- Document, DocumentMetadata, DocumentDraft: the document model
- MetadataFilter: predicates applied before ranking
- LinearScanIndex, cosine_similarity: exact ranking
- DocumentStore, create_document_store(): the store and its factory
- get_default_documents(): seed content
"""

from learning_index.retrieval.document import (
    Difficulty,
    Document,
    DocumentDraft,
    DocumentKind,
    DocumentMetadata,
)
from learning_index.retrieval.filters import MetadataFilter
from learning_index.retrieval.seeds import get_default_documents
from learning_index.retrieval.similarity import LinearScanIndex, cosine_similarity
from learning_index.retrieval.store import DocumentStore, create_document_store

__all__ = [
    # Document
    "Difficulty",
    "Document",
    "DocumentDraft",
    "DocumentKind",
    "DocumentMetadata",
    # Search
    "LinearScanIndex",
    "MetadataFilter",
    "cosine_similarity",
    # Store
    "DocumentStore",
    "create_document_store",
    # Seeds
    "get_default_documents",
]
