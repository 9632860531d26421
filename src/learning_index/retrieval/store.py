"""
In-memory document store.

Pattern: Protocol -> Implementation -> Factory

The store owns the document collection and is the only way to mutate
or query it. It is an explicit object: the application builds one with
create_document_store() at startup and passes it to whoever needs it.

CONCURRENCY:
------------
- Embeddings are computed outside any lock (the remote provider may
  block on the network).
- A single lock guards the duplicate check + append, remove and clear.
- Readers copy the collection into a tuple under the lock and work on
  that snapshot, so they never see a half-built document.
- Default content is seeded lazily, once per store. One thread seeds
  under a separate seed lock; readers never wait for it.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterable

import numpy as np

from learning_index.config import IndexConfig, get_config
from learning_index.core import EmbeddingProvider, ScoredDocument, SimilarityIndex
from learning_index.errors import DimensionMismatchError, DuplicateIdError
from learning_index.retrieval.document import Document, DocumentDraft, DocumentMetadata
from learning_index.retrieval.filters import MetadataFilter
from learning_index.retrieval.seeds import get_default_documents
from learning_index.retrieval.similarity import LinearScanIndex

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Append-only collection of embedded documents with similarity search.

    Dependencies are INJECTED, not created internally.

    Args:
        embeddings: Provider used for documents and queries
        dimensions: Expected vector length; must match the provider
        index: Ranking strategy (LinearScanIndex by default)
        seed_documents: Content inserted once, on first use
        default_limit: Result count when search() gets no limit
    """

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        dimensions: int | None = None,
        index: SimilarityIndex | None = None,
        seed_documents: Iterable[DocumentDraft] | None = None,
        default_limit: int = 5,
    ):
        if dimensions is not None and dimensions != embeddings.dimensions:
            raise ValueError(
                f"Store expects {dimensions} dimensions but the embedding "
                f"provider yields {embeddings.dimensions}"
            )
        self._embeddings = embeddings
        self._dimensions = embeddings.dimensions
        self._index = index or LinearScanIndex()
        self.default_limit = default_limit

        self._documents: list[Document] = []
        self._ids: set[str] = set()
        self._lock = threading.Lock()

        self._seed_documents = list(seed_documents or [])
        self._seed_lock = threading.Lock()
        self._seeded = not self._seed_documents

    @property
    def dimensions(self) -> int:
        return self._dimensions

    # -----------------------------------------------------------------------
    # SEEDING
    # -----------------------------------------------------------------------

    def seed_defaults(self) -> int:
        """
        Insert the seed documents if that has not happened yet.

        Idempotent: only the first call (explicit, or implied by any other
        operation) inserts anything. Returns the number of documents
        inserted by this call.

        Calls arriving while another thread is seeding return 0 at once and
        work on the current snapshot; seeds become visible one by one.
        """
        if self._seeded:
            return 0
        if not self._seed_lock.acquire(blocking=False):
            return 0

        try:
            if self._seeded:
                return 0
            inserted = 0
            for draft in self._seed_documents:
                try:
                    self._insert(draft.content, draft.metadata, draft.id)
                    inserted += 1
                except Exception as e:
                    logger.warning(f"Skipping seed document {draft.id!r}: {e!r}")
            self._seeded = True
        finally:
            self._seed_lock.release()

        logger.info(f"Seeded {inserted} default documents")
        return inserted

    # -----------------------------------------------------------------------
    # WRITES
    # -----------------------------------------------------------------------

    def _embed(self, text: str) -> np.ndarray:
        vector = np.asarray(self._embeddings.embed(text), dtype=np.float32).ravel()
        if vector.shape[0] != self._dimensions:
            raise DimensionMismatchError(self._dimensions, vector.shape[0])
        return vector

    def _contains(self, doc_id: str) -> bool:
        with self._lock:
            return doc_id in self._ids

    def _insert(
        self,
        content: str,
        metadata: DocumentMetadata,
        doc_id: str | None,
    ) -> Document:
        if doc_id is None:
            doc_id = uuid.uuid4().hex
        elif self._contains(doc_id):
            raise DuplicateIdError(doc_id)

        document = Document(
            id=doc_id,
            content=content,
            embedding=self._embed(content),
            metadata=metadata,
        )

        with self._lock:
            # Re-check: another insert may have claimed the id while we embedded.
            if document.id in self._ids:
                raise DuplicateIdError(document.id)
            self._documents.append(document)
            self._ids.add(document.id)

        logger.debug(f"Inserted document {document.id!r} ({document.metadata.kind.value})")
        return document

    def insert(
        self,
        content: str,
        metadata: DocumentMetadata,
        doc_id: str | None = None,
    ) -> Document:
        """
        Embed content and append it as a new document.

        Raises:
            DuplicateIdError: doc_id is already in the store (store unchanged)
        """
        self.seed_defaults()
        return self._insert(content, metadata, doc_id)

    def insert_many(self, drafts: Iterable[DocumentDraft]) -> list[Document]:
        """Insert drafts in order; stops at the first duplicate id."""
        self.seed_defaults()
        return [self._insert(d.content, d.metadata, d.id) for d in drafts]

    def remove(self, doc_id: str) -> bool:
        """Remove a document by id. Returns False if it was not present."""
        self.seed_defaults()
        with self._lock:
            if doc_id not in self._ids:
                return False
            self._documents = [doc for doc in self._documents if doc.id != doc_id]
            self._ids.discard(doc_id)
        logger.debug(f"Removed document {doc_id!r}")
        return True

    def clear(self) -> None:
        """Remove all documents. Seed content is not re-inserted afterwards."""
        with self._seed_lock:
            self._seeded = True
            with self._lock:
                self._documents = []
                self._ids = set()

    # -----------------------------------------------------------------------
    # READS
    # -----------------------------------------------------------------------

    def all_documents(self) -> tuple[Document, ...]:
        """Point-in-time, read-only snapshot of every document."""
        self.seed_defaults()
        with self._lock:
            return tuple(self._documents)

    def get(self, doc_id: str) -> Document | None:
        for doc in self.all_documents():
            if doc.id == doc_id:
                return doc
        return None

    def __len__(self) -> int:
        return len(self.all_documents())

    def search_scored(
        self,
        query_text: str,
        metadata_filter: MetadataFilter | None = None,
        limit: int | None = None,
    ) -> list[ScoredDocument]:
        """Search returning documents with their similarity scores."""
        limit = self.default_limit if limit is None else limit
        query_embedding = self._embed(query_text)
        results = self._index.search_scored(
            query_embedding,
            self.all_documents(),
            metadata_filter=metadata_filter,
            limit=limit,
        )
        logger.debug(f"Search returned {len(results)} results (limit={limit})")
        return results

    def search(
        self,
        query_text: str,
        metadata_filter: MetadataFilter | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        """Documents most similar to the query text, best first."""
        return [
            scored.document
            for scored in self.search_scored(query_text, metadata_filter, limit)
        ]


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def create_document_store(
    config: IndexConfig | None = None,
    embeddings: EmbeddingProvider | None = None,
) -> DocumentStore:
    """
    Build the application's document store.

    Call once at startup and pass the result to consumers.

    Args:
        config: Settings (loaded from the environment if not provided)
        embeddings: Embedding provider (built from config if not provided)
    """
    config = config or get_config()

    if embeddings is None:
        from learning_index.embeddings import get_embedding_provider

        embeddings = get_embedding_provider(config)

    seeds = get_default_documents() if config.seed_defaults else []
    return DocumentStore(
        embeddings,
        dimensions=config.embedding_dim,
        seed_documents=seeds,
        default_limit=config.default_limit,
    )
