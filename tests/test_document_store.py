"""
Unit Tests for DocumentStore

Tests insertion, search, snapshots, seeding and concurrent writes.

PATTERNS:
---------
1. Keyword-based mock embeddings for predictable ranking
2. Local hashing embeddings for end-to-end scenarios (no network)
3. Thread pools to exercise the append lock
"""

import dataclasses
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import numpy as np
import pytest

from learning_index.config import IndexConfig
from learning_index.embeddings import FallbackEmbeddings, HashingEmbeddings
from learning_index.errors import DimensionMismatchError, DuplicateIdError
from learning_index.retrieval import (
    DocumentDraft,
    DocumentMetadata,
    DocumentStore,
    MetadataFilter,
    create_document_store,
    get_default_documents,
)


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_embeddings():
    """Create mock embeddings provider with 3-dimensional vectors."""
    embeddings = MagicMock()
    embeddings.dimensions = 3

    def mock_embed(text):
        if "python" in text.lower():
            return np.array([1.0, 0.0, 0.0])
        elif "react" in text.lower():
            return np.array([0.0, 1.0, 0.0])
        else:
            return np.array([0.0, 0.0, 1.0])

    embeddings.embed.side_effect = mock_embed
    return embeddings


def meta(difficulty="beginner", kind="tutorial", tags=(), owner_id=None):
    return DocumentMetadata(kind=kind, difficulty=difficulty, tags=tags, owner_id=owner_id)


@pytest.fixture
def store(mock_embeddings):
    return DocumentStore(mock_embeddings)


@pytest.fixture
def store_with_docs(store):
    store.insert("python basics", meta("beginner", tags=["python"]), doc_id="py")
    store.insert("react components", meta("intermediate", tags=["react"]), doc_id="react")
    store.insert("machine learning", meta("advanced", kind="roadmap", tags=["ml"]), doc_id="ml")
    return store


@pytest.fixture
def local_store():
    """Store on local hashing embeddings, no seeds."""
    return DocumentStore(FallbackEmbeddings(dimensions=384))


# ---------------------------------------------------------------------------
# INSERT
# ---------------------------------------------------------------------------


class TestInsert:

    def test_insert_returns_embedded_document(self, store):
        doc = store.insert("python basics", meta(tags=["python"]), doc_id="py")

        assert doc.id == "py"
        assert doc.content == "python basics"
        assert doc.embedding.shape == (3,)
        assert doc.metadata.tags == frozenset({"python"})
        assert len(store) == 1

    def test_generated_ids_are_unique(self, store):
        ids = {store.insert(f"doc {i}", meta()).id for i in range(20)}

        assert len(ids) == 20

    def test_duplicate_id_rejected_and_store_unchanged(self, store, mock_embeddings):
        store.insert("python basics", meta(), doc_id="dup")
        calls_before = mock_embeddings.embed.call_count

        with pytest.raises(DuplicateIdError) as exc_info:
            store.insert("react components", meta(), doc_id="dup")

        assert exc_info.value.doc_id == "dup"
        assert len(store) == 1
        assert store.get("dup").content == "python basics"
        assert mock_embeddings.embed.call_count == calls_before

    def test_insert_many_in_order(self, store):
        docs = store.insert_many([
            DocumentDraft(content="a", metadata=meta(), id="a"),
            DocumentDraft(content="b", metadata=meta(), id="b"),
        ])

        assert [d.id for d in docs] == ["a", "b"]
        assert [d.id for d in store.all_documents()] == ["a", "b"]

    def test_tags_are_collapsed(self):
        metadata = meta(tags=["python", "python", "web"])

        assert metadata.tags == frozenset({"python", "web"})

    def test_missing_tags_become_empty(self):
        metadata = meta(tags=None)

        assert metadata.tags == frozenset()

    def test_unreachable_primary_still_inserts(self):
        primary = MagicMock()
        primary.dimensions = 8
        primary.embed.side_effect = TimeoutError("slow")
        store = DocumentStore(FallbackEmbeddings(primary=primary, fallback=HashingEmbeddings(8)))

        doc = store.insert("python", meta(), doc_id="py")

        assert np.array_equal(doc.embedding, HashingEmbeddings(8).embed("python"))
        assert store.search("python")[0].id == "py"

    def test_provider_dimension_disagreement_rejected(self, mock_embeddings):
        with pytest.raises(ValueError):
            DocumentStore(mock_embeddings, dimensions=384)

    def test_wrong_length_embedding_rejected(self, mock_embeddings):
        mock_embeddings.embed.side_effect = lambda text: np.ones(2)
        store = DocumentStore(mock_embeddings)

        with pytest.raises(DimensionMismatchError):
            store.insert("anything", meta())
        assert len(store) == 0

    def test_every_document_has_store_dimensions(self, local_store):
        for text in ["", "python", "react components and hooks"]:
            local_store.insert(text, meta())

        assert all(doc.embedding.shape == (384,) for doc in local_store.all_documents())


# ---------------------------------------------------------------------------
# IMMUTABILITY AND SNAPSHOTS
# ---------------------------------------------------------------------------


class TestSnapshots:

    def test_all_documents_is_a_tuple_snapshot(self, store_with_docs):
        snapshot = store_with_docs.all_documents()

        store_with_docs.insert("python again", meta(), doc_id="later")

        assert isinstance(snapshot, tuple)
        assert [d.id for d in snapshot] == ["py", "react", "ml"]
        assert len(store_with_docs.all_documents()) == 4

    def test_documents_are_frozen(self, store_with_docs):
        doc = store_with_docs.get("py")

        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.content = "changed"

    def test_embeddings_are_read_only(self, store_with_docs):
        doc = store_with_docs.get("py")

        with pytest.raises(ValueError):
            doc.embedding[0] = 42.0

    def test_to_dict_omits_embedding(self, store_with_docs):
        data = store_with_docs.get("ml").to_dict()

        assert data["id"] == "ml"
        assert "embedding" not in data
        assert data["metadata"]["difficulty"] == "advanced"
        assert data["metadata"]["tags"] == ["ml"]


# ---------------------------------------------------------------------------
# SEARCH
# ---------------------------------------------------------------------------


class TestSearch:

    def test_most_similar_first(self, store_with_docs):
        results = store_with_docs.search("python tutorial", limit=3)

        assert results[0].id == "py"

    def test_respects_limit(self, store_with_docs):
        assert len(store_with_docs.search("anything", limit=1)) == 1

    def test_default_limit(self, mock_embeddings):
        store = DocumentStore(mock_embeddings, default_limit=2)
        for i in range(4):
            store.insert(f"doc {i}", meta())

        assert len(store.search("doc")) == 2

    def test_filter_applies_before_ranking(self, store_with_docs):
        results = store_with_docs.search(
            "python", metadata_filter=MetadataFilter(difficulty="advanced"), limit=5
        )

        assert [d.id for d in results] == ["ml"]

    def test_search_empty_store(self, store):
        assert store.search("anything", limit=5) == []

    def test_scores_non_increasing(self, store_with_docs):
        scored = store_with_docs.search_scored("python", limit=10)
        scores = [s.score for s in scored]

        assert scores == sorted(scores, reverse=True)
        assert scored[0].score == pytest.approx(1.0)

    def test_learn_python_scenario(self, local_store):
        """Local embeddings rank lexical overlap first; filters are metadata-only."""
        local_store.insert("python basics", meta("beginner"))
        local_store.insert("react components", meta("intermediate"))
        local_store.insert("machine learning", meta("advanced"))

        top = local_store.search("learn python", limit=2)
        advanced = local_store.search(
            "learn python", metadata_filter=MetadataFilter(difficulty="advanced"), limit=2
        )

        assert len(top) == 2
        assert top[0].content == "python basics"
        assert [d.content for d in advanced] == ["machine learning"]


# ---------------------------------------------------------------------------
# REMOVE / CLEAR
# ---------------------------------------------------------------------------


class TestRemoveAndClear:

    def test_remove_then_reinsert(self, store_with_docs):
        assert store_with_docs.remove("py") is True
        assert store_with_docs.get("py") is None

        store_with_docs.insert("python advanced", meta("advanced"), doc_id="py")

        assert store_with_docs.get("py").content == "python advanced"

    def test_remove_missing(self, store):
        assert store.remove("nope") is False

    def test_clear(self, store_with_docs):
        store_with_docs.clear()

        assert store_with_docs.all_documents() == ()
        assert store_with_docs.search("python") == []


# ---------------------------------------------------------------------------
# SEEDING
# ---------------------------------------------------------------------------


class TestSeeding:

    @pytest.fixture
    def seeded_store(self):
        return DocumentStore(
            HashingEmbeddings(64), seed_documents=get_default_documents()
        )

    def test_seeds_on_first_use(self, seeded_store):
        ids = [d.id for d in seeded_store.all_documents()]

        assert ids == [
            "web-dev-basics",
            "react-basics",
            "nodejs-backend",
            "python-basics",
            "machine-learning",
        ]

    def test_repeated_access_does_not_reseed(self, seeded_store):
        assert len(seeded_store) == 5
        assert len(seeded_store) == 5
        assert seeded_store.seed_defaults() == 0
        assert len(seeded_store.all_documents()) == 5

    def test_explicit_seed_is_idempotent(self, seeded_store):
        assert seeded_store.seed_defaults() == 5
        assert seeded_store.seed_defaults() == 0

    def test_insert_adds_to_seeds(self, seeded_store):
        seeded_store.insert("rust ownership", meta("advanced"), doc_id="rust")

        assert len(seeded_store) == 6

    def test_clear_does_not_reseed(self, seeded_store):
        seeded_store.clear()

        assert len(seeded_store) == 0

    def test_clear_before_first_use_skips_seeding(self):
        store = DocumentStore(HashingEmbeddings(64), seed_documents=get_default_documents())

        store.clear()

        assert len(store) == 0

    def test_duplicate_seed_skipped(self):
        draft = DocumentDraft(content="python", metadata=meta(), id="same")
        store = DocumentStore(HashingEmbeddings(64), seed_documents=[draft, draft])

        assert len(store) == 1

    def test_seed_failure_does_not_crash(self, mock_embeddings):
        mock_embeddings.embed.side_effect = lambda text: np.ones(2)
        store = DocumentStore(mock_embeddings, seed_documents=get_default_documents())

        assert store.all_documents() == ()

    def test_concurrent_first_use_seeds_once(self):
        store = DocumentStore(HashingEmbeddings(64), seed_documents=get_default_documents())

        with ThreadPoolExecutor(max_workers=8) as pool:
            sizes = list(pool.map(lambda _: len(store), range(16)))

        assert all(size <= 5 for size in sizes)
        ids = [d.id for d in store.all_documents()]
        assert len(ids) == 5
        assert len(set(ids)) == 5

    def test_seed_provider_exception_does_not_crash(self, mock_embeddings):
        mock_embeddings.embed.side_effect = RuntimeError("provider exploded")
        store = DocumentStore(mock_embeddings, seed_documents=get_default_documents())

        assert store.all_documents() == ()
        assert store.seed_defaults() == 0

    def test_readers_do_not_wait_for_slow_seeding(self):
        """Seeding over a slow provider never blocks snapshot reads."""
        started = threading.Event()

        def slow_embed(text):
            started.set()
            time.sleep(0.2)
            return np.ones(8, dtype=np.float32)

        primary = MagicMock()
        primary.dimensions = 8
        primary.embed.side_effect = slow_embed
        store = DocumentStore(
            FallbackEmbeddings(primary=primary, fallback=HashingEmbeddings(8)),
            seed_documents=get_default_documents(),
        )

        seeder = threading.Thread(target=store.seed_defaults)
        seeder.start()
        assert started.wait(timeout=2.0)

        began = time.monotonic()
        snapshot = store.all_documents()
        waited = time.monotonic() - began
        seeder.join()

        assert waited < 0.15
        assert len(snapshot) < 5
        assert len(store) == 5


# ---------------------------------------------------------------------------
# CONCURRENCY
# ---------------------------------------------------------------------------


class TestConcurrentInserts:

    def test_no_lost_inserts(self, local_store):
        with ThreadPoolExecutor(max_workers=8) as pool:
            docs = list(
                pool.map(lambda i: local_store.insert(f"document {i}", meta()), range(200))
            )

        stored = local_store.all_documents()
        assert len(stored) == 200
        assert {d.id for d in stored} == {d.id for d in docs}

    def test_same_id_inserted_once(self, local_store):
        def attempt(i):
            try:
                local_store.insert(f"attempt {i}", meta(), doc_id="contested")
                return True
            except DuplicateIdError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(attempt, range(20)))

        assert outcomes.count(True) == 1
        assert len(local_store) == 1


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


class TestCreateDocumentStore:

    def test_seeds_defaults(self):
        config = IndexConfig(embedding_dim=64, use_remote_embeddings=False)

        store = create_document_store(config)

        assert store.dimensions == 64
        assert len(store) == 5

    def test_seeding_disabled(self):
        config = IndexConfig(embedding_dim=64, use_remote_embeddings=False, seed_defaults=False)

        assert len(create_document_store(config)) == 0

    def test_two_stores_are_independent(self):
        config = IndexConfig(embedding_dim=64, use_remote_embeddings=False)
        first = create_document_store(config)
        second = create_document_store(config)

        first.insert("only in first", meta(), doc_id="first-only")

        assert len(first) == 6
        assert len(second) == 5

    def test_injected_embeddings_must_match_config(self, mock_embeddings):
        with pytest.raises(ValueError):
            create_document_store(IndexConfig(embedding_dim=64), embeddings=mock_embeddings)
