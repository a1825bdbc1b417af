"""
Unit Tests for Retrieval Store and Retriever

Tests DocumentStore ingestion and Retriever ranking.

PATTERNS:
---------
1. Mock word vectors to avoid loading a model
2. Verify search behavior, ranking and tie-breaking
3. Cover the no-signal edge cases explicitly
"""

import threading

import numpy as np
import pytest

from commit_rag.core.errors import DocumentAlreadyIngestedError
from commit_rag.embeddings import Embedder, MockWordVectors
from commit_rag.retrieval import (
    NO_SIGNAL_SCORE,
    Document,
    DocumentStore,
    Retriever,
)


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def embedder():
    """Embedder over a tiny 3-d vocabulary."""
    return Embedder(
        MockWordVectors(
            {
                "fix": [1.0, 0.0, 0.0],
                "bugfix": [0.9, 0.1, 0.0],
                "docs": [0.0, 1.0, 0.0],
                "readme": [0.1, 0.9, 0.0],
                "refactor": [0.0, 0.0, 1.0],
                "revert": [-1.0, 0.0, 0.0],
            }
        )
    )


@pytest.fixture
def store(embedder):
    return DocumentStore(embedder)


@pytest.fixture
def store_with_docs(store):
    """Create a store with test documents."""
    store.append(Document(id="fix-login", content="fix bugfix login"))
    store.append(Document(id="docs-readme", content="docs readme update"))
    store.append(Document(id="refactor-cli", content="refactor cleanup"))
    return store


# ---------------------------------------------------------------------------
# DOCUMENT MODEL
# ---------------------------------------------------------------------------


class TestDocument:
    """Test Document dataclass."""

    def test_document_creation_with_required_fields(self):
        doc = Document(id="git diff", content="git diff, +added line")

        assert doc.id == "git diff"
        assert doc.content == "git diff, +added line"

    def test_document_default_fields(self):
        doc = Document(id="a", content="b")

        assert doc.embedding is None
        assert doc.has_signal is False

    def test_empty_embedding_has_no_signal(self):
        doc = Document(id="a", content="b", embedding=np.empty(0))

        assert doc.has_signal is False

    def test_documents_with_same_id_are_distinct(self):
        assert Document(id="x", content="y") != Document(id="x", content="y")


# ---------------------------------------------------------------------------
# DOCUMENT STORE
# ---------------------------------------------------------------------------


class TestDocumentStore:
    """Test DocumentStore basic operations."""

    def test_empty_store(self, store):
        assert len(store) == 0
        assert store.all() == ()

    def test_append_computes_embedding(self, store):
        doc = store.append(Document(id="d", content="fix"))

        np.testing.assert_array_equal(doc.embedding, [1.0, 0.0, 0.0])

    def test_append_preserves_insertion_order(self, store_with_docs):
        assert [d.id for d in store_with_docs.all()] == [
            "fix-login",
            "docs-readme",
            "refactor-cli",
        ]

    def test_duplicate_ids_are_kept(self, store):
        store.append(Document(id="same", content="fix"))
        store.append(Document(id="same", content="readme"))

        assert len(store) == 2

    def test_document_without_known_tokens_is_still_appended(self, store):
        doc = store.append(Document(id="unknown", content="quantum entanglement"))

        assert len(store) == 1
        assert doc.embedding is not None
        assert doc.embedding.size == 0

    def test_reingesting_a_document_is_rejected(self, store):
        doc = store.append(Document(id="d", content="fix"))

        with pytest.raises(DocumentAlreadyIngestedError):
            store.append(doc)
        assert len(store) == 1

    def test_all_returns_snapshot(self, store_with_docs):
        snapshot = store_with_docs.all()
        store_with_docs.append(Document(id="late", content="readme"))

        assert len(snapshot) == 3
        assert len(store_with_docs) == 4

    def test_extend(self, store):
        store.extend([Document(id="a", content="fix"), Document(id="b", content="readme")])

        assert [d.id for d in store] == ["a", "b"]

    def test_concurrent_appends_are_all_stored(self, store):
        def worker(n):
            for i in range(50):
                store.append(Document(id=f"{n}-{i}", content="fix readme"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 200


# ---------------------------------------------------------------------------
# SEARCH
# ---------------------------------------------------------------------------


class TestRetrieverSearch:
    """Test Retriever.search."""

    def test_search_empty_store(self, store):
        retriever = Retriever(store)

        assert retriever.search("fix", limit=5) == []

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_returns_empty(self, store_with_docs, limit):
        assert Retriever(store_with_docs).search("fix", limit=limit) == []

    def test_search_respects_limit(self, store_with_docs):
        assert len(Retriever(store_with_docs).search("fix", limit=1)) == 1

    def test_default_limit_is_three(self, store_with_docs):
        store_with_docs.append(Document(id="extra", content="readme"))

        assert len(Retriever(store_with_docs).search("fix")) == 3

    def test_limit_larger_than_store_returns_all_ranked(self, store_with_docs):
        results = Retriever(store_with_docs).search("docs", limit=10)

        assert [d.id for d in results] == ["docs-readme", "fix-login", "refactor-cli"]

    def test_most_similar_first(self, store_with_docs):
        results = Retriever(store_with_docs).search("bugfix", limit=3)

        assert results[0].id == "fix-login"

    def test_scores_are_descending(self, store_with_docs):
        scored = Retriever(store_with_docs).search_scored("fix readme", limit=3)

        scores = [s.score for s in scored]
        assert scores == sorted(scores, reverse=True)

    def test_search_returns_stored_documents(self, store_with_docs):
        results = Retriever(store_with_docs).search("fix", limit=1)

        assert results[0] is store_with_docs.all()[0]


# ---------------------------------------------------------------------------
# TIE-BREAKING AND NO-SIGNAL DOCUMENTS
# ---------------------------------------------------------------------------


class TestRankingEdgeCases:
    """Stable ordering and explicit handling of missing embeddings."""

    def test_ties_keep_insertion_order(self, store):
        for name in ("first", "second", "third"):
            store.append(Document(id=name, content="fix"))

        results = Retriever(store).search("fix", limit=3)

        assert [d.id for d in results] == ["first", "second", "third"]

    def test_query_without_known_tokens_uses_store_order(self, store_with_docs):
        results = Retriever(store_with_docs).search("quantum physics", limit=3)

        assert [d.id for d in results] == ["fix-login", "docs-readme", "refactor-cli"]

    def test_no_signal_document_ranks_last(self, store):
        store.append(Document(id="empty", content="unknown words only"))
        store.append(Document(id="opposite", content="revert"))
        store.append(Document(id="match", content="fix"))

        results = Retriever(store).search("fix", limit=3)

        # Even a negatively similar document beats one with no signal
        assert [d.id for d in results] == ["match", "opposite", "empty"]

    def test_no_signal_score_is_negative_infinity(self, store):
        store.append(Document(id="empty", content="nothing known"))

        scored = Retriever(store).search_scored("fix", limit=1)

        assert scored[0].score == NO_SIGNAL_SCORE

    def test_absent_embedding_sorts_last_without_error(self, store_with_docs):
        # Bypass append to simulate a document that was never embedded
        store_with_docs._documents.insert(0, Document(id="raw", content="fix"))

        results = Retriever(store_with_docs).search("fix", limit=4)

        assert results[-1].id == "raw"

    def test_mismatched_dimension_scores_zero(self, store_with_docs):
        store_with_docs._documents.append(
            Document(id="other-model", content="x", embedding=np.ones(5))
        )

        scored = Retriever(store_with_docs).search_scored("fix", limit=4)
        by_id = {s.id: s.score for s in scored}

        assert by_id["other-model"] == 0.0

    def test_huge_embedding_ranks_as_parallel(self):
        store = DocumentStore(
            Embedder(MockWordVectors({"neg": [-1.0, 0.0], "big": [1e200, 0.0], "small": [1.0, 0.0]}))
        )
        for word in ("neg", "big", "small"):
            store.append(Document(id=word, content=word))

        scored = Retriever(store).search_scored("small", limit=3)

        assert [s.id for s in scored] == ["big", "small", "neg"]
        assert scored[0].score == pytest.approx(1.0)
