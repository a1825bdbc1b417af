"""
Unit Tests for Embeddings

Tests the word-vector providers and the averaging Embedder.

PATTERNS:
---------
1. Test through the WordVectorProvider protocol
2. Mock providers instead of loading a real model
3. Real file loading exercised with small tmp_path fixtures
"""

import numpy as np
import pytest
from unittest.mock import MagicMock

from commit_rag.core.errors import EmbeddingModelUnavailableError
from commit_rag.core.protocols import WordVectorProvider
from commit_rag.embeddings import (
    Embedder,
    KeyedVectorsProvider,
    MockWordVectors,
    get_word_vector_provider,
    tokenize,
)


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def provider():
    """Small explicit vocabulary."""
    return MockWordVectors(
        {
            "cat": [1.0, 0.0],
            "dog": [0.0, 1.0],
            "pet": [1.0, 1.0],
        }
    )


@pytest.fixture
def glove_file(tmp_path):
    """GloVe-style text file without header."""
    path = tmp_path / "vectors.txt"
    path.write_text(
        "the 0.1 0.2 0.3\n"
        "cat 1.0 0.0 0.0\n"
        "dog 0.0 1.0 0.0\n",
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# TOKENIZATION
# ---------------------------------------------------------------------------


class TestTokenize:
    """Test whitespace tokenization."""

    def test_splits_on_spaces_and_newlines(self):
        assert tokenize("git diff\nsrc/main.py\tchanged") == [
            "git",
            "diff",
            "src/main.py",
            "changed",
        ]

    def test_consecutive_separators_produce_no_empty_tokens(self):
        assert tokenize("a   b\n\n c") == ["a", "b", "c"]

    def test_empty_text(self):
        assert tokenize("") == []


# ---------------------------------------------------------------------------
# EMBEDDER
# ---------------------------------------------------------------------------


class TestEmbedder:
    """Test word-vector averaging."""

    def test_missing_provider_is_fatal(self):
        with pytest.raises(EmbeddingModelUnavailableError):
            Embedder(None)

    def test_single_known_token(self, provider):
        embedder = Embedder(provider)

        np.testing.assert_array_equal(embedder.embed("cat"), [1.0, 0.0])

    def test_average_of_known_tokens(self, provider):
        embedder = Embedder(provider)

        np.testing.assert_allclose(embedder.embed("cat dog"), [0.5, 0.5])

    def test_unknown_tokens_are_skipped_not_zero_filled(self, provider):
        embedder = Embedder(provider)

        # "the" and "sat" are unknown; the result is cat's vector, not diluted
        np.testing.assert_array_equal(embedder.embed("the cat sat"), [1.0, 0.0])

    def test_no_known_tokens_gives_empty_vector(self, provider):
        embedder = Embedder(provider)

        assert embedder.embed("quantum entanglement").size == 0

    def test_empty_text_gives_empty_vector(self, provider):
        embedder = Embedder(provider)

        assert embedder.embed("").size == 0

    def test_looks_up_every_token(self):
        lookup_provider = MagicMock()
        lookup_provider.lookup.return_value = None
        embedder = Embedder(lookup_provider)

        embedder.embed("one two\nthree")

        assert [c.args[0] for c in lookup_provider.lookup.call_args_list] == [
            "one",
            "two",
            "three",
        ]


# ---------------------------------------------------------------------------
# MOCK PROVIDER
# ---------------------------------------------------------------------------


class TestMockWordVectors:
    """Test the mock provider."""

    def test_implements_protocol(self):
        assert isinstance(MockWordVectors(), WordVectorProvider)

    def test_explicit_mapping_returns_none_for_unknown(self, provider):
        assert provider.lookup("unknown") is None

    def test_hash_vectors_are_deterministic(self):
        a = MockWordVectors(dimensions=16)
        b = MockWordVectors(dimensions=16)

        np.testing.assert_array_equal(a.lookup("commit"), b.lookup("commit"))

    def test_hash_vectors_have_requested_dimensions(self):
        mock = MockWordVectors(dimensions=50)

        assert mock.lookup("diff").shape == (50,)
        assert mock.dimensions == 50

    def test_hash_vectors_differ_per_token(self):
        mock = MockWordVectors()

        assert not np.array_equal(mock.lookup("cat"), mock.lookup("dog"))

    def test_hash_mode_has_no_vector_for_empty_token(self):
        assert MockWordVectors().lookup("") is None


# ---------------------------------------------------------------------------
# KEYED VECTORS PROVIDER
# ---------------------------------------------------------------------------


class TestKeyedVectorsProvider:
    """Test loading pretrained vectors from text files."""

    def test_loads_glove_format(self, glove_file):
        provider = KeyedVectorsProvider.from_file(glove_file)

        assert len(provider) == 3
        assert provider.dimensions == 3
        np.testing.assert_array_equal(provider.lookup("cat"), [1.0, 0.0, 0.0])

    def test_skips_word2vec_header(self, tmp_path):
        path = tmp_path / "w2v.txt"
        path.write_text("2 2\ncat 1.0 0.0\ndog 0.0 1.0\n", encoding="utf-8")

        provider = KeyedVectorsProvider.from_file(path)

        assert len(provider) == 2
        assert provider.lookup("2") is None

    def test_skips_lines_with_wrong_dimension(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("cat 1.0 0.0\nbroken 1.0\ndog 0.0 1.0\n", encoding="utf-8")

        provider = KeyedVectorsProvider.from_file(path)

        assert provider.lookup("broken") is None
        assert provider.lookup("dog") is not None

    def test_skips_lines_with_nan_or_inf(self, tmp_path):
        path = tmp_path / "nonfinite.txt"
        path.write_text("cat 1.0 0.0\nnan_word nan 1.0\ninf_word inf 0.0\ndog 0.0 1.0\n", encoding="utf-8")

        provider = KeyedVectorsProvider.from_file(path)

        assert provider.lookup("nan_word") is None
        assert provider.lookup("inf_word") is None
        assert len(provider) == 2

    def test_lowercase_fallback(self, glove_file):
        provider = KeyedVectorsProvider.from_file(glove_file)

        np.testing.assert_array_equal(provider.lookup("Cat"), provider.lookup("cat"))

    def test_lowercase_fallback_can_be_disabled(self, glove_file):
        provider = KeyedVectorsProvider.from_file(glove_file, lowercase_fallback=False)

        assert provider.lookup("Cat") is None

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(EmbeddingModelUnavailableError):
            KeyedVectorsProvider.from_file(tmp_path / "nope.txt")

    def test_empty_file_is_fatal(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")

        with pytest.raises(EmbeddingModelUnavailableError):
            KeyedVectorsProvider.from_file(path)

    def test_empty_table_is_fatal(self):
        with pytest.raises(EmbeddingModelUnavailableError):
            KeyedVectorsProvider({})


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


class TestGetWordVectorProvider:
    """Test the provider factory."""

    def test_mock(self):
        assert isinstance(get_word_vector_provider(use_mock=True), MockWordVectors)

    def test_real_with_path(self, glove_file):
        provider = get_word_vector_provider(path=glove_file)

        assert isinstance(provider, KeyedVectorsProvider)

    def test_real_without_path_is_fatal(self):
        with pytest.raises(EmbeddingModelUnavailableError):
            get_word_vector_provider(use_mock=False, path=None)
