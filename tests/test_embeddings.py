from types import SimpleNamespace

import numpy as np
import openai
import pytest

from moviesearch import embeddings
from moviesearch.config import Settings
from moviesearch.embeddings import (
    OpenAIEmbeddingProvider,
    SentenceTransformerEmbeddingProvider,
    as_matrix,
    get_embedding_provider,
)
from moviesearch.errors import ConfigurationError, EmbeddingProviderError

from tests.conftest import make_fake_openai


def test_openai_provider_batches_and_orders_by_index():
    requests = []

    def create(model, input):
        requests.append((model, input))
        # returned out of order on purpose
        return SimpleNamespace(data=[
            SimpleNamespace(index=i, embedding=[float(i), 1.0]) for i in reversed(range(len(input)))
        ])

    provider = OpenAIEmbeddingProvider(make_fake_openai(embed_fn=create), "text-embedding-ada-002")
    matrix = provider.embed_many(["a", "b", "c"])

    assert requests == [("text-embedding-ada-002", ["a", "b", "c"])]
    assert matrix.tolist() == [[0.0, 1.0], [1.0, 1.0], [2.0, 1.0]]
    assert provider.name == "openai:text-embedding-ada-002"


def test_openai_provider_single_embed():
    def create(model, input):
        return SimpleNamespace(data=[SimpleNamespace(index=0, embedding=[0.5, 0.25])])

    provider = OpenAIEmbeddingProvider(make_fake_openai(embed_fn=create), "m")
    assert provider.embed("hello").tolist() == [0.5, 0.25]


def test_openai_provider_wraps_sdk_errors():
    def create(model, input):
        raise openai.OpenAIError("quota exceeded")

    provider = OpenAIEmbeddingProvider(make_fake_openai(embed_fn=create), "m")
    with pytest.raises(EmbeddingProviderError) as exc_info:
        provider.embed("hello")
    assert isinstance(exc_info.value.__cause__, openai.OpenAIError)


def test_openai_provider_empty_batch_makes_no_request():
    def create(model, input):
        raise AssertionError("should not be called")

    provider = OpenAIEmbeddingProvider(make_fake_openai(embed_fn=create), "m")
    assert provider.embed_many([]).shape == (0, 0)


class FakeSentenceModel:
    def encode(self, texts, show_progress_bar=False):
        return np.array([[len(t), 1.0] for t in texts])


def test_sentence_transformer_provider_uses_cached_model(monkeypatch):
    monkeypatch.setitem(embeddings._sentence_models, "fake-model", FakeSentenceModel())
    provider = SentenceTransformerEmbeddingProvider("fake-model")
    assert provider.embed("abc").tolist() == [3.0, 1.0]
    assert provider.embed_many(["a", "bb"]).tolist() == [[1.0, 1.0], [2.0, 1.0]]
    assert provider.name == "sentence-transformers:fake-model"


def test_sentence_transformer_load_failure(monkeypatch):
    def broken(name):
        raise OSError(f"model {name} not found")

    monkeypatch.setattr(embeddings, "SentenceTransformer", broken)
    provider = SentenceTransformerEmbeddingProvider("missing-model")
    with pytest.raises(EmbeddingProviderError):
        provider.embed("hello")
    assert "missing-model" not in embeddings._sentence_models


def test_as_matrix_rejects_ragged_vectors():
    with pytest.raises(EmbeddingProviderError):
        as_matrix([[1.0, 2.0], [1.0]], 2)
    with pytest.raises(EmbeddingProviderError):
        as_matrix([[1.0, 2.0]], 2)


def test_get_embedding_provider_openai_needs_key():
    with pytest.raises(ConfigurationError):
        get_embedding_provider(Settings(embedding_backend="openai"))


def test_get_embedding_provider_selects_backend():
    fake = make_fake_openai()
    provider = get_embedding_provider(Settings(embedding_backend="openai"), client=fake)
    assert isinstance(provider, OpenAIEmbeddingProvider)
    assert provider.client is fake

    local = get_embedding_provider(Settings(embedding_backend="sentence-transformers", embedding_model_name="x"))
    assert isinstance(local, SentenceTransformerEmbeddingProvider)
    assert local.model_name == "x"

    with pytest.raises(ConfigurationError):
        get_embedding_provider(Settings(embedding_backend="faiss"))
