# moviesearch/embeddings.py
"""
embeddings.py

Responsibilities:
- Turn text into embedding vectors through a pluggable provider.
- OpenAI embeddings are the default (same model the search originally used).
- sentence-transformers runs locally and needs no API key.

Every provider failure surfaces as EmbeddingProviderError. Nothing is retried.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import numpy as np
import openai
from sentence_transformers import SentenceTransformer

from moviesearch.config import Settings, make_openai_client
from moviesearch.errors import ConfigurationError, EmbeddingProviderError

logger = logging.getLogger(__name__)

# Loaded SentenceTransformer models, keyed by model name
_sentence_models: Dict[str, SentenceTransformer] = {}


def as_matrix(vectors, expected_rows: int) -> np.ndarray:
    """
    Validate provider output and return it as a float (rows, dim) array.

    Raises:
        EmbeddingProviderError: wrong number of vectors or ragged/empty vectors.
    """
    if expected_rows == 0:
        return np.empty((0, 0))
    try:
        matrix = np.asarray(vectors, dtype=np.float64)
    except ValueError as e:
        raise EmbeddingProviderError("Embedding provider returned vectors of inconsistent length") from e

    if matrix.ndim != 2 or matrix.shape[0] != expected_rows or matrix.shape[1] == 0:
        raise EmbeddingProviderError(
            f"Embedding provider returned shape {matrix.shape}, expected {expected_rows} non-empty vectors"
        )
    return matrix


class EmbeddingProvider(ABC):
    """Anything that maps text to a fixed-length vector."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifies the embedding space (backend + model)."""

    @abstractmethod
    def embed(self, text: str) -> np.ndarray:
        """Embed a single text into a 1-D vector."""

    def embed_many(self, texts: Sequence[str]) -> np.ndarray:
        """
        Embed several texts, one call per text.

        Providers with a batch endpoint override this.
        """
        return as_matrix([self.embed(t) for t in texts], len(texts))


class OpenAIEmbeddingProvider(EmbeddingProvider):
    def __init__(self, client: openai.OpenAI, model: str):
        self.client = client
        self.model = model

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    def _create(self, texts: List[str]) -> List[List[float]]:
        try:
            resp = self.client.embeddings.create(model=self.model, input=texts)
        except openai.OpenAIError as e:
            raise EmbeddingProviderError(f"OpenAI embeddings request failed: {e}") from e
        # the API echoes an index per item; don't rely on response order
        data = sorted(resp.data, key=lambda d: d.index)
        return [d.embedding for d in data]

    def embed(self, text: str) -> np.ndarray:
        return as_matrix(self._create([text]), 1)[0]

    def embed_many(self, texts: Sequence[str]) -> np.ndarray:
        texts = list(texts)
        if not texts:
            return as_matrix([], 0)
        logger.info(f"[embeddings] Requesting {len(texts)} embeddings from {self.model}")
        return as_matrix(self._create(texts), len(texts))


def get_sentence_model(model_name: str) -> SentenceTransformer:
    """Load (or return cached) SentenceTransformer model."""
    model = _sentence_models.get(model_name)
    if model is None:
        logger.info(f"[embeddings] Loading SentenceTransformer model: {model_name} (this may take a few seconds)...")
        try:
            model = SentenceTransformer(model_name)
        except Exception as e:
            raise EmbeddingProviderError(f"Could not load SentenceTransformer model {model_name}: {e}") from e
        _sentence_models[model_name] = model
    return model


class SentenceTransformerEmbeddingProvider(EmbeddingProvider):
    def __init__(self, model_name: str):
        self.model_name = model_name

    @property
    def name(self) -> str:
        return f"sentence-transformers:{self.model_name}"

    def _encode(self, texts: List[str]) -> np.ndarray:
        model = get_sentence_model(self.model_name)
        try:
            return model.encode(texts, show_progress_bar=False)
        except Exception as e:
            raise EmbeddingProviderError(f"SentenceTransformer encode failed: {e}") from e

    def embed(self, text: str) -> np.ndarray:
        return as_matrix(self._encode([text]), 1)[0]

    def embed_many(self, texts: Sequence[str]) -> np.ndarray:
        texts = list(texts)
        if not texts:
            return as_matrix([], 0)
        return as_matrix(self._encode(texts), len(texts))


def get_embedding_provider(settings: Settings, client: Optional[openai.OpenAI] = None) -> EmbeddingProvider:
    """
    Pick the provider named by settings.embedding_backend.

    Raises:
        ConfigurationError: OpenAI backend without an API key, or unknown backend.
    """
    if settings.embedding_backend == "openai":
        if client is None:
            client = make_openai_client(settings)
        return OpenAIEmbeddingProvider(client, settings.openai_embedding_model)
    if settings.embedding_backend == "sentence-transformers":
        return SentenceTransformerEmbeddingProvider(settings.embedding_model_name)
    raise ConfigurationError(f"Unknown embedding backend: {settings.embedding_backend!r}")
