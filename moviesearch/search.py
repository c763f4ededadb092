# moviesearch/search.py
"""
search.py

Implements semantic search over an Index by comparing the query embedding
with every stored vector (linear scan, no approximate search).
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from langchain_core.documents import Document
from pydantic import BaseModel, ConfigDict

from moviesearch.config import Settings, load_settings
from moviesearch.embeddings import EmbeddingProvider, get_embedding_provider
from moviesearch.errors import ConfigurationError
from moviesearch.index import Index, build_index
from moviesearch.movies import MOVIES, Record

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    document: Document
    score: float


def cosine_similarity(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """
    Cosine similarity between the query and each row of matrix.
    """
    dot = matrix @ query
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    return dot / (norms + 1e-10)  # small term prevents divide-by-zero


def dot_similarity(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    return matrix @ query


def euclidean_similarity(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    # distance -> score so that higher still means closer
    distance = np.linalg.norm(matrix - query, axis=1)
    return 1.0 / (1.0 + distance)


METRICS: Dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "cosine": cosine_similarity,
    "dot": dot_similarity,
    "euclidean": euclidean_similarity,
}


def search(
    index: Index,
    query: str,
    count: int = 3,
    *,
    provider: EmbeddingProvider,
    metric: str = "cosine",
) -> List[SearchResult]:
    """
    Return the `count` entries of the index closest to the query.

    Args:
        index: index built with build_index
        query: free text
        count: how many results to return (all of them if larger than the index)
        provider: must be the provider the index was built with
        metric: "cosine" (default), "dot" or "euclidean"

    Returns:
        SearchResults sorted by descending score. Equal scores keep index order.

    Raises:
        ValueError: negative count, or provider does not match the index
        ConfigurationError: unknown metric
        EmbeddingProviderError: the query could not be embedded
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    score_fn = METRICS.get(metric)
    if score_fn is None:
        raise ConfigurationError(f"Unknown similarity metric: {metric!r}")

    if len(index) == 0 or count == 0:
        return []

    if provider.name != index.provider_name:
        raise ValueError(
            f"Index was built with {index.provider_name!r}, cannot query it with {provider.name!r}"
        )

    # Convert query into embedding
    query_vector = np.asarray(provider.embed(query), dtype=np.float64)
    if query_vector.shape != (index.vectors.shape[1],):
        raise ValueError(
            f"Query vector has shape {query_vector.shape}, index vectors have dim {index.vectors.shape[1]}"
        )

    scores = score_fn(index.vectors, query_vector)

    # Sort by similarity descending; sorted() is stable with reverse=True
    ranked = sorted(range(len(index)), key=lambda i: scores[i], reverse=True)

    entries = index.entries
    return [SearchResult(document=entries[i].document, score=float(scores[i])) for i in ranked[:count]]


def create_store(
    records: Sequence[Record] = MOVIES,
    provider: Optional[EmbeddingProvider] = None,
    settings: Optional[Settings] = None,
) -> Index:
    """
    Build a fresh index over the movie catalogue.

    Every call re-embeds all records; nothing is cached between calls.
    """
    if provider is None:
        provider = get_embedding_provider(settings or load_settings())
    return build_index(records, provider)


def search_movies(
    query: str,
    count: int = 3,
    provider: Optional[EmbeddingProvider] = None,
    settings: Optional[Settings] = None,
) -> List[SearchResult]:
    """Build the movie index and search it in one go."""
    settings = settings or load_settings()
    if provider is None:
        provider = get_embedding_provider(settings)
    store = create_store(provider=provider)
    return search(store, query, count, provider=provider, metric=settings.similarity_metric)


if __name__ == "__main__":
    # Quick test
    user_query = "For kids..."
    for r in search_movies(user_query):
        print(f"[score={r.score:.3f}] {r.document.metadata['title']}")
