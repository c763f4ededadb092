"""
moviesearch

Semantic search over a small movie catalogue plus a one-shot chat demo.
"""

from moviesearch.errors import (
    CompletionProviderError,
    ConfigurationError,
    EmbeddingProviderError,
    MovieSearchError,
)
from moviesearch.index import Index, IndexEntry, build_index
from moviesearch.movies import MOVIES, Record, to_document
from moviesearch.search import SearchResult, create_store, search, search_movies

__all__ = [
    "CompletionProviderError",
    "ConfigurationError",
    "EmbeddingProviderError",
    "MovieSearchError",
    "Index",
    "IndexEntry",
    "build_index",
    "MOVIES",
    "Record",
    "to_document",
    "SearchResult",
    "create_store",
    "search",
    "search_movies",
]
