# moviesearch/index.py
"""
In-memory embedding index.

An Index is built once from a list of records and never changes afterwards,
so any number of searches can read it at the same time. Building a new index
always re-embeds every record.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np
from langchain_core.documents import Document

from moviesearch.embeddings import EmbeddingProvider, as_matrix
from moviesearch.movies import Record, to_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class IndexEntry:
    document: Document
    vector: np.ndarray


class Index:
    """Ordered, read-only collection of IndexEntry values."""

    def __init__(self, entries: Sequence[IndexEntry], provider_name: str):
        self._entries: Tuple[IndexEntry, ...] = tuple(entries)
        self.provider_name = provider_name
        if self._entries:
            matrix = np.vstack([e.vector for e in self._entries])
        else:
            matrix = np.empty((0, 0))
        matrix.setflags(write=False)
        self._matrix = matrix

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> Tuple[IndexEntry, ...]:
        return self._entries

    @property
    def documents(self) -> List[Document]:
        return [e.document for e in self._entries]

    @property
    def vectors(self) -> np.ndarray:
        """Read-only (n, dim) matrix, row i belongs to entry i."""
        return self._matrix

    def __repr__(self) -> str:
        return f"Index(size={len(self)}, provider={self.provider_name!r})"


def build_index(records: Sequence[Record], provider: EmbeddingProvider) -> Index:
    """
    Embed every record and return the resulting Index.

    Args:
        records: records with unique ids; may be empty
        provider: embedding provider, also needed later to embed queries

    Returns:
        Index with one entry per record, in input order.

    Raises:
        ValueError: duplicate record ids
        EmbeddingProviderError: any provider failure (no partial index)
    """
    seen = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate record id: {record.id}")
        seen.add(record.id)

    if not records:
        return Index([], provider.name)

    documents = [to_document(r) for r in records]
    logger.info(f"[index] Embedding {len(documents)} documents with {provider.name}")
    vectors = as_matrix(provider.embed_many([d.page_content for d in documents]), len(documents))

    entries = []
    for doc, vec in zip(documents, vectors):
        vec = np.array(vec, dtype=np.float64)
        vec.setflags(write=False)
        entries.append(IndexEntry(document=doc, vector=vec))

    index = Index(entries, provider.name)
    logger.info(f"[index] Built index with {len(index)} entries (dim={index.vectors.shape[1]})")
    return index
