"""
debug_similarity.py

Diagnostic: score every movie against a query and show vector norms, to check
that query and document embeddings live in the same space.
"""

import sys

import numpy as np

from moviesearch.config import load_settings
from moviesearch.embeddings import get_embedding_provider
from moviesearch.errors import MovieSearchError
from moviesearch.search import create_store, search


def main():
    query = input("Enter the exact query you used: ").strip()
    try:
        settings = load_settings()
        provider = get_embedding_provider(settings)
        print("Embedding movies...")
        index = create_store(provider=provider)
        print("Entries:", len(index), "Vectors shape:", index.vectors.shape)

        print("Encoding query...")
        qv = provider.embed(query)
        ranked = search(index, query, len(index), provider=provider, metric=settings.similarity_metric)
    except MovieSearchError as e:
        print(f"[debug] {e}")
        sys.exit(1)
    print("Query vector shape:", qv.shape, "||q||:", np.linalg.norm(qv))

    # row position of each movie id, to look up its vector
    rows = {e.document.metadata["source"]: i for i, e in enumerate(index)}

    print(f"\nTop 5 matches ({settings.similarity_metric}):")
    for r in ranked[:5]:
        row = rows[r.document.metadata["source"]]
        print(f"[{row}] score={r.score:.4f} ||emb||={np.linalg.norm(index.vectors[row]):.4f}")
        print("  Text:", r.document.page_content.replace("\n", " ")[:200])
        print()

    worst = ranked[-1]
    print("Worst match:", worst.document.metadata["title"], f"score={worst.score:.4f}")


if __name__ == "__main__":
    main()
