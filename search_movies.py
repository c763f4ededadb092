"""
search_movies.py

Build the movie index and print the closest matches for a query.
Usage: python search_movies.py ["query"] [count]
"""

import sys

from moviesearch.errors import MovieSearchError
from moviesearch.logging_setup import configure_logging
from moviesearch.search import search_movies

DEFAULT_QUERY = "For kids..."


def main():
    configure_logging()
    query = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_QUERY
    count = int(sys.argv[2]) if len(sys.argv) > 2 else 3

    try:
        results = search_movies(query, count=count)
    except MovieSearchError as e:
        print(f"[search] {e}")
        sys.exit(1)

    print(f"Top results for query: '{query}'\n")
    for r in results:
        meta = r.document.metadata
        print(f"[score={r.score:.3f}] #{meta['source']} {meta['title']}")
        print(f"  {r.document.page_content.splitlines()[-1]}")


if __name__ == "__main__":
    main()
