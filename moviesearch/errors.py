# moviesearch/errors.py
"""
Exception types raised by the search and chat flows.

Nothing here retries: a failure aborts the current operation and the caller
decides what to do with it.
"""


class MovieSearchError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MovieSearchError):
    """Missing or invalid configuration, raised before any external call."""


class EmbeddingProviderError(MovieSearchError):
    """The embedding provider failed (transport, auth, quota or bad output)."""


class CompletionProviderError(MovieSearchError):
    """The chat-completion call failed or returned no usable choice."""
