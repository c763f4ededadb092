# moviesearch/config.py
"""
Process configuration.

Values come from the environment (a local .env file is loaded first via
python-dotenv). The API key is only required by the components that talk to
OpenAI, so a local sentence-transformers search can run without one.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv
from openai import OpenAI

from moviesearch.errors import ConfigurationError

EMBEDDING_BACKENDS = ("openai", "sentence-transformers")
SIMILARITY_METRICS = ("cosine", "dot", "euclidean")

DEFAULT_LLM_MODEL = "gpt-3.5-turbo"
DEFAULT_OPENAI_EMBEDDING_MODEL = "text-embedding-ada-002"
# "all-MiniLM-L6-v2" is small and fast, good enough for a dozen movies.
DEFAULT_EMBEDDING_MODEL_NAME = "all-MiniLM-L6-v2"


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    llm_model: str = DEFAULT_LLM_MODEL
    llm_temperature: Optional[float] = None
    embedding_backend: str = "openai"
    openai_embedding_model: str = DEFAULT_OPENAI_EMBEDDING_MODEL
    embedding_model_name: str = DEFAULT_EMBEDDING_MODEL_NAME
    similarity_metric: str = "cosine"
    request_timeout: float = 30.0
    max_retries: int = 0

    def require_api_key(self) -> str:
        """Return the OpenAI key or fail before any request is made."""
        if not self.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY not found in environment. Add it to .env")
        return self.openai_api_key


def _get_float(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env: mapping to read from instead of os.environ (no .env loading then).

    Raises:
        ConfigurationError: on unknown backend/metric or malformed numbers.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    backend = env.get("EMBEDDING_BACKEND", "openai").strip().lower()
    if backend not in EMBEDDING_BACKENDS:
        raise ConfigurationError(
            f"EMBEDDING_BACKEND must be one of {', '.join(EMBEDDING_BACKENDS)}, got {backend!r}"
        )

    metric = env.get("SIMILARITY_METRIC", "cosine").strip().lower()
    if metric not in SIMILARITY_METRICS:
        raise ConfigurationError(
            f"SIMILARITY_METRIC must be one of {', '.join(SIMILARITY_METRICS)}, got {metric!r}"
        )

    timeout = _get_float(env, "OPENAI_TIMEOUT", 30.0)
    if timeout <= 0:
        raise ConfigurationError(f"OPENAI_TIMEOUT must be > 0, got {timeout}")

    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        llm_model=env.get("LLM_MODEL", DEFAULT_LLM_MODEL),
        llm_temperature=_get_float(env, "LLM_TEMPERATURE", None),
        embedding_backend=backend,
        openai_embedding_model=env.get("OPENAI_EMBEDDING_MODEL", DEFAULT_OPENAI_EMBEDDING_MODEL),
        embedding_model_name=env.get("EMBEDDING_MODEL_NAME", DEFAULT_EMBEDDING_MODEL_NAME),
        similarity_metric=metric,
        request_timeout=timeout,
        max_retries=_get_int(env, "OPENAI_MAX_RETRIES", 0),
    )


def make_openai_client(settings: Settings) -> OpenAI:
    """Create an OpenAI client (openai>=1.0.0) from the settings."""
    return OpenAI(
        api_key=settings.require_api_key(),
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
