import re
from types import SimpleNamespace

import numpy as np
import pytest

from moviesearch.embeddings import EmbeddingProvider
from moviesearch.errors import EmbeddingProviderError
from moviesearch.movies import Record

# word -> dimension; words outside the vocabulary are ignored
VOCAB = {
    "cats": 0, "cat": 0, "feline": 0, "kitten": 0,
    "dogs": 1, "dog": 1, "canine": 1, "puppies": 1,
    "kids": 2, "children's": 2, "animated": 2,
    "space": 3, "intergalactic": 3, "futuristic": 3,
}


class KeywordEmbedding(EmbeddingProvider):
    """Deterministic bag-of-keywords embedding for tests."""

    def __init__(self, name="stub:keywords"):
        self._name = name
        self.calls = []

    @property
    def name(self):
        return self._name

    def embed(self, text):
        self.calls.append(text)
        vec = np.zeros(len(set(VOCAB.values())))
        for word in re.findall(r"[\w']+", text.lower()):
            if word in VOCAB:
                vec[VOCAB[word]] += 1.0
        return vec


class FailingEmbedding(KeywordEmbedding):
    """Raises on the n-th embed call (1-based)."""

    def __init__(self, fail_on_call):
        super().__init__()
        self.fail_on_call = fail_on_call

    def embed(self, text):
        if len(self.calls) + 1 == self.fail_on_call:
            self.calls.append(text)
            raise EmbeddingProviderError("rate limited")
        return super().embed(text)


@pytest.fixture
def provider():
    return KeywordEmbedding()


@pytest.fixture
def pets():
    return [
        Record(id=1, title="A", description="cats"),
        Record(id=2, title="B", description="dogs"),
    ]


def make_fake_openai(embed_fn=None, chat_fn=None):
    """Object shaped like openai.OpenAI for the endpoints we call."""
    return SimpleNamespace(
        embeddings=SimpleNamespace(create=embed_fn),
        chat=SimpleNamespace(completions=SimpleNamespace(create=chat_fn)),
    )
