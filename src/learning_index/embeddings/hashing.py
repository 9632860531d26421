"""
Deterministic local embeddings.

Feature hashing over word unigrams and bigrams: every token is hashed
with CRC-32 into one of `dimensions` buckets, bigrams add half weight so
word order still shifts the vector, and the result is L2-normalized.

Pure function of the input text: no clock, no randomness, no
process-salted hash(). Texts sharing words share components, which is
what makes the local path useful for similarity and not just a
placeholder.
"""

import re
import zlib

import numpy as np

_TOKEN_PATTERN = re.compile(r"[^\W_]+")

UNIGRAM_WEIGHT = 1.0
BIGRAM_WEIGHT = 0.5


def tokenize(text: str) -> list[str]:
    """Lowercase alphanumeric tokens, in order."""
    return _TOKEN_PATTERN.findall(text.lower())


def bucket(feature: str, dimensions: int) -> int:
    """Map a feature to a component index via its 32-bit CRC."""
    return zlib.crc32(feature.encode("utf-8")) % dimensions


class HashingEmbeddings:
    """
    Local embedding provider, always available.

    Vectors are non-negative, so cosine similarities fall in [0, 1].
    Text without any tokens maps to the zero vector.
    """

    def __init__(self, dimensions: int = 384):
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str) -> np.ndarray:
        """Generate a deterministic embedding from the text's tokens."""
        vector = np.zeros(self._dimensions, dtype=np.float32)
        tokens = tokenize(text)

        for token in tokens:
            vector[bucket(token, self._dimensions)] += UNIGRAM_WEIGHT
        for first, second in zip(tokens, tokens[1:]):
            vector[bucket(f"{first} {second}", self._dimensions)] += BIGRAM_WEIGHT

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        return [self.embed(text) for text in texts]
