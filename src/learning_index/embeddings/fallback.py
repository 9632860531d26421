"""
Non-failing embedding provider: remote first, local hashing otherwise.

The local path is an explicit branch (`use_fallback()`), not only an
exception handler, so tests and offline deployments can force it.
Remote vectors are checked at this boundary: anything that is not a
finite vector of exactly `dimensions` components is discarded in favor
of the local vector, so the similarity index can assume uniform length.
"""

import logging

import numpy as np

from learning_index.config import IndexConfig, get_config
from learning_index.core import EmbeddingProvider
from learning_index.embeddings.hashing import HashingEmbeddings
from learning_index.embeddings.openai_embeddings import OpenAIEmbeddings
from learning_index.errors import DimensionMismatchError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class FallbackEmbeddings:
    """
    Embedding provider that never raises.

    Args:
        primary: Remote provider, or None when unconfigured
        fallback: Local deterministic provider (HashingEmbeddings by default)
        dimensions: Vector length when neither provider is given
        force_fallback: Skip the primary even when it is configured
    """

    def __init__(
        self,
        primary: EmbeddingProvider | None = None,
        fallback: EmbeddingProvider | None = None,
        dimensions: int | None = None,
        force_fallback: bool = False,
    ):
        if fallback is None:
            dims = dimensions or (primary.dimensions if primary else 384)
            fallback = HashingEmbeddings(dims)
        if primary is not None and primary.dimensions != fallback.dimensions:
            raise ValueError(
                f"Primary provider yields {primary.dimensions} dimensions "
                f"but fallback yields {fallback.dimensions}"
            )
        self._primary = primary
        self._fallback = fallback
        self.force_fallback = force_fallback

    @property
    def dimensions(self) -> int:
        return self._fallback.dimensions

    @property
    def provider_name(self) -> str:
        return "local" if self.use_fallback() else "remote"

    def use_fallback(self) -> bool:
        """True when embeddings come from the local algorithm without trying remote."""
        return self._primary is None or self.force_fallback

    def embed_locally(self, text: str) -> np.ndarray:
        """The deterministic local path."""
        return self._fallback.embed(text)

    def _validated(self, vector: np.ndarray) -> np.ndarray:
        vector = np.asarray(vector, dtype=np.float32).ravel()
        if vector.shape[0] != self.dimensions:
            raise DimensionMismatchError(self.dimensions, vector.shape[0])
        if not np.all(np.isfinite(vector)):
            raise ProviderUnavailableError("Embedding contains non-finite values")
        return vector

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        # The remote API rejects empty input; the local path maps it to zeros.
        if self.use_fallback() or not text.strip():
            return self.embed_locally(text)

        try:
            return self._validated(self._primary.embed(text))
        except DimensionMismatchError as e:
            logger.warning(f"Remote embedding rejected, using local fallback: {e}")
        except Exception as e:
            logger.warning(f"Remote embedding unavailable, using local fallback: {e!r}")
        return self.embed_locally(text)

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts; the batch degrades as a whole."""
        if self.use_fallback() or not texts:
            return self._fallback.embed_batch(texts)
        if not all(t.strip() for t in texts):
            return [self.embed(t) for t in texts]

        try:
            return [self._validated(v) for v in self._primary.embed_batch(texts)]
        except DimensionMismatchError as e:
            logger.warning(f"Remote batch embedding rejected, using local fallback: {e}")
        except Exception as e:
            logger.warning(f"Remote batch embedding unavailable, using local fallback: {e!r}")
        return self._fallback.embed_batch(texts)


def get_embedding_provider(config: IndexConfig | None = None) -> FallbackEmbeddings:
    """
    Factory function to get the store's embedding provider.

    The remote provider is only wired when remote embeddings are enabled
    and an API key is configured; otherwise every call is local.
    """
    config = config or get_config()
    local = HashingEmbeddings(config.embedding_dim)

    if config.use_remote_embeddings and config.openai_api_key:
        primary = OpenAIEmbeddings(
            model=config.embedding_model,
            dimensions=config.embedding_dim,
            api_key=config.openai_api_key,
            timeout=config.embedding_timeout,
        )
        logger.info(
            f"Using OpenAI embeddings ({config.embedding_model}, "
            f"{config.embedding_dim}d) with local fallback"
        )
        return FallbackEmbeddings(primary=primary, fallback=local)

    logger.info(f"Using local hashing embeddings ({config.embedding_dim}d)")
    return FallbackEmbeddings(fallback=local)
