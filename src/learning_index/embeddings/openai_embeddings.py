"""
Remote embeddings via the OpenAI API.

This module has ONE job: turn text into vectors using the network
service. It does not decide what happens when the service is down;
every SDK failure is re-raised as ProviderUnavailableError and the
caller (FallbackEmbeddings) picks the local path.
"""

import os

import numpy as np
from openai import OpenAI, OpenAIError

from learning_index.errors import ProviderUnavailableError

# Only the text-embedding-3 family accepts a `dimensions` argument.
_SHORTENABLE_PREFIX = "text-embedding-3"


class OpenAIEmbeddings:
    """
    OpenAI-based embedding provider.

    Asks the API for exactly `dimensions` components so remote vectors
    share the store's fixed dimensionality.
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        dimensions: int = 384,
        api_key: str | None = None,
        timeout: float = 10.0,
        client: OpenAI | None = None,
    ):
        self.model = model
        self._dimensions = dimensions
        self._client = client or OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            timeout=timeout,
            max_retries=1,
        )

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _create(self, payload: str | list[str]):
        kwargs = {"input": payload, "model": self.model}
        if self.model.startswith(_SHORTENABLE_PREFIX):
            kwargs["dimensions"] = self._dimensions
        try:
            return self._client.embeddings.create(**kwargs)
        except OpenAIError as e:
            raise ProviderUnavailableError(f"OpenAI embeddings call failed: {e}") from e

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        response = self._create(text)
        if not response.data:
            raise ProviderUnavailableError("OpenAI returned no embedding data")
        return np.array(response.data[0].embedding, dtype=np.float32)

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts in one request."""
        if not texts:
            return []

        response = self._create(texts)
        if len(response.data) != len(texts):
            raise ProviderUnavailableError(
                f"OpenAI returned {len(response.data)} embeddings for {len(texts)} inputs"
            )
        ordered = sorted(response.data, key=lambda item: item.index)
        return [np.array(item.embedding, dtype=np.float32) for item in ordered]
