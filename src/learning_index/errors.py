"""
Exception hierarchy for the learning index.

Only DuplicateIdError is meant to reach callers. Provider and dimension
errors are raised inside the embeddings package and absorbed by
FallbackEmbeddings before they leave it.
"""


class LearningIndexError(Exception):
    """Base class for all learning index errors."""


class ProviderUnavailableError(LearningIndexError):
    """The remote embedding service failed (network, auth, quota, timeout)."""


class DimensionMismatchError(LearningIndexError):
    """An embedding does not have the dimensionality the store expects."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected embedding of length {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class DuplicateIdError(LearningIndexError):
    """A document with this id already exists in the store."""

    def __init__(self, doc_id: str):
        super().__init__(f"Document id already exists: {doc_id!r}")
        self.doc_id = doc_id
