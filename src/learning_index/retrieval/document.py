"""
Document model for the learning index.

Single responsibility: define the structure of documents held by the
store. Documents are frozen once created; the store builds them fully
(embedding included) before they become visible to readers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

import numpy as np


class DocumentKind(str, Enum):
    ROADMAP = "roadmap"
    TUTORIAL = "tutorial"
    PROJECT = "project"
    CONCEPT = "concept"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DocumentMetadata:
    """
    Non-content attributes used for filtering.

    `kind` and `difficulty` accept their string values; `tags` accepts
    any iterable of strings and is stored as a frozenset.
    """

    kind: DocumentKind
    difficulty: Difficulty
    tags: frozenset[str] = frozenset()
    owner_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        object.__setattr__(self, "kind", DocumentKind(self.kind))
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        object.__setattr__(self, "tags", as_tag_set(self.tags))

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "difficulty": self.difficulty.value,
            "tags": sorted(self.tags),
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat(),
        }


def as_tag_set(tags: Iterable[str] | None) -> frozenset[str]:
    if tags is None:
        return frozenset()
    # A bare string would otherwise be split into characters.
    if isinstance(tags, str):
        return frozenset([tags])
    return frozenset(tags)


@dataclass(frozen=True)
class Document:
    """
    An embedded document held by the store.

    The embedding is a read-only float32 array; equality ignores it.
    """

    id: str
    content: str
    embedding: np.ndarray = field(repr=False, compare=False)
    metadata: DocumentMetadata

    def __post_init__(self):
        embedding = np.array(self.embedding, dtype=np.float32)
        embedding.setflags(write=False)
        object.__setattr__(self, "embedding", embedding)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (embedding omitted)."""
        return {
            "id": self.id,
            "content": self.content,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class DocumentDraft:
    """Content and metadata waiting to be embedded and inserted."""

    content: str
    metadata: DocumentMetadata
    id: str | None = None
