"""
Metadata filters applied before similarity ranking.

A closed set of optional predicates. Predicates that are set must all
hold; `tags` matches when the document carries at least one of them.
"""

from __future__ import annotations

from dataclasses import dataclass

from learning_index.retrieval.document import Difficulty, Document, DocumentKind, as_tag_set


@dataclass(frozen=True)
class MetadataFilter:
    kind: DocumentKind | None = None
    difficulty: Difficulty | None = None
    owner_id: str | None = None
    tags: frozenset[str] | None = None

    def __post_init__(self):
        if self.kind is not None:
            object.__setattr__(self, "kind", DocumentKind(self.kind))
        if self.difficulty is not None:
            object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        if self.tags is not None:
            object.__setattr__(self, "tags", as_tag_set(self.tags))

    @property
    def is_empty(self) -> bool:
        return (
            self.kind is None
            and self.difficulty is None
            and self.owner_id is None
            and self.tags is None
        )

    def matches(self, document: Document) -> bool:
        """Whether the document passes every predicate that is set."""
        meta = document.metadata
        if self.kind is not None and meta.kind != self.kind:
            return False
        if self.difficulty is not None and meta.difficulty != self.difficulty:
            return False
        if self.owner_id is not None and meta.owner_id != self.owner_id:
            return False
        # An empty tag set can never be satisfied by any-of.
        if self.tags is not None and self.tags.isdisjoint(meta.tags):
            return False
        return True
