"""
Personalized recommendations from a learning context.

The context is flattened into one composite query, with one labeled
line per field in a fixed order, and handed to DocumentStore.search.
Fixed ordering keeps the query string, and therefore the results,
identical for identical contexts.
"""

from __future__ import annotations

import logging

from learning_index.recommendations.context import LearningContext
from learning_index.retrieval.document import (
    Difficulty,
    Document,
    DocumentKind,
    DocumentMetadata,
)
from learning_index.retrieval.filters import MetadataFilter
from learning_index.retrieval.store import DocumentStore

logger = logging.getLogger(__name__)

PROFILE_TAGS = frozenset({"user-profile", "onboarding"})


def profile_document_id(user_id: str) -> str:
    return f"user-context-{user_id}"


class RecommendationAssembler:
    """
    Turns learning contexts into top-K document recommendations.

    Usage:
        assembler = RecommendationAssembler(store)
        docs = assembler.recommend(LearningContext(goals=["learn python"]), limit=5)
    """

    def __init__(self, store: DocumentStore):
        self._store = store

    @staticmethod
    def build_query(context: LearningContext) -> str:
        """Composite query: goals, experience, style, preferences, projects."""
        segments = [
            ("Goals", ", ".join(context.goals)),
            ("Experience", context.experience),
            ("Learning Style", context.learning_style),
            ("Preferences", ", ".join(context.preferences)),
            ("Current Projects", ", ".join(context.current_projects)),
            ("Completed Projects", ", ".join(context.completed_projects)),
        ]
        return "\n".join(f"{label}: {value}" for label, value in segments)

    def recommend(
        self,
        context: LearningContext,
        limit: int = 10,
        metadata_filter: MetadataFilter | None = None,
    ) -> list[Document]:
        """
        Documents best matching the context.

        No filter is applied unless the caller layers one on, e.g.
        MetadataFilter(difficulty="beginner").
        """
        query = self.build_query(context)
        results = self._store.search(query, metadata_filter=metadata_filter, limit=limit)
        logger.debug(f"Recommended {len(results)} documents (limit={limit})")
        return results

    def store_profile(self, user_id: str, context: LearningContext) -> Document:
        """
        Store the user's context as a user-scoped document.

        An existing profile for the same user is replaced.
        """
        doc_id = profile_document_id(user_id)
        if self._store.remove(doc_id):
            logger.info(f"Replacing stored learning profile for user {user_id}")

        return self._store.insert(
            context.model_dump_json(),
            DocumentMetadata(
                kind=DocumentKind.CONCEPT,
                difficulty=Difficulty.BEGINNER,
                tags=PROFILE_TAGS,
                owner_id=user_id,
            ),
            doc_id=doc_id,
        )
