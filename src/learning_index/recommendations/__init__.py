"""
Recommendations module - personalized retrieval from learning contexts.
"""

from learning_index.recommendations.assembler import (
    RecommendationAssembler,
    profile_document_id,
)
from learning_index.recommendations.context import LearningContext

__all__ = [
    "LearningContext",
    "RecommendationAssembler",
    "profile_document_id",
]
