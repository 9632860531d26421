"""
Seed data for the learning index.

Separating data from infrastructure keeps content updates out of the
store code and lets tests seed controlled data instead.
"""

from learning_index.retrieval.seeds.learning_content import get_default_documents

__all__ = ["get_default_documents"]
