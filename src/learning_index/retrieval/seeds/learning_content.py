"""
Default learning content seed data.

A small set of documents covering representative topics and every
difficulty level, so recommendations have something to return before
any domain content is inserted.
"""

from learning_index.retrieval.document import (
    Difficulty,
    DocumentDraft,
    DocumentKind,
    DocumentMetadata,
)


def get_default_documents() -> list[DocumentDraft]:
    """Get the default documents seeded into every new store."""
    return [
        DocumentDraft(
            id="web-dev-basics",
            content=(
                "HTML CSS JavaScript fundamentals web development frontend "
                "basics responsive design"
            ),
            metadata=DocumentMetadata(
                kind=DocumentKind.ROADMAP,
                difficulty=Difficulty.BEGINNER,
                tags=frozenset({"web", "html", "css", "javascript", "frontend"}),
            ),
        ),
        DocumentDraft(
            id="react-basics",
            content=(
                "React components JSX state props hooks useState useEffect "
                "modern frontend library"
            ),
            metadata=DocumentMetadata(
                kind=DocumentKind.TUTORIAL,
                difficulty=Difficulty.INTERMEDIATE,
                tags=frozenset({"react", "javascript", "frontend", "components"}),
            ),
        ),
        DocumentDraft(
            id="nodejs-backend",
            content=(
                "Node.js backend development Express.js API REST endpoints "
                "server-side JavaScript"
            ),
            metadata=DocumentMetadata(
                kind=DocumentKind.PROJECT,
                difficulty=Difficulty.INTERMEDIATE,
                tags=frozenset({"nodejs", "backend", "express", "api"}),
            ),
        ),
        DocumentDraft(
            id="python-basics",
            content=(
                "Python programming fundamentals variables functions loops "
                "data structures beginner friendly"
            ),
            metadata=DocumentMetadata(
                kind=DocumentKind.TUTORIAL,
                difficulty=Difficulty.BEGINNER,
                tags=frozenset({"python", "programming", "basics"}),
            ),
        ),
        DocumentDraft(
            id="machine-learning",
            content=(
                "Machine learning artificial intelligence neural networks deep "
                "learning TensorFlow PyTorch"
            ),
            metadata=DocumentMetadata(
                kind=DocumentKind.ROADMAP,
                difficulty=Difficulty.ADVANCED,
                tags=frozenset({"ml", "ai", "python", "tensorflow"}),
            ),
        ),
    ]
