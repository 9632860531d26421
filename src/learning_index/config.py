"""
Index configuration.

Loads embedding and store settings from environment variables.
Malformed numeric values fall back to the defaults instead of failing
at import time.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


@dataclass
class IndexConfig:
    """Configuration for the document store and its embedding provider.

    Environment Variables:
        LEARNING_INDEX_EMBEDDING_DIM: Vector length D for the store (default: 384)
        LEARNING_INDEX_EMBEDDING_MODEL: OpenAI embedding model (default: text-embedding-3-small)
        LEARNING_INDEX_USE_REMOTE_EMBEDDINGS: Try the OpenAI API first (default: true)
        LEARNING_INDEX_EMBEDDING_TIMEOUT: Seconds per remote embedding call (default: 10)
        LEARNING_INDEX_SEED_DEFAULTS: Seed default learning content (default: true)
        LEARNING_INDEX_DEFAULT_LIMIT: Result count when callers pass none (default: 5)
        OPENAI_API_KEY: Without it only local embeddings are used
    """

    embedding_dim: int = 384
    embedding_model: str = "text-embedding-3-small"
    use_remote_embeddings: bool = True
    embedding_timeout: float = 10.0
    openai_api_key: str | None = None
    seed_defaults: bool = True
    default_limit: int = 5

    @classmethod
    def from_env(cls) -> "IndexConfig":
        """Load config from environment variables."""
        return cls(
            embedding_dim=_env_int("LEARNING_INDEX_EMBEDDING_DIM", 384),
            embedding_model=os.environ.get(
                "LEARNING_INDEX_EMBEDDING_MODEL", "text-embedding-3-small"
            ),
            use_remote_embeddings=_env_bool("LEARNING_INDEX_USE_REMOTE_EMBEDDINGS", True),
            embedding_timeout=_env_float("LEARNING_INDEX_EMBEDDING_TIMEOUT", 10.0),
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            seed_defaults=_env_bool("LEARNING_INDEX_SEED_DEFAULTS", True),
            default_limit=_env_int("LEARNING_INDEX_DEFAULT_LIMIT", 5),
        )


_config: IndexConfig | None = None


def get_config() -> IndexConfig:
    """Get the config loaded from the environment (lazy)."""
    global _config
    if _config is None:
        _config = IndexConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
