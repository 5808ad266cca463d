"""Embedding utilities for token descriptions."""

from token_lineage.constants import EMBEDDING_DIMENSION, EMBEDDING_MODEL
from token_lineage.embeddings.openai_client import (
    create_embedding,
    get_openai_client,
)

__all__ = [
    "create_embedding",
    "get_openai_client",
    "EMBEDDING_MODEL",
    "EMBEDDING_DIMENSION",
]
