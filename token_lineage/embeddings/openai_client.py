"""
Shared OpenAI client setup and embedding creation.

Token descriptions are short (a name, a symbol and a few keywords), so
inputs are truncated by characters rather than counted in tokens.
"""

from __future__ import annotations

import logging

from openai import OpenAI

from token_lineage.config import get_openai_api_key
from token_lineage.constants import EMBEDDING_MODEL

logger = logging.getLogger(__name__)

# Generous ceiling for a token description
EMBEDDING_MAX_CHARS = 8000


def get_openai_client() -> OpenAI:
    """Get OpenAI client instance (raises ValueError when no key is configured)."""
    api_key = get_openai_api_key()
    return OpenAI(api_key=api_key)


def create_embedding(
    client: OpenAI,
    text: str,
    model: str = EMBEDDING_MODEL,
) -> list[float] | None:
    """
    Create an embedding for a single text.

    Args:
        client: OpenAI client instance
        text: Text to embed
        model: Embedding model name

    Returns:
        Embedding vector, or None for empty text or on API failure
    """
    if not text or not text.strip():
        return None

    try:
        response = client.embeddings.create(model=model, input=text[:EMBEDDING_MAX_CHARS])
        return list(response.data[0].embedding)
    except Exception as e:
        logger.warning(f"Error creating embedding: {e}")
        return None
