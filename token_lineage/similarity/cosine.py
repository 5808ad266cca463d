"""
Cosine similarity computation utilities.

Provides cosine similarity for description embeddings using NumPy.
"""

import logging

import numpy as np

from token_lineage.constants import EMBEDDING_DIMENSION

logger = logging.getLogger(__name__)


def validate_embedding(
    embedding: list[float] | None,
    expected_dimension: int | None = EMBEDDING_DIMENSION,
) -> bool:
    """
    Validate an embedding vector.

    Args:
        embedding: Embedding vector to validate
        expected_dimension: Expected dimension (None skips the check)

    Returns:
        True if valid, False otherwise
    """
    if embedding is None:
        return False
    if not isinstance(embedding, (list, tuple, np.ndarray)):
        return False
    if len(embedding) == 0:
        return False
    if expected_dimension is not None and len(embedding) != expected_dimension:
        logger.warning(f"Invalid embedding dimension: {len(embedding)} != {expected_dimension}")
        return False
    arr = np.asarray(embedding, dtype=np.float64)
    if not np.all(np.isfinite(arr)):
        logger.warning("Embedding contains NaN or Inf values")
        return False
    return True


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 for mismatched lengths or zero vectors instead of NaN.
    """
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.shape != b_arr.shape or a_arr.size == 0:
        return 0.0
    norm = np.linalg.norm(a_arr) * np.linalg.norm(b_arr)
    if norm == 0:
        return 0.0
    return float(np.dot(a_arr, b_arr) / norm)

