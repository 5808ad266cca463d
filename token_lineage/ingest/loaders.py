"""
JSON readers and writers for token lists.

A token file is either a JSON array of token objects or an object with a
"tokens" array. Each token object carries name, symbol and optionally id,
keywords and marketCap/market_cap.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from token_lineage.detection.batch import InvalidTokenError, Match, TokenDescriptor, coerce_tokens

logger = logging.getLogger(__name__)


def load_tokens(path: Path | str, role: str = "token") -> list[TokenDescriptor]:
    """
    Read a token file into descriptors.

    Args:
        path: JSON file to read
        role: Label used in error messages ("runner", "candidate", ...)

    Returns:
        Validated TokenDescriptors in file order

    Raises:
        FileNotFoundError: if the file does not exist
        InvalidTokenError: if the file is not a token list or an entry is malformed
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidTokenError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("tokens")
    if not isinstance(data, list):
        raise InvalidTokenError(f"{path} must contain a JSON array or an object with a 'tokens' array")

    tokens = coerce_tokens(data, role=role)
    logger.debug(f"Loaded {len(tokens)} {role}s from {path}")
    return tokens


def write_matches(path: Path | str, matches: Iterable[Match]) -> int:
    """
    Write matches as a JSON array; returns the number written.

    Parent directories are created as needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [m.to_dict() for m in matches]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(rows, f, indent=2)
        f.write("\n")
    return len(rows)
