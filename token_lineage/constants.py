"""
Constants for token_lineage package.

Centralizes magic numbers and configuration defaults.
"""

# Confidence scale (integer heuristic scores, not probabilities)
MAX_CONFIDENCE = 99  # Ceiling after the agreement bonus
DEFAULT_MIN_CONFIDENCE = 75  # Default batch threshold used by the CLI

# Agreement bonus: (minimum distinct agreeing methods, bonus), checked in order
AGREEMENT_BONUSES = (
    (4, 8),
    (3, 5),
    (2, 2),
)

# Batch matcher tie-break policies
TIE_BREAK_FIRST = "first"  # First runner in input order keeps the tie
TIE_BREAK_MARKET_CAP = "market_cap"  # Larger runner market cap wins the tie

# Embedding defaults
EMBEDDING_MODEL = "text-embedding-3-small"
EMBEDDING_DIMENSION = 1536
DEFAULT_SEMANTIC_THRESHOLD = 0.45  # Cosine similarity floor for a semantic match

# LLM second opinion
LLM_MODEL = "gpt-4o-mini"
LLM_MAX_TOKENS = 150
LLM_TEMPERATURE = 0.1
DEFAULT_LLM_MIN_CONFIDENCE = 60

# Keywords with this prefix hold image-derived descriptions
IMAGE_KEYWORD_PREFIX = "img:"

# Cache TTL (Time To Live) in days
CACHE_TTL_EMBEDDINGS = 30

# Parallel processing defaults
DEFAULT_WORKERS = 1  # Sequential unless asked otherwise
