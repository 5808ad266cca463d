"""Vector similarity helpers."""
