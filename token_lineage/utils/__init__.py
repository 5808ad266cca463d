"""Shared utilities: thread pool execution, counters and tqdm-safe logging."""
