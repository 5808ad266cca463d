"""
Thread-pool helper for batch matching.

Candidates are independent of each other, so they can be scored in worker
threads. Outcomes are returned in input order so that a parallel batch
produces exactly the same output as a sequential one.
"""

import logging
import sys
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Generic, TypeVar

from tqdm import tqdm

from token_lineage.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Outcome(Generic[T, R]):
    """Result of one work item: either a value or the exception it raised."""

    item: T
    result: R | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def execute_parallel(
    items: Sequence[T],
    worker_func: Callable[[T], R],
    max_workers: int = 4,
    desc: str = "Matching",
    unit: str = "token",
    show_progress: bool = True,
    stats: ExecutionStats | None = None,
) -> list[Outcome[T, R]]:
    """
    Run worker_func over items in a thread pool.

    A failing item does not stop the others; its exception is stored on the
    Outcome and counted as "failed" in stats. Successful items are counted
    as "processed".

    Args:
        items: Work items
        worker_func: Called once per item
        max_workers: Thread pool size
        desc: Progress bar label
        unit: Progress bar unit
        show_progress: Draw a tqdm bar on stderr
        stats: Optional counters to update

    Returns:
        One Outcome per item, in the same order as items
    """
    if not items:
        return []

    outcomes: list[Outcome[T, R] | None] = [None] * len(items)
    progress = tqdm(
        total=len(items),
        desc=desc,
        unit=unit,
        file=sys.stderr,
        mininterval=1.0,
        dynamic_ncols=True,
        disable=not show_progress,
    )

    with progress, ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(worker_func, item): i for i, item in enumerate(items)}
        for future in as_completed(futures):
            index = futures[future]
            try:
                outcomes[index] = Outcome(items[index], result=future.result())
                if stats is not None:
                    stats.increment("processed")
            except Exception as e:
                logger.debug(f"Worker failed on item {index}: {e}")
                outcomes[index] = Outcome(items[index], error=e)
                if stats is not None:
                    stats.increment("failed")
            progress.update(1)

    return outcomes
