"""
Parallel-for over independent index ranges

numpy releases the GIL inside its element-wise kernels, so splitting rows or
pixels into chunks and running them on a thread pool scales across cores.
Each worker must only write to memory owned by its own chunk.
"""

import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple


# Below this many units a thread pool costs more than it saves
DEFAULT_MIN_CHUNK = 64


def default_workers() -> int:
    return max(1, os.cpu_count() or 1)


def split_range(count: int, chunks: int) -> List[Tuple[int, int]]:
    """Split [0, count) into at most `chunks` contiguous (lo, hi) ranges"""
    if count <= 0:
        return []
    chunks = max(1, min(chunks, count))
    size = (count + chunks - 1) // chunks
    return [(lo, min(lo + size, count)) for lo in range(0, count, size)]


def parallel_for(
    count: int,
    worker: Callable[[int, int], None],
    max_workers: Optional[int] = None,
    min_chunk: int = DEFAULT_MIN_CHUNK,
) -> None:
    """
    Run worker(lo, hi) over disjoint chunks covering [0, count).

    Returns only after every chunk has finished. An exception raised in any
    chunk is re-raised here.

    Args:
        count: Number of independent work units
        worker: Callable processing units lo..hi-1
        max_workers: Thread count (defaults to the CPU count)
        min_chunk: Minimum units per chunk
    """
    if count <= 0:
        return

    workers = max_workers if max_workers is not None else default_workers()
    workers = max(1, min(workers, count // max(1, min_chunk)))

    if workers == 1:
        worker(0, count)
        return

    ranges = split_range(count, workers)
    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures: List[Future] = [pool.submit(worker, lo, hi) for lo, hi in ranges]
        for future in futures:
            future.result()
