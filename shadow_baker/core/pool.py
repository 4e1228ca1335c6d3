"""
Buffer Pool - Reusable working buffers for the shadow pipeline

Padded float buffers for large sprites run into tens of megabytes. Allocating
them on every image is wasteful, so they are borrowed from a pool and handed
back when the operation finishes.

Buffers are grouped into power-of-two capacity buckets. A borrowed buffer may
be larger than requested and its contents are whatever the previous borrower
left behind.
"""

import threading
import numpy as np
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple


BucketKey = Tuple[str, int, int]  # (dtype, channels, capacity)


def _bucket_capacity(count: int) -> int:
    """Round a requested entry count up to its power-of-two bucket"""
    if count <= 1:
        return 1
    return 1 << (int(count) - 1).bit_length()


class BufferPool:
    """
    Thread-safe free list of flat numpy buffers.

    Usage:
        pool = BufferPool()
        with pool.borrow(width * height) as buf:
            work = buf[:width * height].reshape(height, width, 4)
            ...
    """

    def __init__(self, max_per_bucket: int = 4):
        self.max_per_bucket = max_per_bucket
        self._free: Dict[BucketKey, List[np.ndarray]] = {}
        self._lock = threading.Lock()

    def rent(self, count: int, channels: int = 4, dtype=np.float32) -> np.ndarray:
        """Take a buffer of at least `count` entries out of the pool"""
        if count < 0:
            raise ValueError(f"Buffer size must be >= 0, got {count}")

        dtype = np.dtype(dtype)
        capacity = _bucket_capacity(count)
        key = (dtype.str, channels, capacity)

        with self._lock:
            free = self._free.get(key)
            if free:
                return free.pop()

        return np.empty((capacity, channels), dtype=dtype)

    def give_back(self, buffer: np.ndarray) -> None:
        """Return a rented buffer so later borrowers can reuse it"""
        key = (buffer.dtype.str, buffer.shape[1], buffer.shape[0])

        with self._lock:
            free = self._free.setdefault(key, [])
            if len(free) < self.max_per_bucket and not any(b is buffer for b in free):
                free.append(buffer)

    @contextmanager
    def borrow(self, count: int, channels: int = 4, dtype=np.float32) -> Iterator[np.ndarray]:
        """Borrow a buffer for the duration of a with-block"""
        buffer = self.rent(count, channels, dtype)
        try:
            yield buffer
        finally:
            self.give_back(buffer)

    def stats(self) -> Dict[BucketKey, int]:
        """Number of idle buffers held per bucket"""
        with self._lock:
            return {key: len(free) for key, free in self._free.items() if free}

    def clear(self) -> None:
        """Drop every idle buffer"""
        with self._lock:
            self._free.clear()


_shared_pool = BufferPool()


def shared_pool() -> BufferPool:
    """The process-wide pool used when no pool is passed explicitly"""
    return _shared_pool
