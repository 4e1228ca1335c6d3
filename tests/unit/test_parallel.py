"""
Unit tests for the chunked parallel-for helper.
"""
import threading

import pytest
import numpy as np

from shadow_baker.core.parallel import parallel_for, split_range


class TestSplitRange:

    def test_covers_range(self):
        ranges = split_range(10, 3)
        assert ranges == [(0, 4), (4, 8), (8, 10)]

    def test_more_chunks_than_units(self):
        assert split_range(2, 8) == [(0, 1), (1, 2)]

    def test_empty(self):
        assert split_range(0, 4) == []


class TestParallelFor:

    @pytest.mark.parametrize("count,workers,min_chunk", [
        (1, 4, 1),
        (10, 1, 1),
        (1000, 4, 1),
        (1000, 8, 64),
        (37, 5, 2),
    ])
    def test_every_index_visited_once(self, count, workers, min_chunk):
        hits = np.zeros(count, dtype=np.int32)

        def worker(lo, hi):
            hits[lo:hi] += 1

        parallel_for(count, worker, max_workers=workers, min_chunk=min_chunk)
        assert np.all(hits == 1)

    def test_zero_count_does_nothing(self):
        calls = []
        parallel_for(0, lambda lo, hi: calls.append((lo, hi)))
        assert calls == []

    def test_small_count_runs_inline(self):
        """Below min_chunk the worker runs once on the calling thread."""
        calls = []

        def worker(lo, hi):
            calls.append((lo, hi, threading.current_thread()))

        parallel_for(10, worker, max_workers=8, min_chunk=64)
        assert calls == [(0, 10, threading.current_thread())]

    def test_uses_multiple_chunks(self):
        calls = []
        lock = threading.Lock()

        def worker(lo, hi):
            with lock:
                calls.append((lo, hi))

        parallel_for(400, worker, max_workers=4, min_chunk=1)
        assert sorted(calls) == [(0, 100), (100, 200), (200, 300), (300, 400)]

    def test_exception_propagates(self):
        def worker(lo, hi):
            if lo > 0:
                raise RuntimeError("chunk failed")

        with pytest.raises(RuntimeError, match="chunk failed"):
            parallel_for(100, worker, max_workers=4, min_chunk=1)
