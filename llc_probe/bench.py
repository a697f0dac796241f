import logging
import time
from dataclasses import dataclass

import numpy as np

from .units import format_bytes, format_duration

logger = logging.getLogger(__name__)

# One element per cache line, so no two random accesses share a line.
ELEMENT_SIZE = 64
# Indices are drawn in batches of this many; only the accesses are timed.
# 4096 int64 indices are 32 KiB, small enough to stay out of the way of the
# buffer being measured.
CHUNK = 1 << 12


@dataclass(frozen=True)
class Sample:
    size: int
    latency: float  # ns per access


def allocate(size: int, element_size: int = ELEMENT_SIZE) -> np.ndarray:
    # Rows are element_size bytes wide; only the first byte of each is touched.
    if element_size < 1:
        raise ValueError(f"element_size must be positive, got {element_size}")
    n = max(1, size // element_size)
    return np.zeros((n, element_size), dtype=np.uint8)


def random_access(size: int, iterations: int, rng: np.random.Generator, element_size: int = ELEMENT_SIZE) -> int:
    """Time `iterations` random read-increment-writes over a `size` byte buffer.

    Returns the elapsed wall-clock time in nanoseconds.
    """
    if size < 1:
        raise ValueError(f"size must be positive, got {size}")
    if iterations < 1:
        raise ValueError(f"iterations must be positive, got {iterations}")

    arr = allocate(size, element_size)
    n = len(arr)
    column = arr[:, 0]

    elapsed = 0
    done = 0
    while done < iterations:
        count = min(CHUNK, iterations - done)
        idx = rng.integers(0, np.iinfo(np.int64).max, size=count)
        np.remainder(idx, n, out=idx)
        start = time.perf_counter_ns()
        # add.at is unbuffered: repeated indices are each incremented.
        np.add.at(column, idx, 1)
        elapsed += time.perf_counter_ns() - start
        done += count
    return elapsed


def run_sweep(sizes, iterations: int, rng: np.random.Generator, benchmark=random_access) -> list[Sample]:
    series = []
    for size in sizes:
        logger.info("Size: %s", format_bytes(size))
        elapsed = benchmark(size, iterations, rng)
        logger.info("  elapsed %s", format_duration(elapsed))
        series.append(Sample(size=size, latency=elapsed / iterations))
    return series


def stride_sweep(length: int = 32 * 2**20, max_stride: int = 128) -> list[Sample]:
    """Time touching every k-th int32 of a fixed array, for k in 1..max_stride.

    Total time stays flat while k is within a cache line and drops once the
    stride skips lines.
    """
    arr = np.empty(length, dtype=np.int32)
    series = []
    for k in range(1, max_stride + 1):
        # reset
        arr.fill(4)
        start = time.perf_counter_ns()
        arr[::k] *= 3
        elapsed = time.perf_counter_ns() - start
        logger.info("%d : %s", k, format_duration(elapsed))
        series.append(Sample(size=k, latency=float(elapsed)))
    return series
