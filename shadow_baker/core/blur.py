"""
Separable Gaussian Blur - In-place two-pass blur over RGBA float buffers

Horizontal pass:  buffer -> scratch
Vertical pass:    scratch -> buffer

Samples outside the buffer are clamped to the nearest edge pixel. The
compositor pads its buffer with a transparent ring as wide as the radius,
so in practice the clamped samples are transparent and the shadow fades out
smoothly instead of being cut at the image border.
"""

import numpy as np
from typing import Optional

from .kernel import GaussianKernelCache, default_kernel_cache
from .parallel import parallel_for
from .pool import BufferPool, shared_pool


def as_image_view(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    View the first width * height RGBA entries of a buffer as (H, W, 4).

    Accepts (H, W, 4) images as well as flat (N, 4) or (N * 4,) pool
    buffers. The result is always a view, never a copy.
    """
    count = width * height
    if buffer.ndim == 3 and buffer.shape[0] == height and buffer.shape[1] == width:
        return buffer

    if not buffer.flags.c_contiguous:
        raise ValueError("Flat blur buffers must be C-contiguous")

    flat = buffer.reshape(-1, 4)
    if flat.shape[0] < count:
        raise ValueError(
            f"Buffer holds {flat.shape[0]} pixels, need {count} for {width}x{height}"
        )
    return flat[:count].reshape(height, width, 4)


def _accumulate_shifted(
    dst: np.ndarray,
    src: np.ndarray,
    start: int,
    stop: int,
    offset: int,
    weight: np.float32,
) -> None:
    """
    dst[i - start] += src[clamp(i + offset, 0, n - 1)] * weight
    for every i in [start, stop), where n = len(src) along axis 0.
    """
    n = src.shape[0]

    # Indices whose sample lands inside the source
    lo = max(start, -offset)
    hi = min(stop, n - offset)
    if lo < hi:
        dst[lo - start:hi - start] += src[lo + offset:hi + offset] * weight

    # Clamped to the first element
    left_end = min(stop, -offset)
    if left_end > start:
        dst[:left_end - start] += src[0] * weight

    # Clamped to the last element
    right_start = max(start, n - offset)
    if right_start < stop:
        dst[right_start - start:] += src[n - 1] * weight


def blur_in_place(
    buffer: np.ndarray,
    width: int,
    height: int,
    radius: int,
    kernel_cache: Optional[GaussianKernelCache] = None,
    pool: Optional[BufferPool] = None,
    max_workers: Optional[int] = None,
) -> None:
    """
    Apply a separable Gaussian blur to an RGBA float buffer in place.

    Args:
        buffer: (H, W, 4) array, or flat pool buffer with >= W * H entries
        width: Image width in pixels
        height: Image height in pixels
        radius: Blur radius; 0 leaves the buffer untouched
        kernel_cache: Kernel cache (defaults to the shared one)
        pool: Pool for the scratch buffer (defaults to the shared one)
        max_workers: Thread count for the row-parallel passes
    """
    if radius <= 0 or width <= 0 or height <= 0:
        return

    kernel_cache = kernel_cache or default_kernel_cache()
    pool = pool or shared_pool()

    kernel = kernel_cache.get_kernel(radius)
    image = as_image_view(buffer, width, height)

    with pool.borrow(width * height, 4, image.dtype) as scratch_buffer:
        scratch = scratch_buffer[:width * height].reshape(height, width, 4)

        def horizontal(lo: int, hi: int) -> None:
            # Rows lo..hi-1, with columns moved to axis 0
            src = image[lo:hi].swapaxes(0, 1)
            dst = scratch[lo:hi].swapaxes(0, 1)
            dst[...] = 0
            for i, weight in enumerate(kernel):
                _accumulate_shifted(dst, src, 0, width, i - radius, weight)

        def vertical(lo: int, hi: int) -> None:
            dst = image[lo:hi]
            dst[...] = 0
            for i, weight in enumerate(kernel):
                _accumulate_shifted(dst, scratch, lo, hi, i - radius, weight)

        # Vertical reads whole columns of scratch, so it must wait for
        # every horizontal chunk.
        parallel_for(height, horizontal, max_workers=max_workers)
        parallel_for(height, vertical, max_workers=max_workers)
