"""
Gaussian Kernel Cache - 1D blur weights memoized by radius

The blur engine asks for the same radius once per image, so only the last
computed kernel is kept. A request for a different radius replaces it.
"""

import numpy as np
from typing import Optional, Tuple


MAX_BLUR_RADIUS = 512


def clamp_radius(radius: int) -> int:
    """Clamp a blur radius to the supported range [0, MAX_BLUR_RADIUS]"""
    return max(0, min(int(radius), MAX_BLUR_RADIUS))


def compute_gaussian_kernel(radius: int) -> np.ndarray:
    """
    Compute normalized Gaussian weights for offsets -radius..radius.

    Sigma is radius / 2, so the kernel reaches about two standard
    deviations at each end. Radius 0 is the identity kernel [1.0].

    Args:
        radius: Blur radius in pixels (>= 0)

    Returns:
        float32 array of 2 * radius + 1 weights summing to 1.0
    """
    if radius < 0:
        raise ValueError(f"Blur radius must be >= 0, got {radius}")

    if radius == 0:
        return np.ones(1, dtype=np.float32)

    sigma = radius / 2.0
    two_sigma_sq = 2.0 * sigma * sigma
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    weights = np.exp(-(offsets * offsets) / two_sigma_sq)
    weights /= weights.sum()

    return weights.astype(np.float32)


class GaussianKernelCache:
    """Single-slot cache of the most recently used Gaussian kernel"""

    def __init__(self):
        # (radius, kernel) is swapped as one tuple so a reader never pairs
        # one radius with another radius' weights.
        self._slot: Optional[Tuple[int, np.ndarray]] = None

    @property
    def cached_radius(self) -> Optional[int]:
        slot = self._slot
        return slot[0] if slot is not None else None

    def get_kernel(self, radius: int) -> np.ndarray:
        """
        Get the kernel for a radius, computing it on a cache miss.

        The returned array is shared with the cache and is read-only.
        """
        slot = self._slot
        if slot is not None and slot[0] == radius and len(slot[1]) > 0:
            return slot[1]

        kernel = compute_gaussian_kernel(radius)
        kernel.flags.writeable = False
        self._slot = (radius, kernel)
        return kernel

    def clear(self) -> None:
        self._slot = None


_default_cache = GaussianKernelCache()


def get_kernel(radius: int) -> np.ndarray:
    """Get a Gaussian kernel from the shared process-wide cache"""
    return _default_cache.get_kernel(radius)


def default_kernel_cache() -> GaussianKernelCache:
    return _default_cache
