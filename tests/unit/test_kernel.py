"""
Unit tests for Gaussian kernel computation and the single-slot cache.
"""
import pytest
import numpy as np

from shadow_baker.core.kernel import (
    MAX_BLUR_RADIUS,
    GaussianKernelCache,
    clamp_radius,
    compute_gaussian_kernel,
    get_kernel,
)


class TestKernelShape:
    """Test kernel length, normalization and symmetry."""

    @pytest.mark.parametrize("radius", [0, 1, 2, 3, 10, 64, 250, 512])
    def test_kernel_normalized(self, radius):
        """Weights sum to 1 and there are 2r+1 of them."""
        kernel = compute_gaussian_kernel(radius)
        assert len(kernel) == 2 * radius + 1
        assert abs(float(kernel.sum(dtype=np.float64)) - 1.0) < 1e-5

    @pytest.mark.parametrize("radius", [1, 4, 17, 100])
    def test_kernel_symmetric_and_peaked(self, radius):
        """Weights mirror around the center, which holds the maximum."""
        kernel = compute_gaussian_kernel(radius)
        for i in range(len(kernel)):
            assert kernel[i] == kernel[2 * radius - i]
        assert np.argmax(kernel) == radius
        assert np.all(kernel >= 0)

    def test_radius_zero_is_identity(self):
        """Radius 0 gives exactly [1.0]."""
        kernel = compute_gaussian_kernel(0)
        assert kernel.tolist() == [1.0]

    def test_known_weights_radius_one(self):
        """Radius 1 (sigma 0.5) matches the closed form."""
        edge = np.exp(-2.0)
        expected = np.array([edge, 1.0, edge]) / (1.0 + 2.0 * edge)
        np.testing.assert_allclose(compute_gaussian_kernel(1), expected, rtol=1e-6)

    def test_negative_radius_rejected(self):
        with pytest.raises(ValueError):
            compute_gaussian_kernel(-1)


class TestClampRadius:
    """Test radius clamping."""

    @pytest.mark.parametrize("value,expected", [
        (-5, 0),
        (0, 0),
        (10, 10),
        (512, 512),
        (513, MAX_BLUR_RADIUS),
        (10_000, MAX_BLUR_RADIUS),
    ])
    def test_clamp(self, value, expected):
        assert clamp_radius(value) == expected


class TestKernelCache:
    """Test the single-slot memoization."""

    def test_same_radius_returns_cached_array(self, kernel_cache):
        """Repeated lookups return the very same array."""
        first = kernel_cache.get_kernel(5)
        second = kernel_cache.get_kernel(5)
        assert first is second
        assert kernel_cache.cached_radius == 5

    def test_radius_change_replaces_slot(self, kernel_cache):
        """Switching radius recomputes and keeps only the latest kernel."""
        first = kernel_cache.get_kernel(5)
        other = kernel_cache.get_kernel(3)
        assert len(other) == 7
        assert kernel_cache.cached_radius == 3

        again = kernel_cache.get_kernel(5)
        assert again is not first
        np.testing.assert_array_equal(again, compute_gaussian_kernel(5))
        np.testing.assert_array_equal(again, first)

    def test_cached_kernel_is_read_only(self, kernel_cache):
        """Callers can't corrupt the cached weights."""
        kernel = kernel_cache.get_kernel(2)
        with pytest.raises(ValueError):
            kernel[0] = 1.0

    def test_clear(self, kernel_cache):
        kernel_cache.get_kernel(4)
        kernel_cache.clear()
        assert kernel_cache.cached_radius is None

    def test_shared_cache(self):
        """Module-level get_kernel matches a fresh computation."""
        np.testing.assert_array_equal(get_kernel(7), compute_gaussian_kernel(7))
