"""
Shared pytest fixtures for shadow_baker tests.

This module provides:
- Sprite fixtures (programmatically generated RGBA arrays)
- Image file fixtures written to tmp_path
- Isolated kernel cache / buffer pool / compositor fixtures
"""
import pytest
import numpy as np
from pathlib import Path
from PIL import Image

from shadow_baker.core import BufferPool, GaussianKernelCache, ShadowCompositor


# ==============================================================================
# Pixel fixtures
# ==============================================================================

def make_solid(width, height, rgba=(255, 255, 255, 255)):
    """Return a (height, width, 4) uint8 array filled with one color."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return pixels


@pytest.fixture
def opaque_4x4():
    """Solid opaque 4x4 white sprite."""
    return make_solid(4, 4)


@pytest.fixture
def single_white_pixel():
    """1x1 fully opaque white sprite."""
    return make_solid(1, 1)


@pytest.fixture
def diamond_sprite():
    """9x9 sprite with an opaque diamond and transparent corners."""
    pixels = np.zeros((9, 9, 4), dtype=np.uint8)
    for y in range(9):
        for x in range(9):
            if abs(x - 4) + abs(y - 4) <= 3:
                pixels[y, x] = (200, 50, 20, 255)
    return pixels


# ==============================================================================
# File fixtures
# ==============================================================================

@pytest.fixture
def sprite_file(tmp_path, diamond_sprite):
    """Write the diamond sprite as a PNG and return its path."""
    path = tmp_path / "sprites" / "diamond.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(diamond_sprite).save(path)
    return path


@pytest.fixture
def broken_file(tmp_path):
    """A .png file that isn't an image."""
    path = tmp_path / "sprites" / "broken.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"definitely not a png")
    return path


# ==============================================================================
# Isolated core state
# ==============================================================================

@pytest.fixture
def kernel_cache():
    return GaussianKernelCache()


@pytest.fixture
def pool():
    return BufferPool()


@pytest.fixture
def compositor(kernel_cache, pool):
    """Compositor with its own cache and pool, single-threaded."""
    return ShadowCompositor(kernel_cache=kernel_cache, pool=pool, max_workers=1)


@pytest.fixture
def solid():
    """Factory for solid-color sprites: solid(width, height, rgba)."""
    return make_solid
