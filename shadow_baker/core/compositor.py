"""
Shadow Compositor - Builds a blurred, colorized drop shadow from a sprite

Pipeline:
1. Copy the sprite's alpha into a float buffer padded by `radius` pixels
   on every side, colorized with the shadow color
2. Blur the padded buffer in place
3. Convert back to RGBA8

The padding gives the blur room to spread, so the output is
(width + 2 * radius) x (height + 2 * radius).
"""

import numpy as np
from typing import NamedTuple, Optional, Union

from .blur import blur_in_place
from .color import ShadowColor
from .kernel import GaussianKernelCache, clamp_radius, default_kernel_cache
from .parallel import parallel_for
from .parser import Sprite
from .pool import BufferPool, shared_pool


PixelSource = Union[np.ndarray, bytes, bytearray, memoryview]

# Pixels per chunk for the float -> byte conversion
CONVERT_CHUNK = 16384


class ShadowResult(NamedTuple):
    pixels: np.ndarray  # (height, width, 4) uint8
    width: int
    height: int


def float_to_byte(values: np.ndarray, out: np.ndarray) -> None:
    """
    Convert float channel values to bytes: round(clamp(v, 0, 1) * 255).

    Rounds half up, so 0.5 -> 128. Blurred sums of 1.0 can fall a few ULP
    short of 1.0, and truncating would turn those into 254.
    """
    scaled = np.clip(values, 0.0, 1.0)
    scaled *= 255.0
    scaled += 0.5
    np.floor(scaled, out=scaled)
    out[...] = scaled


def _source_view(source_pixels: PixelSource, width: int, height: int) -> np.ndarray:
    if source_pixels is None:
        raise ValueError("Source pixels must not be None")
    if width <= 0 or height <= 0:
        raise ValueError(f"Source size must be positive, got {width}x{height}")

    if isinstance(source_pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(source_pixels, dtype=np.uint8)
    else:
        flat = np.asarray(source_pixels, dtype=np.uint8)

    if flat.size != width * height * 4:
        raise ValueError(
            f"Source holds {flat.size} bytes, expected {width * height * 4} "
            f"for {width}x{height} RGBA"
        )
    return flat.reshape(height, width, 4)


class ShadowCompositor:
    """
    Generates drop shadow images.

    Uses the shared kernel cache and buffer pool unless given its own.
    """

    def __init__(
        self,
        kernel_cache: Optional[GaussianKernelCache] = None,
        pool: Optional[BufferPool] = None,
        max_workers: Optional[int] = None,
    ):
        self.kernel_cache = kernel_cache or default_kernel_cache()
        self.pool = pool or shared_pool()
        self.max_workers = max_workers

    def generate(
        self,
        source_pixels: PixelSource,
        width: int,
        height: int,
        color: ShadowColor,
        radius: int,
    ) -> ShadowResult:
        """
        Generate a drop shadow for an RGBA8 image.

        Args:
            source_pixels: (height, width, 4) uint8 array or flat RGBA8 bytes
            width: Source width
            height: Source height
            color: Shadow color, straight RGBA 0-1
            radius: Blur radius in pixels, clamped to [0, 512]

        Returns:
            ShadowResult with the padded uint8 pixels and their size
        """
        source = _source_view(source_pixels, width, height)
        radius = clamp_radius(radius)

        # Fully transparent color: nothing survives the pipeline
        if color.a <= 0:
            out_width = width + radius * 2
            out_height = height + radius * 2
            output = np.zeros((out_height, out_width, 4), dtype=np.uint8)
            return ShadowResult(output, out_width, out_height)

        return self._render(source, width, height, color, radius)

    def _render(
        self,
        source: np.ndarray,
        width: int,
        height: int,
        color: ShadowColor,
        radius: int,
    ) -> ShadowResult:
        """Run the full pad -> colorize -> blur -> convert pipeline"""
        out_width = width + radius * 2
        out_height = height + radius * 2
        count = out_width * out_height

        output = np.empty((out_height, out_width, 4), dtype=np.uint8)

        with self.pool.borrow(count, 4, np.float32) as buffer:
            work = buffer[:count].reshape(out_height, out_width, 4)

            # Pooled buffers carry stale data, clear the padding ring
            if radius > 0:
                work[:radius] = 0
                work[out_height - radius:] = 0
                work[radius:out_height - radius, :radius] = 0
                work[radius:out_height - radius, out_width - radius:] = 0

            self._colorize(source, work[radius:radius + height, radius:radius + width], color)

            blur_in_place(
                work, out_width, out_height, radius,
                kernel_cache=self.kernel_cache,
                pool=self.pool,
                max_workers=self.max_workers,
            )

            flat_in = buffer[:count]
            flat_out = output.reshape(count, 4)

            def convert(lo: int, hi: int) -> None:
                float_to_byte(flat_in[lo:hi], flat_out[lo:hi])

            parallel_for(count, convert, max_workers=self.max_workers, min_chunk=CONVERT_CHUNK)

        return ShadowResult(output, out_width, out_height)

    @staticmethod
    def _colorize(source: np.ndarray, dst: np.ndarray, color: ShadowColor) -> None:
        """
        Write the shadow color with alpha scaled by the source alpha.

        Pixels whose resulting shadow alpha is not positive are written as
        transparent zero, color channels included.
        """
        shadow_alpha = (source[:, :, 3].astype(np.float32) / 255.0) * np.float32(color.a)
        covered = shadow_alpha > 0

        dst[...] = 0
        dst[covered, 0] = color.r
        dst[covered, 1] = color.g
        dst[covered, 2] = color.b
        dst[covered, 3] = shadow_alpha[covered]

    def generate_from_sprite(self, sprite: Sprite, color: ShadowColor, radius: int) -> Sprite:
        """Generate the shadow of a decoded sprite as a new Sprite"""
        result = self.generate(sprite.pixels, sprite.width, sprite.height, color, radius)
        return Sprite(
            width=result.width,
            height=result.height,
            pixels=result.pixels,
            name=f"{sprite.name}_shadow",
            source_path=sprite.source_path
        )


_default_compositor = ShadowCompositor()


def generate(
    source_pixels: PixelSource,
    width: int,
    height: int,
    color: ShadowColor,
    radius: int,
) -> ShadowResult:
    """Generate a drop shadow with the shared compositor"""
    return _default_compositor.generate(source_pixels, width, height, color, radius)
