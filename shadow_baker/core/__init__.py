"""
Shadow Baker - Core image processing
"""

from .parser import SpriteParser, Sprite
from .exporter import SpriteExporter, sanitize_output_name, sanitize_output_path
from .color import ShadowColor, BLACK
from .kernel import (
    MAX_BLUR_RADIUS, clamp_radius,
    compute_gaussian_kernel, GaussianKernelCache, get_kernel,
)
from .pool import BufferPool, shared_pool
from .parallel import parallel_for, split_range
from .blur import blur_in_place
from .compositor import (
    ShadowCompositor, ShadowResult,
    generate, float_to_byte,
)

__all__ = [
    'SpriteParser', 'Sprite', 'SpriteExporter',
    'sanitize_output_name', 'sanitize_output_path',
    # Color
    'ShadowColor', 'BLACK',
    # Kernel
    'MAX_BLUR_RADIUS', 'clamp_radius',
    'compute_gaussian_kernel', 'GaussianKernelCache', 'get_kernel',
    # Buffers & scheduling
    'BufferPool', 'shared_pool',
    'parallel_for', 'split_range',
    # Blur & compositing
    'blur_in_place',
    'ShadowCompositor', 'ShadowResult',
    'generate', 'float_to_byte',
]
