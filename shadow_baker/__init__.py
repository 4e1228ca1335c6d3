"""
Shadow Baker - Drop shadow generation for 2D sprites
"""

from .core import (
    SpriteParser, Sprite, SpriteExporter,
    ShadowColor, ShadowCompositor, ShadowResult,
    generate, blur_in_place, get_kernel, clamp_radius,
)
from .config import ShadowConfig, load_config, save_config
from .batch import run_batch, BatchReport, ItemStatus
from .errors import ShadowBakerError, ConfigError, OutputDirectoryError, SpriteDecodeError

__version__ = "0.1.0"
__all__ = [
    'SpriteParser',
    'Sprite',
    'SpriteExporter',
    'ShadowColor',
    'ShadowCompositor',
    'ShadowResult',
    'generate',
    'blur_in_place',
    'get_kernel',
    'clamp_radius',
    'ShadowConfig',
    'load_config',
    'save_config',
    'run_batch',
    'BatchReport',
    'ItemStatus',
    'ShadowBakerError',
    'ConfigError',
    'OutputDirectoryError',
    'SpriteDecodeError',
]
