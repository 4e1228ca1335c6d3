"""
Sprite Exporter - Writes generated shadows to disk as PNG
"""

from PIL import Image
import numpy as np
from pathlib import Path

from .parser import Sprite
from ..errors import OutputDirectoryError


DEFAULT_EXTENSION = '.png'


def sanitize_output_name(name: str) -> str:
    """
    Normalize a configured output name into a relative file name.

    Surrounding whitespace and leading slashes are removed, and '.png' is
    appended unless the name already ends with it (case-insensitive).
    """
    name = name.strip().lstrip('/')
    if not name.lower().endswith(DEFAULT_EXTENSION):
        name += DEFAULT_EXTENSION
    return name


def sanitize_output_path(directory: str, name: str) -> str:
    """Join an output directory and a configured output name"""
    return directory + "/" + sanitize_output_name(name)


class SpriteExporter:
    """Exports shadow sprites and manages the output directory"""

    @classmethod
    def ensure_directory(cls, directory: str | Path) -> Path:
        """Create the output directory if it doesn't exist yet"""
        directory = Path(directory)
        if directory.is_dir():
            return directory

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(f"Failed to create output directory '{directory}': {e}") from e

        return directory

    @classmethod
    def write_pixels(cls, pixels: np.ndarray, width: int, height: int, path: str | Path) -> Path:
        """Encode an RGBA8 buffer as PNG"""
        path = Path(path)
        pixels = np.asarray(pixels, dtype=np.uint8).reshape(height, width, 4)

        # Output names may contain subdirectories
        path.parent.mkdir(parents=True, exist_ok=True)

        # (H, W, 4) uint8 is read as RGBA
        img = Image.fromarray(np.ascontiguousarray(pixels))
        img.save(path, 'PNG')

        return path

    @classmethod
    def to_png(cls, sprite: Sprite, path: str | Path) -> Path:
        """Export a single sprite to PNG"""
        return cls.write_pixels(sprite.pixels, sprite.width, sprite.height, path)
