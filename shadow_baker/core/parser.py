"""
Sprite Parser - Reads image files into RGBA pixel buffers
Any format Pillow can decode is accepted
"""

from PIL import Image, UnidentifiedImageError
import numpy as np
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from ..errors import SpriteDecodeError


@dataclass
class Sprite:
    """A decoded sprite: RGBA uint8 pixels of shape (height, width, 4)"""
    width: int
    height: int
    pixels: np.ndarray
    name: str = "sprite"
    source_path: Optional[Path] = None


class SpriteParser:
    """Decodes image files into Sprite objects"""

    @classmethod
    def parse(cls, path: str | Path) -> Sprite:
        """Parse an image file into a Sprite object

        Raises:
            FileNotFoundError: if the file does not exist
            SpriteDecodeError: if the file has no readable pixel data
        """
        path = Path(path)

        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            with Image.open(path) as img:
                # Animated formats: only the first frame is used
                img.seek(0)
                rgba = img.convert('RGBA') if img.mode != 'RGBA' else img.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise SpriteDecodeError(f"Could not decode {path}: {e}") from e

        return Sprite(
            width=rgba.width,
            height=rgba.height,
            pixels=np.array(rgba, dtype=np.uint8),
            name=path.stem,
            source_path=path
        )
