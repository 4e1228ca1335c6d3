"""
Unit tests for output naming, directory handling and PNG writing.
"""
import pytest
import numpy as np
from PIL import Image

from shadow_baker.core.exporter import (
    SpriteExporter,
    sanitize_output_name,
    sanitize_output_path,
)
from shadow_baker.core.parser import Sprite
from shadow_baker.errors import OutputDirectoryError


class TestOutputNaming:

    @pytest.mark.parametrize("name,expected", [
        ("hero", "hero.png"),
        ("  hero_shadow  ", "hero_shadow.png"),
        ("/hero", "hero.png"),
        ("//props/tree", "props/tree.png"),
        ("hero.png", "hero.png"),
        ("HERO.PNG", "HERO.PNG"),
        ("hero.Png", "hero.Png"),
        ("hero.jpg", "hero.jpg.png"),
    ])
    def test_sanitize_name(self, name, expected):
        assert sanitize_output_name(name) == expected

    def test_sanitize_path(self):
        assert sanitize_output_path("out/shadows", " /hero ") == "out/shadows/hero.png"


class TestDirectory:

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        assert SpriteExporter.ensure_directory(target) == target
        assert target.is_dir()

    def test_existing_directory(self, tmp_path):
        assert SpriteExporter.ensure_directory(tmp_path) == tmp_path

    def test_creation_failure(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("x")
        with pytest.raises(OutputDirectoryError):
            SpriteExporter.ensure_directory(blocker / "sub")


class TestWritePng:

    def test_write_pixels_round_trip(self, tmp_path, diamond_sprite):
        path = SpriteExporter.write_pixels(diamond_sprite, 9, 9, tmp_path / "out.png")

        with Image.open(path) as img:
            assert img.mode == "RGBA"
            assert img.size == (9, 9)
            np.testing.assert_array_equal(np.array(img), diamond_sprite)

    def test_write_flat_buffer(self, tmp_path):
        flat = np.arange(2 * 3 * 4, dtype=np.uint8)
        path = SpriteExporter.write_pixels(flat, 2, 3, tmp_path / "flat.png")
        with Image.open(path) as img:
            assert img.size == (2, 3)

    def test_to_png_creates_subdirectories(self, tmp_path, opaque_4x4):
        sprite = Sprite(width=4, height=4, pixels=opaque_4x4)
        path = SpriteExporter.to_png(sprite, tmp_path / "nested" / "dir" / "s.png")
        assert path.is_file()

    def test_wrong_size_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            SpriteExporter.write_pixels(np.zeros(10, dtype=np.uint8), 2, 2, tmp_path / "x.png")
