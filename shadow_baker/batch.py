"""
Batch Driver - Generates drop shadows for every image in a configuration

Configuration problems abort the whole batch before any image is touched.
Problems with a single image (blank name, missing or unreadable source,
failed write) skip that image and the batch carries on. Nothing is retried.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np

from .config import ShadowConfig
from .core.compositor import ShadowCompositor
from .core.exporter import SpriteExporter, sanitize_output_path
from .core.parser import Sprite, SpriteParser
from .errors import SpriteDecodeError

logger = logging.getLogger(__name__)


Decoder = Callable[[Path], Sprite]
Writer = Callable[[np.ndarray, int, int, str], Path]


class ItemStatus(Enum):
    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ItemResult:
    """Outcome for one configured (source, output name) pair"""
    source: Optional[str]
    name: Optional[str]
    status: ItemStatus
    output_path: Optional[str] = None
    message: str = ""


@dataclass
class BatchReport:
    configured: int
    results: List[ItemResult] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def generated(self) -> int:
        return sum(1 for r in self.results if r.status is ItemStatus.GENERATED)

    @property
    def skipped(self) -> List[ItemResult]:
        return [r for r in self.results if r.status is not ItemStatus.GENERATED]

    @property
    def output_paths(self) -> List[str]:
        return [r.output_path for r in self.results if r.status is ItemStatus.GENERATED]

    @property
    def all_succeeded(self) -> bool:
        return self.generated == self.configured

    def summary(self) -> str:
        return (
            f"Drop shadow generation complete. {self.generated} of {self.configured} "
            f"images generated in {self.elapsed:.3f} seconds."
        )


class ShadowBatch:
    """Runs one configuration through decode -> generate -> write"""

    def __init__(
        self,
        config: ShadowConfig,
        decoder: Optional[Decoder] = None,
        writer: Optional[Writer] = None,
        compositor: Optional[ShadowCompositor] = None,
    ):
        self.config = config
        self.decoder = decoder or SpriteParser.parse
        self.writer = writer or SpriteExporter.write_pixels
        self.compositor = compositor or ShadowCompositor()

    def _prepare_output_directory(self) -> str:
        directory = self.config.resolved_output_directory
        if not Path(directory).is_dir():
            logger.info(f"Output directory '{directory}' does not exist, creating it.")
            SpriteExporter.ensure_directory(directory)
        return directory

    def process_item(self, source: Optional[str], name: Optional[str], directory: str) -> ItemResult:
        """Generate and save the shadow for one configured pair"""
        if name is None or not name.strip():
            logger.warning(f"Source image '{source}' has no configured drop shadow output file name.")
            return ItemResult(source, name, ItemStatus.SKIPPED, message="blank output name")

        source_path = self.config.resolve_source(source)
        if source_path is None:
            logger.warning(f"No source image specified for output file '{name}'.")
            return ItemResult(source, name, ItemStatus.SKIPPED, message="missing source")

        try:
            sprite = self.decoder(source_path)
        except FileNotFoundError:
            logger.warning(f"Source image '{source_path}' for output file '{name}' does not exist.")
            return ItemResult(source, name, ItemStatus.SKIPPED, message="missing source")
        except SpriteDecodeError as e:
            logger.warning(f"Could not access the image data of '{source_path}' for output file '{name}': {e}")
            return ItemResult(source, name, ItemStatus.SKIPPED, message="undecodable source")

        if sprite is None or sprite.width <= 0 or sprite.height <= 0:
            logger.warning(f"Could not access the image data of '{source_path}' for output file '{name}'.")
            return ItemResult(source, name, ItemStatus.SKIPPED, message="undecodable source")

        shadow = self.compositor.generate(
            sprite.pixels, sprite.width, sprite.height,
            self.config.shadow_color, self.config.blur_radius,
        )

        output_path = sanitize_output_path(directory, name)
        try:
            self.writer(shadow.pixels, shadow.width, shadow.height, output_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save drop shadow image at '{output_path}': {e}")
            return ItemResult(source, name, ItemStatus.FAILED, output_path, message=str(e))

        logger.info(f"Generated drop shadow image at '{output_path}'.")
        return ItemResult(source, name, ItemStatus.GENERATED, output_path)

    def run(self) -> BatchReport:
        self.config.validate()
        directory = self._prepare_output_directory()
        items = list(self.config.outputs.items())

        logger.info(f"Generating drop shadow images. {len(items)} images will be processed.")
        start = time.perf_counter()

        if self.config.jobs > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=min(self.config.jobs, len(items))) as pool:
                results = list(pool.map(lambda item: self.process_item(item[0], item[1], directory), items))
        else:
            results = [self.process_item(source, name, directory) for source, name in items]

        report = BatchReport(
            configured=len(items),
            results=results,
            elapsed=time.perf_counter() - start,
        )
        logger.info(report.summary())
        return report


def run_batch(
    config: ShadowConfig,
    decoder: Optional[Decoder] = None,
    writer: Optional[Writer] = None,
    compositor: Optional[ShadowCompositor] = None,
) -> BatchReport:
    """
    Generate every configured drop shadow image.

    Raises:
        ConfigError: empty mapping or unset output directory
        OutputDirectoryError: output directory could not be created
    """
    return ShadowBatch(config, decoder, writer, compositor).run()
