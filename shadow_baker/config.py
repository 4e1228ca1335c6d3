"""
Batch configuration - which images get shadows, where they go, and how they look

Example shadows.yaml:

    output_directory: build/shadows
    blur_radius: 10
    shadow_color: "#000000B0"
    outputs:
      sprites/hero.png: hero_shadow
      sprites/tree.png: props/tree_shadow.png

Relative paths are resolved against the directory of the YAML file.
"""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .core.color import ShadowColor, BLACK
from .errors import ConfigError


DEFAULT_BLUR_RADIUS = 10


def normalize_directory(directory: Optional[str]) -> str:
    """Trim whitespace and trailing slashes from a directory setting"""
    if directory is None:
        return ""
    return str(directory).strip().rstrip('/')


@dataclass
class ShadowConfig:
    """Settings for one batch of drop shadow images."""

    output_directory: str = ""
    # source image path -> output file name (blank = skip)
    outputs: Dict[str, Optional[str]] = field(default_factory=dict)
    blur_radius: int = DEFAULT_BLUR_RADIUS  # clamped to 0-512 at generation
    shadow_color: ShadowColor = BLACK
    jobs: int = 1  # images processed concurrently
    base_dir: Optional[Path] = None  # anchor for relative paths

    @property
    def resolved_output_directory(self) -> str:
        directory = normalize_directory(self.output_directory)
        if directory and self.base_dir is not None and not Path(directory).is_absolute():
            directory = normalize_directory((self.base_dir / directory).as_posix())
        return directory

    def resolve_source(self, source: Optional[str]) -> Optional[Path]:
        """Resolve a configured source path, or None if it is blank"""
        if source is None or not str(source).strip():
            return None
        path = Path(str(source).strip())
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    def validate(self) -> None:
        """Raise ConfigError if the batch cannot run at all"""
        if not self.outputs:
            raise ConfigError("No drop shadow image is configured for generation.")
        if not self.resolved_output_directory:
            raise ConfigError("'output_directory' property is not set.")
        if self.jobs < 1:
            raise ConfigError(f"'jobs' must be at least 1, got {self.jobs}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return {
            'output_directory': self.output_directory,
            'blur_radius': self.blur_radius,
            'shadow_color': self.shadow_color.to_hex(),
            'jobs': self.jobs,
            'outputs': {str(k): v for k, v in self.outputs.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> ShadowConfig:
        """Create from dictionary; unknown keys are ignored"""
        outputs = data.get('outputs') or {}
        if not isinstance(outputs, dict):
            raise ConfigError("'outputs' must be a mapping of source image to output name")

        try:
            color = ShadowColor.parse(data['shadow_color']) if 'shadow_color' in data else BLACK
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid 'shadow_color': {e}") from e

        try:
            blur_radius = int(data.get('blur_radius', DEFAULT_BLUR_RADIUS))
            jobs = int(data.get('jobs', 1))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        return cls(
            output_directory=normalize_directory(data.get('output_directory')),
            outputs={str(k): (None if v is None else str(v)) for k, v in outputs.items()},
            blur_radius=blur_radius,
            shadow_color=color,
            jobs=jobs,
            base_dir=base_dir,
        )


def load_config(path: Path | str) -> ShadowConfig:
    """Load a batch configuration from a YAML file.

    Relative source paths and output directory are resolved against the
    file's directory.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    return ShadowConfig.from_dict(data, base_dir=path.resolve().parent)


def save_config(config: ShadowConfig, path: Path | str) -> Path:
    """Write a configuration as YAML"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    return path
