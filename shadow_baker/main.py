#!/usr/bin/env python
"""
Shadow Baker CLI - Generate drop shadow images for 2D sprites

Usage:
    shadow-baker <config.yaml> [options]
    shadow-baker --images <image> [<image> ...] -o <dir> [options]

Examples:
    shadow-baker shadows.yaml                         # Run a batch config
    shadow-baker shadows.yaml --radius 6              # Override the blur radius
    shadow-baker --images hero.png tree.png -o out    # Ad-hoc images
    shadow-baker --images hero.png -c "#20103080"     # Tinted, half-opaque shadow
    shadow-baker --init shadows.yaml                  # Write a sample config
"""

import argparse
import logging
import sys
from pathlib import Path

from .batch import run_batch
from .config import ShadowConfig, load_config, save_config, DEFAULT_BLUR_RADIUS
from .core.color import ShadowColor
from .errors import ShadowBakerError

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shadow-baker',
        description="Generate blurred drop shadow images for 2D sprites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Config file (YAML):
  output_directory: build/shadows
  blur_radius: 10
  shadow_color: "#000000FF"
  outputs:
    sprites/hero.png: hero_shadow
    sprites/tree.png: props/tree_shadow

Output names get a .png extension if they don't already have one.
Blank output names are skipped.
        """
    )

    parser.add_argument(
        'config',
        type=str,
        nargs='?',
        default=None,
        help='Batch configuration file (YAML)'
    )

    parser.add_argument(
        '--images',
        type=str,
        nargs='+',
        default=None,
        metavar='IMAGE',
        help='Generate shadows for these images instead of a config file'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output directory (default: current directory for --images)'
    )

    parser.add_argument(
        '-r', '--radius',
        type=int,
        default=None,
        help=f'Blur radius in pixels, 0-512 (default: {DEFAULT_BLUR_RADIUS})'
    )

    parser.add_argument(
        '-c', '--color',
        type=str,
        default=None,
        help='Shadow color as #RRGGBB[AA] or r,g,b[,a] floats 0-1 (default: opaque black)'
    )

    parser.add_argument(
        '-j', '--jobs',
        type=int,
        default=None,
        help='Number of images processed concurrently (default: 1)'
    )

    parser.add_argument(
        '--init',
        type=str,
        default=None,
        metavar='PATH',
        help='Write a sample configuration file and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug output'
    )

    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only show warnings and errors'
    )

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', force=True)


def sample_config() -> ShadowConfig:
    return ShadowConfig(
        output_directory='shadows',
        outputs={'sprites/hero.png': 'hero_shadow'},
    )


def config_from_args(args: argparse.Namespace) -> ShadowConfig:
    """Build the batch configuration from a config file or --images"""
    if args.images:
        config = ShadowConfig(
            output_directory=args.output or '.',
            outputs={image: f"{Path(image).stem}_shadow" for image in args.images},
        )
    else:
        config = load_config(args.config)
        if args.output:
            config.output_directory = args.output.strip().rstrip('/')
            config.base_dir = None

    if args.radius is not None:
        config.blur_radius = args.radius
    if args.color is not None:
        try:
            config.shadow_color = ShadowColor.parse(args.color)
        except ValueError as e:
            raise ShadowBakerError(str(e)) from e
    if args.jobs is not None:
        config.jobs = args.jobs

    return config


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose, args.quiet)

    if args.init:
        path = save_config(sample_config(), args.init)
        print(f"Wrote sample config: {path}")
        return EXIT_OK

    if not args.config and not args.images:
        parser.print_help()
        return EXIT_ERROR

    try:
        config = config_from_args(args)
        report = run_batch(config)
    except ShadowBakerError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_ERROR

    for item in report.skipped:
        print(f"Skipped: {item.source or '<none>'} -> {item.name or '<blank>'} ({item.message})")

    print(report.summary())
    return EXIT_OK if report.all_succeeded else EXIT_PARTIAL


if __name__ == '__main__':
    sys.exit(main())
