#!/usr/bin/env python3
"""Render the showcase scene.

This script renders the showcase scene (three spheres over a reflective
floor, lit by two spherical lights and a directional light) and saves the
result as a PPM or PNG file, depending on the output extension.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 1024)
    --height HEIGHT     Image height in pixels (default: 1024)
    --depth DEPTH       Maximum recursion depth (default: 10)
    --output OUTPUT     Output file path, .ppm or .png (default: showcase.ppm)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 256 --height 256 --output showcase.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=1024,
        help="Image height in pixels (default: 1024)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=10,
        help="Maximum recursion depth (default: 10)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.ppm",
        help="Output file path, .ppm or .png (default: showcase.ppm)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend; the GPU must support 64-bit floats (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_showcase(
    width: int = 1024,
    height: int = 1024,
    max_recursion_depth: int = 10,
    output_path: str = "showcase.ppm",
    quiet: bool = False,
) -> Path:
    """Render the showcase scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        max_recursion_depth: Recursion limit for reflection and refraction.
        output_path: Output file path (.ppm or .png).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from chibiray.core.render import render
    from chibiray.preview.export import save_image
    from chibiray.scene.showcase import create_showcase_scene

    scene = create_showcase_scene(width, height, max_recursion_depth)

    if not quiet:
        print(f"Rendering showcase scene ({width}x{height}, depth {max_recursion_depth})...")

    start_time = time.time()
    image = render(scene)

    output_file = Path(output_path)
    save_image(image, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    arch = ti.gpu if args.arch == "gpu" else ti.cpu
    ti.init(arch=arch, default_fp=ti.f64)

    try:
        render_showcase(
            width=args.width,
            height=args.height,
            max_recursion_depth=args.depth,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
