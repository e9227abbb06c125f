"""Render the reference sphere scene.

Usage:
    spheretrace [options]
    python -m spheretrace [options]

Options:
    --width WIDTH         Image width in pixels (default: 1000)
    --height HEIGHT       Image height in pixels (default: 500)
    --samples SAMPLES     Number of samples per pixel (default: 4)
    --max-depth DEPTH     Maximum diffuse bounces per path (default: 50)
    --output OUTPUT       Output file, .ppm or .png (default: render.ppm)
    --seed SEED           Random seed for a reproducible image
    --nearest-hit         Use nearest-hit instead of first-hit traversal
    --backend BACKEND     "python" (default) or "taichi"
    --quiet               Suppress progress output

Example:
    spheretrace --width 200 --height 100 --samples 16 --output spheres.png
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from spheretrace.core.integrator import MAX_DEPTH
from spheretrace.core.renderer import RenderSettings
from spheretrace.scene.presets import REFERENCE_HEIGHT, REFERENCE_SAMPLES, REFERENCE_WIDTH

BACKENDS = ("python", "taichi")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spheretrace",
        description="Render the reference sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=REFERENCE_WIDTH,
        help=f"Image width in pixels (default: {REFERENCE_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=REFERENCE_HEIGHT,
        help=f"Image height in pixels (default: {REFERENCE_HEIGHT})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=REFERENCE_SAMPLES,
        help=f"Number of samples per pixel (default: {REFERENCE_SAMPLES})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum diffuse bounces per path (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.ppm",
        help="Output file path, .ppm or .png (default: render.ppm)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible image",
    )
    parser.add_argument(
        "--nearest-hit",
        action="store_true",
        help="Shade the nearest intersection instead of the first object in scene order",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="python",
        help="Rendering backend (default: python)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def _init_taichi(seed: int | None, quiet: bool) -> None:
    import taichi as ti

    # Use GPU if available, fall back to CPU
    seed_kwargs = {} if seed is None else {"random_seed": seed}
    try:
        ti.init(arch=ti.gpu, **seed_kwargs)
        if not quiet:
            print("Using Taichi GPU backend")
    except Exception:
        ti.init(arch=ti.cpu, **seed_kwargs)
        if not quiet:
            print("Using Taichi CPU backend")


def render_scene(
    settings: RenderSettings,
    output_path: str = "render.ppm",
    seed: int | None = None,
    nearest_hit: bool = False,
    backend: str = "python",
    quiet: bool = False,
) -> Path:
    """Render the reference scene and save it to a file.

    PPM output is streamed pixel by pixel; PNG output is collected in memory
    and written once the render finishes.

    Args:
        settings: Image size, sample count and depth cap.
        output_path: Output file path (.ppm or .png).
        seed: Random seed, or None for a nondeterministic render.
        nearest_hit: Use nearest-hit traversal.
        backend: "python" or "taichi". The taichi backend expects ti.init
            to have been called.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from spheretrace.core.sampling import make_rng
    from spheretrace.output.export import save_png
    from spheretrace.output.ppm import PPMWriter
    from spheretrace.output.sink import ArraySink
    from spheretrace.scene.presets import reference_camera, reference_scene
    from spheretrace.scene.world import TraversalMode

    output_file = Path(output_path)
    suffix = output_file.suffix.lower()
    if suffix not in (".ppm", ".png"):
        raise ValueError(f"Unsupported output format {suffix!r}; use .ppm or .png")

    mode = TraversalMode.NEAREST_HIT if nearest_hit else TraversalMode.FIRST_HIT
    scene = reference_scene(mode)
    camera = reference_camera()

    if backend == "taichi":
        from spheretrace.accel.integrator import render
    elif backend == "python":
        from spheretrace.core.renderer import render
    else:
        raise ValueError(f"Unknown backend: {backend}")

    if not quiet:
        print(
            f"Rendering {settings.width}x{settings.height} at "
            f"{settings.samples_per_pixel} samples per pixel ({mode.value}-hit)..."
        )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    def run(sink) -> None:
        if backend == "taichi":
            render(scene, camera, settings, sink, callback=progress_callback)
        else:
            render(scene, camera, settings, sink, make_rng(seed), callback=progress_callback)

    if suffix == ".ppm":
        with PPMWriter(output_file, settings.width, settings.height) as ppm:
            run(ppm)
    else:
        sink = ArraySink(settings.width, settings.height)
        run(sink)
        save_png(sink.image, output_file)

    if not quiet:
        print()  # Newline after progress

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
        )
        if args.backend == "taichi":
            _init_taichi(args.seed, args.quiet)
        render_scene(
            settings,
            output_path=args.output,
            seed=args.seed,
            nearest_hit=args.nearest_hit,
            backend=args.backend,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
