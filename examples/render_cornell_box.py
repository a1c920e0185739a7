#!/usr/bin/env python3
"""Render the Cornell box scene.

This script demonstrates end-to-end rendering of the Cornell box scene with
lumen. It creates the scene and camera, picks a renderer, accumulates
progressive passes and saves a tone mapped PNG.

Usage:
    python examples/render_cornell_box.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 256)
    --height HEIGHT         Image height in pixels (default: 256)
    --samples SAMPLES       Paths per pixel in every pass (default: 4)
    --passes PASSES         Number of progressive passes (default: 16)
    --depth-limit DEPTH     Maximum path length (default: 5)
    --renderer NAME         path, ray or debug (default: path)
    --tonemap OPERATOR      linear, gamma[:g], reinhard[:g] or filmic (default: gamma:2.2)
    --exposure EXPOSURE     Linear exposure before tone mapping (default: 1.0)
    --workers WORKERS       Worker processes (default: 1)
    --seed SEED             Base random seed (default: 0)
    --config FILE           JSON file with render settings (overridden by flags)
    --output OUTPUT         Output file path (default: cornell_box.png)
    --preview               Show the result in a Matplotlib window
    --quiet                 Only log warnings and errors

Example:
    python examples/render_cornell_box.py --width 128 --height 128 --passes 8 --workers 4
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import taichi as ti

if TYPE_CHECKING:
    from lumen.core.config import RenderConfig

logger = logging.getLogger("render_cornell_box")

RENDERERS = ("path", "ray", "debug")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Cornell box scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, help="Image width in pixels (default: 256)")
    parser.add_argument("--height", type=int, help="Image height in pixels (default: 256)")
    parser.add_argument("--samples", type=int, help="Paths per pixel in every pass (default: 4)")
    parser.add_argument("--passes", type=int, help="Number of progressive passes (default: 16)")
    parser.add_argument("--depth-limit", dest="depth_limit", type=int, help="Maximum path length (default: 5)")
    parser.add_argument(
        "--contribution-limit",
        dest="contribution_limit",
        type=float,
        help="Minimum path throughput before a path is cut (default: 0.01)",
    )
    parser.add_argument("--tonemap", type=str, help="Tone mapping operator (default: gamma:2.2)")
    parser.add_argument("--exposure", type=float, help="Linear exposure before tone mapping (default: 1.0)")
    parser.add_argument("--workers", type=int, help="Worker processes (default: 1)")
    parser.add_argument("--seed", type=int, help="Base random seed (default: 0)")
    parser.add_argument("--renderer", choices=RENDERERS, default="path", help="Renderer (default: path)")
    parser.add_argument("--config", type=Path, help="JSON file with render settings")
    parser.add_argument(
        "--output",
        type=str,
        default="cornell_box.png",
        help="Output file path (default: cornell_box.png)",
    )
    parser.add_argument("--preview", action="store_true", help="Show the result in a Matplotlib window")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args()


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Merge the optional JSON config file with command-line overrides."""
    from lumen.core.config import RenderConfig

    settings: dict[str, Any] = {}
    if args.config is not None:
        settings.update(json.loads(args.config.read_text()))

    for name in (
        "width",
        "height",
        "samples",
        "passes",
        "depth_limit",
        "contribution_limit",
        "tonemap",
        "exposure",
        "workers",
        "seed",
    ):
        value = getattr(args, name)
        if value is not None:
            settings[name] = value

    return RenderConfig.from_dict(settings)


def render_cornell_box(
    config: RenderConfig,
    renderer_name: str = "path",
    output_path: str = "cornell_box.png",
    preview: bool = False,
) -> Path:
    """Render the Cornell box scene and save to file.

    Args:
        config: The RenderConfig to render with.
        renderer_name: One of "path", "ray" or "debug".
        output_path: Output file path (PNG).
        preview: If True, show the result in a Matplotlib window.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from lumen.core.integrator import DebugRenderer, RayTracer
    from lumen.core.progressive import ProgressiveRenderer
    from lumen.preview.display import show_preview
    from lumen.scene.cornell_box import create_cornell_box_light, create_cornell_box_scene

    scene, camera = create_cornell_box_scene(aspect_ratio=config.aspect_ratio)

    if renderer_name == "path":
        renderer = config.path_tracer()
    elif renderer_name == "ray":
        renderer = RayTracer(create_cornell_box_light())
    else:
        renderer = DebugRenderer()

    progressive = ProgressiveRenderer(
        scene,
        camera,
        renderer,
        config.width,
        config.height,
        seed=config.seed,
        workers=config.workers,
    )

    logger.info(
        "Rendering %dx%d with %r, %d passes on %d worker(s)",
        config.width,
        config.height,
        renderer,
        config.passes,
        config.workers,
    )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        elapsed = time.time() - start_time
        logger.info("Progress: %d/%d passes (%.1fs elapsed)", current, target, elapsed)

    progressive.render(config.passes, callback=progress_callback)

    output_file = Path(output_path)
    progressive.save_image(output_file, tonemap=config.tonemap, exposure=config.exposure)

    logger.info("Saved to: %s", output_file.absolute())
    logger.info("Total time: %.2fs", time.time() - start_time)

    if preview:
        show_preview(progressive, tonemap=config.tonemap, exposure=config.exposure)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # The film only accumulates passes, the CPU backend is sufficient
    ti.init(arch=ti.cpu)

    try:
        config = build_config(args)
        render_cornell_box(config, renderer_name=args.renderer, output_path=args.output, preview=args.preview)
    except (OSError, ValueError) as e:
        logger.error("Error: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
