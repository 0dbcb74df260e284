#!/usr/bin/env python3
"""Render a sphere scene and present it in a window.

Renders the frame once, prints how long it took, then shows the result until
the window is closed (Escape or 'q'). Left-clicking marks the pixel under the
cursor white.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 200)
    --height HEIGHT     Image height in pixels (default: 100)
    --samples SAMPLES   Samples per pixel (default: 100)
    --depth DEPTH       Maximum bounces per ray (default: 50)
    --scene SCENE       Preset name ("materials", "single") or a JSON scene file
    --seed SEED         Random seed (default: 0)
    --threads N         CPU worker threads (default: Taichi's choice)
    --headless          Render and exit without opening a window
    --static            Show the result with Matplotlib instead of GGUI

Example:
    python -m examples.render_spheres --width 400 --height 200 --samples 50
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels (default: 200)")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels (default: 100)")
    parser.add_argument("--samples", type=int, default=None, help="Samples per pixel (default: 100)")
    parser.add_argument("--depth", type=int, default=None, help="Maximum bounces per ray (default: 50)")
    parser.add_argument(
        "--scene",
        type=str,
        default="materials",
        help='Preset name ("materials", "single") or path to a JSON scene file',
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: 0)")
    parser.add_argument("--threads", type=int, default=None, help="CPU worker threads")
    parser.add_argument("--headless", action="store_true", help="Do not open a window")
    parser.add_argument("--static", action="store_true", help="Show with Matplotlib instead of GGUI")
    return parser.parse_args()


def build_config(args: argparse.Namespace):
    """Resolve the render configuration, scene and background from the arguments."""
    from pathtracer.config import RenderConfig, load_scene_file

    scene_path = Path(args.scene)
    if scene_path.suffix == ".json":
        config, scene, background = load_scene_file(scene_path)
    else:
        config, scene, background = RenderConfig(), None, None

    overrides = {
        "width": args.width,
        "height": args.height,
        "samples": args.samples,
        "max_depth": args.depth,
        "seed": args.seed,
        "num_threads": args.threads,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    config.validate()
    return config, scene, background


def main() -> int:
    """Main entry point."""
    args = parse_args()

    try:
        config, scene, background = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from pathtracer.config import init_taichi

    init_taichi(seed=config.seed, num_threads=config.num_threads)

    # Field-declaring modules are imported after Taichi is initialized
    from pathtracer.camera.pinhole import setup_camera
    from pathtracer.core.framebuffer import Framebuffer
    from pathtracer.core.integrator import set_background
    from pathtracer.core.renderer import Renderer
    from pathtracer.scene.presets import SCENES
    from pathtracer.scene.world import World

    try:
        if scene is None:
            if args.scene not in SCENES:
                raise ValueError(f"Unknown scene {args.scene!r}; choose from {sorted(SCENES)}")
            world, _ = SCENES[args.scene](aspect_ratio=config.aspect_ratio)
        else:
            world = World.build(scene)
            set_background(*background)
    except (RuntimeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_camera(config.camera())
    framebuffer = Framebuffer(config.width, config.height)
    renderer = Renderer(config.settings())

    print(
        f"Rendering {world.get_sphere_count()} spheres at {config.width}x{config.height}, "
        f"{config.samples} spp, depth {config.max_depth}..."
    )
    seconds = renderer.render(framebuffer)
    print(f"Render time: {seconds:.2f}s")

    if args.headless:
        return 0

    if args.static:
        from pathtracer.preview.display import show_framebuffer

        show_framebuffer(framebuffer, title=args.scene)
        return 0

    from pathtracer.preview.window import PreviewWindow

    if not PreviewWindow.is_display_available():
        print("No display available; skipping preview.")
        return 0

    PreviewWindow(framebuffer).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
