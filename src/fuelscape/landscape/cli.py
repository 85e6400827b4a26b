"""Command-line interface for landscape generation."""

import argparse
import logging
import sys
import time
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural fuel landscape"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to a TOML config file"
    )
    parser.add_argument("--width", type=int, default=None, help="Map width")
    parser.add_argument("--height", type=int, default=None, help="Map height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--noise-scale", type=float, default=None, help="Noise coordinate scale"
    )
    parser.add_argument(
        "--mesh-resolution", type=int, default=None, help="Mesh vertices per side"
    )
    parser.add_argument(
        "--urban", action="store_true", default=None, help="Generate urban areas"
    )
    parser.add_argument(
        "--burned", action="store_true", default=None, help="Generate burned areas"
    )
    parser.add_argument(
        "--random-percentages",
        action="store_true",
        help="Draw random category weights instead of configured ones",
    )
    parser.add_argument(
        "--debug-images",
        type=str,
        default=None,
        help="Directory to save debug images (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for landscape generation."""
    args = build_parser().parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Import here to avoid slow startup for --help
    from ..exceptions import LandscapeError
    from .config import LandscapeConfig, load_config
    from .generator import generate_landscape
    from .validation import validate_landscape

    config = load_config(Path(args.config)) if args.config else LandscapeConfig()

    overrides: dict = {}
    if args.width is not None:
        overrides["map_width"] = args.width
    if args.height is not None:
        overrides["map_height"] = args.height
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.noise_scale is not None:
        overrides["noise_scale"] = args.noise_scale
    if args.urban:
        overrides["generate_urban_areas"] = True
    if args.burned:
        overrides["generate_burned_areas"] = True
    if args.random_percentages:
        overrides["manual_percentage_control"] = False
    if args.debug_images is not None:
        overrides["debug_output_dir"] = args.debug_images
    if args.mesh_resolution is not None:
        overrides["mesh"] = config.mesh.model_copy(
            update={"resolution": args.mesh_resolution}
        )
    config = config.model_copy(update=overrides)

    print(
        f"Generating {config.map_width}x{config.map_height} landscape "
        f"with seed {config.seed}"
    )
    print()

    start_time = time.time()
    try:
        result = generate_landscape(config)
    except LandscapeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    gen_time = time.time() - start_time

    validation = validate_landscape(result)

    print()
    print(f"Generation complete in {gen_time:.1f}s")
    print(
        f"Mesh: {result.mesh.vertex_count:,} vertices, "
        f"{result.mesh.triangle_count:,} triangles"
    )
    for category, count in result.category_counts().items():
        print(f"  {category.name.lower():>13}: {count / result.categories.size:6.1%}")

    if not validation.passed:
        print(f"Validation failed with {len(validation.errors)} errors", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
