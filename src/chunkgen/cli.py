"""Command-line interface for chunk generation."""

import argparse
import logging
import time
from pathlib import Path

import structlog

from .config import GeneratorConfig, find_config, load_config
from .exceptions import ChunkGenError
from .gradient import gradient_magnitude
from .types import NoiseKind


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate domain-warped fractal noise height chunks"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of generator TOML config file",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed (overrides config)")
    parser.add_argument(
        "--chunk-size", type=int, default=None, help="Chunk size (overrides config)"
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Base noise scale (overrides config, rebuilds default bands)",
    )
    parser.add_argument(
        "--cell",
        action="store_true",
        help="Use cell noise for the default bands",
    )
    parser.add_argument(
        "--region",
        type=int,
        nargs=4,
        metavar=("X0", "Y0", "X1", "Y1"),
        default=(0, 0, 0, 0),
        help="Inclusive chunk rectangle (default: 0 0 0 0)",
    )
    parser.add_argument(
        "--gradient", action="store_true", help="Also compute the gradient grid"
    )
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="Save result to this .npz path"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def configure_logging(verbose: bool) -> None:
    """Configure structlog console output."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    """Load the base config and apply command-line overrides.

    Raises:
        FileNotFoundError: If the named config does not exist.
        InvalidConfigError: If the config file fails validation.
    """
    if args.config:
        config = load_config(find_config(args.config))
    else:
        config = GeneratorConfig()

    data = config.model_dump()
    if args.seed is not None:
        data["seed"] = args.seed
    if args.chunk_size is not None:
        data["chunk_size"] = args.chunk_size
    if args.scale is not None:
        data["scale"] = args.scale
        data.pop("bands")
    if args.cell:
        data["kind"] = NoiseKind.CELL
        data.pop("bands", None)

    return GeneratorConfig.model_validate(data)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for chunk generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from pydantic import ValidationError

    from .generator import generate_region, generate_region_with_gradient
    from .persistence import save_heights

    try:
        config = resolve_config(args)
    except (FileNotFoundError, ChunkGenError, ValidationError) as e:
        logger.error("config_error", error=str(e))
        raise SystemExit(1)

    x0, y0, x1, y1 = args.region
    logger.info(
        "generation_starting",
        seed=config.seed,
        chunk_size=config.chunk_size,
        region=(x0, y0, x1, y1),
    )

    start_time = time.time()
    try:
        if args.gradient:
            heights, gradient = generate_region_with_gradient(x0, y0, x1, y1, config)
        else:
            heights, gradient = generate_region(x0, y0, x1, y1, config), None
    except ChunkGenError as e:
        logger.error("generation_error", error=str(e))
        raise SystemExit(1)
    gen_time = time.time() - start_time

    print(f"Generated {heights.shape[1]}x{heights.shape[0]} heights in {gen_time:.2f}s")
    print(
        f"  min={int(heights.min())} max={int(heights.max())} "
        f"mean={float(heights.mean()):.1f}"
    )
    if gradient is not None:
        slope = gradient_magnitude(gradient)
        print(f"  slope mean={float(slope.mean()):.2f} max={float(slope.max()):.2f}")

    if args.output:
        output_path = save_heights(Path(args.output), heights, config, gradient)
        print(f"Saved to {output_path}")


if __name__ == "__main__":
    main()
