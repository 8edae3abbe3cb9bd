"""Command-line entry point: build a mosaic and write it to a PNG file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from anigrid.config import settings
from anigrid.engine.config import MosaicConfig
from anigrid.engine.context import MosaicContext
from anigrid.engine.pipeline import MosaicError, create_pipeline
from anigrid.sources.anilist import AniListClient, AniListSource
from anigrid.sources.base import EntitySource, EntitySourceError
from anigrid.sources.images import CachedImageSource
from anigrid.sources.local import JsonEntitySource

logger = logging.getLogger("anigrid")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anigrid",
        description="Pack a ranked collection of images into a hexagonal mosaic.",
    )
    parser.add_argument("--source", choices=["anilist", "json"], default="anilist")
    parser.add_argument("--input", type=Path, help="Entity bundle JSON (with --source json)")
    parser.add_argument("--output", type=Path, default=Path(MosaicConfig.output_path))
    parser.add_argument("--size", type=int, default=MosaicConfig.canvas_width,
                        help="Canvas width and height in pixels")
    parser.add_argument("--radius", type=float, default=MosaicConfig.cell_radius,
                        help="Hexagon circumradius in pixels")
    parser.add_argument("--stroke-width", type=int, default=MosaicConfig.stroke_width)
    parser.add_argument("--stroke-color", default=MosaicConfig.stroke_color)
    parser.add_argument("--background", default=MosaicConfig.background)
    parser.add_argument("--workers", type=int, default=None,
                        help="Render workers (default: CPU count)")
    parser.add_argument("--include-adult", action="store_true")
    parser.add_argument("--cache-dir", type=Path, default=settings.image_cache_dir)
    parser.add_argument("--log-level", default=settings.anigrid_log_level)
    return parser


def _entity_source(args: argparse.Namespace) -> EntitySource:
    if args.source == "json":
        if args.input is None:
            raise ValueError("--input is required with --source json")
        return JsonEntitySource(args.input)
    client = AniListClient(
        settings.anilist_token,
        endpoint=settings.anilist_endpoint,
        timeout=settings.http_timeout,
    )
    return AniListSource(client)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = MosaicConfig(
            canvas_width=args.size,
            canvas_height=args.size,
            cell_radius=args.radius,
            stroke_width=args.stroke_width,
            stroke_color=args.stroke_color,
            background=args.background,
            max_workers=args.workers,
            include_adult=args.include_adult,
            output_path=str(args.output),
        )
        source = _entity_source(args)
    except (ValueError, EntitySourceError) as e:
        logger.error("%s", e)
        return 2

    with CachedImageSource(args.cache_dir, timeout=settings.http_timeout) as images:
        ctx = MosaicContext(config=config, entity_source=source, image_source=images)
        pipeline = create_pipeline()
        try:
            for progress in pipeline.run_streaming(ctx):
                logger.info(
                    "[%d/%d] %s %s (%.0fms)",
                    progress["index"] + 1,
                    progress["total"],
                    progress["stage_id"],
                    progress["status"],
                    progress["elapsed_ms"],
                )
        except MosaicError as e:
            logger.error("Mosaic aborted: %s", e)
            return 1

    ctx.surface.save_png(config.output_path)
    summary = ctx.summary()
    logger.info(
        "%d cells, %d painted, %d failed → %s",
        summary["cells"],
        summary["painted"],
        summary["failed"],
        config.output_path,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
