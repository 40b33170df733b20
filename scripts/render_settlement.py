#!/usr/bin/env python3
"""Generate a settlement on a synthetic heightmap and save a map of it.

Usage:
    uv run python scripts/render_settlement.py --seed 42 -o settlement.png
    uv run python scripts/render_settlement.py --colors palette.json
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from thorpe import config
from thorpe.index import Index
from thorpe.render import render_settlement
from thorpe.site.settlement import Settlement
from thorpe.util import rng
from thorpe.util.live_vars import live_variable_registry
from thorpe.world.sim import HeightmapWorld


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a settlement and render a top-down map of it."
    )
    parser.add_argument("--seed", default=config.RANDOM_SEED, help="Master seed.")
    parser.add_argument(
        "--world-size",
        type=int,
        default=64,
        help="Side of the synthetic world in chunks.",
    )
    parser.add_argument(
        "--flat", action="store_true", help="Use a flat world with no water."
    )
    parser.add_argument(
        "--scale", type=int, default=2, help="Blocks per output pixel."
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=Path("settlement.png"), help="PNG path."
    )
    parser.add_argument(
        "--colors", type=Path, default=None, help="JSON colour table overrides."
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng.init(args.seed)
    size = args.world_size
    if args.flat:
        world = HeightmapWorld.flat(size, size)
    else:
        world_seed = rng.get("world.heightmap").getrandbits(32)
        world = HeightmapWorld.generate(size, size, seed=world_seed)

    center = (size * config.CHUNK_SIZE // 2, size * config.CHUNK_SIZE // 2)
    settlement = Settlement.generate(center, world, rng.get("site.settlement"))

    index = Index.load(args.colors) if args.colors else Index()
    image = render_settlement(settlement, index, blocks_per_pixel=args.scale)
    image.save(args.output)

    print(f"{settlement.name}: {len(settlement.structures)} structures")
    for var in live_variable_registry.get_all_variables():
        print(f"  {var.name}: {var.get_stats_summary()}")
    print(f"Wrote {args.output}")


if __name__ == "__main__":
    main()
