"""Top-down map images of settlements."""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw

from thorpe.index import Index
from thorpe.site.settlement import Settlement
from thorpe.types import Rgb

BACKGROUND: Rgb = (30, 30, 30)
STRUCTURE_OUTLINE: Rgb = (240, 230, 200)
KEEP_OUTLINE: Rgb = (255, 90, 60)


def settlement_colors(
    settlement: Settlement, index: Index, blocks_per_pixel: int = 4
) -> np.ndarray:
    """Sample ``get_color`` over the settlement's radius.

    Returns:
        A ``uint8`` array of shape (height, width, 3), row 0 being the
        most negative y. Positions without a colour get ``BACKGROUND``.
    """
    if blocks_per_pixel <= 0:
        raise ValueError("blocks_per_pixel must be positive")

    radius = int(settlement.radius())
    coords = range(-radius, radius, blocks_per_pixel)
    image = np.empty((len(coords), len(coords), 3), dtype=np.uint8)
    image[:] = BACKGROUND

    for row, y in enumerate(coords):
        for col, x in enumerate(coords):
            color = settlement.get_color(index, (x, y))
            if color is not None:
                image[row, col] = color
    return image


def render_settlement(
    settlement: Settlement,
    index: Index | None = None,
    blocks_per_pixel: int = 4,
    outline_structures: bool = True,
) -> Image.Image:
    """Render a settlement's plots, optionally outlining its structures."""
    index = index or Index()
    pixels = settlement_colors(settlement, index, blocks_per_pixel)
    image = Image.fromarray(pixels)

    if outline_structures:
        radius = int(settlement.radius())
        draw = ImageDraw.Draw(image)
        for structure in settlement.structures:
            bounds = structure.bounds_2d()
            draw.rectangle(
                (
                    (bounds.min_x + radius) // blocks_per_pixel,
                    (bounds.min_y + radius) // blocks_per_pixel,
                    (bounds.max_x + radius) // blocks_per_pixel,
                    (bounds.max_y + radius) // blocks_per_pixel,
                ),
                outline=KEEP_OUTLINE if structure.is_keep else STRUCTURE_OUTLINE,
            )
    return image
