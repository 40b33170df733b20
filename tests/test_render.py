"""Tests for top-down settlement maps."""

from __future__ import annotations

import numpy as np
import pytest

from tests.helpers import make_settlement
from thorpe.index import Index
from thorpe.render import BACKGROUND, render_settlement, settlement_colors


@pytest.fixture(scope="module")
def settlement():
    return make_settlement(seed=7)


def test_colors_cover_settlement_radius(settlement) -> None:
    pixels = settlement_colors(settlement, Index(), blocks_per_pixel=8)
    assert pixels.shape == (100, 100, 3)
    assert pixels.dtype == np.uint8
    assert (pixels != np.array(BACKGROUND, dtype=np.uint8)).any()


def test_render_returns_rgb_image(settlement) -> None:
    image = render_settlement(settlement, blocks_per_pixel=8)
    assert image.size == (100, 100)
    assert image.mode == "RGB"


def test_rejects_non_positive_scale(settlement) -> None:
    with pytest.raises(ValueError):
        settlement_colors(settlement, Index(), blocks_per_pixel=0)
