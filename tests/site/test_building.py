"""Tests for house and keep voxel sampling."""

from __future__ import annotations

from random import Random

from thorpe.index import Index
from thorpe.site.settlement.building import (
    FOUNDATION_DEPTH,
    LEVEL_HEIGHT,
    House,
    Keep,
)
from thorpe.site.settlement.structure import Structure
from thorpe.world.block import Block, BlockKind

INDEX = Index()
COLORS = INDEX.settlement_colors.building


def make_house(**kwargs) -> House:
    params = {"origin": (0, 0, 10), "half_x": 4, "half_y": 3, "levels": 1}
    params.update(kwargs)
    return House(**params)


class TestHouse:
    """Tests for House."""

    def test_generate_ranges(self) -> None:
        rng = Random(4)
        for _ in range(50):
            house = House.generate(rng, (0, 0, 0))
            assert 3 <= house.half_x <= 5
            assert 3 <= house.half_y <= 5
            assert 1 <= house.levels <= 2

    def test_bounds_include_overhang_and_foundation(self) -> None:
        house = make_house()
        bounds = house.bounds()
        assert house.bounds_2d().min_x == -5
        assert house.bounds_2d().max_y == 4
        assert bounds.min_z == 10 - FOUNDATION_DEPTH
        assert bounds.max_z == 10 + house.top_height
        assert house.top_height == LEVEL_HEIGHT + 3 + 1

    def test_foundation(self) -> None:
        """Rock below the ground floor, nothing under the overhang."""
        house = make_house()
        foundation = Block.new(BlockKind.ROCK, COLORS.foundation)
        assert house.sample(INDEX, (0, 0, 9)) == foundation
        assert house.sample(INDEX, (4, 3, 7)) == foundation
        assert house.sample(INDEX, (5, 0, 9)) is None
        assert house.sample(INDEX, (0, 0, 6)) is None

    def test_frame(self) -> None:
        house = make_house()
        assert house.sample(INDEX, (4, 3, 11)) == Block.new(
            BlockKind.WOOD, COLORS.support
        )
        assert house.sample(INDEX, (0, 0, 10)) == Block.new(
            BlockKind.WOOD, COLORS.floor
        )
        assert house.sample(INDEX, (4, 1, 11)) == Block.new(
            BlockKind.EARTH, COLORS.wall
        )
        assert house.sample(INDEX, (0, 0, 12)) == Block.air()

    def test_door_faces_negative_y(self) -> None:
        house = make_house()
        assert house.sample(INDEX, (0, -3, 11)) == Block.air()
        assert house.sample(INDEX, (0, 3, 11)) == Block.new(
            BlockKind.EARTH, COLORS.wall
        )

    def test_roof_ridge_and_eaves(self) -> None:
        """The roof climbs one block per block inward from the eaves."""
        house = make_house(ridge_along_x=True)
        roof = Block.new(BlockKind.WOOD, COLORS.roof)
        eaves_z = 10 + house.wall_height
        assert house.sample(INDEX, (0, -4, eaves_z)) == roof
        assert house.sample(INDEX, (0, 0, 10 + house.top_height)) == roof
        assert house.sample(INDEX, (0, 0, 10 + house.top_height + 1)) is None
        assert house.sample(INDEX, (0, -4, eaves_z + 1)) is None

    def test_ridge_orientation(self) -> None:
        along_x = make_house(half_x=5, half_y=3, ridge_along_x=True)
        along_y = make_house(half_x=5, half_y=3, ridge_along_x=False)
        assert along_x.top_height < along_y.top_height


class TestKeep:
    """Tests for Keep."""

    def test_generate_ranges(self) -> None:
        rng = Random(9)
        for _ in range(50):
            keep = Keep.generate(rng, (0, 0, 0))
            assert keep.half_x == keep.half_y
            assert 4 <= keep.half_x <= 6
            assert 3 <= keep.levels <= 4
            assert keep.overhang == 0

    def test_roof_and_parapet(self) -> None:
        keep = Keep(origin=(0, 0, 0), half_x=4, half_y=4, levels=3)
        top = keep.wall_height
        assert keep.sample(INDEX, (0, 0, top)) == Block.new(
            BlockKind.ROCK, COLORS.keep_roof
        )
        assert keep.sample(INDEX, (4, 0, top + 1)) == Block.new(
            BlockKind.ROCK, COLORS.keep_stone
        )
        assert keep.sample(INDEX, (4, 1, top + 1)) is None
        assert keep.sample(INDEX, (0, 0, top + 1)) is None
        assert keep.sample(INDEX, (5, 0, 1)) is None


class TestStructure:
    """Tests for the Structure wrapper."""

    def test_delegates_to_building(self) -> None:
        house = make_house()
        structure = Structure(house)
        assert not structure.is_keep
        assert structure.bounds() == house.bounds()
        assert structure.sample(INDEX, (0, 0, 9)) == house.sample(INDEX, (0, 0, 9))
        assert Structure(Keep((0, 0, 0), 4, 4, 3)).is_keep
