"""World simulation oracle consumed by site generation.

Sites never own world data; they query a ``WorldOracle`` for altitude,
slope, water and world paths. ``HeightmapWorld`` is a small numpy-backed
implementation holding one altitude value per chunk, which is what the
scripts and tests generate settlements against.
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from thorpe import config
from thorpe.types import BlockPos, Vec2f
from thorpe.util.coordinates import project_onto_segment

from .column import ColumnSample, ColumnSampler, NearestPath


class WorldOracle(Protocol):
    """Read-only world queries used while generating and painting sites."""

    def can_host_settlement(self, chunk_pos: tuple[int, int]) -> bool: ...

    def get_alt_approx(self, wpos: BlockPos) -> float | None: ...

    def get_gradient_approx(self, chunk_pos: tuple[int, int]) -> float | None: ...

    def get_nearest_path(self, wpos: BlockPos) -> NearestPath | None: ...


class HeightmapWorld:
    """A rectangular world described by per-chunk altitude and water masks.

    Attributes:
        altitude: Float array of chunk altitudes in blocks. Shape: (width, height).
        river: Bool array marking chunks with a river. Same shape.
        lake: Bool array marking chunks with a lake. Same shape.
        paths: World paths as polylines of block positions, each with a width.
    """

    def __init__(
        self,
        altitude: np.ndarray,
        river: np.ndarray | None = None,
        lake: np.ndarray | None = None,
        paths: list[tuple[list[Vec2f], float]] | None = None,
    ) -> None:
        if altitude.ndim != 2:
            raise ValueError("altitude must be a 2D array")
        self.altitude = altitude.astype(np.float32)
        self.river = (
            river.astype(bool) if river is not None else np.zeros(altitude.shape, bool)
        )
        self.lake = (
            lake.astype(bool) if lake is not None else np.zeros(altitude.shape, bool)
        )
        self.paths = paths or []

        # Slope per chunk: altitude change per block
        grad_x, grad_y = np.gradient(self.altitude)
        self.gradient = np.hypot(grad_x, grad_y) / config.CHUNK_SIZE

        water = np.argwhere(self.river | self.lake)
        half_chunk = config.CHUNK_SIZE / 2
        self._water_centers = water.astype(np.float64) * config.CHUNK_SIZE + half_chunk

    @classmethod
    def flat(cls, width: int, height: int, alt: float = 64.0) -> HeightmapWorld:
        """A level world with no water and no paths."""
        return cls(np.full((width, height), alt, dtype=np.float32))

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        seed: int,
        base_alt: float = 64.0,
        relief: float = 96.0,
        grid_size: int = 4,
    ) -> HeightmapWorld:
        """Generate rolling terrain from bilinearly upsampled value noise.

        Chunks in the lowest two percent of altitude become lakes.
        """
        rng = np.random.default_rng(seed)
        coarse = rng.random((grid_size + 1, grid_size + 1))

        gx = np.linspace(0.0, grid_size, num=width, endpoint=False)
        gy = np.linspace(0.0, grid_size, num=height, endpoint=False)
        x0 = np.floor(gx).astype(int)
        y0 = np.floor(gy).astype(int)
        tx = (gx - x0)[:, None]
        ty = (gy - y0)[None, :]

        c00 = coarse[x0[:, None], y0[None, :]]
        c10 = coarse[x0[:, None] + 1, y0[None, :]]
        c01 = coarse[x0[:, None], y0[None, :] + 1]
        c11 = coarse[x0[:, None] + 1, y0[None, :] + 1]
        top = c00 + (c10 - c00) * tx
        bottom = c01 + (c11 - c01) * tx
        noise = top + (bottom - top) * ty

        altitude = base_alt + noise * relief
        lake = altitude < np.percentile(altitude, 2)
        return cls(altitude, lake=lake)

    # ------------------------------------------------------------------
    # Oracle queries
    # ------------------------------------------------------------------

    @property
    def size_chunks(self) -> tuple[int, int]:
        return (self.altitude.shape[0], self.altitude.shape[1])

    def _in_bounds(self, chunk_pos: tuple[int, int]) -> bool:
        x, y = chunk_pos
        return 0 <= x < self.altitude.shape[0] and 0 <= y < self.altitude.shape[1]

    def can_host_settlement(self, chunk_pos: tuple[int, int]) -> bool:
        if not self._in_bounds(chunk_pos):
            return False
        if self.river[chunk_pos] or self.lake[chunk_pos]:
            return False
        return bool(self.gradient[chunk_pos] < config.MAX_SETTLEMENT_SLOPE)

    def get_gradient_approx(self, chunk_pos: tuple[int, int]) -> float | None:
        if not self._in_bounds(chunk_pos):
            return None
        return float(self.gradient[chunk_pos])

    def get_alt_approx(self, wpos: BlockPos) -> float | None:
        """Bilinear altitude between chunk centers."""
        fx = wpos[0] / config.CHUNK_SIZE - 0.5
        fy = wpos[1] / config.CHUNK_SIZE - 0.5
        w, h = self.altitude.shape
        if not (-0.5 <= fx < w - 0.5 and -0.5 <= fy < h - 0.5):
            return None

        x0 = min(max(math.floor(fx), 0), w - 1)
        y0 = min(max(math.floor(fy), 0), h - 1)
        x1 = min(x0 + 1, w - 1)
        y1 = min(y0 + 1, h - 1)
        tx = min(max(fx - x0, 0.0), 1.0)
        ty = min(max(fy - y0, 0.0), 1.0)

        alt = self.altitude
        top = alt[x0, y0] + (alt[x1, y0] - alt[x0, y0]) * tx
        bottom = alt[x0, y1] + (alt[x1, y1] - alt[x0, y1]) * tx
        return float(top + (bottom - top) * ty)

    def get_nearest_path(self, wpos: BlockPos) -> NearestPath | None:
        point = (float(wpos[0]), float(wpos[1]))
        best: NearestPath | None = None
        for polyline, width in self.paths:
            for start, end in zip(polyline, polyline[1:], strict=False):
                nearest = project_onto_segment(point, start, end)
                dist = math.hypot(nearest[0] - point[0], nearest[1] - point[1])
                if best is None or dist < best.dist:
                    best = NearestPath(dist, nearest, width)
        return best

    def get_water_dist(self, wpos: BlockPos) -> float | None:
        """Distance to the nearest water chunk's edge, clamped at zero."""
        if len(self._water_centers) == 0:
            return None
        deltas = self._water_centers - np.array(wpos, dtype=np.float64)
        dist = float(np.min(np.hypot(deltas[:, 0], deltas[:, 1])))
        return max(dist - config.CHUNK_SIZE / 2, 0.0)

    # ------------------------------------------------------------------
    # Column sampling
    # ------------------------------------------------------------------

    def column(self, wpos: BlockPos) -> ColumnSample | None:
        alt = self.get_alt_approx(wpos)
        if alt is None:
            return None
        return ColumnSample(
            alt=alt,
            riverless_alt=alt,
            water_dist=self.get_water_dist(wpos),
            path=self.get_nearest_path(wpos),
        )

    def column_sampler(self, chunk_origin: BlockPos) -> ColumnSampler:
        """Column lookup by offset from ``chunk_origin``."""

        def sample(offs: BlockPos) -> ColumnSample | None:
            return self.column((chunk_origin[0] + offs[0], chunk_origin[1] + offs[1]))

        return sample
