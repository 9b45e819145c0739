"""Frames as seen by the tracker, with a spatial grid for fast feature lookup."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from stereoslam.stereo import FeatureSet, Keypoint, StereoFrame

DEFAULT_IMAGE_WIDTH = 752.0
DEFAULT_IMAGE_HEIGHT = 480.0

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _to_cell_index(value: float) -> int:
    """Non-negative cell index from a coordinate; negatives and NaN give 0."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if math.isinf(value):
        return 2**63
    return int(value)


def _to_i32(value: float) -> int:
    """Integer saturated to the 32-bit signed range; NaN gives 0."""
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


class FeatureGrid:
    """Buckets feature indices into a grid of image cells for radius queries."""

    GRID_COLS = 64
    GRID_ROWS = 48

    def __init__(
        self, keypoints: Sequence[Keypoint], img_width: float, img_height: float
    ) -> None:
        self.min_x = 0.0
        self.min_y = 0.0
        self.grid_cols = self.GRID_COLS
        self.grid_rows = self.GRID_ROWS
        self.width_inv = self.grid_cols / (img_width - self.min_x)
        self.height_inv = self.grid_rows / (img_height - self.min_y)
        self._cells: list[list[int]] = [[] for _ in range(self.grid_cols * self.grid_rows)]

        for idx, kp in enumerate(keypoints):
            cell_x = min(_to_cell_index((kp.x - self.min_x) * self.width_inv), self.grid_cols - 1)
            cell_y = min(_to_cell_index((kp.y - self.min_y) * self.height_inv), self.grid_rows - 1)
            self._cells[cell_y * self.grid_cols + cell_x].append(idx)

    def _cell_range(self, low: float, high: float, limit: int) -> range:
        lo = max(_to_i32(math.floor(low) if math.isfinite(low) else low), 0)
        hi = _to_i32(math.ceil(high) if math.isfinite(high) else high)
        # A negative upper bound wraps around to the last cell.
        hi = limit - 1 if hi < 0 else min(hi, limit - 1)
        return range(lo, hi + 1)

    def get_features_in_area(self, x: float, y: float, r: float) -> list[int]:
        """Indices of features in the grid cells covering a square of half-side r.

        These are spatial candidates only; callers filter by exact distance.
        """
        cols = self._cell_range(
            (x - self.min_x - r) * self.width_inv,
            (x - self.min_x + r) * self.width_inv,
            self.grid_cols,
        )
        rows = self._cell_range(
            (y - self.min_y - r) * self.height_inv,
            (y - self.min_y + r) * self.height_inv,
            self.grid_rows,
        )
        return [
            idx
            for cell_y in rows
            for cell_x in cols
            for idx in self._cells[cell_y * self.grid_cols + cell_x]
        ]

    def get_features_in_area_with_level(
        self,
        x: float,
        y: float,
        r: float,
        min_level: int,
        max_level: int,
        keypoints: Sequence[Keypoint],
    ) -> list[int]:
        """Area candidates restricted to pyramid levels; a negative bound is ignored."""
        candidates = self.get_features_in_area(x, y, r)
        if min_level < 0 and max_level < 0:
            return candidates

        def accepted(idx: int) -> bool:
            if not 0 <= idx < len(keypoints):
                return False
            octave = keypoints[idx].octave
            return (min_level < 0 or octave >= min_level) and (
                max_level < 0 or octave <= max_level
            )

        return [idx for idx in candidates if accepted(idx)]


@dataclass
class Frame:
    """A frame being tracked: left-image features, stereo depth and associations."""

    timestamp_ns: int
    features: FeatureSet
    points_cam: list[np.ndarray | None]
    grid: FeatureGrid
    bow_vector: dict[int, float] | None = None
    map_point_matches: list[int | None] = field(default_factory=list)

    @classmethod
    def from_stereo(
        cls,
        stereo: StereoFrame,
        img_width: float = DEFAULT_IMAGE_WIDTH,
        img_height: float = DEFAULT_IMAGE_HEIGHT,
    ) -> "Frame":
        """Build a tracking frame from stereo output and the image size."""
        features = stereo.left_features
        return cls(
            timestamp_ns=stereo.timestamp_ns,
            features=features,
            points_cam=list(stereo.points_cam),
            grid=FeatureGrid(features.keypoints, img_width, img_height),
            bow_vector=None,
            map_point_matches=[None] * len(features.keypoints),
        )

    def num_features(self) -> int:
        """Number of features in the frame."""
        return len(self.features.keypoints)