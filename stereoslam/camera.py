"""Pinhole stereo camera intrinsics."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class CameraModel:
    """Rectified stereo pinhole camera: focal lengths, principal point and baseline."""

    fx: float
    fy: float
    cx: float
    cy: float
    baseline: float

    @classmethod
    def from_k_and_baseline(cls, k, baseline: float) -> "CameraModel":
        """Build a camera from a 3x3 intrinsic matrix and a stereo baseline in metres."""
        matrix = np.asarray(k, dtype=float)
        if matrix.shape != (3, 3):
            raise ValueError(f"intrinsic matrix must be 3x3, got shape {matrix.shape}")
        return cls(
            fx=float(matrix[0, 0]),
            fy=float(matrix[1, 1]),
            cx=float(matrix[0, 2]),
            cy=float(matrix[1, 2]),
            baseline=float(baseline),
        )