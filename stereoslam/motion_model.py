"""Rigid poses and a constant-velocity motion model for pose prediction."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Pose:
    """Rigid transform: a 3x3 rotation matrix and a translation vector."""

    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self) -> None:
        rotation = np.array(self.rotation, dtype=float)
        translation = np.array(self.translation, dtype=float).ravel()
        if rotation.shape != (3, 3):
            raise ValueError(f"rotation must be 3x3, got shape {rotation.shape}")
        if translation.shape != (3,):
            raise ValueError(f"translation must have 3 entries, got {translation.shape}")
        object.__setattr__(self, "rotation", rotation)
        object.__setattr__(self, "translation", translation)

    @classmethod
    def identity(cls) -> "Pose":
        """The identity transform."""
        return cls(np.eye(3), np.zeros(3))

    def inverse(self) -> "Pose":
        """The inverse transform."""
        rt = self.rotation.T
        return Pose(rt, -(rt @ self.translation))

    def compose(self, other: "Pose") -> "Pose":
        """self * other: apply `other` first, then self."""
        return Pose(
            self.rotation @ other.rotation,
            self.rotation @ other.translation + self.translation,
        )

    def transform_point(self, point) -> np.ndarray:
        """Map a 3-D point through the transform."""
        return self.rotation @ np.asarray(point, dtype=float) + self.translation


class MotionModel:
    """Predicts the next pose from the motion between the last two poses."""

    def __init__(self) -> None:
        self.reset()

    def update(self, pose: Pose) -> None:
        """Record a new pose observation."""
        if self._prev_pose is not None:
            self._velocity = pose.translation - self._prev_pose.translation
            self._angular_velocity = self._prev_pose.rotation.T @ pose.rotation
        self._prev_pose = pose

    def predict(self) -> Pose | None:
        """Predicted next pose, or None before any observation."""
        prev = self._prev_pose
        if prev is None:
            return None
        return Pose(prev.rotation @ self._angular_velocity, prev.translation + self._velocity)

    def reset(self) -> None:
        """Forget all observations."""
        self._prev_pose: Pose | None = None
        self._velocity = np.zeros(3)
        self._angular_velocity = np.eye(3)