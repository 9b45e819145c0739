"""Projection-based search for map point correspondences in the current frame."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from stereoslam.camera import CameraModel
from stereoslam.motion_model import Pose
from stereoslam.stereo import StereoFrame


class LocalMapTracker:
    """Projects map points into the current frame and matches them to keypoints."""

    def __init__(self, camera: CameraModel, search_radius: float = 15.0) -> None:
        self.camera = camera
        self.search_radius = search_radius

    def project(self, point_world, pose: Pose) -> tuple[float, float] | None:
        """Pixel coordinates of a world point seen from camera pose T_wc, or None if behind."""
        p_cam = pose.inverse().transform_point(np.asarray(point_world, dtype=float))
        if p_cam[2] <= 0.0:
            return None
        cam = self.camera
        u = cam.fx * p_cam[0] / p_cam[2] + cam.cx
        v = cam.fy * p_cam[1] / p_cam[2] + cam.cy
        return float(u), float(v)

    def search_by_projection(
        self, map_points: Sequence, frame: StereoFrame, pose: Pose
    ) -> list[tuple[int, int]]:
        """(map point index, keypoint index) pairs: nearest keypoint within the search radius."""
        keypoints = frame.left_features.keypoints
        matches: list[tuple[int, int]] = []
        for mp_idx, point in enumerate(map_points):
            projected = self.project(point, pose)
            if projected is None:
                continue
            u, v = projected
            best_dist = self.search_radius
            best_idx: int | None = None
            for kp_idx, kp in enumerate(keypoints):
                dist = math.hypot(kp.x - u, kp.y - v)
                if dist < best_dist:
                    best_dist = dist
                    best_idx = kp_idx
            if best_idx is not None:
                matches.append((mp_idx, best_idx))
        return matches