"""Stereo feature matching along epipolar lines and depth triangulation."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from stereoslam.camera import CameraModel

TH_HIGH = 100
"""Maximum descriptor distance accepted as a match."""
TH_LOW = 50
"""Stricter descriptor distance threshold."""
NN_RATIO = 0.75
"""Ratio test threshold between best and second-best distance."""

DESCRIPTOR_BYTES = 32

_MIN_DEPTH = 0.1
_MAX_DEPTH = 40.0
_VERTICAL_MARGIN = 2.0
_STEREO_RATIO = 0.9
_MIN_DISPARITY = 0.5


@dataclass(frozen=True)
class Keypoint:
    """A detected feature location in pixel coordinates."""

    x: float
    y: float
    octave: int = 0


@dataclass
class FeatureSet:
    """Keypoints with one binary descriptor row per keypoint."""

    keypoints: list[Keypoint] = field(default_factory=list)
    descriptors: np.ndarray = field(
        default_factory=lambda: np.zeros((0, DESCRIPTOR_BYTES), dtype=np.uint8)
    )

    def __post_init__(self) -> None:
        self.keypoints = list(self.keypoints)
        desc = np.asarray(self.descriptors, dtype=np.uint8)
        if desc.size == 0 and not self.keypoints:
            desc = np.zeros((0, DESCRIPTOR_BYTES), dtype=np.uint8)
        if desc.ndim != 2:
            raise ValueError("descriptors must be a 2-D array with one row per keypoint")
        if desc.shape[0] != len(self.keypoints):
            raise ValueError(
                f"{desc.shape[0]} descriptor rows for {len(self.keypoints)} keypoints"
            )
        self.descriptors = desc

    def __len__(self) -> int:
        return len(self.keypoints)


@dataclass(frozen=True)
class StereoMatch:
    """Correspondence between a left keypoint and a right keypoint."""

    query_idx: int
    train_idx: int
    distance: float


@dataclass
class StereoFrame:
    """Features of a rectified stereo pair and the depth recovered from them."""

    left_features: FeatureSet
    right_features: FeatureSet
    matches_lr: list[StereoMatch]
    points_cam: list[np.ndarray | None]
    timestamp_ns: int


def _as_bytes(descriptor) -> np.ndarray:
    if isinstance(descriptor, (bytes, bytearray, memoryview)):
        return np.frombuffer(bytes(descriptor), dtype=np.uint8)
    return np.asarray(descriptor, dtype=np.uint8).ravel()


def descriptor_distance(desc1, desc2) -> int:
    """Hamming distance between two binary descriptors over their common length."""
    a = _as_bytes(desc1)
    b = _as_bytes(desc2)
    n = min(a.size, b.size)
    return int(np.unpackbits(np.bitwise_xor(a[:n], b[:n])).sum())


def triangulate(
    left: FeatureSet,
    right: FeatureSet,
    matches: list[StereoMatch],
    camera: CameraModel,
) -> list[np.ndarray | None]:
    """Recover camera-frame 3-D points for matched left keypoints; None where unknown."""
    points: list[np.ndarray | None] = [None] * len(left.keypoints)
    for m in matches:
        if not (0 <= m.query_idx < len(left.keypoints)):
            continue
        if not (0 <= m.train_idx < len(right.keypoints)):
            continue
        lkp = left.keypoints[m.query_idx]
        rkp = right.keypoints[m.train_idx]
        disparity = lkp.x - rkp.x
        if abs(disparity) < _MIN_DISPARITY:
            continue
        z = camera.fx * camera.baseline / disparity
        x = (lkp.x - camera.cx) * z / camera.fx
        y = (lkp.y - camera.cy) * z / camera.fy
        points[m.query_idx] = np.array([x, y, z])
    return points


class StereoMatcher:
    """Matches left and right features of a rectified pair and triangulates depth."""

    def __init__(self, camera: CameraModel) -> None:
        self.camera = camera

    def match_features(self, left: FeatureSet, right: FeatureSet) -> list[StereoMatch]:
        """For each left keypoint, find the best right keypoint on its epipolar line."""
        fb = self.camera.fx * self.camera.baseline
        max_disparity = fb / _MIN_DEPTH
        min_disparity = fb / _MAX_DEPTH
        n_left = len(left.keypoints)
        n_right = len(right.keypoints)

        matches: list[StereoMatch] = []
        for left_idx, lkp in enumerate(left.keypoints):
            ul, vl = lkp.x, lkp.y
            min_u = max(ul - max_disparity, 0.0)
            max_u = min(ul - min_disparity, n_right * ul / n_left)
            left_desc = left.descriptors[left_idx]

            best_dist = TH_HIGH
            second_best = TH_HIGH
            best_idx: int | None = None
            for right_idx, rkp in enumerate(right.keypoints):
                ur, vr = rkp.x, rkp.y
                if abs(vl - vr) > _VERTICAL_MARGIN:
                    continue
                if ur < min_u or ur > max_u:
                    continue
                if ul <= ur:
                    continue
                dist = descriptor_distance(left_desc, right.descriptors[right_idx])
                if dist < best_dist:
                    second_best = best_dist
                    best_dist = dist
                    best_idx = right_idx
                elif dist < second_best:
                    second_best = dist

            if best_idx is not None and (
                best_dist < _STEREO_RATIO * second_best or second_best == TH_HIGH
            ):
                matches.append(StereoMatch(left_idx, best_idx, float(best_dist)))
        return matches

    def process(self, left: FeatureSet, right: FeatureSet, timestamp_ns: int) -> StereoFrame:
        """Match a stereo pair of feature sets and triangulate the matched points."""
        matches = self.match_features(left, right)
        points = triangulate(left, right, matches, self.camera)
        return StereoFrame(
            left_features=left,
            right_features=right,
            matches_lr=matches,
            points_cam=points,
            timestamp_ns=timestamp_ns,
        )