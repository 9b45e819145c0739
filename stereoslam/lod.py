"""Level-of-detail point filtering and frame-rate measurement for visualization."""

from __future__ import annotations

import time
from collections import deque
from typing import Iterable

import numpy as np

_FPS_WINDOW = 100
_MEDIUM_STRIDE = 3


def filter_points_lod(
    points: Iterable,
    camera_pos,
    near_threshold: float = 10.0,
    far_threshold: float = 50.0,
    far_downsample: int = 10,
) -> list[np.ndarray]:
    """Thin out points by their distance from the camera.

    Points closer than `near_threshold` are all kept. Points closer than
    `far_threshold` are sampled: one is kept whenever the count of points
    kept so far plus far points seen so far is a multiple of three. Points
    beyond `far_threshold` are kept one in `far_downsample`, after all others.
    """
    if far_downsample < 1:
        raise ValueError(f"far_downsample must be at least 1, got {far_downsample}")
    camera = np.asarray(camera_pos, dtype=float)

    result: list[np.ndarray] = []
    far_points: list[np.ndarray] = []
    for raw in points:
        point = np.asarray(raw, dtype=float)
        dist = float(np.linalg.norm(point - camera))
        if dist < near_threshold:
            result.append(point)
        elif dist < far_threshold:
            if (len(result) + len(far_points)) % _MEDIUM_STRIDE == 0:
                result.append(point)
        else:
            far_points.append(point)

    result.extend(far_points[::far_downsample])
    return result


class FrameRateMeter:
    """Frames per second over a sliding window of the most recent frame times."""

    def __init__(self, window: int = _FPS_WINDOW) -> None:
        if window < 2:
            raise ValueError(f"window must hold at least 2 frames, got {window}")
        self._times: deque[float] = deque(maxlen=window)
        self._last_fps = 0.0

    def tick(self, now: float | None = None) -> float:
        """Record a frame at time `now` (seconds, wall clock if omitted); return the rate."""
        self._times.append(time.time() if now is None else float(now))
        fps = 0.0
        if len(self._times) >= 2:
            dt = self._times[-1] - self._times[0]
            if dt > 0.0:
                fps = (len(self._times) - 1) / dt
        self._last_fps = fps
        return fps

    def fps(self) -> float:
        """The rate computed at the last tick; 0.0 before two frames."""
        return self._last_fps