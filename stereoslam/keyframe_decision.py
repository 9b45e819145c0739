"""Criteria for deciding when the tracker creates a new keyframe."""

from __future__ import annotations

TIME_THRESHOLD_BEFORE_IMU_INIT = 0.25
"""Seconds between keyframes before the IMU is initialized."""


class KeyFrameDecision:
    """Decides keyframe creation from elapsed frames, time and tracking quality."""

    def __init__(
        self,
        min_frames: int = 0,
        max_frames: int = 15,
        min_tracked_ratio: float = 0.9,
    ) -> None:
        self.min_frames = min_frames
        self.max_frames = max_frames
        self.min_tracked_ratio = min_tracked_ratio
        self._frames_since_kf = 0

    @property
    def frames_since_kf(self) -> int:
        """Frames counted since the last keyframe."""
        return self._frames_since_kf

    def _quality_decision(self, tracked_points: int, reference_points: int) -> bool:
        if self._frames_since_kf >= self.max_frames:
            self._frames_since_kf = 0
            return True
        if self._frames_since_kf < self.min_frames:
            return False
        if reference_points > 0 and tracked_points / reference_points < self.min_tracked_ratio:
            self._frames_since_kf = 0
            return True
        return False

    def should_create_keyframe(self, tracked_points: int, reference_points: int) -> bool:
        """Count a frame and decide from frame count and tracked-point ratio."""
        self._frames_since_kf += 1
        return self._quality_decision(tracked_points, reference_points)

    def should_create_keyframe_stereo_inertial(
        self,
        tracked_points: int,
        reference_points: int,
        time_since_last_kf: float,
        imu_initialized: bool,
    ) -> bool:
        """Count a frame and decide; before IMU initialization the decision is time-based."""
        self._frames_since_kf += 1
        if not imu_initialized:
            if time_since_last_kf >= TIME_THRESHOLD_BEFORE_IMU_INIT:
                self._frames_since_kf = 0
                return True
            return False
        return self._quality_decision(tracked_points, reference_points)

    def reset(self) -> None:
        """Restart the frame count after a keyframe is created."""
        self._frames_since_kf = 0