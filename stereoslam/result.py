"""Per-frame tracking results and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stereoslam.state import TrackingState


@dataclass
class TrackingMetrics:
    """Scalar metrics describing tracking quality for one frame."""

    n_features: int
    n_map_point_matches: int
    n_inliers: int
    inlier_ratio: float
    reproj_error_median_px: float
    reproj_error_mean_px: float
    imu_preint_residual_m: float
    delta_translation_m: float
    delta_rotation_deg: float


@dataclass
class TimingStats:
    """Timing breakdown for one frame, in milliseconds."""

    total_ms: float = 0.0
    extract_orb_ms: float = 0.0
    match_ms: float = 0.0
    solve_pnp_ms: float = 0.0
    relocal_ms: float = 0.0

    @classmethod
    def zero(cls) -> "TimingStats":
        """Timing with every entry at zero."""
        return cls()


@dataclass
class MatchInfo:
    """Correspondence details of one frame, for visualization."""

    matched_map_points: list[tuple[int, int]] = field(default_factory=list)
    """(map point id, feature index) pairs."""
    inlier_indices: list[int] = field(default_factory=list)
    outlier_indices: list[int] = field(default_factory=list)
    reproj_errors: list[float] = field(default_factory=list)
    local_map_point_ids: list[int] = field(default_factory=list)


@dataclass
class TrackingResult:
    """Summary of tracking for a single frame."""

    state: TrackingState
    pose: Any
    velocity: Any
    reference_kf_id: int | None
    metrics: TrackingMetrics
    timing: TimingStats
    matches: MatchInfo
    imu_bias: Any = None