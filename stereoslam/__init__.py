"""Building blocks for stereo-inertial visual SLAM: camera model, stereo matching,
keyframe decisions, a binary-descriptor vocabulary, poses, shared flags,
feature grids, projection search and point-cloud thinning."""

__version__ = "0.1.0"

__all__ = [
    "camera",
    "keyframe_decision",
    "local_map",
    "lod",
    "motion_model",
    "result",
    "shared_state",
    "state",
    "stereo",
    "tracking_frame",
    "vocabulary",
]