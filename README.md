# stereoslam

Building blocks for stereo-inertial visual SLAM, in plain Python on top of numpy.

## Modules

- `stereoslam.camera`: `CameraModel`, a frozen pinhole model with `fx`, `fy`, `cx`, `cy` and a stereo `baseline`. `CameraModel.from_k_and_baseline(k, baseline)` builds one from a 3×3 intrinsic matrix. Any other shape raises `ValueError`.
- `stereoslam.stereo`: the data types `Keypoint` (x, y, octave), `FeatureSet` (keypoints with one descriptor row each), `StereoMatch` and `StereoFrame`.
  - `StereoMatcher(camera).match_features(left, right)` looks for the best right keypoint for each left keypoint.
    - The search stays within 2 px vertically, keeps disparity positive and keeps it inside the range that depths from 0.1 m to 40 m allow.
    - A match is accepted when its descriptor distance is below 100 and it passes a 0.9 ratio test.
  - `StereoMatcher.process(left, right, timestamp_ns)` matches the two sets, triangulates them and returns a `StereoFrame`.
  - `descriptor_distance` gives the Hamming distance over the length the two descriptors share.
  - `triangulate` returns one camera-frame point per left keypoint, or `None` where the disparity is under 0.5 px or the keypoint has no match.
  - The constants `TH_HIGH`, `TH_LOW` and `NN_RATIO` are also here.
- `stereoslam.state`: the enum `TrackingState`, with the values `NOT_INITIALIZED`, `OK`, `RECENTLY_LOST` and `LOST`. `TrackingState.default()` is `NOT_INITIALIZED`.
- `stereoslam.result`: the dataclasses `TrackingResult`, `TrackingMetrics`, `TimingStats` and `MatchInfo`. `TimingStats.zero()` returns a `TimingStats` with every entry at zero.
- `stereoslam.keyframe_decision`: `KeyFrameDecision` decides when to create a keyframe. It takes `min_frames`, `max_frames` and `min_tracked_ratio`, with defaults 0, 15 and 0.9.
  - `should_create_keyframe` says yes after `max_frames` frames, or when the ratio of tracked to reference points falls below `min_tracked_ratio`.
  - `should_create_keyframe_stereo_inertial` works by time until the IMU is initialized: it says yes every 0.25 s. After that it uses the same rules as `should_create_keyframe`.
  - `reset()` restarts the frame count.
- `stereoslam.vocabulary`: `OrbVocabulary.load_from_text(path)` reads a vocabulary tree in the DBoW2 text format. The first line is `k L ...`, then each node line holds a parent id, a leaf flag, 32 descriptor bytes and a weight.
  - Lines with too few fields are skipped.
  - If the file cannot be read or parsed, it raises `VocabularyError`.
  - `quantize(descriptor)` returns `(word_id, leaf_node_id)`.
  - `transform(descriptors, levels_up)` returns an L1-normalized bag-of-words dict and a feature dict. The feature dict groups feature indices by the ancestor node `levels_up` above each leaf.
  - `transform_bow_only` returns only the bag-of-words dict.
  - `OrbVocabulary.score(v1, v2)` gives the L1 similarity `1 - 0.5·‖v1 − v2‖₁`.
  - `hamming_distance(a, b)` compares the first 32 bytes of two descriptors.
- `stereoslam.motion_model`: `Pose` is a rigid transform made of a 3×3 rotation and a translation. It has `identity()`, `inverse()`, `compose(other)` and `transform_point(point)`.
  - `MotionModel` predicts the next pose from the motion between the last two poses given to `update`.
  - `predict()` returns `None` before any pose has been given.
- `stereoslam.shared_state`: `SharedState` holds the state the workers share.
  - It carries an `atlas` object guarded by `atlas_lock` and an optional `vocabulary`.
  - Its thread-safe coordination flags cover keyframe flow control, aborting bundle adjustment, shutdown, pausing local mapping, global bundle adjustment running, loop corrected and bad IMU.
  - `check_and_clear_loop_corrected()` and `check_and_clear_bad_imu()` read a flag and clear it atomically.
- `stereoslam.tracking_frame`: `FeatureGrid` sorts feature indices into a 64×48 grid of image cells.
  - `get_features_in_area(x, y, r)` returns the candidates in the cells that cover a square of half-side `r`.
  - `get_features_in_area_with_level` also filters by octave; a negative bound means "any".
  - `Frame.from_stereo(stereo, img_width=752, img_height=480)` builds the frame the tracker works on.
- `stereoslam.local_map`: `LocalMapTracker(camera, search_radius=15.0)`.
  - `project(point_world, pose)` returns pixel coordinates, or `None` for points behind the camera.
  - `search_by_projection(map_points, frame, pose)` pairs each projected point with the nearest keypoint inside the radius.
- `stereoslam.lod`: `filter_points_lod(points, camera_pos, near_threshold=10, far_threshold=50, far_downsample=10)` thins a point cloud by distance from the camera. `FrameRateMeter` gives frames per second over a sliding window of the last 100 frames: call `tick(now)` for each frame and read the rate with `fps()`.

## Installing

```
pip install .
```

Tests:

```
pip install .[test]
pytest
```

## Example

```python
from stereoslam.keyframe_decision import KeyFrameDecision
from stereoslam.vocabulary import OrbVocabulary

decision = KeyFrameDecision()
if decision.should_create_keyframe_stereo_inertial(
    tracked_points=80,
    reference_points=120,
    time_since_last_kf=0.3,
    imu_initialized=False,
):
    print("new keyframe")

similarity = OrbVocabulary.score({0: 0.5, 1: 0.5}, {0: 0.5, 1: 0.5})  # 1.0
```

## What it does not do

This is a library of parts, not a complete SLAM system.

- It does not detect features or compute descriptors from images. `FeatureSet`s must be supplied with their keypoints and descriptors already filled in.
- It has no tracker loop that puts these parts together.
- It has no map or keyframe store. `SharedState.atlas` is whatever object you give it.
- It has no IMU preintegration, bundle adjustment, pose-graph optimization, loop closing or viewer.
- It has no command-line program.