from stereoslam.keyframe_decision import KeyFrameDecision


def test_max_frames_forces_keyframe_and_resets():
    d = KeyFrameDecision()
    results = [d.should_create_keyframe(100, 100) for _ in range(15)]
    assert results[:14] == [False] * 14
    assert results[14] is True
    assert d.frames_since_kf == 0
    again = [d.should_create_keyframe(100, 100) for _ in range(15)]
    assert again.index(True) == 14


def test_tracking_drop_triggers_keyframe():
    d = KeyFrameDecision()
    assert d.should_create_keyframe(80, 100) is True
    assert d.frames_since_kf == 0
    assert d.should_create_keyframe(100, 100) is False


def test_ratio_at_threshold_does_not_trigger():
    d = KeyFrameDecision()
    assert d.should_create_keyframe(90, 100) is False
    assert d.frames_since_kf == 1


def test_zero_reference_points_ignores_ratio():
    d = KeyFrameDecision()
    results = [d.should_create_keyframe(0, 0) for _ in range(15)]
    assert results.count(True) == 1
    assert results[-1] is True


def test_before_imu_init_uses_time():
    d = KeyFrameDecision()
    assert d.should_create_keyframe_stereo_inertial(0, 100, 0.1, False) is False
    assert d.should_create_keyframe_stereo_inertial(100, 100, 0.25, False) is True
    assert d.frames_since_kf == 0
    assert d.should_create_keyframe_stereo_inertial(100, 100, 0.3, False) is True


def test_before_imu_init_ignores_frame_count():
    d = KeyFrameDecision()
    results = [d.should_create_keyframe_stereo_inertial(100, 100, 0.0, False) for _ in range(30)]
    assert not any(results)
    assert d.frames_since_kf == 30


def test_after_imu_init_uses_quality():
    d = KeyFrameDecision()
    assert d.should_create_keyframe_stereo_inertial(50, 100, 0.0, True) is True
    results = [d.should_create_keyframe_stereo_inertial(100, 100, 10.0, True) for _ in range(15)]
    assert results.index(True) == 14


def test_reset_restarts_count():
    d = KeyFrameDecision()
    for _ in range(10):
        d.should_create_keyframe(100, 100)
    d.reset()
    assert d.frames_since_kf == 0
    results = [d.should_create_keyframe(100, 100) for _ in range(14)]
    assert not any(results)


def test_min_frames_blocks_early_keyframes():
    d = KeyFrameDecision(min_frames=3)
    assert d.should_create_keyframe(0, 100) is False
    assert d.should_create_keyframe(0, 100) is False
    assert d.should_create_keyframe(0, 100) is True