from stereoslam.state import TrackingState


def test_default_is_not_initialized():
    assert TrackingState.default() is TrackingState.NOT_INITIALIZED


def test_default_is_one_of_four_distinct_states():
    states = list(TrackingState)
    assert len(states) == 4
    assert len({s.value for s in states}) == 4
    assert TrackingState.default() in states


def test_default_matches_lookup_by_name():
    assert TrackingState.default() is TrackingState["NOT_INITIALIZED"]
    assert TrackingState.default() is not TrackingState["RECENTLY_LOST"]