"""State shared between the tracking, local mapping and loop closing workers."""

from __future__ import annotations

import threading
from typing import Any


class _Flag:
    """A boolean that can be read, written and swapped atomically across threads."""

    def __init__(self, value: bool = False) -> None:
        self._value = bool(value)
        self._lock = threading.Lock()

    def get(self) -> bool:
        with self._lock:
            return self._value

    def set(self, value: bool) -> None:
        with self._lock:
            self._value = bool(value)

    def swap(self, value: bool) -> bool:
        with self._lock:
            previous = self._value
            self._value = bool(value)
            return previous

    def __bool__(self) -> bool:
        return self.get()

    def __repr__(self) -> str:
        return f"_Flag({self.get()})"


class SharedState:
    """Map store, vocabulary and coordination flags shared by the worker threads.

    The map store (`atlas`) is guarded by `atlas_lock`; each flag is atomic.
    """

    def __init__(self, vocabulary: Any = None, atlas: Any = None) -> None:
        self.atlas = atlas
        self.atlas_lock = threading.RLock()
        self.vocabulary = vocabulary

        self.stop_keyframe_creation = _Flag()
        """Set by local mapping when its keyframe queue is too long."""
        self.abort_ba = _Flag()
        """Set by tracking to cut a running local bundle adjustment short."""
        self.shutdown_requested = _Flag()

        self.pause_local_mapping = _Flag()
        """Set by loop closing before it corrects the map."""
        self.local_mapping_paused = _Flag()
        self.global_ba_running = _Flag()
        self.loop_corrected = _Flag()

        self.bad_imu = _Flag()
        """Set when IMU initialization failed for lack of motion."""

    def should_stop_keyframe_creation(self) -> bool:
        """Whether tracking should hold off creating keyframes."""
        return self.stop_keyframe_creation.get()

    def set_stop_keyframe_creation(self, value: bool) -> None:
        """Set the keyframe flow-control flag."""
        self.stop_keyframe_creation.set(value)

    def should_abort_ba(self) -> bool:
        """Whether a running bundle adjustment should stop early."""
        return self.abort_ba.get()

    def request_abort_ba(self) -> None:
        """Ask a running bundle adjustment to stop (a new keyframe is coming)."""
        self.abort_ba.set(True)

    def clear_abort_ba(self) -> None:
        """Clear the abort request once bundle adjustment has finished."""
        self.abort_ba.set(False)

    def request_shutdown(self) -> None:
        """Ask the worker threads to finish."""
        self.shutdown_requested.set(True)

    def is_shutdown_requested(self) -> bool:
        """Whether shutdown was requested."""
        return self.shutdown_requested.get()

    def should_pause_local_mapping(self) -> bool:
        """Whether local mapping has been asked to pause."""
        return self.pause_local_mapping.get()

    def set_local_mapping_paused(self, paused: bool) -> None:
        """Acknowledge (or withdraw) that local mapping is paused."""
        self.local_mapping_paused.set(paused)

    def is_global_ba_running(self) -> bool:
        """Whether a global bundle adjustment is in progress."""
        return self.global_ba_running.get()

    def check_and_clear_loop_corrected(self) -> bool:
        """Return whether a loop was corrected, clearing the flag."""
        return self.loop_corrected.swap(False)

    def is_bad_imu(self) -> bool:
        """Whether IMU initialization failed for lack of motion."""
        return self.bad_imu.get()

    def set_bad_imu(self, value: bool) -> None:
        """Set the bad-IMU flag."""
        self.bad_imu.set(value)

    def check_and_clear_bad_imu(self) -> bool:
        """Return whether the bad-IMU flag was set, clearing it."""
        return self.bad_imu.swap(False)