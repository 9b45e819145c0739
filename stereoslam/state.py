"""Tracking state machine states."""

from __future__ import annotations

from enum import Enum, auto


class TrackingState(Enum):
    """State of the tracker."""

    NOT_INITIALIZED = auto()
    """Waiting for an initial pose."""
    OK = auto()
    """Tracking successfully."""
    RECENTLY_LOST = auto()
    """Lost recently, attempting recovery."""
    LOST = auto()
    """Completely lost; relocalization or a new map is needed."""

    @classmethod
    def default(cls) -> "TrackingState":
        """The state a fresh tracker starts in."""
        return cls.NOT_INITIALIZED