"""
Tracking capability and status enums shared by providers and tracking modes.
"""

from __future__ import annotations

from enum import Enum


class TrackingType(str, Enum):
    """Tracking capabilities a provider may offer."""
    SLAM = "slam"
    VPS = "vps"
    FACE = "face"
    IMAGE = "image"


class TargetStatus(str, Enum):
    """Lifecycle state of a single tracked target."""
    FOUND = "found"
    UPDATED = "updated"
    LOST = "lost"


class TrackingStatus(str, Enum):
    """World tracking quality as reported by the backend."""
    NORMAL = "NORMAL"
    LIMITED = "LIMITED"
    NOT_AVAILABLE = "NOT_AVAILABLE"

    @classmethod
    def parse(cls, value: str) -> "TrackingStatus":
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.NOT_AVAILABLE
