"""
Tracking modes.

One TrackingMode per capability; providers bind them to a host component and
feed them backend events.
"""

from .base import TrackingMode
from .targets import TargetStateTracker, TargetTrackingMode
from .world import TrackingStatusMonitor, WorldTrackingMode
from .face import FaceTrackingMode
from .image import ImageTrackingMode
from .vps import VPSTrackingMode

__all__ = [
    "TrackingMode",
    "TargetStateTracker",
    "TargetTrackingMode",
    "TrackingStatusMonitor",
    "WorldTrackingMode",
    "FaceTrackingMode",
    "ImageTrackingMode",
    "VPSTrackingMode",
]
