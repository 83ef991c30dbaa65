"""
Typed models for the AR tracking runtime.

Tracking enums, poses and the events tracking modes publish, plus the typed
configuration adapted from the YAML config.
"""

from .tracking import TargetStatus, TrackingStatus, TrackingType
from .pose import Pose
from .events import TargetEvent, TrackingStatusEvent
from .config import (
    Config,
    EngineConfig,
    ProvidersConfig,
    WebConfig,
    WebXRConfig,
    XR8Config,
    ZapparConfig,
)

__all__ = [
    # Tracking
    "TrackingType",
    "TargetStatus",
    "TrackingStatus",
    # Pose
    "Pose",
    # Events
    "TargetEvent",
    "TrackingStatusEvent",
    # Config
    "Config",
    "EngineConfig",
    "ProvidersConfig",
    "WebXRConfig",
    "XR8Config",
    "ZapparConfig",
    "WebConfig",
]
