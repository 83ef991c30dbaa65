"""
Session coordination layer.

`get_session(engine)` returns the per-engine ARSession that registers
providers, gates readiness and tracks the single active provider.
"""

from .coordinator import ARSession, ReadinessState, get_session, release_session
from .errors import (
    ARTrackingError,
    FeatureNotSupported,
    MissingDependency,
    ProviderLoadError,
    SessionNotActive,
    UnsupportedCapability,
)

__all__ = [
    "ARSession",
    "ReadinessState",
    "get_session",
    "release_session",
    "ARTrackingError",
    "FeatureNotSupported",
    "MissingDependency",
    "ProviderLoadError",
    "SessionNotActive",
    "UnsupportedCapability",
]
