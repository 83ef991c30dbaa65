"""
Error taxonomy for AR tracking sessions.
"""

from __future__ import annotations

from typing import Iterable, Optional


class ARTrackingError(Exception):
    """Base class for all tracking session errors."""


class UnsupportedCapability(ARTrackingError):
    """A provider was asked for a tracking mode it cannot produce."""

    def __init__(self, provider_name: str, tracking_type):
        self.provider_name = provider_name
        self.tracking_type = tracking_type
        value = getattr(tracking_type, "value", tracking_type)
        super().__init__(f"Tracking mode '{value}' not supported by provider '{provider_name}'")


class MissingDependency(ARTrackingError):
    """The host object lacks a component the tracking mode requires."""

    def __init__(self, component_type: str, object_name: str):
        self.component_type = component_type
        self.object_name = object_name
        super().__init__(f"'{object_name}' requires a '{component_type}' component")


class SessionNotActive(ARTrackingError):
    """An operation needs a running provider session and none is active."""


class ProviderLoadError(ARTrackingError):
    """A registered provider failed to load; the session can never become ready."""

    def __init__(self, provider_name: str, cause: Optional[BaseException] = None):
        self.provider_name = provider_name
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Provider '{provider_name}' failed to load{detail}")


class FeatureNotSupported(ARTrackingError):
    """A backend refused to start because required features are unavailable."""

    def __init__(self, features: Iterable[str]):
        self.features = sorted(features)
        super().__init__(f"Required features not supported: {', '.join(self.features)}")
