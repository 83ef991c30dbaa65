"""
Tracking providers.

Each provider wraps one tracking backend and hands out tracking modes for
the capabilities it supports.
"""

from .base import ARProvider
from .factory import create_provider, register_providers_from_config
from .sdk import SDK_STOPPED, SdkProvider, SimulatedSdk, TrackingSdk
from .webxr import WebXRProvider, WebXRWorldTracking
from .xr8 import XR8Provider
from .zappar import ZapparProvider

__all__ = [
    "ARProvider",
    "SdkProvider",
    "TrackingSdk",
    "SimulatedSdk",
    "SDK_STOPPED",
    "WebXRProvider",
    "WebXRWorldTracking",
    "XR8Provider",
    "ZapparProvider",
    "create_provider",
    "register_providers_from_config",
]
