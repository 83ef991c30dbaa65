"""
ARProvider implementation for the device-native WebXR API.

Sessions are negotiated by the host engine (`request_xr_session`); the
engine's XR start/end signals drive this provider's notifications, so a
session ended from the platform side (system UI, tab hidden) is reported
the same way as one ended through `end_session()`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, FrozenSet, Optional, Sequence

from engine.base import XRSessionHandle
from models.config import WebXRConfig
from models.events import TrackingStatusEvent
from models.tracking import TrackingStatus, TrackingType
from session.errors import SessionNotActive
from tracking.world import WorldTrackingMode
from .base import ARProvider

if TYPE_CHECKING:
    from engine.base import Component, Engine

XR_SESSION_MODE = "immersive-ar"


class WebXRWorldTracking(WorldTrackingMode):
    """World tracking on top of a native WebXR session."""

    @property
    def enabled_features(self) -> FrozenSet[str]:
        """
        Features granted to the running session.

        Raises:
            SessionNotActive: If no WebXR session is running.
        """
        self.require_active()
        handle = self.provider.xr_session
        if handle is None:
            raise SessionNotActive("WebXR session handle is not available")
        return handle.enabled_features

    @property
    def hit_test_available(self) -> bool:
        return "hit-test" in self.enabled_features


class WebXRProvider(ARProvider):
    """
    Device-native WebXR provider. Supports world tracking only, and only on
    engines that report AR support.
    """

    name = "webxr"

    def __init__(self, engine: "Engine", config: Optional[WebXRConfig] = None):
        super().__init__(engine)
        self.config = config or WebXRConfig()
        self._xr_session: Optional[XRSessionHandle] = None
        engine.on_xr_session_start.add(self._on_xr_session_start)
        engine.on_xr_session_end.add(self._on_xr_session_end)

    @property
    def xr_session(self) -> Optional[XRSessionHandle]:
        return self._xr_session

    async def load(self) -> None:
        self.loaded = True

    def supports(self, tracking_type: TrackingType) -> bool:
        if not self._engine.ar_supported:
            return False
        return tracking_type is TrackingType.SLAM

    def _create_tracking_mode(self, tracking_type: TrackingType, component: "Component", **kwargs: Any) -> WebXRWorldTracking:
        return WebXRWorldTracking(
            self,
            component,
            required_features=kwargs.pop("required_features", self.config.required_features),
            optional_features=kwargs.pop("optional_features", self.config.optional_features),
            **kwargs,
        )

    async def start_session(
        self,
        required_features: Optional[Sequence[str]] = None,
        optional_features: Optional[Sequence[str]] = None,
    ) -> None:
        if self._session_active:
            logging.info("WebXR session already running")
            return
        required = list(required_features) if required_features is not None else list(self.config.required_features)
        optional = list(optional_features) if optional_features is not None else list(self.config.optional_features)
        await self._engine.request_xr_session(XR_SESSION_MODE, required, optional)

    async def end_session(self) -> None:
        handle = self._xr_session
        if handle is None:
            logging.warning("WebXR session already ended")
            return
        try:
            await handle.end()
        except Exception as e:
            # The platform may have torn the session down already.
            logging.debug(f"WebXR session end raised, treating as ended: {e}")
        self._xr_session = None
        self._notify_session_ended()

    def _on_xr_session_start(self, handle: XRSessionHandle) -> None:
        self._xr_session = handle
        self._notify_session_started()
        for mode in self._modes_of(TrackingType.SLAM):
            mode._receive_tracking_status(TrackingStatusEvent(TrackingStatus.NORMAL))

    def _on_xr_session_end(self) -> None:
        self._xr_session = None
        self._notify_session_ended()
