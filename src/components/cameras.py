"""
AR camera components.

An AR camera sits on a scene object next to its view component and turns it
into a tracked camera for one capability. On `init()` it registers its
candidate providers with the engine's session and binds a tracking mode from
the first provider that supports the capability.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Iterable, List, Optional

from engine.base import Component
from models.tracking import TrackingStatus, TrackingType
from runtime.emitter import Emitter
from session import get_session
from session.errors import MissingDependency, UnsupportedCapability
from tracking.base import TrackingMode

if TYPE_CHECKING:
    from engine.base import Engine
    from providers.base import ARProvider


class ARCamera(Component):
    """
    Base class for AR cameras.

    Args:
        providers: Candidate providers in order of preference. When empty,
            the providers already registered with the session are used.
        engine: Host engine; defaults to the scene object's engine.
        mode_options: Passed to `provider.create_tracking_mode()`.
    """

    type_name = "ar-camera"
    tracking_type: TrackingType = TrackingType.SLAM

    def __init__(
        self,
        providers: Iterable["ARProvider"] = (),
        engine: Optional["Engine"] = None,
        **mode_options: Any,
    ):
        super().__init__(engine)
        self._candidates: List["ARProvider"] = list(providers)
        self._mode_options = mode_options
        self._tracking_mode: Optional[TrackingMode] = None
        self._pending_end: Optional[asyncio.Task] = None

    @property
    def tracking_mode(self) -> Optional[TrackingMode]:
        return self._tracking_mode

    @property
    def object_name(self) -> str:
        return self.object.name if self.object is not None else type(self).__name__

    async def init(self) -> TrackingMode:
        """
        Register candidate providers and bind the tracking mode.

        Raises:
            UnsupportedCapability: If no candidate supports this camera's
                tracking type.
        """
        if self._tracking_mode is not None:
            return self._tracking_mode

        session = get_session(self.engine)
        for provider in self._candidates:
            await session.register_provider(provider)

        candidates = self._candidates or list(session.registered_providers)
        for provider in candidates:
            try:
                self._tracking_mode = provider.create_tracking_mode(
                    self.tracking_type, self, **self._mode_options
                )
            except UnsupportedCapability as e:
                logging.info(f"{self.object_name}: {e}, trying next provider")
                continue
            logging.info(f"{self.object_name}: using provider '{provider.name}' for {self.tracking_type.value}")
            return self._tracking_mode

        names = ",".join(p.name for p in candidates) or "none"
        raise UnsupportedCapability(names, self.tracking_type)

    async def start(self, **init_options: Any) -> None:
        """
        Prepare the tracking mode against this camera's scene object.

        Raises:
            MissingDependency: If the scene object lacks a required component.
        """
        mode = await self.init()
        try:
            await mode.init(**init_options)
        except MissingDependency as e:
            logging.error(f"{self.object_name}: cannot start, {e}")
            raise

    async def start_session(self) -> None:
        if not self.active:
            logging.info(f"{self.object_name}: inactive, not starting a session")
            return
        await self._require_mode().start_session()

    async def end_session(self) -> None:
        if not self.active:
            return
        await self._require_mode().end_session()

    def on_deactivate(self) -> None:
        mode = self._tracking_mode
        if mode is None or not mode.is_active:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(mode.end_session())
            return
        self._pending_end = loop.create_task(mode.end_session())
        self._pending_end.add_done_callback(self._on_end_done)

    def _on_end_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logging.warning(f"{self.object_name}: failed to end session on deactivate: {error}")

    def _require_mode(self) -> TrackingMode:
        if self._tracking_mode is None:
            raise RuntimeError(f"{self.object_name}: init() has not been called")
        return self._tracking_mode


class ARSLAMCamera(ARCamera):
    """World tracking camera."""

    type_name = "ar-slam-camera"
    tracking_type = TrackingType.SLAM

    @property
    def on_tracking_status(self) -> Emitter:
        return self._require_mode().on_tracking_status

    @property
    def tracking_status(self) -> TrackingStatus:
        return self._require_mode().tracking_status


class ARFaceTrackingCamera(ARCamera):
    """Face tracking camera. Pass `camera_direction="back"` for the rear camera."""

    type_name = "ar-face-tracking-camera"
    tracking_type = TrackingType.FACE

    @property
    def on_face_loading(self) -> Emitter:
        return self._require_mode().on_face_loading

    @property
    def on_face_found(self) -> Emitter:
        return self._require_mode().on_face_found

    @property
    def on_face_update(self) -> Emitter:
        return self._require_mode().on_face_update

    @property
    def on_face_lost(self) -> Emitter:
        return self._require_mode().on_face_lost


class ARImageTrackingCamera(ARCamera):
    """Image target camera. Pass `image_targets=[...]` to restrict the images."""

    type_name = "ar-image-tracking-camera"
    tracking_type = TrackingType.IMAGE

    @property
    def on_image_found(self) -> Emitter:
        return self._require_mode().on_image_found

    @property
    def on_image_update(self) -> Emitter:
        return self._require_mode().on_image_update

    @property
    def on_image_lost(self) -> Emitter:
        return self._require_mode().on_image_lost


class ARVPSCamera(ARCamera):
    type_name = "ar-vps-camera"
    tracking_type = TrackingType.VPS

    @property
    def on_way_spot_found(self) -> Emitter:
        return self._require_mode().on_way_spot_found

    @property
    def on_way_spot_updated(self) -> Emitter:
        return self._require_mode().on_way_spot_updated

    @property
    def on_way_spot_lost(self) -> Emitter:
        return self._require_mode().on_way_spot_lost

    @property
    def on_mesh_found(self) -> Emitter:
        return self._require_mode().on_mesh_found

    @property
    def on_tracking_status(self) -> Emitter:
        return self._require_mode().on_tracking_status
