"""
ARProvider interface for pluggable tracking backends.

A provider is a backend with some tracking capabilities: the device-native
WebXR API, the 8th Wall SDK, the Zappar SDK, ... The session coordinator only
depends on this contract:
- `load()` once, setting `loaded` on success
- `supports(type)` / `create_tracking_mode(type, component)`
- `start_session(required, optional)` / `end_session()`
- `on_session_start(provider)` / `on_session_end(provider)` notifications
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from models.tracking import TrackingType
from runtime.emitter import Emitter
from session.errors import UnsupportedCapability

if TYPE_CHECKING:
    from engine.base import Component, Engine
    from session.coordinator import ARSession
    from tracking.base import TrackingMode


class ARProvider(ABC):
    """
    Abstract base class for tracking providers.

    Subclasses implement the backend specifics and report session state
    changes through `_notify_session_started()` / `_notify_session_ended()`,
    which guarantee one start and one end notification per session.
    """

    name = "provider"

    def __init__(self, engine: "Engine"):
        self._engine = engine
        self.loaded = False
        self._session_active = False
        self._tracking_modes: List["TrackingMode"] = []
        self.on_session_start = Emitter(f"{self.name}.session-start")
        self.on_session_end = Emitter(f"{self.name}.session-end")

    @classmethod
    async def register_with_session(cls, session: "ARSession", **kwargs: Any) -> "ARProvider":
        """
        Return this backend's provider for the session's engine, creating and
        registering it on first use.
        """
        for provider in session.registered_providers:
            if type(provider) is cls:
                return provider
        provider = cls(session.engine, **kwargs)
        await session.register_provider(provider)
        return provider

    @property
    def engine(self) -> "Engine":
        return self._engine

    @property
    def session_active(self) -> bool:
        return self._session_active

    @property
    def tracking_modes(self) -> List["TrackingMode"]:
        return list(self._tracking_modes)

    @property
    def supported_types(self) -> List[TrackingType]:
        return [t for t in TrackingType if self.supports(t)]

    @abstractmethod
    async def load(self) -> None:
        """
        Initialize the backend and set `loaded = True` on success.

        Called exactly once, by the session coordinator on registration.
        """
        pass

    @abstractmethod
    def supports(self, tracking_type: TrackingType) -> bool:
        """Whether this provider can create the given tracking mode."""
        pass

    def create_tracking_mode(self, tracking_type: TrackingType, component: "Component", **kwargs: Any) -> "TrackingMode":
        """
        Create a tracking mode bound to `component`.

        Raises:
            UnsupportedCapability: If `supports(tracking_type)` is False.
        """
        if not self.supports(tracking_type):
            raise UnsupportedCapability(self.name, tracking_type)
        mode = self._create_tracking_mode(tracking_type, component, **kwargs)
        self._tracking_modes.append(mode)
        return mode

    @abstractmethod
    def _create_tracking_mode(self, tracking_type: TrackingType, component: "Component", **kwargs: Any) -> "TrackingMode":
        pass

    def release_tracking_mode(self, mode: "TrackingMode") -> None:
        if mode in self._tracking_modes:
            self._tracking_modes.remove(mode)

    @abstractmethod
    async def start_session(
        self,
        required_features: Optional[Sequence[str]] = None,
        optional_features: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Ask the backend to start producing tracking data.

        The start notification follows once the backend is running, which may
        be after a permission prompt. A required feature the backend cannot
        provide fails the start instead of being dropped.
        """
        pass

    @abstractmethod
    async def end_session(self) -> None:
        """End the session. Ending an already ended session is not an error."""
        pass

    def _modes_of(self, tracking_type: TrackingType) -> List["TrackingMode"]:
        return [m for m in self._tracking_modes if m.tracking_type is tracking_type]

    def _notify_session_started(self) -> None:
        if self._session_active:
            return
        self._session_active = True
        for mode in list(self._tracking_modes):
            mode._on_session_started()
        self.on_session_start.notify(self)

    def _notify_session_ended(self) -> None:
        if not self._session_active:
            logging.warning(f"Provider '{self.name}': session already ended")
            return
        self._session_active = False
        for mode in list(self._tracking_modes):
            mode._on_session_ended()
        self.on_session_end.notify(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(engine={self._engine.name!r}, loaded={self.loaded})"
