"""
Host engine interfaces.

The rendering engine is an external collaborator. These classes describe the
parts of it the tracking core consumes:
- a one-shot scene-load signal
- native XR session start/end signals and a session request call
- scene objects carrying named components
- a disposal hook so per-engine state can be released
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

from runtime.emitter import Emitter


class XRSessionHandle:
    """
    A granted native XR session.

    Ending is idempotent: ending an already ended handle is not an error.
    """

    def __init__(self, engine: "Engine", mode: str, enabled_features: Iterable[str]):
        self._engine = engine
        self.mode = mode
        self.enabled_features = frozenset(enabled_features)
        self.ended = False

    async def end(self) -> None:
        if self.ended:
            return
        self.ended = True
        await self._engine.end_xr_session()


class Engine(ABC):
    """
    Minimal host engine contract.

    Attributes:
        name: Label used in diagnostics (the engine object itself is the
            identity key for per-engine state).
        on_scene_loaded: Fires once when the scene finishes loading.
        on_xr_session_start: Fires with an XRSessionHandle when a native
            session starts.
        on_xr_session_end: Fires when the native session ends.
        on_dispose: Fires with the engine when it is disposed.
    """

    def __init__(self, name: str = "main", ar_supported: bool = True):
        self.name = name
        self._ar_supported = ar_supported
        self._scene_loaded = False
        self._disposed = False
        self.on_scene_loaded = Emitter(f"{name}.scene-loaded")
        self.on_xr_session_start = Emitter(f"{name}.xr-session-start")
        self.on_xr_session_end = Emitter(f"{name}.xr-session-end")
        self.on_dispose = Emitter(f"{name}.dispose")

    @property
    def ar_supported(self) -> bool:
        return self._ar_supported

    @property
    def scene_loaded(self) -> bool:
        return self._scene_loaded

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _mark_scene_loaded(self) -> None:
        """Fire the scene-load signal; later calls are ignored."""
        if self._scene_loaded:
            return
        self._scene_loaded = True
        logging.info(f"Scene loaded: engine={self.name}")
        self.on_scene_loaded.notify()

    @abstractmethod
    async def request_xr_session(
        self,
        mode: str,
        required_features: Sequence[str],
        optional_features: Sequence[str],
    ) -> XRSessionHandle:
        """
        Request a native XR session.

        Raises:
            FeatureNotSupported: If any required feature is unavailable.
        """
        pass

    @abstractmethod
    async def end_xr_session(self) -> None:
        """End the running native XR session. No-op when none is running."""
        pass

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self.on_dispose.notify(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class SceneObject:
    """A scene graph node holding components keyed by type name."""

    def __init__(self, name: str, engine: Optional[Engine] = None):
        self.name = name
        self.engine = engine
        self._components: Dict[str, "Component"] = {}

    def add_component(self, component: "Component") -> "Component":
        self._components[component.type_name] = component
        component.object = self
        if component.engine is None:
            component.engine = self.engine
        return component

    def get_component(self, type_name: str) -> Optional["Component"]:
        return self._components.get(type_name)

    @property
    def components(self) -> List["Component"]:
        return list(self._components.values())


class Component:
    """
    Base class for engine components.

    Subclasses override the lifecycle hooks they need; `active` toggles call
    `on_activate` / `on_deactivate`.
    """

    type_name = "component"

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine
        self.object: Optional[SceneObject] = None
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        if value == self._active:
            return
        self._active = value
        if value:
            self.on_activate()
        else:
            self.on_deactivate()

    def on_activate(self) -> None:
        pass

    def on_deactivate(self) -> None:
        pass


class ViewComponent(Component):
    """Marker for the camera view component AR cameras render through."""

    type_name = "view"
