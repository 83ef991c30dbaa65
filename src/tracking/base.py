"""
TrackingMode interface.

A tracking mode is a live instance of one tracking capability (world, face,
image, VPS) produced by a provider for one host component. It is bound to
that provider and component for its whole lifetime.

Session policy: `start_session()` starts the owning provider's session when it
is not already running (it never runs on its own). Operations that need live
tracking data call `require_active()`, which raises SessionNotActive.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from models.tracking import TrackingType
from session.errors import MissingDependency, SessionNotActive

if TYPE_CHECKING:
    from engine.base import Component
    from providers.base import ARProvider


class TrackingMode(ABC):
    """
    Abstract base class for tracking modes.

    Lifecycle:
        1. Created by `provider.create_tracking_mode(type, component)`
        2. `await init(...)` checks the host object and prepares the mode
        3. `await start_session()` / `await end_session()` follow the provider
        4. `dispose()` ends the binding when the host component goes away
    """

    tracking_type: TrackingType = TrackingType.SLAM

    # Component types that must be present on the host object.
    required_components: Tuple[str, ...] = ("view",)

    def __init__(
        self,
        provider: "ARProvider",
        component: "Component",
        required_features: Sequence[str] = (),
        optional_features: Sequence[str] = (),
    ):
        self._provider = provider
        self._component = component
        self.required_features: List[str] = list(required_features)
        self.optional_features: List[str] = list(optional_features)
        self._initialized = False
        self._disposed = False

    @property
    def provider(self) -> "ARProvider":
        return self._provider

    @property
    def component(self) -> "Component":
        return self._component

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def is_active(self) -> bool:
        """Whether the owning provider's session is running."""
        return self._provider.session_active

    async def init(self, features: Optional[Sequence[str]] = None, **options: Any) -> None:
        """
        Prepare the mode against its host component.

        Args:
            features: Extra backend features this mode requires (e.g.
                ["location"] for VPS).
            options: Capability-specific settings, passed to `_on_init`.

        Raises:
            MissingDependency: If the host object lacks a required component.
        """
        obj = self._component.object
        object_name = obj.name if obj is not None else type(self._component).__name__
        for type_name in self.required_components:
            if obj is None or obj.get_component(type_name) is None:
                raise MissingDependency(type_name, object_name)

        for feature in features or ():
            if feature not in self.required_features:
                self.required_features.append(feature)

        await self._on_init(**options)
        self._initialized = True

    async def _on_init(self, **options: Any) -> None:
        """Capability-specific setup hook."""
        pass

    async def start_session(self) -> None:
        """Start the provider's session unless it is already running."""
        if self._provider.session_active:
            return
        await self._provider.start_session(self.required_features, self.optional_features)

    async def end_session(self) -> None:
        """End the provider's session. Ending an inactive session is a no-op."""
        if not self._provider.session_active:
            logging.warning(f"{type(self).__name__}: no active session to end")
            return
        await self._provider.end_session()

    def require_active(self) -> None:
        if not self._provider.session_active:
            raise SessionNotActive(
                f"{type(self).__name__} needs a running '{self._provider.name}' session"
            )

    def dispose(self) -> None:
        """Detach from the provider. The mode receives no further events."""
        if self._disposed:
            return
        self._disposed = True
        self._provider.release_tracking_mode(self)

    def _on_session_started(self) -> None:
        """Called by the provider after its session started."""
        pass

    def _on_session_ended(self) -> None:
        """Called by the provider after its session ended."""
        pass
