"""
Binding contract for SDK-based tracking backends.

Third-party SDKs (8th Wall, Zappar) run their own camera pipeline and report
results as named events with a payload. Providers talk to them through the
TrackingSdk protocol; SdkProvider holds the lifecycle logic both SDK
providers share and leaves event translation to the subclass.
"""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Protocol, Sequence

from models.events import TargetEvent, TrackingStatusEvent
from models.tracking import TrackingType
from session.errors import FeatureNotSupported
from .base import ARProvider

SdkListener = Callable[[str, Dict[str, Any]], None]

# Emitted by an SDK when its camera pipeline stops for any reason.
SDK_STOPPED = "session.stopped"


class TrackingSdk(Protocol):
    supported_features: FrozenSet[str]

    async def load(self, options: Dict[str, Any]) -> None:
        ...

    async def run(self, features: Sequence[str]) -> None:
        ...

    async def stop(self) -> None:
        ...

    def add_listener(self, listener: SdkListener) -> None:
        ...

    def remove_listener(self, listener: SdkListener) -> None:
        ...


class SimulatedSdk:
    """
    In-process TrackingSdk used by the headless runtime and tests.

    Args:
        name: Label for diagnostics.
        supported_features: Features `run()` can satisfy.
        load_error: If set, `load()` raises it.
        load_delay_s: Simulated download/initialization time.
        start_delay_s: Simulated camera permission prompt.
    """

    def __init__(
        self,
        name: str = "sdk",
        supported_features: Iterable[str] = (),
        load_error: Optional[Exception] = None,
        load_delay_s: float = 0.0,
        start_delay_s: float = 0.0,
    ):
        self.name = name
        self.supported_features = frozenset(supported_features)
        self.load_error = load_error
        self.load_delay_s = load_delay_s
        self.start_delay_s = start_delay_s
        self.load_options: Optional[Dict[str, Any]] = None
        self.running = False
        self.running_features: List[str] = []
        self._listeners: List[SdkListener] = []

    async def load(self, options: Dict[str, Any]) -> None:
        if self.load_delay_s > 0:
            await asyncio.sleep(self.load_delay_s)
        if self.load_error is not None:
            raise self.load_error
        self.load_options = dict(options)

    async def run(self, features: Sequence[str]) -> None:
        missing = set(features) - self.supported_features
        if missing:
            raise FeatureNotSupported(missing)
        if self.start_delay_s > 0:
            await asyncio.sleep(self.start_delay_s)
        self.running = True
        self.running_features = list(features)

    async def stop(self) -> None:
        self.terminate()

    def terminate(self) -> None:
        """Stop the pipeline from the SDK side (e.g. camera revoked)."""
        if not self.running:
            return
        self.running = False
        self.running_features = []
        self.emit(SDK_STOPPED, {})

    def add_listener(self, listener: SdkListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SdkListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event_name: str, detail: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            listener(event_name, detail)


class SdkProvider(ARProvider):
    """
    Shared lifecycle for SDK-backed providers.

    Subclasses declare `capabilities`, build tracking modes and translate raw
    SDK events in `_handle_sdk_event`.
    """

    capabilities: FrozenSet[TrackingType] = frozenset()

    def __init__(self, engine, sdk: TrackingSdk):
        super().__init__(engine)
        self.sdk = sdk
        sdk.add_listener(self._on_sdk_event)

    def _load_options(self) -> Dict[str, Any]:
        return {}

    async def load(self) -> None:
        await self.sdk.load(self._load_options())
        self.loaded = True

    def supports(self, tracking_type: TrackingType) -> bool:
        return tracking_type in self.capabilities

    async def start_session(
        self,
        required_features: Optional[Sequence[str]] = None,
        optional_features: Optional[Sequence[str]] = None,
    ) -> None:
        if self._session_active:
            logging.info(f"Provider '{self.name}': session already running")
            return
        required = list(required_features or [])
        missing = set(required) - self.sdk.supported_features
        if missing:
            raise FeatureNotSupported(missing)
        features = required + [
            f for f in (optional_features or []) if f in self.sdk.supported_features and f not in required
        ]
        await self.sdk.run(features)
        self._notify_session_started()

    async def end_session(self) -> None:
        if not self._session_active:
            logging.warning(f"Provider '{self.name}': no session to end")
            return
        try:
            await self.sdk.stop()
        except Exception as e:
            logging.debug(f"Provider '{self.name}': stop raised, treating as ended: {e}")
        self._notify_session_ended()

    def _on_sdk_event(self, event_name: str, detail: Dict[str, Any]) -> None:
        if event_name == SDK_STOPPED:
            self._notify_session_ended()
            return
        if not self._session_active:
            logging.debug(f"Provider '{self.name}': ignoring '{event_name}' outside a session")
            return
        self._handle_sdk_event(event_name, detail)

    @abstractmethod
    def _handle_sdk_event(self, event_name: str, detail: Dict[str, Any]) -> None:
        pass

    def _route_target(self, event: TargetEvent) -> None:
        for mode in self._modes_of(event.tracking_type):
            mode._receive_target(event)

    def _route_tracking_status(self, event: TrackingStatusEvent) -> None:
        for mode in self._modes_of(TrackingType.SLAM) + self._modes_of(TrackingType.VPS):
            mode._receive_tracking_status(event)
