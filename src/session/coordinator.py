"""
ARSession - master control for AR tracking sessions.

One ARSession exists per engine instance. It:
- registers tracking providers (device-native WebXR, 8th Wall, Zappar, ...)
- gates a one-time "session ready" notification on the scene having loaded
  AND every registered provider having loaded
- keeps track of the single provider whose session is currently running
- re-broadcasts provider session start/end to any number of subscribers
- can stop whichever session is running

All state changes happen on the event loop thread; the only suspension point
inside the coordinator is awaiting a provider's load() during registration.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from models.tracking import TrackingType
from runtime.emitter import Emitter
from .errors import ProviderLoadError

if TYPE_CHECKING:
    from engine.base import Engine
    from providers.base import ARProvider


class ReadinessState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


# Engine instance -> ARSession, keyed by object identity. Entries are dropped
# when the engine is disposed.
_sessions: Dict["Engine", "ARSession"] = {}


def get_session(engine: "Engine") -> "ARSession":
    """
    Return the session bound to `engine`, creating it on first access.

    A disposed engine gets a fresh, unregistered session; nothing would ever
    release a registry entry for it.
    """
    session = _sessions.get(engine)
    if session is None and engine.disposed:
        logging.warning(f"Engine '{engine.name}' is disposed, returning an unregistered session")
        return ARSession(engine)
    if session is None:
        session = ARSession(engine)
        _sessions[engine] = session
        engine.on_dispose.add(release_session)
    return session


def release_session(engine: "Engine") -> None:
    """Drop the session bound to `engine`. No-op if none exists."""
    session = _sessions.pop(engine, None)
    if session is None:
        return
    session._detach()
    logging.info(f"Session released: engine={engine.name}")


class ARSession:
    """
    Per-engine session coordinator.

    Use `get_session(engine)` (or `ARSession.for_engine(engine)`) rather than
    constructing this directly, so every caller shares the same instance.

    Emitters:
        on_session_ready: No payload. Fires at most once per session.
        on_session_started(provider): A provider's session started.
        on_session_ended(provider): A provider's session ended.
        on_provider_load_failed(provider, error): A provider's load failed;
            the session will never become ready.
    """

    def __init__(self, engine: "Engine"):
        self._engine = engine
        self._providers: List["ARProvider"] = []
        self._current_provider: Optional["ARProvider"] = None
        self._scene_loaded = False
        self._session_ready = False
        self._load_failures: Dict["ARProvider", ProviderLoadError] = {}
        self._ready_waiters: List[asyncio.Future] = []

        self.on_session_ready = Emitter(f"{engine.name}.session-ready")
        self.on_session_started = Emitter(f"{engine.name}.session-started")
        self.on_session_ended = Emitter(f"{engine.name}.session-ended")
        self.on_provider_load_failed = Emitter(f"{engine.name}.provider-load-failed")

    @classmethod
    def for_engine(cls, engine: "Engine") -> "ARSession":
        return get_session(engine)

    @property
    def engine(self) -> "Engine":
        return self._engine

    @property
    def registered_providers(self) -> Tuple["ARProvider", ...]:
        """Shallow copy of all registered providers."""
        return tuple(self._providers)

    @property
    def current_provider(self) -> Optional["ARProvider"]:
        """Provider whose session is running, if any."""
        return self._current_provider

    @property
    def scene_loaded(self) -> bool:
        return self._scene_loaded

    @property
    def session_ready(self) -> bool:
        return self._session_ready

    @property
    def readiness(self) -> ReadinessState:
        if self._session_ready:
            return ReadinessState.READY
        if self._load_failures:
            return ReadinessState.FAILED
        return ReadinessState.PENDING

    @property
    def load_failures(self) -> Dict["ARProvider", ProviderLoadError]:
        return dict(self._load_failures)

    def provider_for(self, tracking_type: TrackingType) -> Optional["ARProvider"]:
        """First registered provider that supports `tracking_type`."""
        for provider in self._providers:
            if provider.supports(tracking_type):
                return provider
        return None

    def get_provider(self, name: str) -> Optional["ARProvider"]:
        for provider in self._providers:
            if provider.name == name:
                return provider
        return None

    async def register_provider(self, provider: "ARProvider") -> None:
        """
        Register a tracking provider, load it and re-check readiness.

        Registering the same provider twice is a no-op. A provider whose load
        fails stays registered but never becomes loaded, which keeps the
        session from ever becoming ready; the failure is logged and published
        through `on_provider_load_failed` instead of being raised.
        """
        if provider in self._providers:
            return

        if not self._engine.on_scene_loaded.has(self._on_scene_loaded):
            self._engine.on_scene_loaded.add(self._on_scene_loaded)
            if self._engine.scene_loaded:
                # Scene finished loading before anyone registered.
                self._scene_loaded = True

        self._providers.append(provider)
        provider.on_session_start.add(self._on_provider_session_started)
        provider.on_session_end.add(self._on_provider_session_ended)
        logging.info(f"Provider registered: {provider.name} (engine={self._engine.name})")

        try:
            await provider.load()
        except Exception as e:
            error = ProviderLoadError(provider.name, e)
            self._load_failures[provider] = error
            logging.error(f"Provider '{provider.name}' failed to load, session will not become ready: {e}")
            self._fail_waiters(error)
            self.on_provider_load_failed.notify(provider, error)
        else:
            logging.info(f"Provider loaded: {provider.name}")

        self._check_provider_load_progress()

    async def wait_until_ready(self) -> None:
        """
        Wait for the session to become ready.

        Raises:
            ProviderLoadError: If a registered provider failed to load.
        """
        if self._session_ready:
            return
        if self._load_failures:
            raise next(iter(self._load_failures.values()))
        waiter = asyncio.get_running_loop().create_future()
        self._ready_waiters.append(waiter)
        await waiter

    async def stop_session(self) -> None:
        """Stop the running AR session, if any."""
        provider = self._current_provider
        if provider is None:
            logging.warning("No tracking session is active, nothing will happen")
            return

        logging.info(f"Stopping session: provider={provider.name}")
        self._current_provider = None
        try:
            await provider.end_session()
        except Exception as e:
            logging.warning(f"Provider '{provider.name}' failed to end its session: {e}")

    def _check_provider_load_progress(self) -> None:
        """
        Fire `on_session_ready` once the scene and every provider are loaded.

        Called after each provider load settles and on the scene-load signal;
        after the first successful check every further call is a no-op.
        """
        if self._session_ready:
            return

        if self._scene_loaded and all(p.loaded for p in self._providers):
            self._session_ready = True
            logging.info(f"Session ready: engine={self._engine.name} providers={[p.name for p in self._providers]}")
            for waiter in self._ready_waiters:
                if not waiter.done():
                    waiter.set_result(None)
            self._ready_waiters.clear()
            self.on_session_ready.notify()

    def _fail_waiters(self, error: ProviderLoadError) -> None:
        for waiter in self._ready_waiters:
            if not waiter.done():
                waiter.set_exception(error)
        self._ready_waiters.clear()

    def _on_scene_loaded(self) -> None:
        self._scene_loaded = True
        self._check_provider_load_progress()

    def _on_provider_session_started(self, provider: "ARProvider") -> None:
        logging.info(f"Provider session started: {provider.name}")
        self._current_provider = provider
        self.on_session_started.notify(provider)

    def _on_provider_session_ended(self, provider: "ARProvider") -> None:
        logging.info(f"Provider session ended: {provider.name}")
        if self._current_provider is provider:
            self._current_provider = None
        elif self._current_provider is not None:
            logging.warning(
                f"Ignoring end of '{provider.name}' session, "
                f"'{self._current_provider.name}' is the active provider"
            )
        self.on_session_ended.notify(provider)

    def _detach(self) -> None:
        """Unhook from the engine and providers when the engine goes away."""
        self._engine.on_scene_loaded.remove(self._on_scene_loaded)
        for provider in self._providers:
            provider.on_session_start.remove(self._on_provider_session_started)
            provider.on_session_end.remove(self._on_provider_session_ended)
        for waiter in self._ready_waiters:
            waiter.cancel()
        self._ready_waiters.clear()
