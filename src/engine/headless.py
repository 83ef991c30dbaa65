"""
Headless host engine.

An in-process engine with no renderer. It provides the signals the tracking
core consumes so the CLI, the control API and the tests can run without a
browser:
- `load_scene()` fires the one-shot scene-load signal
- XR sessions are granted from a fixed feature set, optionally after a
  simulated permission prompt delay
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Sequence

from models.config import EngineConfig
from session.errors import FeatureNotSupported
from .base import Engine, XRSessionHandle


class HeadlessEngine(Engine):
    """
    Engine simulation backed by a static set of supported XR features.

    Example:
        engine = HeadlessEngine("main", supported_features=["local", "hit-test"])
        engine.load_scene()
        handle = await engine.request_xr_session("immersive-ar", ["local"], ["hit-test"])
    """

    def __init__(
        self,
        name: str = "main",
        ar_supported: bool = True,
        supported_features: Iterable[str] = ("local", "hit-test"),
        permission_delay_s: float = 0.0,
    ):
        super().__init__(name=name, ar_supported=ar_supported)
        self.supported_features = frozenset(supported_features)
        self.permission_delay_s = permission_delay_s
        self._xr_session: Optional[XRSessionHandle] = None

    @classmethod
    def from_config(cls, cfg: EngineConfig) -> "HeadlessEngine":
        return cls(
            name=cfg.name,
            ar_supported=cfg.ar_supported,
            supported_features=cfg.supported_features,
            permission_delay_s=cfg.permission_delay_s,
        )

    @property
    def xr_session(self) -> Optional[XRSessionHandle]:
        return self._xr_session

    def load_scene(self) -> None:
        self._mark_scene_loaded()

    async def request_xr_session(
        self,
        mode: str,
        required_features: Sequence[str],
        optional_features: Sequence[str],
    ) -> XRSessionHandle:
        if not self.ar_supported:
            raise FeatureNotSupported([mode])
        if self._xr_session is not None:
            raise RuntimeError(f"XR session already running on engine '{self.name}'")

        missing = set(required_features) - self.supported_features
        if missing:
            raise FeatureNotSupported(missing)

        if self.permission_delay_s > 0:
            await asyncio.sleep(self.permission_delay_s)

        granted = set(required_features) | (set(optional_features) & self.supported_features)
        handle = XRSessionHandle(self, mode, granted)
        self._xr_session = handle
        logging.info(f"XR session granted: engine={self.name} mode={mode} features={sorted(granted)}")
        self.on_xr_session_start.notify(handle)
        return handle

    async def end_xr_session(self) -> None:
        self.terminate_xr_session()

    def terminate_xr_session(self) -> None:
        """End the native session from the platform side (e.g. system UI)."""
        handle = self._xr_session
        if handle is None:
            return
        self._xr_session = None
        handle.ended = True
        logging.info(f"XR session ended: engine={self.name}")
        self.on_xr_session_end.notify()
