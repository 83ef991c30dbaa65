"""
Provider construction from configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from models.config import Config, ProvidersConfig
from .base import ARProvider
from .sdk import SimulatedSdk, TrackingSdk
from .webxr import WebXRProvider
from .xr8 import XR8_FEATURES, XR8Provider
from .zappar import ZAPPAR_FEATURES, ZapparProvider

if TYPE_CHECKING:
    from engine.base import Engine
    from session.coordinator import ARSession


def _create_sdk(name: str, backend: str) -> TrackingSdk:
    if backend != "simulated":
        raise ValueError(f"Unknown SDK backend for '{name}': {backend}")
    features = XR8_FEATURES if name == "xr8" else ZAPPAR_FEATURES
    return SimulatedSdk(name=name, supported_features=features)


def create_provider(
    name: str,
    engine: "Engine",
    config: Optional[ProvidersConfig] = None,
    sdk: Optional[TrackingSdk] = None,
) -> ARProvider:
    """
    Build a provider by name.

    Args:
        name: One of "webxr", "xr8", "zappar".
        engine: Host engine the provider binds to.
        config: Provider settings; defaults apply when omitted.
        sdk: SDK binding for SDK-based providers. When omitted, one is built
            from the configured `sdk` backend.

    Raises:
        ValueError: For an unknown provider or SDK backend.
    """
    config = config or ProvidersConfig()

    if name == "webxr":
        return WebXRProvider(engine, config.webxr)
    if name == "xr8":
        return XR8Provider(engine, sdk or _create_sdk(name, config.xr8.sdk), config.xr8)
    if name == "zappar":
        return ZapparProvider(engine, sdk or _create_sdk(name, config.zappar.sdk))
    raise ValueError(f"Unknown provider: {name}")


async def register_providers_from_config(session: "ARSession", config: Config) -> List[ARProvider]:
    """
    Create every enabled provider, in configured order, and register it with
    the session. A provider whose load fails is still returned; its failure
    is reported through the session's readiness.
    """
    providers = []
    for name in config.providers.enabled:
        existing = session.get_provider(name)
        if existing is not None:
            providers.append(existing)
            continue
        provider = create_provider(name, session.engine, config.providers)
        await session.register_provider(provider)
        providers.append(provider)

    logging.info(f"Registered providers: {[p.name for p in providers]}")
    return providers
