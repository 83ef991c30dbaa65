from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from engine.headless import HeadlessEngine
from models.config import Config
from providers.base import ARProvider
from providers.factory import register_providers_from_config
from session import ARSession, get_session


@dataclass
class RuntimeContext:
    """Holds the runtime's engine, session and providers; avoids global singletons."""

    config: Config
    engine: HeadlessEngine
    session: ARSession
    providers: List[ARProvider] = field(default_factory=list)

    def get_status(self) -> dict:
        current = self.session.current_provider
        return {
            "engine": self.engine.name,
            "readiness": self.session.readiness.value,
            "scene_loaded": self.session.scene_loaded,
            "session_ready": self.session.session_ready,
            "current_provider": current.name if current is not None else None,
        }

    async def shutdown(self) -> None:
        if self.session.current_provider is not None:
            await self.session.stop_session()
        self.engine.dispose()


async def build_runtime(config: Config, load_scene: bool = True) -> RuntimeContext:
    """
    Wire a headless engine, its session and the configured providers.

    Args:
        config: Typed application config.
        load_scene: Fire the engine's scene-load signal once providers are
            registered.
    """
    engine = HeadlessEngine.from_config(config.engine)
    session = get_session(engine)
    providers = await register_providers_from_config(session, config)

    if load_scene:
        engine.load_scene()

    ctx = RuntimeContext(config=config, engine=engine, session=session, providers=providers)
    logging.info(f"Runtime built: {ctx.get_status()}")
    return ctx
