from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from runtime.context import RuntimeContext
from session.errors import FeatureNotSupported
from ..api_models import (
    HealthResponse,
    ProviderInfo,
    SessionActionResponse,
    SessionStatusResponse,
    StartSessionRequest,
)

router = APIRouter()


def _ctx(request: Request) -> RuntimeContext:
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None:
        raise HTTPException(status_code=503, detail="Runtime not initialized")
    return ctx


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse()


@router.get("/session", response_model=SessionStatusResponse)
def session_status(request: Request):
    ctx = _ctx(request)
    session = ctx.session
    status = ctx.get_status()
    return SessionStatusResponse(
        **status,
        providers=[
            ProviderInfo(
                name=p.name,
                loaded=p.loaded,
                session_active=p.session_active,
                supported_types=[t.value for t in p.supported_types],
            )
            for p in session.registered_providers
        ],
        load_failures=[p.name for p in session.load_failures],
    )


@router.post("/session/start", response_model=SessionActionResponse)
async def start_session(body: StartSessionRequest, request: Request):
    """
    Start a tracking session on the named provider.

    - 409 if the session is not ready yet or another provider is running
    - 404 if no provider with that name is registered
    - 422 if the backend refuses a required feature
    """
    session = _ctx(request).session
    if not session.session_ready:
        raise HTTPException(status_code=409, detail=f"Session not ready ({session.readiness.value})")

    provider = session.get_provider(body.provider)
    if provider is None:
        raise HTTPException(status_code=404, detail=f"Unknown provider: {body.provider}")

    current = session.current_provider
    if current is not None and current is not provider:
        raise HTTPException(status_code=409, detail=f"Provider '{current.name}' is already running")

    try:
        await provider.start_session(body.required_features, body.optional_features)
    except FeatureNotSupported as e:
        raise HTTPException(status_code=422, detail=str(e))

    current = session.current_provider
    return SessionActionResponse(ok=True, current_provider=current.name if current else None)


@router.post("/session/stop", response_model=SessionActionResponse)
async def stop_session(request: Request):
    session = _ctx(request).session
    logging.info("Stop requested via API")
    was_running = session.current_provider is not None
    await session.stop_session()
    if not was_running:
        return SessionActionResponse(ok=True, message="No tracking session is active")
    return SessionActionResponse(ok=True)
