"""
FastAPI application factory for the AR tracking runtime.

Routes:
- /api/health -> liveness
- /api/session -> coordinator state
- /api/session/start, /api/session/stop -> session trigger
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from runtime.context import RuntimeContext
from .routes import api


def create_app(ctx: Optional[RuntimeContext] = None) -> FastAPI:
    """Create the FastAPI app bound to a runtime context."""
    app = FastAPI(
        title="AR Tracking",
        version="0.1.0",
        description="Control API for AR tracking sessions",
    )

    # CORS for the browser front-end in development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.ctx = ctx
    app.include_router(api.router, prefix="/api")
    return app
