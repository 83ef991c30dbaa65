from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ProviderInfo(BaseModel):
    name: str
    loaded: bool
    session_active: bool
    supported_types: List[str] = Field(default_factory=list, description="Tracking types: slam|vps|face|image")


class SessionStatusResponse(BaseModel):
    """
    Coordinator snapshot for clients polling the session state.
    """
    engine: str
    readiness: str = Field(..., description="pending|ready|failed")
    scene_loaded: bool
    session_ready: bool
    current_provider: Optional[str] = Field(None, description="Provider whose session is running")
    providers: List[ProviderInfo] = Field(default_factory=list)
    load_failures: List[str] = Field(default_factory=list, description="Providers that failed to load")


class StartSessionRequest(BaseModel):
    provider: str = Field(..., description="Provider name, e.g. webxr")
    required_features: Optional[List[str]] = None
    optional_features: Optional[List[str]] = None


class SessionActionResponse(BaseModel):
    ok: bool
    current_provider: Optional[str] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
