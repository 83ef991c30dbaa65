"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

PROVIDER_NAMES = ("webxr", "xr8", "zappar")
SDK_BACKENDS = ("simulated",)


@dataclass
class EngineConfig:
    """Host engine configuration (headless runtime)."""
    name: str = "main"
    ar_supported: bool = True
    supported_features: List[str] = field(default_factory=lambda: ["local", "hit-test"])
    permission_delay_s: float = 0.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EngineConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            name=d.get("name", "main"),
            ar_supported=d.get("ar_supported", True),
            supported_features=list(d.get("supported_features", ["local", "hit-test"])),
            permission_delay_s=float(d.get("permission_delay_s", 0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ar_supported": self.ar_supported,
            "supported_features": self.supported_features,
            "permission_delay_s": self.permission_delay_s,
        }


@dataclass
class WebXRConfig:
    """Device-native WebXR provider configuration."""
    required_features: List[str] = field(default_factory=lambda: ["local"])
    optional_features: List[str] = field(default_factory=lambda: ["local", "hit-test"])

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WebXRConfig":
        return cls(
            required_features=list(d.get("required_features", ["local"])),
            optional_features=list(d.get("optional_features", ["local", "hit-test"])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required_features": self.required_features,
            "optional_features": self.optional_features,
        }


@dataclass
class XR8Config:
    """8th Wall provider configuration."""
    api_token: Optional[str] = None
    sdk: str = "simulated"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "XR8Config":
        return cls(
            api_token=d.get("api_token"),
            sdk=d.get("sdk", "simulated"),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"sdk": self.sdk}
        if self.api_token is not None:
            d["api_token"] = self.api_token
        return d


@dataclass
class ZapparConfig:
    """Zappar provider configuration."""
    sdk: str = "simulated"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ZapparConfig":
        return cls(sdk=d.get("sdk", "simulated"))

    def to_dict(self) -> Dict[str, Any]:
        return {"sdk": self.sdk}


@dataclass
class ProvidersConfig:
    """Which providers to register (in order) and their settings."""
    enabled: List[str] = field(default_factory=lambda: ["webxr"])
    webxr: WebXRConfig = field(default_factory=WebXRConfig)
    xr8: XR8Config = field(default_factory=XR8Config)
    zappar: ZapparConfig = field(default_factory=ZapparConfig)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ProvidersConfig":
        return cls(
            enabled=list(d.get("enabled", ["webxr"])),
            webxr=WebXRConfig.from_dict(d.get("webxr", {}) or {}),
            xr8=XR8Config.from_dict(d.get("xr8", {}) or {}),
            zappar=ZapparConfig.from_dict(d.get("zappar", {}) or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "webxr": self.webxr.to_dict(),
            "xr8": self.xr8.to_dict(),
            "zappar": self.zappar.to_dict(),
        }


@dataclass
class WebConfig:
    """Control API configuration."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 5000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WebConfig":
        return cls(
            enabled=d.get("enabled", False),
            host=d.get("host", "127.0.0.1"),
            port=d.get("port", 5000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "host": self.host,
            "port": self.port,
        }


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    engine: EngineConfig = field(default_factory=EngineConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_path: str = "logs/ar_tracking.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            engine=EngineConfig.from_dict(d.get("engine", {}) or {}),
            providers=ProvidersConfig.from_dict(d.get("providers", {}) or {}),
            web=WebConfig.from_dict(d.get("web", {}) or {}),
            log_path=d.get("log_path", "logs/ar_tracking.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or passing to existing code)."""
        return {
            "engine": self.engine.to_dict(),
            "providers": self.providers.to_dict(),
            "web": self.web.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
