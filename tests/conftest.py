"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from typing import Iterable, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from engine.base import SceneObject, ViewComponent
from engine.headless import HeadlessEngine
from models.tracking import TrackingType
from providers.base import ARProvider
from session import coordinator
from tracking.face import FaceTrackingMode
from tracking.image import ImageTrackingMode
from tracking.vps import VPSTrackingMode
from tracking.world import WorldTrackingMode

_MODE_CLASSES = {
    TrackingType.SLAM: WorldTrackingMode,
    TrackingType.VPS: VPSTrackingMode,
    TrackingType.FACE: FaceTrackingMode,
    TrackingType.IMAGE: ImageTrackingMode,
}


class FakeProvider(ARProvider):
    """
    Scriptable provider for coordinator tests.

    `load()` waits on `load_gate` when given (an asyncio.Event) and raises
    `load_error` when set.
    """

    name = "fake"

    def __init__(
        self,
        engine,
        name: Optional[str] = None,
        supported: Iterable[TrackingType] = (TrackingType.SLAM,),
        load_gate=None,
        load_error: Optional[Exception] = None,
        end_error: Optional[Exception] = None,
    ):
        if name is not None:
            self.name = name
        super().__init__(engine)
        self.supported = set(supported)
        self.load_gate = load_gate
        self.load_error = load_error
        self.end_error = end_error
        self.load_calls = 0
        self.start_calls = []
        self.end_calls = 0

    async def load(self) -> None:
        self.load_calls += 1
        if self.load_gate is not None:
            await self.load_gate.wait()
        if self.load_error is not None:
            raise self.load_error
        self.loaded = True

    def supports(self, tracking_type: TrackingType) -> bool:
        return tracking_type in self.supported

    def _create_tracking_mode(self, tracking_type, component, **kwargs):
        return _MODE_CLASSES[tracking_type](self, component, **kwargs)

    async def start_session(self, required_features=None, optional_features=None) -> None:
        self.start_calls.append((list(required_features or []), list(optional_features or [])))
        self._notify_session_started()

    async def end_session(self) -> None:
        self.end_calls += 1
        if self.end_error is not None:
            raise self.end_error
        self._notify_session_ended()


@pytest.fixture(autouse=True)
def clear_session_registry():
    """Each test starts with no engine sessions."""
    coordinator._sessions.clear()
    yield
    coordinator._sessions.clear()


@pytest.fixture
def engine():
    return HeadlessEngine(name="test", supported_features=["local", "hit-test"])


@pytest.fixture
def scene_object(engine):
    """Scene object carrying a view component, ready for an AR camera."""
    obj = SceneObject("camera", engine)
    obj.add_component(ViewComponent())
    return obj


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
engine:
  name: main
  ar_supported: true
  supported_features: [local, hit-test]
  permission_delay_s: 0.0

providers:
  enabled: [webxr]
  webxr:
    required_features: [local]
    optional_features: [local, hit-test]

web:
  enabled: false
  host: 127.0.0.1
  port: 5000

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "engine": {
            "name": "main",
            "ar_supported": True,
            "supported_features": ["local", "hit-test"],
            "permission_delay_s": 0.0,
        },
        "providers": {
            "enabled": ["webxr", "xr8", "zappar"],
            "webxr": {
                "required_features": ["local"],
                "optional_features": ["local", "hit-test"],
            },
            "xr8": {"api_token": "test-token", "sdk": "simulated"},
            "zappar": {"sdk": "simulated"},
        },
        "web": {"enabled": False, "host": "127.0.0.1", "port": 5000},
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
