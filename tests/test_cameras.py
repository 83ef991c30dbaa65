"""
Tests for AR camera components.
"""

import asyncio

import pytest

from components import ARFaceTrackingCamera, ARImageTrackingCamera, ARSLAMCamera, ARVPSCamera
from conftest import FakeProvider
from engine.base import SceneObject
from models.tracking import TrackingType
from providers import WebXRProvider
from session import get_session
from session.errors import MissingDependency, UnsupportedCapability


class TestARCameraInit:
    def test_registers_candidates_and_binds_mode(self, engine, scene_object):
        provider = WebXRProvider(engine)
        camera = scene_object.add_component(ARSLAMCamera([provider]))

        mode = asyncio.run(camera.init())

        assert mode.provider is provider
        assert camera.tracking_mode is mode
        assert get_session(engine).registered_providers == (provider,)

    def test_falls_back_to_next_provider(self, engine, scene_object):
        webxr = WebXRProvider(engine)
        sdk = FakeProvider(engine, name="sdk", supported=[TrackingType.FACE])
        camera = scene_object.add_component(ARFaceTrackingCamera([webxr, sdk]))

        mode = asyncio.run(camera.init())

        assert mode.provider is sdk
        assert mode.tracking_type is TrackingType.FACE

    def test_no_supporting_provider(self, engine, scene_object):
        camera = scene_object.add_component(ARVPSCamera([WebXRProvider(engine)]))

        with pytest.raises(UnsupportedCapability):
            asyncio.run(camera.init())

    def test_uses_session_providers_when_none_given(self, engine, scene_object):
        provider = FakeProvider(engine, supported=[TrackingType.IMAGE])
        asyncio.run(get_session(engine).register_provider(provider))
        camera = scene_object.add_component(ARImageTrackingCamera(image_targets=["poster"]))

        mode = asyncio.run(camera.init())

        assert mode.provider is provider
        assert mode.image_targets == {"poster"}

    def test_start_without_view_component(self, engine, caplog):
        obj = SceneObject("no-view", engine)
        camera = obj.add_component(ARSLAMCamera([FakeProvider(engine)]))

        with pytest.raises(MissingDependency):
            asyncio.run(camera.start())

        assert "no-view" in caplog.text


class TestARCameraSession:
    def test_start_and_end_session(self, engine, scene_object):
        provider = FakeProvider(engine)
        camera = scene_object.add_component(ARSLAMCamera([provider]))

        async def scenario():
            await camera.start()
            await camera.start_session()
            assert provider.session_active
            await camera.end_session()

        asyncio.run(scenario())

        assert not provider.session_active

    def test_inactive_camera_does_not_start(self, engine, scene_object):
        provider = FakeProvider(engine)
        camera = scene_object.add_component(ARSLAMCamera([provider]))

        async def scenario():
            await camera.start()
            camera.active = False
            await camera.start_session()

        asyncio.run(scenario())

        assert provider.start_calls == []

    def test_deactivate_ends_session(self, engine, scene_object):
        provider = FakeProvider(engine)
        camera = scene_object.add_component(ARSLAMCamera([provider]))

        async def scenario():
            await camera.start()
            await camera.start_session()
            camera.active = False
            await asyncio.sleep(0)

        asyncio.run(scenario())

        assert provider.end_calls == 1
        assert not provider.session_active

    def test_deactivate_logs_end_failure(self, engine, scene_object, caplog):
        provider = FakeProvider(engine, end_error=RuntimeError("device lost"))
        camera = scene_object.add_component(ARSLAMCamera([provider]))

        async def scenario():
            await camera.start()
            await camera.start_session()
            camera.active = False
            # One turn for the end task, one for its done-callback
            await asyncio.sleep(0)
            await asyncio.sleep(0)

        asyncio.run(scenario())

        assert provider.end_calls == 1
        assert "failed to end session on deactivate: device lost" in caplog.text

    def test_session_before_init_raises(self, scene_object):
        camera = scene_object.add_component(ARSLAMCamera())

        with pytest.raises(RuntimeError, match="init"):
            asyncio.run(camera.start_session())

    def test_emitter_accessors(self, engine, scene_object):
        provider = FakeProvider(engine, supported=list(TrackingType))
        face = scene_object.add_component(ARFaceTrackingCamera([provider]))
        vps = ARVPSCamera([provider], engine=engine)

        async def scenario():
            await face.init()
            await vps.init()

        asyncio.run(scenario())

        assert face.on_face_found is face.tracking_mode.on_target_found
        assert vps.on_way_spot_lost is vps.tracking_mode.on_target_lost
        assert vps.on_tracking_status is vps.tracking_mode.on_tracking_status
