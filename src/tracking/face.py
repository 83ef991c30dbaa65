"""
Face tracking mode.
"""

from __future__ import annotations

from typing import Any, Dict

from models.tracking import TrackingType
from runtime.emitter import Emitter
from .targets import TargetTrackingMode


class FaceTrackingMode(TargetTrackingMode):
    """
    Tracks faces in front of the camera.

    Face ids come from the backend and are stable while the face stays
    visible. `on_face_loading` fires with the backend's loading payload
    (mesh topology, UVs) before the first face is found.
    """

    tracking_type = TrackingType.FACE

    def __init__(self, *args, camera_direction: str = "front", **kwargs):
        super().__init__(*args, **kwargs)
        self.camera_direction = camera_direction
        self.on_face_loading = Emitter("FaceTrackingMode.loading")

    @property
    def on_face_found(self) -> Emitter:
        return self.on_target_found

    @property
    def on_face_update(self) -> Emitter:
        return self.on_target_updated

    @property
    def on_face_lost(self) -> Emitter:
        return self.on_target_lost

    async def _on_init(self, **options: Any) -> None:
        direction = options.get("camera_direction")
        if direction is not None:
            if direction not in ("front", "back"):
                raise ValueError(f"camera_direction must be 'front' or 'back', got {direction!r}")
            self.camera_direction = direction

    def _receive_face_loading(self, detail: Dict[str, Any]) -> None:
        self.on_face_loading.notify(detail)
