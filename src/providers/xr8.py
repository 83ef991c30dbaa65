"""
ARProvider implementation for the 8th Wall (XR8) SDK.

XR8 reports results as named events with a `detail` payload. This provider
translates them:
- reality.image{found,updated,lost}       -> IMAGE target events (id = image name)
- facecontroller.face{found,updated,lost} -> FACE target events (id = face id)
- reality.projectwayspot{found,updated,lost} -> VPS target events (id = wayspot name)
- facecontroller.faceloading, reality.meshfound -> capability-specific emitters
- reality.trackingstatus                  -> world/VPS tracking status
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from models.config import XR8Config
from models.events import TargetEvent, TrackingStatusEvent
from models.pose import Pose
from models.tracking import TargetStatus, TrackingStatus, TrackingType
from tracking.base import TrackingMode
from tracking.face import FaceTrackingMode
from tracking.image import ImageTrackingMode
from tracking.vps import VPSTrackingMode
from tracking.world import WorldTrackingMode
from .sdk import SdkProvider, TrackingSdk

if TYPE_CHECKING:
    from engine.base import Component, Engine

XR8_FEATURES = frozenset({"camera", "location", "face", "image-targets"})

_TARGET_EVENTS = {
    "reality.imagefound": (TrackingType.IMAGE, TargetStatus.FOUND),
    "reality.imageupdated": (TrackingType.IMAGE, TargetStatus.UPDATED),
    "reality.imagelost": (TrackingType.IMAGE, TargetStatus.LOST),
    "facecontroller.facefound": (TrackingType.FACE, TargetStatus.FOUND),
    "facecontroller.faceupdated": (TrackingType.FACE, TargetStatus.UPDATED),
    "facecontroller.facelost": (TrackingType.FACE, TargetStatus.LOST),
    "reality.projectwayspotfound": (TrackingType.VPS, TargetStatus.FOUND),
    "reality.projectwayspotupdated": (TrackingType.VPS, TargetStatus.UPDATED),
    "reality.projectwayspotlost": (TrackingType.VPS, TargetStatus.LOST),
}


def _target_from_detail(tracking_type: TrackingType, status: TargetStatus, detail: Dict[str, Any]) -> TargetEvent:
    if tracking_type is TrackingType.FACE:
        target_id = str(detail.get("id", 0))
        transform = detail.get("transform")
        pose = Pose.from_dict(transform) if transform else None
        data = {k: detail[k] for k in ("vertices", "normals", "attachmentPoints") if k in detail}
    else:
        target_id = str(detail.get("name", ""))
        pose = Pose.from_dict(detail) if "position" in detail else None
        data = {k: detail[k] for k in ("type", "metadata") if k in detail}
    return TargetEvent(
        tracking_type=tracking_type,
        target_id=target_id,
        status=status,
        pose=pose,
        data=data,
    )


class XR8Provider(SdkProvider):
    """8th Wall provider: world, VPS, face and image tracking."""

    name = "xr8"
    capabilities = frozenset({TrackingType.SLAM, TrackingType.VPS, TrackingType.FACE, TrackingType.IMAGE})

    def __init__(self, engine: "Engine", sdk: TrackingSdk, config: Optional[XR8Config] = None):
        super().__init__(engine, sdk)
        self.config = config or XR8Config()

    def _load_options(self) -> Dict[str, Any]:
        return {"api_token": self.config.api_token}

    async def load(self) -> None:
        if not self.config.api_token:
            raise RuntimeError("8th Wall API token is missing (providers.xr8.api_token)")
        await super().load()

    def _create_tracking_mode(self, tracking_type: TrackingType, component: "Component", **kwargs: Any) -> TrackingMode:
        if tracking_type is TrackingType.SLAM:
            kwargs.setdefault("required_features", ["camera"])
            return WorldTrackingMode(self, component, **kwargs)
        if tracking_type is TrackingType.VPS:
            kwargs.setdefault("required_features", ["camera", "location"])
            return VPSTrackingMode(self, component, **kwargs)
        if tracking_type is TrackingType.FACE:
            kwargs.setdefault("required_features", ["camera", "face"])
            return FaceTrackingMode(self, component, **kwargs)
        kwargs.setdefault("required_features", ["camera"])
        kwargs.setdefault("optional_features", ["image-targets"])
        return ImageTrackingMode(self, component, **kwargs)

    def _handle_sdk_event(self, event_name: str, detail: Dict[str, Any]) -> None:
        mapped = _TARGET_EVENTS.get(event_name)
        if mapped is not None:
            tracking_type, status = mapped
            self._route_target(_target_from_detail(tracking_type, status, detail))
        elif event_name == "facecontroller.faceloading":
            for mode in self._modes_of(TrackingType.FACE):
                mode._receive_face_loading(detail)
        elif event_name == "reality.meshfound":
            for mode in self._modes_of(TrackingType.VPS):
                mode._receive_mesh_found(detail)
        elif event_name == "reality.trackingstatus":
            self._route_tracking_status(
                TrackingStatusEvent(TrackingStatus.parse(detail.get("status", "")), detail.get("reason"))
            )
        else:
            logging.debug(f"XR8: unhandled event '{event_name}'")
