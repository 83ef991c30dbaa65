"""
ARProvider implementation for the Zappar SDK.

Zappar exposes anchors per tracker kind; each anchor reports visibility and a
4x4 column-major pose matrix:
- {image,face}_tracker.anchor_visible     -> FOUND
- {image,face}_tracker.anchor_pose        -> UPDATED
- {image,face}_tracker.anchor_not_visible -> LOST
- instant_world_tracker.status            -> world tracking status
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from models.events import TargetEvent, TrackingStatusEvent
from models.pose import Pose
from models.tracking import TargetStatus, TrackingStatus, TrackingType
from tracking.base import TrackingMode
from tracking.face import FaceTrackingMode
from tracking.image import ImageTrackingMode
from tracking.world import WorldTrackingMode
from .sdk import SdkProvider

if TYPE_CHECKING:
    from engine.base import Component

ZAPPAR_FEATURES = frozenset({"camera", "face", "image-targets"})

_TRACKERS = {
    "image_tracker": TrackingType.IMAGE,
    "face_tracker": TrackingType.FACE,
}

_ANCHOR_STATUS = {
    "anchor_visible": TargetStatus.FOUND,
    "anchor_pose": TargetStatus.UPDATED,
    "anchor_not_visible": TargetStatus.LOST,
}


class ZapparProvider(SdkProvider):
    """Zappar provider: instant world tracking, face and image tracking."""

    name = "zappar"
    capabilities = frozenset({TrackingType.SLAM, TrackingType.FACE, TrackingType.IMAGE})

    def _create_tracking_mode(self, tracking_type: TrackingType, component: "Component", **kwargs: Any) -> TrackingMode:
        if tracking_type is TrackingType.SLAM:
            kwargs.setdefault("required_features", ["camera"])
            return WorldTrackingMode(self, component, **kwargs)
        if tracking_type is TrackingType.FACE:
            kwargs.setdefault("required_features", ["camera", "face"])
            return FaceTrackingMode(self, component, **kwargs)
        kwargs.setdefault("required_features", ["camera", "image-targets"])
        return ImageTrackingMode(self, component, **kwargs)

    def _handle_sdk_event(self, event_name: str, detail: Dict[str, Any]) -> None:
        tracker, _, kind = event_name.partition(".")
        if tracker == "instant_world_tracker" and kind == "status":
            self._route_tracking_status(
                TrackingStatusEvent(TrackingStatus.parse(detail.get("status", "")), detail.get("reason"))
            )
            return

        tracking_type = _TRACKERS.get(tracker)
        status = _ANCHOR_STATUS.get(kind)
        if tracking_type is None or status is None:
            logging.debug(f"Zappar: unhandled event '{event_name}'")
            return

        matrix = detail.get("pose")
        self._route_target(
            TargetEvent(
                tracking_type=tracking_type,
                target_id=str(detail.get("anchor_id", "")),
                status=status,
                pose=Pose.from_matrix(matrix) if matrix is not None else None,
                data={k: v for k, v in detail.items() if k not in ("anchor_id", "pose")},
            )
        )
