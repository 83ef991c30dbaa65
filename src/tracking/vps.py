"""
Visual positioning (VPS) tracking mode.

VPS localizes the device against pre-mapped real-world locations
("wayspots"). It runs on top of world tracking, so it also reports
tracking status, and needs the backend's "location" feature.
"""

from __future__ import annotations

from typing import Any, Dict

from models.events import TrackingStatusEvent
from models.tracking import TrackingStatus, TrackingType
from runtime.emitter import Emitter
from .targets import TargetTrackingMode
from .world import TrackingStatusMonitor


class VPSTrackingMode(TargetTrackingMode):
    """Reports wayspots found/updated/lost and meshes found at a location."""

    tracking_type = TrackingType.VPS

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if "location" not in self.required_features:
            self.required_features.append("location")
        self.on_mesh_found = Emitter("VPSTrackingMode.mesh-found")
        self._monitor = TrackingStatusMonitor("VPSTrackingMode")

    @property
    def on_way_spot_found(self) -> Emitter:
        return self.on_target_found

    @property
    def on_way_spot_updated(self) -> Emitter:
        return self.on_target_updated

    @property
    def on_way_spot_lost(self) -> Emitter:
        return self.on_target_lost

    @property
    def on_tracking_status(self) -> Emitter:
        return self._monitor.on_tracking_status

    @property
    def tracking_status(self) -> TrackingStatus:
        return self._monitor.status

    def _receive_mesh_found(self, detail: Dict[str, Any]) -> None:
        self.on_mesh_found.notify(detail)

    def _receive_tracking_status(self, event: TrackingStatusEvent) -> None:
        self._monitor.update(event)

    def _on_session_ended(self) -> None:
        super()._on_session_ended()
        self._monitor.session_ended()
