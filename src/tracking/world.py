"""
World (SLAM) tracking mode.
"""

from __future__ import annotations

from typing import Optional

from models.events import TrackingStatusEvent
from models.tracking import TrackingStatus, TrackingType
from runtime.emitter import Emitter
from .base import TrackingMode


class TrackingStatusMonitor:
    """Holds the latest tracking status and notifies on change only."""

    def __init__(self, name: str):
        self.on_tracking_status = Emitter(f"{name}.tracking-status")
        self._status: Optional[TrackingStatusEvent] = None

    @property
    def status(self) -> TrackingStatus:
        if self._status is None:
            return TrackingStatus.NOT_AVAILABLE
        return self._status.status

    def update(self, event: TrackingStatusEvent) -> None:
        if self._status == event:
            return
        self._status = event
        self.on_tracking_status.notify(event)

    def session_ended(self) -> None:
        self.update(TrackingStatusEvent(TrackingStatus.NOT_AVAILABLE, reason="session_ended"))


class WorldTrackingMode(TrackingMode):
    """
    Places the host camera in a tracked world space.

    World tracking has no discrete targets; it reports tracking quality
    instead. `on_tracking_status` fires when the status changes, e.g. LIMITED
    while the backend is still estimating absolute scale.
    """

    tracking_type = TrackingType.SLAM

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._monitor = TrackingStatusMonitor(type(self).__name__)

    @property
    def on_tracking_status(self) -> Emitter:
        return self._monitor.on_tracking_status

    @property
    def tracking_status(self) -> TrackingStatus:
        return self._monitor.status

    def _receive_tracking_status(self, event: TrackingStatusEvent) -> None:
        self._monitor.update(event)

    def _on_session_ended(self) -> None:
        self._monitor.session_ended()
