"""
Event payloads emitted by tracking modes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .pose import Pose
from .tracking import TargetStatus, TrackingStatus, TrackingType


@dataclass(frozen=True)
class TargetEvent:
    """
    A lifecycle event for one tracked target (image, face, wayspot).

    Attributes:
        tracking_type: Capability that produced the event.
        target_id: Stable identifier of the target within the tracking mode.
        status: FOUND, UPDATED or LOST.
        pose: Target pose; None when a LOST event carries no geometry.
        data: Capability-specific extras (face vertices, wayspot name, ...).
    """
    tracking_type: TrackingType
    target_id: str
    status: TargetStatus
    pose: Optional[Pose] = None
    data: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def with_status(self, status: TargetStatus) -> "TargetEvent":
        """Copy of this event with a different status."""
        return TargetEvent(
            tracking_type=self.tracking_type,
            target_id=self.target_id,
            status=status,
            pose=self.pose,
            data=dict(self.data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tracking_type": self.tracking_type.value,
            "target_id": self.target_id,
            "status": self.status.value,
            "pose": self.pose.to_dict() if self.pose else None,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class TrackingStatusEvent:
    """World tracking quality change (e.g. LIMITED while scale is unknown)."""
    status: TrackingStatus
    reason: Optional[str] = None

    @property
    def is_normal(self) -> bool:
        return self.status is TrackingStatus.NORMAL
