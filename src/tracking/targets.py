"""
Per-target lifecycle ordering.

Backends do not always report targets cleanly: an "updated" may arrive before
the first "found", a "found" may repeat, a "lost" may arrive for a target that
was never seen. TargetStateTracker normalizes every stream so subscribers only
ever observe, per target id:

    found -> updated* -> lost -> found -> ...
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from models.events import TargetEvent
from models.tracking import TargetStatus
from runtime.emitter import Emitter
from .base import TrackingMode


class TargetStateTracker:
    """
    Tracks which targets are visible and rewrites out-of-order events.

    Rules:
    - FOUND for a visible target becomes UPDATED
    - UPDATED for an unseen target becomes FOUND
    - LOST for an unseen target is dropped
    """

    def __init__(self):
        self._visible: Set[str] = set()

    @property
    def visible(self) -> Set[str]:
        return set(self._visible)

    def is_visible(self, target_id: str) -> bool:
        return target_id in self._visible

    def accept(self, event: TargetEvent) -> Optional[TargetEvent]:
        """Return the event to deliver, or None if it must be dropped."""
        target_id = event.target_id
        if event.status is TargetStatus.LOST:
            if target_id not in self._visible:
                return None
            self._visible.discard(target_id)
            return event

        if target_id in self._visible:
            if event.status is TargetStatus.FOUND:
                return event.with_status(TargetStatus.UPDATED)
            return event

        self._visible.add(target_id)
        if event.status is TargetStatus.UPDATED:
            return event.with_status(TargetStatus.FOUND)
        return event

    def reset(self) -> List[str]:
        """Forget every visible target and return their ids (sorted)."""
        ids = sorted(self._visible)
        self._visible.clear()
        return ids


class TargetTrackingMode(TrackingMode):
    """
    Tracking mode that reports discrete targets.

    Emitters:
        on_target_found(TargetEvent)
        on_target_updated(TargetEvent)
        on_target_lost(TargetEvent)

    When the provider session ends every still-visible target is reported
    lost, so content attached to it can be hidden.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        label = type(self).__name__
        self.on_target_found = Emitter(f"{label}.found")
        self.on_target_updated = Emitter(f"{label}.updated")
        self.on_target_lost = Emitter(f"{label}.lost")
        self._targets = TargetStateTracker()

    @property
    def visible_targets(self) -> Set[str]:
        return self._targets.visible

    def _accepts_target(self, event: TargetEvent) -> bool:
        """Filter hook for subclasses (e.g. image allow-lists)."""
        return True

    def _receive_target(self, event: TargetEvent) -> None:
        if event.tracking_type is not self.tracking_type or not self._accepts_target(event):
            return

        normalized = self._targets.accept(event)
        if normalized is None:
            logging.debug(f"{type(self).__name__}: dropping '{event.status.value}' for unseen target {event.target_id}")
            return

        if normalized.status is TargetStatus.FOUND:
            self.on_target_found.notify(normalized)
        elif normalized.status is TargetStatus.UPDATED:
            self.on_target_updated.notify(normalized)
        else:
            self.on_target_lost.notify(normalized)

    def _on_session_ended(self) -> None:
        for target_id in self._targets.reset():
            self.on_target_lost.notify(
                TargetEvent(
                    tracking_type=self.tracking_type,
                    target_id=target_id,
                    status=TargetStatus.LOST,
                    data={"reason": "session_ended"},
                )
            )
