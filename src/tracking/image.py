"""
Image tracking mode.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Set

from models.events import TargetEvent
from models.tracking import TrackingType
from runtime.emitter import Emitter
from .targets import TargetTrackingMode


class ImageTrackingMode(TargetTrackingMode):
    """
    Tracks known image targets, identified by their name on the backend.

    If `image_targets` is set, events for other images are ignored.
    """

    tracking_type = TrackingType.IMAGE

    def __init__(self, *args, image_targets: Optional[Iterable[str]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._image_targets: Optional[Set[str]] = set(image_targets) if image_targets else None

    @property
    def image_targets(self) -> Optional[Set[str]]:
        return set(self._image_targets) if self._image_targets is not None else None

    @property
    def on_image_found(self) -> Emitter:
        return self.on_target_found

    @property
    def on_image_update(self) -> Emitter:
        return self.on_target_updated

    @property
    def on_image_lost(self) -> Emitter:
        return self.on_target_lost

    def set_targets(self, names: Optional[Iterable[str]]) -> None:
        """Restrict the mode to the given image names (None = all images)."""
        self._image_targets = set(names) if names else None

    async def _on_init(self, **options: Any) -> None:
        if "image_targets" in options:
            self.set_targets(options["image_targets"])

    def _accepts_target(self, event: TargetEvent) -> bool:
        return self._image_targets is None or event.target_id in self._image_targets
