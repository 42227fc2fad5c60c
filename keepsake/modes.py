"""Mode switching: layout dispatch, transition lock, camera lock and overlays."""

import logging
import random
from collections.abc import Sequence

from keepsake.camera import Camera
from keepsake.config import Config
from keepsake.items import Item
from keepsake.layout import LayoutResult, apply_targets, compute_targets
from keepsake.models import Mode
from keepsake.overlays import AxisLabels, OwnerLabels, owner_labels
from keepsake.timeline import Timeline
from keepsake.visibility import hide_all, show_all

logger = logging.getLogger(__name__)


class ModeController:
    """Owns the active mode and the overlays that belong to it.

    A switch locks further switches for config.modes.cooldown_seconds. The lock
    is a debounce only; it does not wait for items to settle.
    """

    def __init__(self, config: Config, rng: random.Random) -> None:
        self.config = config
        self.rng = rng
        self.mode = Mode.EXPLORE
        self.locked_until = float("-inf")
        self.axis_labels = AxisLabels()
        self.owner_labels = OwnerLabels()
        self.last_layout: LayoutResult | None = None
        self.axis_labels.set_mode(self.mode)

    def is_transitioning(self, now: float) -> bool:
        return now < self.locked_until

    def switch(
        self,
        target: Mode,
        items: Sequence[Item],
        camera: Camera,
        timeline: Timeline,
        now: float,
    ) -> bool:
        """Switch to target mode. Returns False if a transition is still locked."""
        if self.is_transitioning(now):
            logger.debug("Ignoring switch to %s during transition", target.value)
            return False

        previous = self.mode
        self.mode = target
        self.locked_until = now + self.config.modes.cooldown_seconds
        camera.locked = target is not Mode.EXPLORE

        if target is not Mode.OWNER:
            self.owner_labels.fade_out()
        self.axis_labels.set_mode(target)

        self.relayout(items, camera)

        if target is Mode.TIME and not timeline.is_empty:
            # Playback only advances in time mode
            timeline.resume_reference(now)
            hide_all(items)
        elif previous is Mode.TIME or timeline.is_empty:
            show_all(items)

        logger.info("Mode %s -> %s", previous.value, target.value)
        return True

    def relayout(self, items: Sequence[Item], camera: Camera) -> LayoutResult:
        """Recompute and apply targets for the active mode at the current viewport."""
        layout_config = self.config.layout
        reserved = layout_config.timeline_reserved if self.mode is Mode.TIME else None
        viewport = camera.viewport(layout_config, ui_reserved=reserved)

        result = compute_targets(self.mode, items, viewport, self.rng, layout_config)
        apply_targets(items, result.targets)
        self.last_layout = result

        if self.mode is Mode.OWNER:
            jitter = layout_config.owner_label_jitter / camera.zoom
            self.owner_labels.replace(owner_labels(result.owner_anchors, self.rng, jitter))
        return result

    def step_overlays(self) -> None:
        anim = self.config.animation
        self.axis_labels.step(anim.label_easing, anim.axis_fade)
        self.owner_labels.step(anim.label_easing)
