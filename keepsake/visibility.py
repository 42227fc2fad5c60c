"""Per-item visibility driven by the timeline's current alert index."""

import logging
from collections.abc import Iterable

from keepsake.config import TimelineConfig
from keepsake.items import Item

logger = logging.getLogger(__name__)


def resolve_visibility(items: Iterable[Item], alert_index: int, config: TimelineConfig) -> int:
    """Update visibility for every item and return how many are visible.

    A change in presence is an edge: entering items pop in from a small scale
    toward an overshoot, leaving items shrink out.
    """
    visible = 0
    for item in items:
        want = item.present_at(alert_index)
        if want != item.should_be_visible:
            item.should_be_visible = want
            if want:
                item.visibility_scale = config.enter_scale
                item.target_visibility_scale = config.overshoot_scale
            else:
                item.target_visibility_scale = config.exit_scale
        item.is_visible = item.should_be_visible
        if item.is_visible:
            visible += 1
    return visible


def hide_all(items: Iterable[Item]) -> None:
    """Reset before the first pass so present items get an entrance."""
    for item in items:
        item.should_be_visible = False
        item.is_visible = False


def show_all(items: Iterable[Item]) -> None:
    """Everything visible at rest scale, used outside time mode."""
    for item in items:
        item.should_be_visible = True
        item.is_visible = True
        item.visibility_scale = 1.0
        item.target_visibility_scale = 1.0
