"""Exponential smoothing of items toward their layout targets."""

import math
from collections.abc import Iterable

from keepsake.config import AnimationConfig
from keepsake.items import Item, Transform


def lerp(start: float, stop: float, amount: float) -> float:
    return start + (stop - start) * amount


def lerp_transform(current: Transform, target: Transform, amount: float) -> Transform:
    return Transform(
        x=lerp(current.x, target.x, amount),
        y=lerp(current.y, target.y, amount),
        width=lerp(current.width, target.width, amount),
        height=lerp(current.height, target.height, amount),
    )


def step_item(item: Item, config: AnimationConfig) -> None:
    """Advance one item by one tick. Converges asymptotically, never snaps."""
    item.current = lerp_transform(item.current, item.target, config.easing)
    item.visibility_scale = lerp(
        item.visibility_scale, item.target_visibility_scale, config.scale_easing,
    )


def step_items(items: Iterable[Item], config: AnimationConfig) -> None:
    for item in items:
        step_item(item, config)


def distance_to_target(item: Item) -> float:
    """Largest remaining gap on any axis, for callers that poll for 'settled'."""
    c, t = item.current, item.target
    return max(
        abs(t.x - c.x), abs(t.y - c.y), abs(t.width - c.width), abs(t.height - c.height),
    )


def is_settled(items: Iterable[Item], tolerance: float = 0.5) -> bool:
    return all(distance_to_target(item) <= tolerance for item in items)


def ticks_to_settle(gap: float, tolerance: float, easing: float) -> int:
    """Ticks for exponential smoothing to shrink a gap below tolerance."""
    if gap <= tolerance:
        return 0
    return math.ceil(math.log(tolerance / gap) / math.log(1 - easing))
