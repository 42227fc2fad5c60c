"""Layout engine: one pure function per mode.

Each layout maps the item collection and the current viewport to a target
transform per item. Nothing here touches `Item.current`; `apply_targets`
is the only writer of `Item.target`.

Sizing rules:
- size mode scales each item by its size score, fitted to its slot
- all other arranged modes share one uniform scale, capped at a fraction of
  the smaller available dimension
"""

import logging
import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from keepsake.camera import Viewport
from keepsake.config import LayoutConfig
from keepsake.items import Item, Transform
from keepsake.models import Mode

logger = logging.getLogger(__name__)

# (uniform scale, cap as a fraction of min(available width, available height))
SENTIMENT_SIZING = (0.4, 0.15)
PRICE_SIZING = (0.3, 0.12)
OWNER_SIZING = (0.3, 0.12)
TIME_SIZING = (0.4, 0.15)
LOCATION_SIZING = (0.3, 0.12)

SIZE_FACTOR_RANGE = (0.04, 1.0)
SIZE_SLOT_WIDTH_FRACTION = 0.6
SIZE_SLOT_HEIGHT_FRACTION = 0.4

OWNER_RADIUS_PER_ITEM = 12.0
OWNER_RADIUS_RANGE = (90.0, 180.0)


@dataclass(frozen=True)
class OwnerAnchor:
    """Where an owner group sits; labels float here in owner mode."""

    owner: int
    x: float
    y: float
    count: int


@dataclass
class LayoutResult:
    targets: dict[str, Transform] = field(default_factory=dict)
    owner_anchors: list[OwnerAnchor] = field(default_factory=list)


LayoutFn = Callable[[Sequence[Item], Viewport, random.Random, LayoutConfig], LayoutResult]


# --- Geometry helpers ---


def map_range(value: float, in_low: float, in_high: float, out_low: float, out_high: float) -> float:
    return out_low + (value - in_low) / (in_high - in_low) * (out_high - out_low)


def rank_progress(rank: int, count: int) -> float:
    """Rank as a fraction of the collection, 0.0 for first and 1.0 for last."""
    if count <= 1:
        return 0.5
    return rank / (count - 1)


def fit_within(
    width: float, height: float, max_width: float, max_height: float, aspect_ratio: float
) -> tuple[float, float]:
    """Clamp both dimensions, then restore the aspect ratio by shrinking.

    Two passes, so both bounds hold at the end.
    """
    for _ in range(2):
        width = min(width, max_width)
        height = min(height, max_height)
        if width / aspect_ratio > height:
            width = height * aspect_ratio
        else:
            height = width / aspect_ratio
    return width, height


def uniform_size(item: Item, viewport: Viewport, sizing: tuple[float, float]) -> tuple[float, float]:
    scale, cap = sizing
    max_size = min(viewport.available_width, viewport.available_height) * cap
    natural = item.original
    return fit_within(
        natural.width * scale, natural.height * scale, max_size, max_size, natural.aspect_ratio,
    )


def clamp_to_viewport(
    center_x: float, center_y: float, width: float, height: float, viewport: Viewport
) -> Transform:
    """Top-left transform centred on (center_x, center_y), kept inside the viewport."""
    min_x = viewport.inner_left
    max_x = viewport.left + viewport.width - viewport.margin - width
    min_y = viewport.inner_top
    max_y = viewport.top + viewport.height - viewport.margin - viewport.ui_reserved - height
    x = max(min_x, min(center_x - width / 2, max_x))
    y = max(min_y, min(center_y - height / 2, max_y))
    return Transform(x, y, width, height)


def place_at(
    item: Item, fx: float, fy: float, viewport: Viewport, sizing: tuple[float, float]
) -> Transform:
    """Place item centred at fractional position (fx, fy) of the available area."""
    width, height = uniform_size(item, viewport, sizing)
    center_x = viewport.inner_left + fx * viewport.available_width
    center_y = viewport.inner_top + fy * viewport.available_height
    return clamp_to_viewport(center_x, center_y, width, height, viewport)


def name_hash(name: str) -> tuple[float, float]:
    """Stable pseudo-random (fx, fy) in [0, 1) derived from an item name."""
    seed = sum(ord(c) * (j + 1) for j, c in enumerate(name))
    rx = abs(math.sin(seed * 12.9898) * 43758.5453)
    ry = abs(math.sin(seed * 78.233) * 43758.5453)
    return rx - math.floor(rx), ry - math.floor(ry)


# --- Mode layouts ---


def arrange_explore(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    return LayoutResult(targets={item.name: item.original for item in items})


def arrange_by_size(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    """Biggest on the left, one equal-width slot per item."""
    result = LayoutResult()
    if not items:
        return result

    ordered = sorted(items, key=lambda item: item.size, reverse=True)
    slot_width = viewport.available_width / len(ordered)
    max_width = slot_width * SIZE_SLOT_WIDTH_FRACTION
    max_height = viewport.available_height * SIZE_SLOT_HEIGHT_FRACTION
    center_y = viewport.inner_top + viewport.available_height / 2

    for i, item in enumerate(ordered):
        factor = map_range(item.size, 1, 100, *SIZE_FACTOR_RANGE)
        natural = item.original
        width, height = fit_within(
            natural.width * factor, natural.height * factor,
            max_width, max_height, natural.aspect_ratio,
        )
        center_x = viewport.inner_left + i * slot_width + slot_width / 2
        result.targets[item.name] = clamp_to_viewport(center_x, center_y, width, height, viewport)

    return result


def arrange_by_sentiment(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    """Most sentimental at the top; horizontal position is random."""
    result = LayoutResult()
    ordered = sorted(items, key=lambda item: item.sentimentality, reverse=True)
    for i, item in enumerate(ordered):
        fy = rank_progress(i, len(ordered))
        fx = rng.random()
        result.targets[item.name] = place_at(item, fx, fy, viewport, SENTIMENT_SIZING)
    return result


def arrange_by_price(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    """Expensive top-right, cheap bottom-left."""
    result = LayoutResult()
    ordered = sorted(items, key=lambda item: item.price, reverse=True)
    for i, item in enumerate(ordered):
        progress = rank_progress(i, len(ordered))
        result.targets[item.name] = place_at(item, 1 - progress, progress, viewport, PRICE_SIZING)
    return result


def pick_group_centers(
    count: int, viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> list[tuple[float, float]]:
    """Random centres at least owner_min_distance apart.

    Best-effort: after owner_max_attempts tries the last candidate is kept
    even if it is too close.
    """
    min_distance = config.owner_min_distance / viewport.zoom
    centers: list[tuple[float, float]] = []
    for _ in range(count):
        attempts = 0
        while True:
            cx = viewport.inner_left + rng.random() * viewport.available_width
            cy = viewport.inner_top + rng.random() * viewport.available_height
            attempts += 1
            too_close = any(math.dist((cx, cy), c) < min_distance for c in centers)
            if not too_close or attempts >= config.owner_max_attempts:
                break
        if too_close:
            logger.debug("Owner centre placed within min distance after %d attempts", attempts)
        centers.append((cx, cy))
    return centers


def arrange_by_owner(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    """One circle of items per owner, at random well-separated centres."""
    result = LayoutResult()

    groups: dict[int, list[Item]] = {}
    for item in items:
        groups.setdefault(item.owner, []).append(item)
    owners = sorted(groups)

    centers = pick_group_centers(len(owners), viewport, rng, config)
    low, high = OWNER_RADIUS_RANGE

    for owner, (cx, cy) in zip(owners, centers):
        members = groups[owner]
        result.owner_anchors.append(OwnerAnchor(owner=owner, x=cx, y=cy, count=len(members)))

        if len(members) == 1:
            item = members[0]
            width, height = uniform_size(item, viewport, OWNER_SIZING)
            result.targets[item.name] = clamp_to_viewport(cx, cy, width, height, viewport)
            continue

        radius = min(high, max(low, len(members) * OWNER_RADIUS_PER_ITEM)) / viewport.zoom
        for i, item in enumerate(members):
            angle = i / len(members) * math.tau
            width, height = uniform_size(item, viewport, OWNER_SIZING)
            result.targets[item.name] = clamp_to_viewport(
                cx + math.cos(angle) * radius,
                cy + math.sin(angle) * radius,
                width, height, viewport,
            )

    return result


def arrange_by_time(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    """Scatter at name-derived positions so items hold still while the timeline plays."""
    result = LayoutResult()
    for item in items:
        fx, fy = name_hash(item.name)
        result.targets[item.name] = place_at(item, fx, fy, viewport, TIME_SIZING)
    return result


def arrange_by_location(
    items: Sequence[Item], viewport: Viewport, rng: random.Random, config: LayoutConfig
) -> LayoutResult:
    """Map location coordinates linearly onto the available area."""
    result = LayoutResult()
    if not items:
        return result

    xs = [item.location[0] for item in items]
    ys = [item.location[1] for item in items]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    for item in items:
        lx, ly = item.location
        fx = (lx - min_x) / (max_x - min_x) if max_x != min_x else 0.5
        fy = (ly - min_y) / (max_y - min_y) if max_y != min_y else 0.5
        result.targets[item.name] = place_at(item, fx, fy, viewport, LOCATION_SIZING)

    return result


LAYOUTS: dict[Mode, LayoutFn] = {
    Mode.EXPLORE: arrange_explore,
    Mode.SIZE: arrange_by_size,
    Mode.SENTIMENT: arrange_by_sentiment,
    Mode.PRICE: arrange_by_price,
    Mode.OWNER: arrange_by_owner,
    Mode.TIME: arrange_by_time,
    Mode.LOCATION: arrange_by_location,
}


def compute_targets(
    mode: Mode,
    items: Sequence[Item],
    viewport: Viewport,
    rng: random.Random,
    config: LayoutConfig,
) -> LayoutResult:
    result = LAYOUTS[mode](items, viewport, rng, config)
    logger.debug("Computed %s layout for %d items", mode.value, len(result.targets))
    return result


def apply_targets(items: Sequence[Item], targets: dict[str, Transform]) -> None:
    for item in items:
        target = targets.get(item.name)
        if target is not None:
            item.target = target
