"""Floating text overlays: per-mode axis labels and owner-group labels.

Axis labels live in normalized screen coordinates (0..1). Owner labels live
in world coordinates at their group's centre. Both fade through
entering -> visible -> fading -> gone.
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from keepsake.animator import lerp
from keepsake.catalog import owner_profile
from keepsake.layout import OwnerAnchor
from keepsake.models import LabelState, Mode

logger = logging.getLogger(__name__)

VISIBLE_THRESHOLD = 0.99
GONE_THRESHOLD = 0.001
DRAW_THRESHOLD = 0.01

# Off-screen start positions by entry side
_OFFSCREEN_LOW = -0.2
_OFFSCREEN_HIGH = 1.2


@dataclass
class LabelOverlay:
    lines: list[str]
    x: float
    y: float
    current_x: float
    current_y: float
    opacity: float = 0.0
    target_opacity: float = 1.0
    state: LabelState = LabelState.ENTERING

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def drawable(self) -> bool:
        return self.opacity > DRAW_THRESHOLD

    def fade_out(self) -> None:
        if self.state is not LabelState.GONE:
            self.target_opacity = 0.0
            self.state = LabelState.FADING

    def step(self, easing: float) -> None:
        self.current_x = lerp(self.current_x, self.x, easing)
        self.current_y = lerp(self.current_y, self.y, easing)
        self.opacity = lerp(self.opacity, self.target_opacity, easing)

        if self.state is LabelState.ENTERING and self.opacity >= VISIBLE_THRESHOLD:
            self.state = LabelState.VISIBLE
        elif self.state is LabelState.FADING and self.opacity < GONE_THRESHOLD:
            self.state = LabelState.GONE


@dataclass(frozen=True)
class AxisLabelSpec:
    text: str
    x: float
    y: float
    from_side: str  # 'left', 'right', 'top', 'bottom' or 'center'


AXIS_LABELS: dict[Mode, list[AxisLabelSpec]] = {
    Mode.SIZE: [
        AxisLabelSpec("BIG", 0.1, 0.2, "left"),
        AxisLabelSpec("SMALL", 0.9, 0.2, "right"),
    ],
    Mode.SENTIMENT: [
        AxisLabelSpec("SENTIMENTAL", 0.5, 0.15, "top"),
        AxisLabelSpec("FUNCTIONAL", 0.5, 0.85, "bottom"),
    ],
    Mode.PRICE: [
        AxisLabelSpec("EXPENSIVE", 0.85, 0.15, "top"),
        AxisLabelSpec("CHEAP", 0.15, 0.85, "bottom"),
    ],
    Mode.LOCATION: [
        AxisLabelSpec("LOCATION", 0.5, 0.5, "center"),
    ],
}


def axis_label(entry: AxisLabelSpec) -> LabelOverlay:
    """A label that slides in from its side of the screen."""
    start_x, start_y = entry.x, entry.y
    if entry.from_side == "left":
        start_x = _OFFSCREEN_LOW
    elif entry.from_side == "right":
        start_x = _OFFSCREEN_HIGH
    elif entry.from_side == "top":
        start_y = _OFFSCREEN_LOW
    elif entry.from_side == "bottom":
        start_y = _OFFSCREEN_HIGH
    return LabelOverlay(lines=[entry.text], x=entry.x, y=entry.y, current_x=start_x, current_y=start_y)


@dataclass
class AxisLabels:
    """The active mode's axis captions, sharing one group opacity."""

    labels: list[LabelOverlay] = field(default_factory=list)
    opacity: float = 0.0
    target_opacity: float = 0.0

    def set_mode(self, mode: Mode) -> None:
        specs = AXIS_LABELS.get(mode, [])
        self.labels = [axis_label(entry) for entry in specs]
        self.target_opacity = 1.0 if specs else 0.0

    def step(self, label_easing: float, group_easing: float) -> None:
        for label in self.labels:
            label.step(label_easing)
        self.opacity = lerp(self.opacity, self.target_opacity, group_easing)

    @property
    def drawable(self) -> bool:
        return self.opacity > DRAW_THRESHOLD


def owner_labels(
    anchors: Sequence[OwnerAnchor], rng: random.Random, jitter: float
) -> list[LabelOverlay]:
    """One name/age/gender label per owner group, drifting in from a random offset."""
    labels = []
    for anchor in anchors:
        profile = owner_profile(anchor.owner)
        labels.append(LabelOverlay(
            lines=[profile.name, f"{profile.age}, {profile.gender}"],
            x=anchor.x,
            y=anchor.y,
            current_x=anchor.x + rng.uniform(-jitter, jitter),
            current_y=anchor.y + rng.uniform(-jitter, jitter),
        ))
    return labels


@dataclass
class OwnerLabels:
    labels: list[LabelOverlay] = field(default_factory=list)

    def replace(self, new_labels: list[LabelOverlay]) -> None:
        """Cross-fade: current labels fade out while the new ones enter."""
        self.fade_out()
        self.labels.extend(new_labels)

    def fade_out(self) -> None:
        for label in self.labels:
            label.fade_out()

    def step(self, easing: float) -> None:
        for label in self.labels:
            label.step(easing)
        before = len(self.labels)
        self.labels = [label for label in self.labels if label.state is not LabelState.GONE]
        if len(self.labels) != before:
            logger.debug("Dropped %d faded owner labels", before - len(self.labels))
