"""Application state, the per-frame tick, and the action surface.

All mutable state lives in one ExplorerState. Input collaborators call the
action functions; the display loop calls tick() once per frame and draws the
RenderFrame it returns.
"""

import logging
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from keepsake.animator import step_items
from keepsake.camera import Camera
from keepsake.catalog import load_catalog
from keepsake.config import Config
from keepsake.items import Item
from keepsake.models import (
    Mode,
    OverlayView,
    RenderFrame,
    SpriteView,
    TimelineWidget,
)
from keepsake.modes import ModeController
from keepsake.timeline import Timeline, load_alert_timestamps
from keepsake.visibility import resolve_visibility

logger = logging.getLogger(__name__)


@dataclass
class ExplorerState:
    config: Config
    items: list[Item]
    camera: Camera
    timeline: Timeline
    modes: ModeController
    pointer: tuple[float, float] | None = None
    visible_count: int = 0

    @property
    def mode(self) -> Mode:
        return self.modes.mode


def create_state(
    items: list[Item],
    timestamps: Sequence[datetime],
    config: Config,
    rng: random.Random | None = None,
) -> ExplorerState:
    if rng is None:
        rng = random.Random(config.seed)
    state = ExplorerState(
        config=config,
        items=items,
        camera=Camera(config.canvas, config.camera),
        timeline=Timeline(timestamps, config.timeline),
        modes=ModeController(config, rng),
        visible_count=len(items),
    )
    logger.info(
        "Explorer ready: %d items, %d alerts", len(items), state.timeline.total_alerts,
    )
    return state


def load_state(config: Config) -> ExplorerState:
    """Load catalog and timestamps from the configured locations."""
    items = load_catalog(config)
    timestamps = load_alert_timestamps(config.resolved_timestamps_path)
    return create_state(items, timestamps, config)


def _now(now: float | None) -> float:
    return time.monotonic() if now is None else now


# --- Action surface ---


def switch_mode(state: ExplorerState, mode: Mode | str, now: float | None = None) -> bool:
    """Switch arrangement. Unknown mode keys raise ValueError."""
    return state.modes.switch(
        Mode(mode), state.items, state.camera, state.timeline, _now(now),
    )


def toggle_timeline_playback(state: ExplorerState, now: float | None = None) -> bool:
    state.timeline.toggle(_now(now))
    return state.timeline.is_playing


def scrub_timeline(state: ExplorerState, progress: float, now: float | None = None) -> float:
    state.timeline.scrub(progress, _now(now))
    return state.timeline.playback_progress


def pan_camera(state: ExplorerState, dx: float, dy: float) -> bool:
    return state.camera.pan(dx, dy)


def reset_camera(state: ExplorerState) -> None:
    state.camera.reset()


def set_pointer(state: ExplorerState, x: float, y: float) -> None:
    """Pointer position used for edge navigation on subsequent ticks."""
    state.pointer = (x, y)


def resize_viewport(state: ExplorerState, width: float, height: float) -> None:
    """Resize the screen and re-run the active layout for the new viewport."""
    state.camera.resize(width, height)
    if state.mode is not Mode.EXPLORE:
        state.modes.relayout(state.items, state.camera)


# --- Frame ---


def tick(state: ExplorerState, now: float | None = None) -> RenderFrame:
    """Advance one frame and return what to draw."""
    now = _now(now)

    if state.mode is Mode.EXPLORE and state.pointer is not None:
        state.camera.edge_navigate(*state.pointer)

    step_items(state.items, state.config.animation)

    if state.mode is Mode.TIME and not state.timeline.is_empty:
        state.timeline.tick(now)
        state.visible_count = resolve_visibility(
            state.items, state.timeline.current_alert_index, state.config.timeline,
        )
    else:
        state.visible_count = sum(1 for item in state.items if item.is_visible)

    state.modes.step_overlays()
    return build_frame(state, now)


def _sprite(state: ExplorerState, item: Item, in_time_mode: bool) -> SpriteView:
    camera = state.camera
    current = item.current
    width, height = current.width, current.height
    x, y = current.x, current.y
    scale = 1.0

    if in_time_mode:
        # Scale about the centre for the entrance/exit pop
        scale = item.visibility_scale
        cx, cy = current.center
        width, height = width * scale, height * scale
        x, y = cx - width / 2, cy - height / 2

    screen_x, screen_y = camera.to_screen(x, y)
    return SpriteView(
        name=item.name,
        asset=item.asset,
        screen_x=screen_x,
        screen_y=screen_y,
        screen_width=width * camera.zoom,
        screen_height=height * camera.zoom,
        visible=item.is_visible if in_time_mode else item.placed,
        scale=scale,
    )


def build_frame(state: ExplorerState, now: float) -> RenderFrame:
    camera = state.camera
    in_time_mode = state.mode is Mode.TIME
    sprites = [_sprite(state, item, in_time_mode) for item in state.items]

    overlays: list[OverlayView] = []
    axis = state.modes.axis_labels
    if axis.drawable:
        for label in axis.labels:
            if label.drawable:
                overlays.append(OverlayView(
                    text=label.text,
                    screen_x=label.current_x * camera.screen_width,
                    screen_y=label.current_y * camera.screen_height,
                    opacity=label.opacity * axis.opacity,
                ))
    for label in state.modes.owner_labels.labels:
        if label.drawable:
            sx, sy = camera.to_screen(label.current_x, label.current_y)
            overlays.append(OverlayView(
                text=label.text, screen_x=sx, screen_y=sy, opacity=label.opacity, kind="owner",
            ))

    widget = None
    timeline = state.timeline
    if in_time_mode and not timeline.is_empty:
        widget = TimelineWidget(
            progress=timeline.playback_progress,
            alert_marker_positions=timeline.alert_marker_positions(),
            is_playing=timeline.is_playing,
            current_time_label=timeline.current_time_label(),
            current_alert_index=timeline.current_alert_index,
            total_alerts=timeline.total_alerts,
            visible_count=state.visible_count,
            total=len(state.items),
        )

    return RenderFrame(
        mode=state.mode,
        transitioning=state.modes.is_transitioning(now),
        camera_locked=camera.locked,
        sprites=sprites,
        overlays=overlays,
        timeline=widget,
    )
