"""Headless drivers: run the tick loop on a simulated clock."""

import logging

from keepsake.animator import distance_to_target, is_settled, ticks_to_settle
from keepsake.explorer import ExplorerState, switch_mode, tick, toggle_timeline_playback
from keepsake.models import Mode, RenderFrame

logger = logging.getLogger(__name__)


class PlaybackReport:
    """Summary of a simulated timeline run."""

    def __init__(self) -> None:
        self.ticks: int = 0
        self.loops: int = 0
        self.alerts_seen: list[int] = []
        self.visible_by_alert: dict[int, int] = {}

    @property
    def peak_alert(self) -> int | None:
        if not self.visible_by_alert:
            return None
        return max(self.visible_by_alert, key=self.visible_by_alert.get)

    def __repr__(self) -> str:
        return (
            f"PlaybackReport({self.ticks} ticks, {self.loops} loops, "
            f"{len(self.visible_by_alert)} alerts visited, peak at alert {self.peak_alert})"
        )


def settle(
    state: ExplorerState,
    start: float = 0.0,
    fps: float = 60.0,
    max_ticks: int = 600,
    tolerance: float = 0.5,
) -> tuple[RenderFrame, float]:
    """Tick until every item is within tolerance of its target.

    The tick budget is the smoothing bound for the largest remaining gap,
    capped at max_ticks. Returns the last frame and the simulated clock.
    """
    now = start
    frame = tick(state, now)
    gap = max((distance_to_target(item) for item in state.items), default=0.0)
    budget = min(max_ticks, ticks_to_settle(gap, tolerance, state.config.animation.easing) + 1)
    for _ in range(budget):
        if is_settled(state.items, tolerance):
            break
        now += 1 / fps
        frame = tick(state, now)
    return frame, now


def simulate_playback(
    state: ExplorerState,
    seconds: float,
    fps: float = 60.0,
    start: float = 0.0,
) -> PlaybackReport:
    """Enter time mode, press play, and record visible counts per alert."""
    report = PlaybackReport()
    if state.timeline.is_empty:
        logger.warning("No alert timestamps loaded, nothing to play")
        return report

    now = start
    if state.mode is not Mode.TIME:
        switch_mode(state, Mode.TIME, now)
    if not state.timeline.is_playing:
        toggle_timeline_playback(state, now)

    previous_progress = state.timeline.playback_progress
    for _ in range(int(seconds * fps)):
        now += 1 / fps
        frame = tick(state, now)
        report.ticks += 1

        progress = state.timeline.playback_progress
        if progress < previous_progress:
            report.loops += 1
        previous_progress = progress

        if frame.timeline is not None:
            alert = frame.timeline.current_alert_index
            if alert not in report.visible_by_alert:
                report.alerts_seen.append(alert)
            report.visible_by_alert[alert] = frame.timeline.visible_count

    logger.info("Playback simulation complete: %s", report)
    return report
