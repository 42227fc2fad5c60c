"""Alert timeline playback: progress, current time, and current alert index."""

import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from keepsake.config import TimelineConfig

logger = logging.getLogger(__name__)


def load_alert_timestamps(path: Path) -> list[datetime]:
    """Read a JSON array of ISO-8601 timestamps. A missing file is an empty timeline."""
    if not path.exists():
        logger.warning("No alert timestamps at %s, timeline disabled", path)
        return []

    raw = json.loads(path.read_text())
    timestamps = sorted(datetime.fromisoformat(ts) for ts in raw)
    logger.info("Loaded %d alert timestamps from %s", len(timestamps), path)
    return timestamps


def format_time(moment: datetime | None) -> str:
    """dd/mm HH:MM, as shown next to the scrubber."""
    if moment is None:
        return "00:00"
    return moment.strftime("%d/%m %H:%M")


class Timeline:
    """Looping playback over the alert timestamps.

    playback_progress is authoritative; current_time and current_alert_index
    are derived from it. Every operation is a no-op on an empty timeline.
    """

    def __init__(self, timestamps: Sequence[datetime], config: TimelineConfig) -> None:
        self.timestamps: tuple[datetime, ...] = tuple(timestamps)
        self.playback_duration_seconds = config.playback_duration_seconds
        self.playback_progress = 0.0
        self.is_playing = False
        self.last_update = 0.0
        self.current_alert_index = 0
        self.current_time: datetime | None = self.timestamps[0] if self.timestamps else None

    @property
    def is_empty(self) -> bool:
        return not self.timestamps

    @property
    def total_alerts(self) -> int:
        return len(self.timestamps)

    @property
    def start_time(self) -> datetime | None:
        return self.timestamps[0] if self.timestamps else None

    @property
    def end_time(self) -> datetime | None:
        return self.timestamps[-1] if self.timestamps else None

    def tick(self, now: float) -> None:
        """Advance playback by the real time elapsed since the last reference point."""
        if self.is_empty:
            return

        if self.is_playing:
            elapsed = now - self.last_update
            self.playback_progress += elapsed / self.playback_duration_seconds
            self.last_update = now
            if self.playback_progress >= 1.0:
                self.playback_progress = 0.0

        self._recompute()

    def scrub(self, progress: float, now: float) -> None:
        """Jump to an absolute progress; out-of-range input is clamped."""
        if self.is_empty:
            return
        self.playback_progress = max(0.0, min(1.0, progress))
        self.last_update = now
        self._recompute()

    def toggle(self, now: float) -> None:
        if self.is_empty:
            return
        self.is_playing = not self.is_playing
        self.last_update = now
        logger.debug("Timeline %s at %.3f", "playing" if self.is_playing else "paused", self.playback_progress)

    def resume_reference(self, now: float) -> None:
        """Restart elapsed-time measurement so time spent away is not played back."""
        self.last_update = now

    def _recompute(self) -> None:
        start, end = self.timestamps[0], self.timestamps[-1]
        self.current_time = start + (end - start) * self.playback_progress

        # Greatest index whose timestamp has passed
        index = 0
        for i, ts in enumerate(self.timestamps):
            if self.current_time >= ts:
                index = i
            else:
                break
        self.current_alert_index = index

    def alert_marker_positions(self) -> list[float]:
        """Each alert's fractional position along the scrubber."""
        if self.is_empty:
            return []
        start, end = self.timestamps[0], self.timestamps[-1]
        span = (end - start).total_seconds()
        if span == 0:
            return [0.0 for _ in self.timestamps]
        return [(ts - start).total_seconds() / span for ts in self.timestamps]

    def current_time_label(self) -> str:
        return format_time(self.current_time)
