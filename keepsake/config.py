"""Configuration loading for the keepsake explorer."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class CanvasConfig(BaseModel):
    width: float = 3000.0
    height: float = 3000.0
    zoom: float = 2.0
    grid_spacing: float = 190.0  # distance between grid cell centres
    max_asset_size: float = 200.0  # longest side of an item in explore mode


class CameraConfig(BaseModel):
    screen_width: float = 1280.0
    screen_height: float = 800.0
    edge_threshold: float = 400.0
    max_speed: float = 10.0


class LayoutConfig(BaseModel):
    margin: float = 50.0  # screen px, divided by zoom in world space
    ui_reserved: float = 100.0
    timeline_reserved: float = 80.0
    owner_min_distance: float = 300.0
    owner_max_attempts: int = 100
    owner_label_jitter: float = 100.0


class AnimationConfig(BaseModel):
    easing: float = 0.05
    scale_easing: float = 0.1
    label_easing: float = 0.08
    axis_fade: float = 0.1


class TimelineConfig(BaseModel):
    playback_duration_seconds: float = 20.0
    enter_scale: float = 0.1
    overshoot_scale: float = 1.2
    exit_scale: float = 0.1


class ModeConfig(BaseModel):
    cooldown_seconds: float = 2.0


class Config(BaseModel):
    assets_dir: str = "images"
    timestamps_path: str = "data/alert_timestamps.json"
    catalog_path: str | None = None
    seed: int | None = None
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    modes: ModeConfig = Field(default_factory=ModeConfig)

    @property
    def resolved_assets_dir(self) -> Path:
        return _resolve(self.assets_dir)

    @property
    def resolved_timestamps_path(self) -> Path:
        return _resolve(self.timestamps_path)

    @property
    def resolved_catalog_path(self) -> Path | None:
        if self.catalog_path is None:
            return None
        return _resolve(self.catalog_path)


def _resolve(path: str) -> Path:
    """Resolve a configured path relative to the project root."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return _project_root() / p


def _project_root() -> Path:
    """Return the keepsake project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
