"""Pydantic models for the keepsake explorer."""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, Field


class Mode(str, Enum):
    EXPLORE = "explore"
    SIZE = "size"
    SENTIMENT = "sentiment"
    PRICE = "price"
    OWNER = "owner"
    TIME = "time"
    LOCATION = "location"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class LabelState(str, Enum):
    ENTERING = "entering"
    VISIBLE = "visible"
    FADING = "fading"
    GONE = "gone"


# --- Catalog models (what comes in at startup) ---


class OwnerProfile(BaseModel):
    name: str
    age: int
    gender: str
    profession: str


class CatalogRecord(BaseModel):
    """Hand-authored attributes for one memory object."""
    size: float = 50
    sentimentality: float = 50
    price: float = 50
    owner: int = Field(default=0, ge=0, le=7)
    entertainment: float = 50
    location_x: float = 250
    location_y: float = 150
    enter_alert_index: int = Field(default=0, ge=0)
    duration_in_alerts: int = Field(default=24, ge=1)

    @classmethod
    def from_row(cls, row: Sequence[float]) -> "CatalogRecord":
        """Build a record from the positional 9-tuple used by catalog files."""
        (
            size, sentimentality, price, owner, entertainment,
            location_x, location_y, enter_alert_index, duration_in_alerts,
        ) = row
        return cls(
            size=size,
            sentimentality=sentimentality,
            price=price,
            owner=owner,
            entertainment=entertainment,
            location_x=location_x,
            location_y=location_y,
            enter_alert_index=enter_alert_index,
            duration_in_alerts=duration_in_alerts,
        )


# --- Render output models (what goes to the drawing collaborator) ---


class SpriteView(BaseModel):
    name: str
    asset: str
    screen_x: float
    screen_y: float
    screen_width: float
    screen_height: float
    visible: bool = True
    scale: float = 1.0


class TimelineWidget(BaseModel):
    progress: float
    alert_marker_positions: list[float]
    is_playing: bool
    current_time_label: str
    current_alert_index: int
    total_alerts: int
    visible_count: int
    total: int


class OverlayView(BaseModel):
    text: str
    screen_x: float
    screen_y: float
    opacity: float
    kind: str = "axis"  # 'axis' or 'owner'


class RenderFrame(BaseModel):
    """Everything the drawing collaborator needs for one tick."""
    mode: Mode
    transitioning: bool
    camera_locked: bool
    sprites: list[SpriteView]
    overlays: list[OverlayView]
    timeline: TimelineWidget | None = None
