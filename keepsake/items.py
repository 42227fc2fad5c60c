"""Memory objects and their animation state."""

from dataclasses import dataclass, field

from keepsake.models import CatalogRecord


@dataclass(frozen=True)
class Transform:
    """Top-left corner plus size, in world units."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def aspect_ratio(self) -> float:
        if self.height == 0:
            return 1.0
        return self.width / self.height


@dataclass
class Item:
    """One memory object.

    `current` is advanced only by the animator and `target` is written only
    by the layout engine. `original` is the explore-mode grid cell.
    """

    name: str
    asset: str
    record: CatalogRecord
    original: Transform = field(default_factory=Transform)
    current: Transform = field(default_factory=Transform)
    target: Transform = field(default_factory=Transform)
    visibility_scale: float = 1.0
    target_visibility_scale: float = 1.0
    should_be_visible: bool = True
    is_visible: bool = True
    placed: bool = False

    # Attribute shortcuts used by the layout engine

    @property
    def size(self) -> float:
        return self.record.size

    @property
    def sentimentality(self) -> float:
        return self.record.sentimentality

    @property
    def price(self) -> float:
        return self.record.price

    @property
    def owner(self) -> int:
        return self.record.owner

    @property
    def location(self) -> tuple[float, float]:
        return self.record.location_x, self.record.location_y

    @property
    def exit_alert_index(self) -> int:
        """First alert index at which the item is gone again (exclusive)."""
        return self.record.enter_alert_index + self.record.duration_in_alerts

    def present_at(self, alert_index: int) -> bool:
        return self.record.enter_alert_index <= alert_index < self.exit_alert_index

    def place(self, transform: Transform) -> None:
        """Set the initial grid cell; current and target start there too."""
        self.original = transform
        self.current = transform
        self.target = transform
        self.placed = True
