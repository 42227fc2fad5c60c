"""Shared test fixtures for keepsake tests."""

import random
from datetime import datetime, timedelta

import pytest

from keepsake.camera import Camera, Viewport
from keepsake.config import Config
from keepsake.explorer import create_state
from keepsake.items import Item, Transform
from keepsake.models import CatalogRecord


def make_item(
    name: str,
    width: float = 100.0,
    height: float = 100.0,
    at: tuple[float, float] = (0.0, 0.0),
    **attrs,
) -> Item:
    """An item already placed at its explore-grid cell."""
    item = Item(name=name, asset=f"{name}.png", record=CatalogRecord(**attrs))
    item.place(Transform(at[0], at[1], width, height))
    return item


@pytest.fixture()
def item_factory():
    return make_item


@pytest.fixture()
def config():
    return Config(seed=7)


@pytest.fixture()
def viewport():
    """A 1000x800 world viewport with the default margins at zoom 1."""
    return Viewport(left=0, top=0, width=1000, height=800, margin=50, ui_reserved=100, zoom=1.0)


@pytest.fixture()
def rng():
    return random.Random(42)


@pytest.fixture()
def items():
    """Six items across three owners with varied attributes and alert windows."""
    return [
        make_item("blanket", 200, 150, (100, 100), size=75, sentimentality=80, price=45,
                  owner=4, location_x=180, location_y=250, enter_alert_index=0, duration_in_alerts=35),
        make_item("keys", 120, 200, (300, 100), size=50, sentimentality=85, price=25,
                  owner=4, location_x=350, location_y=180, enter_alert_index=0, duration_in_alerts=30),
        make_item("bamba", 150, 150, (500, 100), size=12, sentimentality=30, price=4,
                  owner=2, location_x=200, location_y=180, enter_alert_index=3, duration_in_alerts=6),
        make_item("router", 200, 100, (100, 300), size=65, sentimentality=20, price=180,
                  owner=7, location_x=450, location_y=200, enter_alert_index=0, duration_in_alerts=57),
        make_item("kindle", 100, 160, (300, 300), size=40, sentimentality=60, price=120,
                  owner=6, location_x=400, location_y=250, enter_alert_index=5, duration_in_alerts=3),
        make_item("tape", 180, 120, (500, 300), size=10, sentimentality=5, price=8,
                  owner=7, location_x=200, location_y=120, enter_alert_index=9, duration_in_alerts=5),
    ]


@pytest.fixture()
def timestamps():
    """Twelve alerts, six hours apart."""
    start = datetime(2025, 6, 13, 3, 0)
    return [start + timedelta(hours=6 * i) for i in range(12)]


@pytest.fixture()
def state(items, timestamps, config):
    return create_state(items, timestamps, config, rng=random.Random(3))


@pytest.fixture()
def empty_state(items, config):
    return create_state(items, [], config, rng=random.Random(3))


@pytest.fixture()
def camera(config):
    return Camera(config.canvas, config.camera)
