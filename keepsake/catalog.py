"""Item catalog: owner roster, default attribute table, and grid placement.

The catalog pairs an ordered list of asset identifiers with an ordered list of
attribute records. Missing records fall back to the default record.
"""

import logging
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from PIL import Image

from keepsake.config import CanvasConfig, Config
from keepsake.items import Item, Transform
from keepsake.models import CatalogRecord, OwnerProfile

logger = logging.getLogger(__name__)


OWNERS: list[OwnerProfile] = [
    OwnerProfile(name="Yael", age=35, gender="Female", profession="Doctor"),
    OwnerProfile(name="Yaron", age=42, gender="Male", profession="Teacher"),
    OwnerProfile(name="Yoni", age=8, gender="Male", profession="Child"),
    OwnerProfile(name="Noa", age=28, gender="Female", profession="Engineer"),
    OwnerProfile(name="Esti", age=65, gender="Female", profession="Retired Grandmother"),
    OwnerProfile(name="Omer", age=31, gender="Male", profession="Chef"),
    OwnerProfile(name="Zohar", age=22, gender="Female", profession="Student"),
    OwnerProfile(name="Yoav", age=45, gender="Male", profession="Electrician"),
]

DEFAULT_ROW = (50, 50, 50, 0, 50, 250, 150, 0, 24)

DEFAULT_ASSETS = [
    "advil.png", "arak.png", "baby_bottle.png", "baby_toy.png",
    "backpack.png", "baloon.png", "bamba.png", "batteries.png", "blanket.png",
    "catan.png", "choclate_coockies.png", "clothes_2.png", "clothes.png", "color_papers.png",
    "corn_can.png", "cow_radio.png", "dog_collar_leash.png", "dog_food.png", "emergancy_lamp.png",
    "english_cake.png", "folding_chair.png", "fork.png", "grandma_jewelry.png", "haaretz_paper.png",
    "hanger_game_book.png", "keys.png", "kindle.png", "lool.png", "mini_generator.png",
    "mobile_charger.png", "motzetz.png", "nine_stories_book.png", "parenting_book.png", "passport.png",
    "phone_charger.png", "pillow.png", "plastecine.png", "plastic_bucket.png", "plastic_chair.png",
    "rabit_doll.png", "router.png", "serenada_pills.png", "smartphone.png", "sneakers.png",
    "soft_football.png", "standing_fan.png", "tape.png", "tiles.png", "toilet_paper.png",
    "water.png", "wine_glass.png", "wipes.png",
]

# [size, sentimentality, price, owner, entertainment, locationX, locationY, enter, duration]
# Paired with DEFAULT_ASSETS by position.
DEFAULT_ROWS: list[tuple[int, ...]] = [
    # First alerts: grabbed in a hurry
    (10, 5, 12, 7, 10, 150, 90, 1, 57),
    (75, 80, 45, 4, 30, 180, 250, 0, 35),
    (30, 30, 60, 3, 20, 400, 140, 1, 40),
    (50, 85, 25, 4, 45, 350, 180, 0, 30),
    # Early shelter preparations
    (12, 30, 4, 2, 40, 200, 180, 3, 6),
    (15, 20, 6, 2, 65, 280, 160, 4, 4),
    (30, 35, 85, 3, 25, 420, 120, 5, 15),
    (18, 8, 15, 7, 20, 380, 200, 0, 57),
    (12, 15, 8, 1, 35, 320, 240, 0, 57),
    (8, 5, 4, 5, 25, 200, 300, 0, 57),
    # Longer-term shelter living
    (25, 90, 12, 4, 75, 90, 220, 10, 15),
    (30, 45, 25, 5, 40, 180, 320, 12, 10),
    (25, 25, 20, 5, 30, 240, 280, 13, 8),
    (35, 15, 45, 6, 50, 250, 200, 0, 57),
    (20, 5, 35, 7, 15, 300, 150, 18, 10),
    # Heavy bombing period
    (12, 30, 4, 2, 40, 200, 180, 23, 2),
    (30, 25, 35, 1, 30, 250, 150, 28, 8),
    # Prolonged conflict
    (45, 60, 55, 6, 85, 350, 200, 32, 15),
    (35, 75, 40, 1, 70, 280, 220, 34, 12),
    (40, 60, 120, 6, 80, 400, 250, 36, 10),
    (55, 40, 80, 1, 65, 320, 180, 38, 8),
    (25, 20, 30, 5, 45, 220, 200, 40, 6),
    (15, 10, 25, 7, 35, 350, 280, 0, 57),
    (20, 25, 60, 6, 55, 300, 320, 0, 57),
    # Winding down: brief appearances
    (35, 15, 3, 2, 60, 300, 300, 50, 3),
    (12, 5, 8, 1, 20, 280, 140, 52, 4),
    (20, 30, 40, 4, 50, 380, 160, 54, 3),
    (25, 35, 25, 6, 40, 260, 240, 55, 2),
    # Spread across the whole period
    (20, 15, 8, 2, 30, 240, 160, 5, 8),
    (45, 25, 120, 6, 55, 320, 280, 19, 18),
    (25, 70, 45, 4, 35, 200, 240, 9, 18),
    (20, 60, 35, 4, 40, 220, 260, 10, 15),
    (8, 5, 12, 5, 15, 180, 140, 6, 6),
    (15, 40, 8, 1, 50, 280, 180, 24, 6),
    (25, 30, 15, 2, 65, 320, 200, 17, 8),
    (80, 15, 300, 7, 25, 450, 120, 0, 57),
    (20, 5, 25, 3, 20, 300, 160, 7, 10),
    (35, 20, 8, 2, 40, 260, 220, 13, 6),
    (60, 70, 80, 4, 60, 280, 300, 2, 28),
    (40, 10, 25, 6, 30, 380, 240, 14, 12),
    (30, 5, 40, 6, 25, 340, 200, 16, 15),
    (75, 85, 35, 4, 85, 400, 280, 3, 32),
    (65, 20, 180, 7, 35, 450, 200, 0, 57),
    (40, 25, 80, 6, 45, 320, 240, 29, 10),
    (10, 5, 8, 7, 10, 200, 120, 9, 5),
    # Items that come back later
    (12, 30, 4, 2, 40, 200, 180, 14, 3),
    (15, 20, 6, 2, 65, 280, 160, 31, 4),
    (12, 5, 8, 1, 20, 280, 140, 53, 4),
]


def owner_profile(owner: int) -> OwnerProfile:
    return OWNERS[owner]


def item_name(asset: str) -> str:
    """Asset identifier without its file extension."""
    return Path(asset).stem


def pair_records(
    assets: Sequence[str], rows: Sequence[Sequence[float]]
) -> list[CatalogRecord]:
    """Pair assets with records by position, substituting defaults for missing rows."""
    records: list[CatalogRecord] = []
    for i, asset in enumerate(assets):
        if i < len(rows):
            records.append(CatalogRecord.from_row(rows[i]))
        else:
            logger.debug("No attribute record for %s, using defaults", asset)
            records.append(CatalogRecord.from_row(DEFAULT_ROW))
    return records


def natural_size(asset: str, assets_dir: Path | None, fallback: float) -> tuple[float, float]:
    """Pixel dimensions of an asset image, or a square fallback if unavailable."""
    if assets_dir is not None:
        path = assets_dir / asset
        if path.exists():
            with Image.open(path) as img:
                return float(img.width), float(img.height)
    logger.debug("Asset %s not found, assuming square", asset)
    return fallback, fallback


def build_items(
    assets: Sequence[str],
    rows: Sequence[Sequence[float]],
    canvas: CanvasConfig,
    assets_dir: Path | None = None,
) -> list[Item]:
    """Build the item collection and place it in the explore grid."""
    records = pair_records(assets, rows)
    items = [
        Item(name=item_name(asset), asset=asset, record=record)
        for asset, record in zip(assets, records)
    ]
    sizes = [natural_size(asset, assets_dir, canvas.max_asset_size) for asset in assets]
    place_in_grid(items, sizes, canvas)
    return items


def place_in_grid(
    items: list[Item],
    natural_sizes: Sequence[tuple[float, float]],
    canvas: CanvasConfig,
) -> None:
    """Tile items in a roughly square grid centred on the virtual canvas.

    Each item is scaled so its longest side is canvas.max_asset_size, then
    centred on its grid cell.
    """
    if not items:
        return

    cols = math.ceil(math.sqrt(len(items)))
    rows = math.ceil(len(items) / cols)
    start_x = (canvas.width - (cols - 1) * canvas.grid_spacing) / 2
    start_y = (canvas.height - (rows - 1) * canvas.grid_spacing) / 2

    for i, (item, (w, h)) in enumerate(zip(items, natural_sizes)):
        scale = min(canvas.max_asset_size / w, canvas.max_asset_size / h)
        width, height = w * scale, h * scale
        center_x = start_x + (i % cols) * canvas.grid_spacing
        center_y = start_y + (i // cols) * canvas.grid_spacing
        item.place(Transform(center_x - width / 2, center_y - height / 2, width, height))


def load_catalog(config: Config) -> list[Item]:
    """Load the configured catalog file, or the built-in shelter catalog."""
    assets: Sequence[str] = DEFAULT_ASSETS
    rows: Sequence[Sequence[float]] = DEFAULT_ROWS

    catalog_path = config.resolved_catalog_path
    if catalog_path is not None:
        raw: dict[str, Any] = yaml.safe_load(catalog_path.read_text()) or {}
        assets = raw.get("assets", [])
        rows = raw.get("records", [])
        logger.info("Loaded catalog %s: %d assets, %d records", catalog_path, len(assets), len(rows))

    if len(rows) < len(assets):
        logger.info("%d assets have no attribute record", len(assets) - len(rows))

    return build_items(assets, rows, config.canvas, config.resolved_assets_dir)
