"""Rasterise a RenderFrame with Pillow.

Sprites use the asset image when it exists under assets_dir, otherwise a
labelled placeholder box. The timeline widget mirrors the on-screen
scrubber: a bar with red alert markers and a yellow playhead.
"""

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from keepsake.models import RenderFrame, SpriteView, TimelineWidget

logger = logging.getLogger(__name__)

# --- Fonts ---

_FONT_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"
_FONT_REGULAR = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"


def _font(size: int, bold: bool = False) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    path = _FONT_BOLD if bold else _FONT_REGULAR
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        return ImageFont.load_default()


# --- Colors ---

BG = (255, 255, 255)
TEXT = (50, 50, 50)
PLACEHOLDER = (225, 225, 230)
PLACEHOLDER_EDGE = (170, 170, 180)
TIMELINE_BAR = (50, 50, 50)
ALERT_MARKER = (255, 50, 50)
PLAYHEAD = (255, 255, 0)
BUTTON_PLAYING = (50, 150, 50)
BUTTON_PAUSED = (100, 100, 100)

TIMELINE_MARGIN = 50
TIMELINE_OFFSET = 60  # bar distance from the bottom edge
TIMELINE_THICKNESS = 8


def _alpha(color: tuple[int, int, int], opacity: float) -> tuple[int, int, int, int]:
    return (*color, max(0, min(255, int(opacity * 255))))


class AssetCache:
    """Loads each asset image once."""

    def __init__(self, assets_dir: Path | None) -> None:
        self.assets_dir = assets_dir
        self._images: dict[str, Image.Image | None] = {}

    def get(self, asset: str) -> Image.Image | None:
        if asset not in self._images:
            image = None
            if self.assets_dir is not None and (self.assets_dir / asset).exists():
                image = Image.open(self.assets_dir / asset).convert("RGBA")
            self._images[asset] = image
        return self._images[asset]


def _draw_sprite(canvas: Image.Image, draw: ImageDraw.ImageDraw, sprite: SpriteView, assets: AssetCache) -> None:
    w, h = int(round(sprite.screen_width)), int(round(sprite.screen_height))
    if w < 1 or h < 1:
        return
    x, y = int(round(sprite.screen_x)), int(round(sprite.screen_y))

    image = assets.get(sprite.asset)
    if image is not None:
        resized = image.resize((w, h), Image.LANCZOS)
        canvas.paste(resized, (x, y), resized)
        return

    draw.rectangle([x, y, x + w, y + h], fill=PLACEHOLDER, outline=PLACEHOLDER_EDGE)
    if w > 30:
        draw.text((x + w / 2, y + h / 2), sprite.name, fill=TEXT, font=_font(10), anchor="mm")


def _draw_timeline(draw: ImageDraw.ImageDraw, widget: TimelineWidget, width: int, height: int) -> None:
    left = TIMELINE_MARGIN
    bar_width = width - 2 * TIMELINE_MARGIN
    bar_y = height - TIMELINE_OFFSET

    draw.rectangle([left, bar_y, left + bar_width, bar_y + TIMELINE_THICKNESS], fill=TIMELINE_BAR)

    mid_y = bar_y + TIMELINE_THICKNESS / 2
    for position in widget.alert_marker_positions:
        mx = left + position * bar_width
        draw.ellipse([mx - 3, mid_y - 3, mx + 3, mid_y + 3], fill=ALERT_MARKER)

    px = left + widget.progress * bar_width
    draw.rectangle([px - 3, bar_y - 8, px + 3, bar_y + 16], fill=PLAYHEAD)

    button_x, button_y, size = left, bar_y - 40, 30
    draw.rounded_rectangle(
        [button_x, button_y, button_x + size, button_y + size], radius=4,
        fill=BUTTON_PLAYING if widget.is_playing else BUTTON_PAUSED,
    )
    if widget.is_playing:
        draw.rectangle([button_x + 8, button_y + 8, button_x + 12, button_y + 22], fill=(255, 255, 255))
        draw.rectangle([button_x + 18, button_y + 8, button_x + 22, button_y + 22], fill=(255, 255, 255))
    else:
        draw.polygon(
            [(button_x + 10, button_y + 8), (button_x + 10, button_y + 22), (button_x + 22, button_y + 15)],
            fill=(255, 255, 255),
        )

    status = "PLAYING" if widget.is_playing else "PAUSED"
    lines = [
        widget.current_time_label,
        f"{status} | Visible: {widget.visible_count}/{widget.total}",
        f"Alert: {widget.current_alert_index}/{widget.total_alerts - 1}",
    ]
    text_x = button_x + size + 15
    for i, line in enumerate(lines):
        draw.text((text_x, button_y + size / 2 + i * 16), line, fill=TEXT, font=_font(12), anchor="lm")


def render_frame(
    frame: RenderFrame,
    width: int,
    height: int,
    assets_dir: Path | None = None,
    assets: AssetCache | None = None,
) -> Image.Image:
    """Draw one frame onto a new RGBA image of the given screen size."""
    if assets is None:
        assets = AssetCache(assets_dir)

    canvas = Image.new("RGBA", (width, height), (*BG, 255))
    draw = ImageDraw.Draw(canvas)

    drawn = 0
    for sprite in frame.sprites:
        if not sprite.visible:
            continue
        _draw_sprite(canvas, draw, sprite, assets)
        drawn += 1

    # Overlays go on a separate layer so their opacity blends
    layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    layer_draw = ImageDraw.Draw(layer)
    for overlay in frame.overlays:
        font = _font(48, bold=True) if overlay.kind == "axis" else _font(14)
        layer_draw.multiline_text(
            (overlay.screen_x, overlay.screen_y), overlay.text,
            fill=_alpha(TEXT, overlay.opacity), font=font, anchor="mm", align="center",
        )
    canvas.alpha_composite(layer)

    if frame.timeline is not None:
        _draw_timeline(draw, frame.timeline, width, height)

    logger.debug("Rendered %s frame: %d sprites, %d overlays", frame.mode.value, drawn, len(frame.overlays))
    return canvas
