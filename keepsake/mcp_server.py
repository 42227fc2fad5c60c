#!/usr/bin/env python3
"""Keepsake MCP Server — drive the explorer's action surface."""

import json
import logging
import sys

from mcp.server.fastmcp import FastMCP

from keepsake import explorer
from keepsake.catalog import owner_profile
from keepsake.config import load_config

mcp = FastMCP("keepsake")
logger = logging.getLogger(__name__)

# Redirect all logging to stderr so stdout stays clean for MCP stdio transport
logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_state: explorer.ExplorerState | None = None


def _get_state() -> explorer.ExplorerState:
    global _state
    if _state is None:
        _state = explorer.load_state(load_config())
    return _state


@mcp.tool()
def switch_mode(mode: str) -> str:
    """Rearrange items: explore, size, sentiment, price, owner, time or location."""
    try:
        state = _get_state()
        switched = explorer.switch_mode(state, mode)
        return json.dumps({"mode": state.mode.value, "switched": switched})
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def toggle_timeline_playback() -> str:
    """Play or pause the alert timeline (time mode)."""
    state = _get_state()
    playing = explorer.toggle_timeline_playback(state)
    return json.dumps({"is_playing": playing, "empty": state.timeline.is_empty})


@mcp.tool()
def scrub_timeline(progress: float) -> str:
    """Jump the timeline to a position between 0 and 1."""
    state = _get_state()
    value = explorer.scrub_timeline(state, progress)
    return json.dumps({
        "progress": value,
        "current_alert_index": state.timeline.current_alert_index,
        "current_time": state.timeline.current_time_label(),
    })


@mcp.tool()
def pan_camera(dx: float, dy: float) -> str:
    """Pan the camera by a screen-space delta. Only explore mode allows panning."""
    state = _get_state()
    moved = explorer.pan_camera(state, dx, dy)
    return json.dumps({"moved": moved, "camera": [state.camera.x, state.camera.y]})


@mcp.tool()
def resize_viewport(width: float, height: float) -> str:
    """Set the screen size in pixels."""
    if width <= 0 or height <= 0:
        return json.dumps({"error": "width and height must be positive"})
    state = _get_state()
    explorer.resize_viewport(state, width, height)
    return json.dumps({"width": width, "height": height})


@mcp.tool()
def get_frame() -> str:
    """Advance one tick and return the render frame (sprites, timeline, overlays)."""
    frame = explorer.tick(_get_state())
    return frame.model_dump_json()


@mcp.tool()
def list_items() -> str:
    """List the memory objects with their attributes and owner."""
    state = _get_state()
    result = []
    for item in state.items:
        entry = item.record.model_dump()
        entry["name"] = item.name
        entry["owner_name"] = owner_profile(item.owner).name
        result.append(entry)
    return json.dumps(result)


if __name__ == "__main__":
    mcp.run()
