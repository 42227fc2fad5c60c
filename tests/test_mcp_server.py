"""Tests for keepsake MCP server tool registration and basic returns."""

import json

import pytest

import keepsake.mcp_server as mcp_mod
from keepsake.mcp_server import mcp


EXPECTED_TOOLS = {
    "switch_mode",
    "toggle_timeline_playback",
    "scrub_timeline",
    "pan_camera",
    "resize_viewport",
    "get_frame",
    "list_items",
}


@pytest.fixture()
def live_state(state, monkeypatch):
    monkeypatch.setattr(mcp_mod, "_state", state)
    return state


class TestMCPToolRegistration:
    def test_all_tools_registered(self):
        """All 7 expected tools are registered on the mcp object."""
        registered = set(mcp._tool_manager._tools.keys())
        assert EXPECTED_TOOLS.issubset(registered), (
            f"Missing tools: {EXPECTED_TOOLS - registered}"
        )

    def test_tool_count(self):
        registered = set(mcp._tool_manager._tools.keys())
        assert len(registered & EXPECTED_TOOLS) == 7


class TestMCPToolReturns:
    def test_switch_mode(self, live_state):
        data = json.loads(mcp_mod.switch_mode(mode="price"))
        assert data == {"mode": "price", "switched": True}

    def test_switch_mode_during_transition(self, live_state):
        mcp_mod.switch_mode(mode="price")
        data = json.loads(mcp_mod.switch_mode(mode="size"))
        assert data == {"mode": "price", "switched": False}

    def test_error_returns_json_error(self, live_state):
        """Tools return {"error": ...} on ValueError."""
        data = json.loads(mcp_mod.switch_mode(mode="colour"))
        assert "error" in data
        assert live_state.mode.value == "explore"

    def test_toggle_and_scrub(self, live_state):
        assert json.loads(mcp_mod.toggle_timeline_playback()) == {"is_playing": True, "empty": False}
        data = json.loads(mcp_mod.scrub_timeline(progress=0.5))
        assert data["progress"] == 0.5
        assert data["current_alert_index"] == 5
        assert data["current_time"] == "14/06 12:00"

    def test_pan_camera(self, live_state):
        data = json.loads(mcp_mod.pan_camera(dx=20, dy=0))
        assert data["moved"] is True
        assert data["camera"][0] == live_state.camera.x

    def test_resize_viewport(self, live_state):
        data = json.loads(mcp_mod.resize_viewport(width=1920, height=1080))
        assert data == {"width": 1920, "height": 1080}
        assert live_state.camera.screen_height == 1080

    def test_resize_rejects_non_positive(self, live_state):
        data = json.loads(mcp_mod.resize_viewport(width=0, height=600))
        assert "error" in data
        assert live_state.camera.screen_width == 1280

    def test_get_frame(self, live_state):
        data = json.loads(mcp_mod.get_frame())
        assert data["mode"] == "explore"
        assert len(data["sprites"]) == 6
        assert data["timeline"] is None

    def test_list_items(self, live_state):
        data = json.loads(mcp_mod.list_items())
        assert [d["name"] for d in data] == ["blanket", "keys", "bamba", "router", "kindle", "tape"]
        assert data[0]["owner_name"] == "Esti"
        assert data[2]["enter_alert_index"] == 3
