"""Tests for the tick loop, action surface and render frame."""

import pytest

from keepsake.explorer import (
    pan_camera,
    reset_camera,
    resize_viewport,
    scrub_timeline,
    set_pointer,
    switch_mode,
    tick,
    toggle_timeline_playback,
)
from keepsake.models import Mode


class TestTick:
    def test_explore_frame(self, state):
        frame = tick(state, now=0.0)
        assert frame.mode is Mode.EXPLORE
        assert frame.timeline is None
        assert len(frame.sprites) == len(state.items)
        assert all(s.visible and s.scale == 1.0 for s in frame.sprites)

    def test_sprites_in_screen_space(self, state):
        frame = tick(state, now=0.0)
        sprite = frame.sprites[0]
        item = state.items[0]
        zoom = state.camera.zoom
        assert sprite.screen_x == pytest.approx(item.current.x * zoom + state.camera.x)
        assert sprite.screen_width == pytest.approx(item.current.width * zoom)

    def test_items_move_toward_targets(self, state):
        switch_mode(state, Mode.SIZE, now=0.0)
        before = [i.current for i in state.items]
        tick(state, now=0.016)
        assert [i.current for i in state.items] != before

    def test_transition_flag(self, state):
        switch_mode(state, Mode.SIZE, now=0.0)
        assert tick(state, now=1.0).transitioning
        assert not tick(state, now=2.5).transitioning


class TestTimeMode:
    def test_visibility_follows_timeline(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        toggle_timeline_playback(state, now=0.0)
        now = 0.0
        for _ in range(250):
            now += 0.1
            tick(state, now)
            alert = state.timeline.current_alert_index
            for item in state.items:
                assert item.is_visible == item.present_at(alert)

    def test_timeline_widget(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        scrub_timeline(state, 0.5, now=0.0)
        frame = tick(state, now=0.0)
        widget = frame.timeline
        assert widget is not None
        assert widget.progress == 0.5
        assert widget.current_alert_index == 5
        assert widget.total_alerts == 12
        assert widget.total == len(state.items)
        assert widget.visible_count == sum(1 for s in frame.sprites if s.visible)
        assert widget.current_time_label == "14/06 12:00"
        assert not widget.is_playing

    def test_entrance_scale_in_sprite(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        frame = tick(state, now=0.0)
        visible = [s for s in frame.sprites if s.visible]
        assert visible
        # Entrance pop starts small
        assert all(s.scale == pytest.approx(0.1) for s in visible)

    def test_hidden_sprites_flagged(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        frame = tick(state, now=0.0)
        hidden = {s.name for s in frame.sprites if not s.visible}
        # Alert 0: bamba, kindle and tape have not arrived yet
        assert hidden == {"bamba", "kindle", "tape"}

    def test_no_timeline_widget_without_alerts(self, empty_state):
        switch_mode(empty_state, Mode.TIME, now=0.0)
        frame = tick(empty_state, now=0.5)
        assert frame.timeline is None
        assert all(s.visible for s in frame.sprites)

    def test_playback_paused_outside_time_mode(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        toggle_timeline_playback(state, now=0.0)
        switch_mode(state, Mode.SIZE, now=3.0)
        progress = state.timeline.playback_progress
        tick(state, now=10.0)
        assert state.timeline.playback_progress == progress

    def test_reentering_time_mode_resumes_without_jump(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        toggle_timeline_playback(state, now=0.0)
        tick(state, now=1 / 60)
        before = state.timeline.current_alert_index
        progress = state.timeline.playback_progress

        switch_mode(state, Mode.SIZE, now=3.0)
        switch_mode(state, Mode.TIME, now=10.0)
        tick(state, now=10.0 + 1 / 60)

        assert state.timeline.current_alert_index - before <= 1
        assert state.timeline.playback_progress == pytest.approx(progress + 1 / 60 / 20)


class TestActions:
    def test_toggle_returns_state(self, state):
        assert toggle_timeline_playback(state, now=0.0)
        assert not toggle_timeline_playback(state, now=1.0)

    def test_scrub_clamps(self, state):
        assert scrub_timeline(state, 1.7, now=0.0) == 1.0
        assert scrub_timeline(state, -2, now=0.0) == 0.0

    def test_pan_only_in_explore(self, state):
        x = state.camera.x
        assert pan_camera(state, 40, 0)
        assert state.camera.x == pytest.approx(x + 20)

        switch_mode(state, Mode.PRICE, now=0.0)
        moved_x = state.camera.x
        assert not pan_camera(state, 40, 0)
        assert state.camera.x == moved_x

    def test_reset_camera(self, state):
        x, y = state.camera.x, state.camera.y
        pan_camera(state, 100, 100)
        reset_camera(state)
        assert (state.camera.x, state.camera.y) == (x, y)

    def test_edge_navigation(self, state):
        x = state.camera.x
        set_pointer(state, 0, 400)
        tick(state, now=0.0)
        assert state.camera.x > x

    def test_edge_navigation_locked(self, state):
        switch_mode(state, Mode.SIZE, now=0.0)
        x = state.camera.x
        set_pointer(state, 0, 400)
        tick(state, now=0.1)
        assert state.camera.x == x

    def test_resize_relayouts_arranged_mode(self, state):
        switch_mode(state, Mode.LOCATION, now=0.0)
        before = {i.name: i.target for i in state.items}
        resize_viewport(state, 1920, 1080)
        assert state.camera.screen_width == 1920
        assert {i.name: i.target for i in state.items} != before

    def test_resize_keeps_explore_grid(self, state):
        resize_viewport(state, 1920, 1080)
        assert all(i.target == i.original for i in state.items)


class TestOverlays:
    def test_axis_overlay_in_frame(self, state):
        switch_mode(state, Mode.SENTIMENT, now=0.0)
        for n in range(30):
            frame = tick(state, now=n / 60)
        texts = [o.text for o in frame.overlays if o.kind == "axis"]
        assert texts == ["SENTIMENTAL", "FUNCTIONAL"]
        assert all(0 < o.opacity <= 1 for o in frame.overlays)

    def test_owner_overlay_in_frame(self, state):
        switch_mode(state, Mode.OWNER, now=0.0)
        for n in range(30):
            frame = tick(state, now=n / 60)
        owners = [o for o in frame.overlays if o.kind == "owner"]
        assert len(owners) == 4
        assert owners[0].text == "Yoni\n8, Male"

    def test_frame_serialises(self, state):
        switch_mode(state, Mode.TIME, now=0.0)
        frame = tick(state, now=0.0)
        data = frame.model_dump(mode="json")
        assert data["mode"] == "time"
        assert len(data["timeline"]["alert_marker_positions"]) == 12
