"""Tests for alert-window visibility and entrance/exit effects."""

import pytest

from keepsake.config import TimelineConfig
from keepsake.visibility import hide_all, resolve_visibility, show_all


@pytest.fixture()
def tl_config():
    return TimelineConfig()


class TestPresence:
    def test_window_is_half_open(self, item_factory):
        item = item_factory("bamba", enter_alert_index=3, duration_in_alerts=6)
        assert not item.present_at(2)
        assert item.present_at(3)
        assert item.present_at(8)
        assert not item.present_at(9)
        assert item.exit_alert_index == 9


class TestResolveVisibility:
    def test_matches_window_for_every_alert(self, items, tl_config):
        hide_all(items)
        for alert in range(70):
            resolve_visibility(items, alert, tl_config)
            for item in items:
                assert item.is_visible == item.present_at(alert)
                assert item.is_visible == item.should_be_visible

    def test_returns_visible_count(self, items, tl_config):
        # Alert 5: blanket, keys, bamba, router, kindle
        assert resolve_visibility(items, 5, tl_config) == 5
        # Alert 10: blanket, keys, router, tape
        assert resolve_visibility(items, 10, tl_config) == 4

    def test_entrance_pops_with_overshoot(self, item_factory, tl_config):
        item = item_factory("kindle", enter_alert_index=5, duration_in_alerts=3)
        hide_all([item])
        resolve_visibility([item], 5, tl_config)
        assert item.is_visible
        assert item.visibility_scale == 0.1
        assert item.target_visibility_scale == 1.2

    def test_exit_shrinks_without_snapping(self, item_factory, tl_config):
        item = item_factory("kindle", enter_alert_index=5, duration_in_alerts=3)
        hide_all([item])
        resolve_visibility([item], 5, tl_config)
        item.visibility_scale = 1.1
        resolve_visibility([item], 8, tl_config)
        assert not item.is_visible
        assert item.target_visibility_scale == 0.1
        assert item.visibility_scale == 1.1

    def test_no_edge_no_effect(self, item_factory, tl_config):
        item = item_factory("router", enter_alert_index=0, duration_in_alerts=57)
        hide_all([item])
        resolve_visibility([item], 0, tl_config)
        item.visibility_scale = 0.9
        resolve_visibility([item], 1, tl_config)
        assert item.visibility_scale == 0.9
        assert item.target_visibility_scale == 1.2

    def test_already_visible_items_do_not_pop(self, item_factory, tl_config):
        item = item_factory("router", enter_alert_index=0, duration_in_alerts=57)
        resolve_visibility([item], 0, tl_config)
        assert item.visibility_scale == 1.0
        assert item.target_visibility_scale == 1.0


class TestResets:
    def test_hide_all(self, items):
        hide_all(items)
        assert not any(i.is_visible or i.should_be_visible for i in items)

    def test_show_all(self, items, tl_config):
        hide_all(items)
        resolve_visibility(items, 20, tl_config)
        show_all(items)
        for item in items:
            assert item.is_visible and item.should_be_visible
            assert item.visibility_scale == 1.0
            assert item.target_visibility_scale == 1.0
