"""Tests for collaborator protocols, configuration and transitions."""

import pytest


def test_widget_host_is_abstract():
    from widget_drawer.protocols import WidgetHost

    with pytest.raises(TypeError):
        WidgetHost()


def test_widget_host_registry(host):
    from widget_drawer.protocols import get_widget_host, register_widget_host

    assert get_widget_host() is None
    register_widget_host(host)
    assert get_widget_host() is host


def test_drawer_config_defaults():
    from widget_drawer.protocols import DrawerConfig, get_drawer_config, set_drawer_config

    config = get_drawer_config()
    assert config.density == 1.0
    assert config.indicator_show_ms == 500
    assert config.replay_on_subscribe is True

    custom = DrawerConfig(density=3.0)
    set_drawer_config(custom)
    assert get_drawer_config() is custom


def test_drawer_config_rejects_bad_density():
    from widget_drawer.protocols import DrawerConfig

    with pytest.raises(ValueError):
        DrawerConfig(density=0)


def test_indicator_transitions():
    from PyQt6.QtCore import QEasingCurve

    from widget_drawer.animation import indicator_transition
    from widget_drawer.protocols import DrawerConfig

    config = DrawerConfig(indicator_show_ms=300, indicator_hide_ms=200)
    show = indicator_transition(True, config)
    hide = indicator_transition(False, config)

    assert show.target_scale == 1.0
    assert show.duration_ms == 300
    assert show.easing == QEasingCurve.Type.OutBack
    assert show.hide_on_finish is False

    assert hide.target_scale == 0.0
    assert hide.duration_ms == 200
    assert hide.easing == QEasingCurve.Type.InBack
    assert hide.hide_on_finish is True
    assert hide.easing_curve().type() == QEasingCurve.Type.InBack
