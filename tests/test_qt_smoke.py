"""
Headless smoke tests for the Qt window.
The frame loop is driven by calling ``_tick`` directly instead of waiting on the QTimer.
"""
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from timetracker.ui.qt_app import MainWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp, client, runner):
    win = MainWindow(client=client, runner=runner)
    win.frame_timer.stop()
    yield win
    win.controller.state.should_close = True
    win.close()


def _log_in(window, runner):
    window.login_view.username_edit.setText("alice")
    window.login_view.password_edit.setText("secret")
    window._tick()
    window.login_view.login_btn.click()
    runner.run_all()
    window._tick()
    runner.run_all()
    window._tick()


def test_starts_on_login_without_calls(window, client, runner):
    window._tick()
    assert window.stack.currentWidget() is window.login_view
    assert client.calls == []
    assert runner.jobs == []
    assert not window.login_view.login_btn.isEnabled()

    window.login_view.username_edit.setText("alice")
    window.login_view.password_edit.setText("secret")
    window._tick()
    assert window.login_view.login_btn.isEnabled()


def test_login_reaches_track_picker(window, client, runner):
    client.responses["login"] = '{"behavior": "AUTHENTICATION", "username": "alice", "uid": 7}'
    client.responses["account"] = '{"behavior": "ACCOUNT", "tracks": [{"track": "a"}]}'
    _log_in(window, runner)

    assert window.login_view.username_edit.text() == ""
    assert window.stack.currentWidget() is window.picker_view
    assert window.windowTitle() == "(alice) Time Tracker"
    assert window.picker_view.list_layout.count() == 2


def test_timer_shows_total_in_seconds(window, client, runner):
    client.responses["login"] = '{"behavior": "AUTHENTICATION", "username": "alice", "uid": 7}'
    client.responses["account"] = '{"behavior": "ACCOUNT", "tracks": [{"track": "a"}]}'
    client.responses["count"] = '{"behavior": "TRACKINFO", "track": "a", "seconds": 3700}'
    _log_in(window, runner)

    window.controller.select_track("a")
    runner.run_all()
    window._tick()

    view = window.timer_view
    assert window.stack.currentWidget() is view
    assert view.total_value.text() == "3700"
    assert view.session_value.text() == "0"
    assert view.track_value.text() == "a"
    assert view.sync_btn.isEnabled()
    assert not view.save_btn.isEnabled()
    assert not view.reset_btn.isEnabled()
