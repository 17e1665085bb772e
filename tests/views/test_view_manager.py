"""
View Layer Tests

ViewRequestInterpreter registry lookup and ViewManager switching, using a
recording view so no terminal loop is started.
"""

import pytest

from wsn_analyzer.managers.view.view_manager import ViewManager
from wsn_analyzer.managers.view.view_request_interpreter import ViewRequestInterpreter
from wsn_analyzer.managers.view.view_strategy import ViewStrategy
from wsn_analyzer.views.cli_view.cli_view import CommandLineView


class RecordingView(ViewStrategy):
    name = "recording"
    events = []

    def start_view(self):
        self.running = True
        RecordingView.events.append(("start", id(self)))

    def stop_view(self):
        self.running = False
        RecordingView.events.append(("stop", id(self)))


@pytest.fixture
def registry(monkeypatch):
    RecordingView.events = []
    monkeypatch.setitem(ViewRequestInterpreter.VIEW_STRATEGIES, RecordingView.name, RecordingView)
    return RecordingView


class TestViewRequestInterpreter:

    def test_cli_is_registered(self):
        view = ViewRequestInterpreter().get_view_strategy(" CLI ", controller=None)
        assert isinstance(view, CommandLineView)
        assert view.running is False

    def test_unknown_view(self):
        with pytest.raises(ValueError, match="Available views: cli"):
            ViewRequestInterpreter().get_view_strategy("tkinter", controller=None)


class TestViewManager:

    def test_switch_stops_previous(self, registry):
        manager = ViewManager(controller="controller")
        manager.initiate_view_strategy("recording")
        first = manager.active_view
        manager.initiate_view_strategy("recording")
        second = manager.active_view
        assert registry.events == [("start", id(first)), ("stop", id(first)), ("start", id(second))]
        assert second.controller == "controller"

    def test_invalid_request_keeps_active_view(self, registry):
        manager = ViewManager(controller=None)
        manager.initiate_view_strategy("recording")
        active = manager.active_view
        with pytest.raises(ValueError):
            manager.initiate_view_strategy("web")
        assert manager.active_view is active
        assert active.running

    def test_stop_active_view(self, registry):
        manager = ViewManager(controller=None)
        manager.initiate_view_strategy("recording")
        view = manager.active_view
        manager.stop_active_view()
        assert manager.active_view is None
        assert view.running is False
