from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from timetracker.dispatch import CallDispatcher
from timetracker.models import CallResult
from timetracker.ui.controller import TrackerController


class ManualRunner:
    """Queues submitted work until the test decides to run it."""

    def __init__(self) -> None:
        self.jobs: List[Tuple[Callable[[], Any], Future]] = []

    def submit(self, fn: Callable[[], Any]) -> Future:
        future: Future = Future()
        self.jobs.append((fn, future))
        return future

    def run_all(self) -> None:
        while self.jobs:
            fn, future = self.jobs.pop(0)
            try:
                future.set_result(fn())
            except Exception as exc:
                future.set_exception(exc)


class FakeClient:
    base_url = "https://tracker.test"

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.responses: Dict[str, Any] = {}

    def call(self, name: str, form: Optional[Dict[str, Any]] = None) -> CallResult:
        self.calls.append((name, dict(form or {})))
        response = self.responses.get(name, '{"message": "ok"}')
        if isinstance(response, Exception):
            raise response
        if isinstance(response, CallResult):
            return response
        return CallResult(ok=True, body=response)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def runner():
    return ManualRunner()


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def clock():
    return {"now": 1000.0}


@pytest.fixture
def controller(client, runner, clock):
    return TrackerController(CallDispatcher(client, runner), clock=lambda: clock["now"])


@pytest.fixture
def logged_in(controller, client, runner):
    """Controller past the login screen with three tracks listed."""
    client.responses["login"] = '{"behavior": "AUTHENTICATION", "username": "alice", "uid": 7}'
    client.responses["account"] = (
        '{"behavior": "ACCOUNT", "tracks": [{"track": "a", "seconds": 1},'
        ' {"track": "X", "seconds": 2}, {"track": "c", "seconds": 3}]}'
    )
    assert controller.login("alice", "secret")
    runner.run_all()
    controller.tick()
    runner.run_all()
    controller.tick()
    return controller
