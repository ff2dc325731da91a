import pytest

from timetracker import api
from timetracker.dispatch import CallDispatcher


def test_call_runs_on_runner_and_is_taken_once(client, runner):
    dispatcher = CallDispatcher(client, runner)
    call = dispatcher.dispatch(api.count, 7, "work", epoch=3)

    assert call.label == "count"
    assert call.epoch == 3
    assert not call.ready()
    with pytest.raises(RuntimeError):
        call.take()

    runner.run_all()
    assert call.ready()
    result = call.take()
    assert result.ok is True
    assert call.taken
    with pytest.raises(RuntimeError):
        call.take()


def test_request_ids_increase(client, runner):
    dispatcher = CallDispatcher(client, runner)
    first = dispatcher.dispatch(api.version)
    second = dispatcher.dispatch(api.version)
    assert second.request_id == first.request_id + 1


def test_dispatch_starts_immediately(client, runner):
    CallDispatcher(client, runner).dispatch(api.delete, 7, "X")
    assert len(runner.jobs) == 1
