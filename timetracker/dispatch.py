import itertools
from concurrent.futures import Future
from functools import partial
from typing import Any, Callable, Protocol

from .client import TrackerClient
from .models import CallResult
from .utils import get_logger


class Runner(Protocol):
    def submit(self, fn: Callable[[], Any]) -> Future: ...


class PendingCall:
    """Handle on one in-flight request.

    ``ready()`` never blocks; ``take()`` hands the result out exactly once.
    """

    def __init__(self, request_id: int, label: str, epoch: int, future: Future) -> None:
        self.request_id = request_id
        self.label = label
        self.epoch = epoch
        self._future = future
        self._taken = False

    def ready(self) -> bool:
        return self._future.done()

    @property
    def taken(self) -> bool:
        return self._taken

    def take(self) -> CallResult:
        if self._taken:
            raise RuntimeError(f"Result of {self.label} #{self.request_id} already taken")
        if not self._future.done():
            raise RuntimeError(f"{self.label} #{self.request_id} is still running")
        self._taken = True
        exc = self._future.exception()
        if exc is not None:
            return CallResult(ok=False, body=str(exc) or type(exc).__name__)
        return self._future.result()


class CallDispatcher:
    def __init__(self, client: TrackerClient, runner: Runner) -> None:
        self.client = client
        self.runner = runner
        self.logger = get_logger("timetracker")
        self._ids = itertools.count(1)

    def dispatch(self, fn: Callable[..., CallResult], *args: Any, epoch: int = 0) -> PendingCall:
        request_id = next(self._ids)
        label = getattr(fn, "__name__", "call")
        self.logger.debug("Dispatch %s #%d epoch=%d", label, request_id, epoch)
        future = self.runner.submit(partial(fn, self.client, *args))
        return PendingCall(request_id, label, epoch, future)
