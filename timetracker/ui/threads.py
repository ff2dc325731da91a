from concurrent.futures import Future
from typing import Any, Callable

from PySide6.QtCore import QRunnable, QThread, QThreadPool, Slot

from ..utils import get_logger


class Worker(QRunnable):
    def __init__(self, fn: Callable[[], Any], future: Future) -> None:
        super().__init__()
        self.fn = fn
        self.future = future
        self.logger = get_logger("timetracker.qt")

    @Slot()
    def run(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        self.logger.debug("Worker start thread=%s", QThread.currentThread())
        try:
            result = self.fn()
        except Exception as exc:
            self.logger.debug("Worker error thread=%s exc=%s", QThread.currentThread(), exc)
            self.future.set_exception(exc)
        else:
            self.logger.debug("Worker result thread=%s", QThread.currentThread())
            self.future.set_result(result)
        finally:
            self.logger.debug("Worker finished thread=%s", QThread.currentThread())


class TaskRunner:
    """Runs callables on the Qt thread pool and hands back a Future.

    The frame loop polls the Future; nothing is pushed back into the GUI thread.
    """

    def __init__(self) -> None:
        self.pool = QThreadPool.globalInstance()
        self.logger = get_logger("timetracker.qt")
        self._workers = set()

    def submit(self, fn: Callable[[], Any]) -> Future:
        future: Future = Future()
        worker = Worker(fn, future)
        self._workers.add(worker)
        future.add_done_callback(lambda _f: self._workers.discard(worker))
        self.logger.debug("TaskRunner start worker thread=%s", QThread.currentThread())
        self.pool.start(worker)
        return future

    def wait(self, msecs: int = -1) -> bool:
        return self.pool.waitForDone(msecs)
