# ui/workers/bridge_worker.py
from __future__ import annotations

import itertools
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

logger = logging.getLogger(__name__)


class BridgeSignals(QObject):
    succeeded = Signal(int, object)   # call_id, result
    failed = Signal(int, object)      # call_id, exception


class BridgeCall(QRunnable):
    def __init__(self, call_id: int, fn, args, signals: BridgeSignals):
        super().__init__()
        self.call_id = call_id
        self.fn = fn
        self.args = args
        self.signals = signals

    @Slot()
    def run(self):
        try:
            result = self.fn(*self.args)
        except Exception as e:
            self.signals.failed.emit(self.call_id, e)
            return
        self.signals.succeeded.emit(self.call_id, result)


class BridgeRunner(QObject):
    """
    Runs bridge operations on a thread pool and hands the result back on the
    GUI thread (signals are queued to this object, which lives there).
    """

    def __init__(self, pool: QThreadPool | None = None, parent=None):
        super().__init__(parent)
        self.pool = pool or QThreadPool.globalInstance()
        self._ids = itertools.count(1)
        self._pending: dict[int, tuple] = {}   # call_id -> (signals, on_result, on_error)

    def submit(self, fn, *args, on_result=None, on_error=None) -> int:
        call_id = next(self._ids)
        signals = BridgeSignals()
        signals.succeeded.connect(self._on_succeeded)
        signals.failed.connect(self._on_failed)
        self._pending[call_id] = (signals, on_result, on_error)

        self.pool.start(BridgeCall(call_id, fn, args, signals))
        return call_id

    @Slot(int, object)
    def _on_succeeded(self, call_id: int, result):
        entry = self._pending.pop(call_id, None)
        if entry is None:
            return
        _signals, on_result, _on_error = entry
        if on_result is not None:
            on_result(result)

    @Slot(int, object)
    def _on_failed(self, call_id: int, error):
        entry = self._pending.pop(call_id, None)
        if entry is None:
            return
        _signals, _on_result, on_error = entry
        if on_error is not None:
            on_error(error)
        else:
            logger.error("Bridge call failed: %s", error, exc_info=error)
