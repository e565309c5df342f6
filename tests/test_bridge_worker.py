"""Tests for the thread-pool runner that executes bridge calls"""

import logging
import threading
import time

import pytest
from PySide6.QtCore import QCoreApplication, QThreadPool

from ui.workers.bridge_worker import BridgeRunner


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate() and time.monotonic() < deadline:
        QCoreApplication.processEvents()
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def bridge_runner(qapp):
    pool = QThreadPool()
    runner = BridgeRunner(pool=pool)
    yield runner
    pool.waitForDone(5000)
    QCoreApplication.processEvents()


class TestBridgeRunner:
    def test_result_reaches_callback_on_gui_thread(self, bridge_runner):
        main_thread = threading.get_ident()
        results = []

        def work(x):
            return x * 2, threading.get_ident()

        bridge_runner.submit(work, 21, on_result=lambda r: results.append((r, threading.get_ident())))

        assert _wait_for(lambda: results)
        (value, worker_thread), callback_thread = results[0]
        assert value == 42
        assert worker_thread != main_thread
        assert callback_thread == main_thread
        assert bridge_runner._pending == {}

    def test_error_reaches_error_callback_on_gui_thread(self, bridge_runner):
        main_thread = threading.get_ident()
        errors = []

        bridge_runner.submit(
            lambda: 1 / 0,
            on_result=lambda r: pytest.fail("unexpected result"),
            on_error=lambda e: errors.append((type(e), threading.get_ident())),
        )

        assert _wait_for(lambda: errors)
        assert errors == [(ZeroDivisionError, main_thread)]
        assert bridge_runner._pending == {}

    def test_error_without_callback_is_logged(self, bridge_runner, caplog):
        with caplog.at_level(logging.ERROR):
            bridge_runner.submit(lambda: 1 / 0)
            assert _wait_for(lambda: not bridge_runner._pending)

        assert "Bridge call failed" in caplog.text

    def test_calls_get_distinct_ids(self, bridge_runner):
        done = []
        first = bridge_runner.submit(lambda: "a", on_result=done.append)
        second = bridge_runner.submit(lambda: "b", on_result=done.append)

        assert first != second
        assert _wait_for(lambda: len(done) == 2)
        assert sorted(done) == ["a", "b"]
