"""
Rescan scheduler tests
"""

import threading
import time

import pytest

from fusemods.lib.board import BoardDecorator
from fusemods.lib.document import document_parse
from fusemods.lib.scheduler import RescanHandle, rescan_schedule


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestRescanHandle:
    """Periodic execution until cancelled"""

    def test_runs_repeatedly(self):
        calls = []
        handle = rescan_schedule(lambda: calls.append(1), interval=0.01)
        try:
            assert wait_for(lambda: len(calls) >= 3)
        finally:
            handle.cancel()

    def test_stops_after_cancel(self):
        calls = []
        handle = rescan_schedule(lambda: calls.append(1), interval=0.01)
        assert wait_for(lambda: len(calls) >= 1)
        handle.cancel()

        time.sleep(0.05)
        settled = len(calls)
        time.sleep(0.1)
        assert len(calls) == settled
        assert handle.cancelled

    def test_failing_task_keeps_schedule(self):
        calls = []

        def task():
            calls.append(1)
            raise RuntimeError("boom")

        handle = rescan_schedule(task, interval=0.01)
        try:
            assert wait_for(lambda: len(calls) >= 2)
        finally:
            handle.cancel()

    def test_context_manager_cancels(self):
        with RescanHandle(lambda: None, 0.01).start() as handle:
            pass
        assert handle.cancelled

    @pytest.mark.parametrize("interval", [0, -1])
    def test_interval_must_be_positive(self, interval):
        with pytest.raises(ValueError, match="positive"):
            RescanHandle(lambda: None, interval)

    def test_default_interval_from_settings(self):
        handle = rescan_schedule(lambda: None)
        handle.cancel()
        assert handle.interval == 0.5

    def test_cancel_before_first_tick(self):
        ran = threading.Event()
        handle = rescan_schedule(ran.set, interval=0.05)
        handle.cancel()
        assert not ran.wait(0.15)


class TestPeriodicDecoration:
    """Rescanning picks up containers added after the first pass"""

    def test_new_message_decorated(self):
        doc = document_parse('<div id="board"><div class="message">&1first</div></div>')
        decorator = BoardDecorator()
        lock = threading.Lock()

        def rescan():
            with lock:
                decorator.messages_format(doc)

        with rescan_schedule(rescan, interval=0.01):
            assert wait_for(lambda: len(doc.elements_findByClass("message-formatted")) == 1)

            with lock:
                late = document_parse('<div class="message">&2second</div>').children[0]
                doc.element_findById("board").child_append(late)

            assert wait_for(lambda: len(doc.elements_findByClass("message-formatted")) == 2)

        assert '<span class="message-color-2">second</span>' in doc.html_render()
