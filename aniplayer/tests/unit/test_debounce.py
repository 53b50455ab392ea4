"""
Tests for the debouncer.
"""

import threading
import time

from aniplayer.application.library_manager import Debouncer

DELAY = 0.05


class _Counter:
    def __init__(self):
        self.count = 0
        self.fired = threading.Event()
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.count += 1
        self.fired.set()


class TestDebouncer:
    def test_burst_collapses_to_one_call(self):
        counter = _Counter()
        debouncer = Debouncer(counter, DELAY)

        for _ in range(10):
            debouncer.trigger()

        assert counter.fired.wait(2)
        time.sleep(DELAY * 4)
        assert counter.count == 1
        debouncer.close()

    def test_spaced_triggers_each_fire(self):
        counter = _Counter()
        debouncer = Debouncer(counter, DELAY)

        for expected in (1, 2, 3):
            counter.fired.clear()
            debouncer.trigger()
            assert counter.fired.wait(2)
            assert counter.count == expected

        debouncer.close()

    def test_cancel_drops_pending_call(self):
        counter = _Counter()
        debouncer = Debouncer(counter, DELAY)

        debouncer.trigger()
        assert debouncer.pending
        debouncer.cancel()

        assert not counter.fired.wait(DELAY * 4)
        assert not debouncer.pending
        debouncer.close()

    def test_closed_debouncer_ignores_triggers(self):
        counter = _Counter()
        debouncer = Debouncer(counter, DELAY)
        debouncer.trigger()

        debouncer.close()
        debouncer.trigger()

        assert not counter.fired.wait(DELAY * 4)
        assert counter.count == 0

    def test_close_waits_for_running_action(self):
        started = threading.Event()
        release = threading.Event()
        finished = []

        def slow_action():
            started.set()
            release.wait(2)
            finished.append(True)

        debouncer = Debouncer(slow_action, DELAY)
        debouncer.trigger()
        assert started.wait(2)

        closer = threading.Thread(target=debouncer.close)
        closer.start()
        time.sleep(DELAY)
        assert closer.is_alive()

        release.set()
        closer.join(2)
        assert finished == [True]

    def test_action_errors_are_contained(self):
        counter = _Counter()
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            counter()

        debouncer = Debouncer(flaky, DELAY)
        debouncer.trigger()
        time.sleep(DELAY * 4)
        debouncer.trigger()

        assert counter.fired.wait(2)
        debouncer.close()
