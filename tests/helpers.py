"""Test doubles shared by the unit tests."""

import itertools
import threading

_ids = itertools.count(1)


class FakeDriver:
    """Stands in for a live driver; records implicit wait and quit calls."""

    def __init__(self, session_id=None, capabilities=None, fail_quit=False):
        self.session_id = session_id
        self.capabilities = dict(capabilities or {})
        self.fail_quit = fail_quit
        self.implicit_wait = None
        self.quit_calls = 0

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds

    def quit(self):
        self.quit_calls += 1
        if self.fail_quit:
            raise RuntimeError("engine refused to quit")


class FakeFactory:
    """Driver factory that hands out FakeDrivers and remembers every call."""

    def __init__(self):
        self.created = []
        self.remote_calls = []
        self.fail_with = None
        self.fail_quit = False
        self._lock = threading.Lock()

    def create(self, capabilities):
        if self.fail_with:
            raise self.fail_with
        driver = FakeDriver(capabilities=capabilities, fail_quit=self.fail_quit)
        with self._lock:
            self.created.append(driver)
        return driver

    def connect_remote(self, url, capabilities):
        if self.fail_with:
            raise self.fail_with
        driver = FakeDriver(session_id=f"remote-{next(_ids)}", capabilities=capabilities, fail_quit=self.fail_quit)
        with self._lock:
            self.remote_calls.append(url)
            self.created.append(driver)
        return driver


def run_in_thread(fn, *args, **kwargs):
    """Run fn on a fresh thread and return its result, re-raising its error."""
    outcome = {}

    def target():
        try:
            outcome["result"] = fn(*args, **kwargs)
        except BaseException as e:
            outcome["error"] = e

    worker = threading.Thread(target=target)
    worker.start()
    worker.join(timeout=10)
    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("result")
