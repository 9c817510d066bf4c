import pytest

from helpers import FakeDriver
from sessionhub import ReleaseFailure, release


def test_release_quits_driver():
    driver = FakeDriver()
    release(driver)
    assert driver.quit_calls == 1


def test_release_none_is_a_noop():
    release(None)


def test_release_failure_is_reported():
    driver = FakeDriver(fail_quit=True)

    with pytest.raises(ReleaseFailure) as exc_info:
        release(driver)

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.failures == [exc_info.value.__cause__]
