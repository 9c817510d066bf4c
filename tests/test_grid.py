import pytest

from helpers import FakeDriver
from sessionhub import SessionRecord, derive_grid_url, is_grid_enabled


@pytest.mark.parametrize("host,expected", [
    ("supergrid-east.example.com", True),
    ("eu.supergrid.example.com", True),
    ("local-hub.example.com", False),
    ("", False),
    (None, False),
])
def test_is_grid_enabled(host, expected):
    assert is_grid_enabled(host) is expected


def test_custom_marker():
    assert is_grid_enabled("megagrid.example.com", marker="megagrid")
    assert not is_grid_enabled("supergrid.example.com", marker="megagrid")


def test_derive_grid_url_for_supergrid():
    url = derive_grid_url("supergrid-east.example.com", "abc-123", grid_enabled=True)
    assert url == "https://supergrid-east.example.com/grid/resources?sessionId=abc-123"


def test_no_url_without_session_id():
    assert derive_grid_url("supergrid-east.example.com", None, grid_enabled=True) is None


def test_no_url_when_not_grid_enabled():
    assert derive_grid_url("local-hub.example.com", "abc-123", grid_enabled=False) is None


class TestSessionRecord:
    def test_build_remote_record_on_grid(self):
        driver = FakeDriver(session_id="abc-123")
        record = SessionRecord.build(driver, "supergrid-east.example.com", grid_enabled=True)

        assert record.driver is driver
        assert record.session_id == "abc-123"
        assert record.grid_url == "https://supergrid-east.example.com/grid/resources?sessionId=abc-123"
        assert record.is_remote

    def test_build_remote_record_without_grid(self):
        record = SessionRecord.build(FakeDriver(session_id="abc-123"), "local-hub.example.com", grid_enabled=False)

        assert record.session_id == "abc-123"
        assert record.grid_url is None

    def test_build_local_record(self):
        record = SessionRecord.build(FakeDriver(), "supergrid-east.example.com", grid_enabled=True)

        assert record.session_id is None
        assert record.grid_url is None
        assert not record.is_remote

    def test_record_is_immutable(self):
        record = SessionRecord.build(FakeDriver(session_id="abc-123"))
        with pytest.raises(AttributeError):
            record.session_id = "other"
