import pytest

from sessionhub import USER_CAPABILITY, VIEW_ONLY_USER, with_user


def test_with_user_copies_and_tags():
    caps = {"browserName": "chrome"}
    tagged = with_user(caps, VIEW_ONLY_USER)

    assert tagged == {"browserName": "chrome", USER_CAPABILITY: VIEW_ONLY_USER}
    assert USER_CAPABILITY not in caps


def test_with_user_accepts_none():
    assert with_user(None, "auditor") == {USER_CAPABILITY: "auditor"}


def test_with_user_requires_tag():
    with pytest.raises(ValueError):
        with_user({}, "")
