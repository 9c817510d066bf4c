"""Capability helpers."""

from typing import Any, Dict, Mapping, Optional

USER_CAPABILITY = "sessionhub:user"
VIEW_ONLY_USER = "view-only"


def with_user(capabilities: Optional[Mapping[str, Any]], user_tag: str) -> Dict[str, Any]:
    """Return a copy of the capabilities carrying the given user identity."""
    if not user_tag:
        raise ValueError("user_tag must be a non-empty string")
    merged = dict(capabilities or {})
    merged[USER_CAPABILITY] = user_tag
    return merged
