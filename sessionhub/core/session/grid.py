"""Grid resource URL derivation for supergrid deployments."""

from typing import Optional

DEFAULT_GRID_MARKER = "supergrid"
GRID_RESOURCE_TEMPLATE = "https://{host}/grid/resources?sessionId={session_id}"


def is_grid_enabled(host: Optional[str], marker: str = DEFAULT_GRID_MARKER) -> bool:
    """A deployment is grid-enabled when its host contains the grid marker."""
    if not host or not marker:
        return False
    return marker in host


def derive_grid_url(host: Optional[str], session_id: Optional[str], grid_enabled: bool) -> Optional[str]:
    """
    Build the per-session grid resource URL.

    Args:
        host: Configured grid hostname
        session_id: Remote session identifier, None for local engines
        grid_enabled: Whether the deployment exposes per-session resources

    Returns:
        ``https://{host}/grid/resources?sessionId={id}`` or None
    """
    if not grid_enabled or not host or not session_id:
        return None
    return GRID_RESOURCE_TEMPLATE.format(host=host, session_id=session_id)
