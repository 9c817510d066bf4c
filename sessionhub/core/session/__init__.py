"""
Session Components

Records, the thread-keyed registry, grid URL derivation and driver release.
The lifecycle facade lives in ``sessionhub.core.session.manager``.
"""

from .grid import derive_grid_url, is_grid_enabled
from .record import SessionRecord
from .registry import SessionRegistry
from .release import release

__all__ = [
    'SessionRecord', 'SessionRegistry',
    'derive_grid_url', 'is_grid_enabled', 'release',
]
