"""
Browser Components

Driver construction and event hooks.
"""

from .events import EventConfig, EventFiringDriver, EventHandler
from .factory import BrowserConfig, BrowserFactory, DriverFactory, PlaywrightDriver

__all__ = [
    'BrowserConfig', 'BrowserFactory', 'DriverFactory', 'PlaywrightDriver',
    'EventConfig', 'EventFiringDriver', 'EventHandler',
]
