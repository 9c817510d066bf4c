"""
Driver Factory

Produces live automation sessions from a capability mapping.

Local sessions run a Playwright browser owned by the calling thread (the
sync API binds its event loop to the thread that started it, which matches
the one-session-per-thread model). Remote sessions are W3C WebDriver
sessions opened on a grid through Selenium and carry a remote session id.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright
from selenium import webdriver

logger = logging.getLogger(__name__)

LOCAL_BROWSERS = ("chromium", "firefox", "webkit")

# Consumed by the factory itself; every other key is ignored locally and sent
# as-is to a remote grid.
LOCAL_CAPABILITY_KEYS = ("browserName", "headless", "viewport", "userAgent", "args")


class DriverFactory(Protocol):
    """Builds live driver handles."""

    def create(self, capabilities: Mapping[str, Any]) -> Any:
        ...

    def connect_remote(self, url: str, capabilities: Mapping[str, Any]) -> Any:
        ...


@dataclass
class BrowserConfig:
    """Configuration for local browser setup."""
    browser_name: str = "chromium"
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 720
    user_agent: Optional[str] = None
    args: List[str] = field(default_factory=lambda: ['--no-sandbox', '--disable-dev-shm-usage'])

    @classmethod
    def from_capabilities(cls, capabilities: Mapping[str, Any], defaults: Optional["BrowserConfig"] = None) -> "BrowserConfig":
        """Overlay capability values on top of the factory defaults."""
        base = defaults or cls()
        viewport = capabilities.get("viewport") or {}
        browser_name = str(capabilities.get("browserName") or base.browser_name).lower()
        if browser_name in ("chrome", "msedge", "edge"):
            browser_name = "chromium"
        return cls(
            browser_name=browser_name,
            headless=bool(capabilities.get("headless", base.headless)),
            viewport_width=int(viewport.get("width", base.viewport_width)),
            viewport_height=int(viewport.get("height", base.viewport_height)),
            user_agent=capabilities.get("userAgent", base.user_agent),
            args=list(capabilities.get("args", base.args)),
        )


class PlaywrightDriver:
    """
    Local browser session handle.

    Owns the Playwright instance, browser, context and page it was built
    with. Local engines have no remote session id.
    """

    session_id = None

    def __init__(self, playwright: Playwright, browser: Browser, context: BrowserContext, page: Page):
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self._closed = False

    def implicitly_wait(self, seconds: float) -> None:
        """Apply an element lookup timeout, mirroring WebDriver semantics."""
        timeout_ms = seconds * 1000
        self.context.set_default_timeout(timeout_ms)
        self.page.set_default_timeout(timeout_ms)

    def get(self, url: str) -> None:
        self.page.goto(url)

    @property
    def current_url(self) -> str:
        return self.page.url

    @property
    def title(self) -> str:
        return self.page.title()

    def quit(self) -> None:
        """
        Close the page, context and browser, then stop Playwright.

        Every step is attempted; the first error is re-raised once all of
        them have run.
        """
        if self._closed:
            return
        self._closed = True

        first_error: Optional[Exception] = None
        for step in (self.page.close, self.context.close, self.browser.close, self.playwright.stop):
            try:
                step()
            except Exception as e:
                logger.warning(f"Error during browser cleanup: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error


class BrowserFactory:
    """Default factory: Playwright locally, Selenium against a grid."""

    def __init__(self, defaults: Optional[BrowserConfig] = None):
        self.defaults = defaults or BrowserConfig()

    def create(self, capabilities: Mapping[str, Any]) -> PlaywrightDriver:
        """Launch a local browser for the calling thread."""
        config = BrowserConfig.from_capabilities(capabilities, self.defaults)
        if config.browser_name not in LOCAL_BROWSERS:
            raise ValueError(f"Unsupported local browser '{config.browser_name}', expected one of {LOCAL_BROWSERS}")

        logger.info(f"🚀 Launching local {config.browser_name} (headless={config.headless})")
        playwright = sync_playwright().start()
        try:
            browser_type = getattr(playwright, config.browser_name)
            launch_args = config.args if config.browser_name == "chromium" else []
            browser = browser_type.launch(headless=config.headless, args=launch_args)
            context_options: Dict[str, Any] = {
                'viewport': {'width': config.viewport_width, 'height': config.viewport_height},
            }
            if config.user_agent:
                context_options['user_agent'] = config.user_agent
            context = browser.new_context(**context_options)
            page = context.new_page()
        except Exception:
            playwright.stop()
            raise
        return PlaywrightDriver(playwright, browser, context, page)

    def connect_remote(self, url: str, capabilities: Mapping[str, Any]) -> webdriver.Remote:
        """Open a WebDriver session on a remote grid endpoint."""
        options = build_remote_options(capabilities)
        logger.info(f"🌐 Connecting to remote grid at {url} ({options.capabilities.get('browserName')})")
        return webdriver.Remote(command_executor=url, options=options)


def build_remote_options(capabilities: Mapping[str, Any]):
    """
    Translate a capability mapping into Selenium browser options.

    ``browserName`` selects the options class; every other key outside
    ``LOCAL_CAPABILITY_KEYS`` is passed through with ``set_capability``.
    """
    browser_name = str(capabilities.get("browserName") or "chrome").lower()
    if browser_name in ("chrome", "chromium"):
        options = webdriver.ChromeOptions()
    elif browser_name == "firefox":
        options = webdriver.FirefoxOptions()
    elif browser_name in ("edge", "msedge", "microsoftedge"):
        options = webdriver.EdgeOptions()
    elif browser_name == "safari":
        options = webdriver.SafariOptions()
    else:
        raise ValueError(f"Unsupported remote browser '{browser_name}'")

    if capabilities.get("headless") and hasattr(options, "add_argument"):
        options.add_argument("--headless")

    for key, value in capabilities.items():
        if key in LOCAL_CAPABILITY_KEYS:
            continue
        options.set_capability(key, value)
    return options
