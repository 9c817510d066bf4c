"""Driver shutdown."""

import logging
from typing import Any

from ...errors import ReleaseFailure

logger = logging.getLogger(__name__)


def release(driver: Any) -> None:
    """
    Ask the automation engine to terminate a driver session.

    Args:
        driver: Live driver handle; None is ignored

    Raises:
        ReleaseFailure: The engine failed to terminate the session
    """
    if driver is None:
        return

    logger.debug(f"Quitting driver {type(driver).__name__}")
    try:
        driver.quit()
    except Exception as e:
        raise ReleaseFailure(f"Failed to terminate driver session: {e}", [e]) from e
    logger.info("🧹 Driver session terminated")
