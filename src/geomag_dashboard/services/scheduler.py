"""
Auto-refresh scheduling service.
"""

import asyncio
import logging
from typing import Callable, Optional


class AutoRefreshScheduler:
    """
    Owns at most one pending refresh timer.

    Arming always replaces the pending timer, so there is never more than
    one refresh scheduled.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scheduler.

        Args:
            loop: Event loop for timers. Defaults to the running loop at arm time
            logger: Logger instance
        """
        self._loop = loop
        self.logger = logger or logging.getLogger(__name__)
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def armed(self) -> bool:
        """True while a timer is pending."""
        return self._handle is not None

    def arm(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """
        Schedule callback after delay_ms, replacing any pending timer.

        Args:
            delay_ms: Delay in milliseconds
            callback: Called once when the timer fires
        """
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = loop.call_later(delay_ms / 1000.0, fire)
        self.logger.debug(f"Auto-refresh armed for {delay_ms} ms")

    def cancel(self) -> None:
        """Cancel the pending timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            self.logger.debug("Auto-refresh cancelled")
