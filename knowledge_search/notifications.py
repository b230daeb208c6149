"""Transient status line shown in the page header.

A single slot: a new message replaces the current one. Every message bumps a
token, and an auto-clear timer only fires if its token is still current, so a
timer left over from an older message never erases a newer one.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class StatusNotifier:
    """Single-slot, self-clearing status message."""

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self.message: str = ""
        self._tokens = itertools.count(1)
        self._token = 0
        self._timer: asyncio.TimerHandle | None = None
        self._on_change = on_change

    @property
    def token(self) -> int:
        return self._token

    def show(self, text: str, duration: float | None = None) -> int:
        """Display a message.

        Args:
            text: Message to display.
            duration: Seconds until the message clears itself. None keeps it
                until it is replaced or cleared.

        Returns:
            Token identifying this message.
        """
        self.cancel()
        self._token = next(self._tokens)
        self.message = text

        if duration is not None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug(f"No running event loop; status {text!r} will not auto-clear")
            else:
                self._timer = loop.call_later(duration, self.clear, self._token)

        self._notify()
        return self._token

    def clear(self, token: int | None = None) -> bool:
        """Clear the message.

        Args:
            token: Only clear if this is still the current message's token.
                None clears unconditionally.

        Returns:
            True if the message was cleared.
        """
        if token is not None and token != self._token:
            return False
        self.cancel()
        self.message = ""
        self._notify()
        return True

    def cancel(self) -> None:
        """Drop the pending auto-clear timer, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
