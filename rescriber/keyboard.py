"""
Key event handling for the soft keyboard.

Translates primary key codes from the keyboard view into edits on the host
connection and keyboard state changes (shift, symbols layout).
"""
import asyncio
import logging
from typing import Optional

from rescriber import status
from rescriber.adapter import TextBufferAdapter
from rescriber.status import StatusView

logger = logging.getLogger(__name__)

KEYCODE_SHIFT = -1
KEYCODE_MODE_CHANGE = -2
KEYCODE_DONE = -4
KEYCODE_DELETE = -5
KEYCODE_ALT_MODE_CHANGE = -10

LAYOUT_QWERTY = "qwerty"
LAYOUT_SYMBOLS = "symbols"


class KeyEventHandler:
    """Applies key presses to the host connection held by the adapter."""

    def __init__(
        self,
        adapter: TextBufferAdapter,
        view: StatusView,
        status_reset_delay: float = 1.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.adapter = adapter
        self.view = view
        self.status_reset_delay = status_reset_delay
        self._loop = loop
        self.shifted = False
        self.layout = LAYOUT_QWERTY

    def on_key(self, code: int):
        """Handle one key press identified by its primary code."""
        connection = self.adapter.connection
        if connection is None:
            logger.warning("No input connection available")
            return

        if code == KEYCODE_DELETE:
            connection.delete_before_cursor(1)
        elif code == KEYCODE_SHIFT:
            self.shifted = not self.shifted
        elif code in (KEYCODE_MODE_CHANGE, KEYCODE_ALT_MODE_CHANGE):
            self.layout = LAYOUT_QWERTY if self.layout == LAYOUT_SYMBOLS else LAYOUT_SYMBOLS
        elif code == KEYCODE_DONE:
            self._send(connection)
        else:
            char = self._to_char(code)
            if char is None:
                logger.warning("Ignoring unknown key code %d", code)
                return
            connection.commit_text(char.upper() if self.shifted else char)

    def on_text(self, text: Optional[str]):
        """Commit a whole string (e.g. from a multi-character key)."""
        connection = self.adapter.connection
        if connection is None:
            logger.warning("No input connection available")
            return
        connection.commit_text(text or "")

    def _send(self, connection):
        logger.debug("Enter pressed - sending message")
        self.view.show_status(status.SENDING)
        connection.send_enter()

        loop = self._loop or self._running_loop()
        if loop is not None:
            loop.call_later(self.status_reset_delay, self.view.show_status, status.READY)

    @staticmethod
    def _to_char(code: int) -> Optional[str]:
        if code < 0 or code > 0x10FFFF:
            return None
        char = chr(code)
        return char if char.isprintable() else None

    @staticmethod
    def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None
