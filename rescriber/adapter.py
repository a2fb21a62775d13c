"""
Reads the pending message from the host text field and swaps in redacted text.
"""
import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_CHARS = 1000


class InputConnection(Protocol):
    """Editing operations the host text field exposes to the keyboard."""

    def text_before_cursor(self, n: int) -> Optional[str]:
        """Up to ``n`` characters immediately before the cursor."""

    def delete_before_cursor(self, n: int) -> None:
        """Delete ``n`` characters immediately before the cursor."""

    def commit_text(self, text: str) -> None:
        """Insert ``text`` at the cursor."""

    def send_enter(self) -> None:
        """Deliver an Enter key press to the host application."""


class TextBufferAdapter:
    """Text capture & replace over whichever host connection is attached."""

    def __init__(self, connection: Optional[InputConnection] = None, lookback_chars: int = DEFAULT_LOOKBACK_CHARS):
        self.connection = connection
        self.lookback_chars = lookback_chars

    def attach(self, connection: InputConnection):
        """Start editing a host text field."""
        self.connection = connection

    def detach(self):
        """The host text field went away."""
        self.connection = None

    def capture_text(self) -> str:
        """
        Text before the cursor, up to the lookback window.

        Returns:
            The captured text, or "" if no host connection is attached
        """
        if self.connection is None:
            logger.debug("No input connection; nothing to capture")
            return ""
        return self.connection.text_before_cursor(self.lookback_chars) or ""

    def replace(self, original: str, replacement: str) -> bool:
        """
        Replace ``original`` (just before the cursor) with ``replacement``.

        The buffer is re-read first; if it no longer ends with ``original``
        (the user kept typing, or the field changed) nothing is touched.

        Args:
            original: Text captured when the request was made
            replacement: Redacted text from the service

        Returns:
            True if the buffer was edited, False if it was left alone
        """
        if self.connection is None:
            logger.warning("Input connection lost before replacement")
            return False

        current = self.connection.text_before_cursor(len(original)) or ""
        if current != original:
            logger.warning("Text before cursor changed while redacting; leaving buffer untouched")
            return False

        self.connection.delete_before_cursor(len(original))
        self.connection.commit_text(replacement)
        return True
