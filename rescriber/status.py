"""
Status line and redact button of the keyboard view.
"""
from typing import Protocol

READY = "Type your message..."
NO_TEXT = "No text to redact"
PROCESSING = "Rescriber 2.0 processing..."
ALREADY_PROCESSING = "Already processing..."
COMPLETE = "Rescriber 2.0 complete! Press Enter to send."
FAILED = "Rescriber 2.0 failed. Try again."
TEXT_CHANGED = "Text changed while redacting. Try again."
SENDING = "Sending message..."

TRIGGER_LABEL = "Rescriber 2.0 Redaction"
TRIGGER_BUSY_LABEL = "Processing..."


class StatusView(Protocol):
    """Where the keyboard shows progress to the user."""

    def show_status(self, message: str) -> None:
        ...

    def set_trigger_enabled(self, enabled: bool, label: str) -> None:
        ...


class LoggingStatusView:
    """StatusView that records what would be shown and logs it."""

    def __init__(self, logger):
        self.logger = logger
        self.message = ""
        self.trigger_enabled = True
        self.trigger_label = TRIGGER_LABEL

    def show_status(self, message: str) -> None:
        self.message = message
        self.logger.info("Status: %s", message)

    def set_trigger_enabled(self, enabled: bool, label: str) -> None:
        self.trigger_enabled = enabled
        self.trigger_label = label
