"""
One keyboard session: everything the keyboard needs between showing and hiding its view.
"""
import asyncio
import logging
from typing import Optional

import httpx

from rescriber import status
from rescriber.adapter import InputConnection, TextBufferAdapter
from rescriber.client import RedactionClient
from rescriber.config import Settings, get_settings
from rescriber.coordinator import RedactionCoordinator
from rescriber.keyboard import KeyEventHandler
from rescriber.status import StatusView

logger = logging.getLogger(__name__)


class KeyboardSession:
    """
    Owns the client, adapter, coordinator and key handler for one session.

    Usage:
        session = KeyboardSession(view)
        session.start_input(connection)
        session.on_key(ord("h"))
        task = session.on_redact_pressed()
    """

    def __init__(
        self,
        view: StatusView,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.settings = settings or get_settings()
        self.view = view
        self.client = RedactionClient(self.settings, transport=transport, async_transport=async_transport)
        self.adapter = TextBufferAdapter(lookback_chars=self.settings.lookback_chars)
        self.coordinator = RedactionCoordinator(self.client, self.adapter, view, loop=loop)
        self.keys = KeyEventHandler(
            self.adapter,
            view,
            status_reset_delay=self.settings.status_reset_delay,
            loop=loop,
        )

        view.set_trigger_enabled(True, status.TRIGGER_LABEL)
        view.show_status(status.READY)
        logger.debug("Keyboard session created for %s", self.client.url)

    def start_input(self, connection: InputConnection):
        """Host text field gained focus."""
        self.adapter.attach(connection)

    def finish_input(self):
        """Host text field lost focus."""
        self.adapter.detach()

    def on_key(self, code: int):
        self.keys.on_key(code)

    def on_text(self, text: Optional[str]):
        self.keys.on_text(text)

    def on_redact_pressed(self) -> Optional[asyncio.Task]:
        return self.coordinator.on_trigger()
