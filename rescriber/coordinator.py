"""
Request coordinator: turns a tap on the redact button into one redaction round trip.
"""
import asyncio
import logging
from enum import Enum
from typing import Optional

from rescriber import status
from rescriber.adapter import TextBufferAdapter
from rescriber.client import RedactionClient
from rescriber.outcomes import RequestOutcome
from rescriber.status import StatusView

logger = logging.getLogger(__name__)


class CoordinatorState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class RedactionCoordinator:
    """
    Single-flight controller between the redact button, the client and the host buffer.

    All state lives on the event loop thread that drives the keyboard UI:
    on_trigger() must be called there, completions are applied there.
    Other threads go through trigger_threadsafe().
    """

    def __init__(
        self,
        client: RedactionClient,
        adapter: TextBufferAdapter,
        view: StatusView,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.client = client
        self.adapter = adapter
        self.view = view
        self._loop = loop
        self._state = CoordinatorState.IDLE
        self._original: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state is CoordinatorState.PENDING

    def on_trigger(self) -> Optional[asyncio.Task]:
        """
        Handle one press of the redact button.

        Returns:
            The task running the round trip, or None if no request was started
        """
        if self._state is CoordinatorState.PENDING:
            logger.warning("Redaction already in progress, ignoring request")
            self.view.show_status(status.ALREADY_PROCESSING)
            return None

        original = self.adapter.capture_text()
        if not original.strip():
            logger.debug("No text to redact")
            self.view.show_status(status.NO_TEXT)
            return None

        loop = self._loop or asyncio.get_running_loop()
        self._state = CoordinatorState.PENDING
        self._original = original
        self.view.show_status(status.PROCESSING)
        self.view.set_trigger_enabled(False, status.TRIGGER_BUSY_LABEL)

        logger.debug("Redacting %d characters", len(original))
        self._task = loop.create_task(self._run(original))
        return self._task

    def trigger_threadsafe(self):
        """Schedule on_trigger() on the owning loop from any thread."""
        if self._loop is None:
            raise RuntimeError("trigger_threadsafe() needs a coordinator created with an explicit loop")
        self._loop.call_soon_threadsafe(self.on_trigger)

    async def wait_idle(self):
        """Wait until the outstanding round trip, if any, has been applied."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.shield(task)

    async def _run(self, original: str):
        try:
            outcome = await self.client.redact_async(original)
        except asyncio.CancelledError:
            logger.info("Redaction cancelled; buffer left untouched")
            self._finish()
            raise
        except Exception:
            logger.exception("Redaction round trip raised; buffer left untouched")
            self.view.show_status(status.FAILED)
            self._finish()
            return
        self.on_complete(outcome)

    def on_complete(self, outcome: RequestOutcome):
        """
        Apply the outcome of the outstanding request.

        A completion arriving while idle is logged and dropped.
        """
        if self._state is not CoordinatorState.PENDING:
            logger.warning("Ignoring redaction result received while idle")
            return

        original = self._original
        if outcome.ok:
            if self.adapter.replace(original, outcome.redacted_text):
                logger.debug("Text replaced with redacted version")
                self.view.show_status(status.COMPLETE)
            else:
                self.view.show_status(status.TEXT_CHANGED)
        else:
            logger.info("Redaction failed (%s): %s", outcome.kind.value, outcome.message)
            self.view.show_status(status.FAILED)
        self._finish()

    def _finish(self):
        self._state = CoordinatorState.IDLE
        self._original = None
        self.view.set_trigger_enabled(True, status.TRIGGER_LABEL)
