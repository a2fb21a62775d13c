"""
Client for the remote redaction service.

Both call forms post ``{"text": ...}`` to ``{base_url}/redact`` and resolve
every possible result into a single RequestOutcome.
"""
import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional, Tuple

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from rescriber import metrics
from rescriber.config import Settings, get_settings
from rescriber.outcomes import Failure, FailureKind, RequestOutcome, Success
from rescriber.schemas import RedactionRequest, RedactionResponse

logger = logging.getLogger(__name__)


class RedactionClient:
    """
    Sends text to the redaction service and returns the redacted version.

    A fresh httpx client is opened for every call, so instances carry no
    state between requests and can be shared freely.

    Usage:
        client = RedactionClient()
        outcome = await client.redact_async("email me at jane@example.com")
        if outcome.ok:
            print(outcome.redacted_text)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Keyboard settings (defaults to the global settings)
            transport: Transport for the blocking form; defaults to an
                HTTPTransport that retries failed connects
            async_transport: Transport for the async form; defaults to
                ``transport`` when it also supports async, otherwise to an
                AsyncHTTPTransport that retries failed connects
        """
        self.settings = settings or get_settings()
        self.url = self.settings.redact_url
        self.timeout = httpx.Timeout(self.settings.timeout_seconds)
        self.headers = {
            "Content-Type": "application/json",
            "User-Agent": self.settings.user_agent,
        }
        self._transport = transport
        if async_transport is None and isinstance(transport, httpx.AsyncBaseTransport):
            async_transport = transport
        self._async_transport = async_transport

    def redact(self, text: str) -> RequestOutcome:
        """
        Blocking redaction call. Keep it off the thread that drives the keyboard UI.

        The POST runs on a worker thread so the whole call, not only each
        network phase, is bounded by the configured timeout.

        Args:
            text: Message body to redact

        Returns:
            Success with the redacted text, or a classified Failure
        """
        body, invalid = self._prepare(text)
        if invalid is not None:
            return self._finish(invalid)

        logger.debug("Sending %d characters to %s", len(text), self.url)
        started = time.monotonic()

        client = httpx.Client(transport=self._sync_transport(), timeout=self.timeout)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rescriber-redact")
        try:
            future = executor.submit(client.post, self.url, content=body, headers=self.headers)
            response = future.result(timeout=self.settings.timeout_seconds)
        except (httpx.TimeoutException, FutureTimeoutError):
            outcome = self._timeout_failure()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            outcome = self._network_failure(e)
        else:
            outcome = self._resolve(response)
        finally:
            # a timed-out worker is abandoned; closing the client drops its connection
            client.close()
            executor.shutdown(wait=False)

        return self._finish(outcome, time.monotonic() - started)

    async def redact_async(self, text: str) -> RequestOutcome:
        """
        Non-blocking redaction call with the same semantics as redact().

        The whole call, not only each network phase, is bounded by the
        configured timeout.
        """
        body, invalid = self._prepare(text)
        if invalid is not None:
            return self._finish(invalid)

        logger.debug("Sending %d characters to %s", len(text), self.url)
        started = time.monotonic()

        try:
            async with httpx.AsyncClient(transport=self._async_transport_for_call(), timeout=self.timeout) as client:
                response = await asyncio.wait_for(
                    client.post(self.url, content=body, headers=self.headers),
                    timeout=self.settings.timeout_seconds,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            outcome = self._timeout_failure()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            outcome = self._network_failure(e)
        else:
            outcome = self._resolve(response)

        return self._finish(outcome, time.monotonic() - started)

    def _sync_transport(self) -> httpx.BaseTransport:
        if self._transport is not None:
            return self._transport
        return httpx.HTTPTransport(retries=self.settings.retries_on_connect_failure)

    def _async_transport_for_call(self) -> httpx.AsyncBaseTransport:
        if self._async_transport is not None:
            return self._async_transport
        return httpx.AsyncHTTPTransport(retries=self.settings.retries_on_connect_failure)

    def _prepare(self, text: str) -> Tuple[Optional[str], Optional[Failure]]:
        """Validate and serialize the request body, or explain why it cannot be sent."""
        invalid = self._check_input(text)
        if invalid is not None:
            return None, invalid
        try:
            return RedactionRequest(text=text).model_dump_json(), None
        except PydanticSerializationError as e:
            logger.warning("Text could not be encoded for the request")
            return None, Failure(FailureKind.INVALID_INPUT, str(e))

    @staticmethod
    def _check_input(text: str) -> Optional[Failure]:
        if not text or not text.strip():
            logger.warning("Empty text provided for redaction")
            return Failure(FailureKind.INVALID_INPUT, "text cannot be empty")
        return None

    def _timeout_failure(self) -> Failure:
        return Failure(
            FailureKind.NETWORK_TIMEOUT,
            f"request timed out after {self.settings.timeout_seconds:g}s",
        )

    @staticmethod
    def _network_failure(error: Exception) -> Failure:
        logger.error("Network request failed: %s", error)
        return Failure(FailureKind.NETWORK_ERROR, str(error) or type(error).__name__)

    @staticmethod
    def _resolve(response: httpx.Response) -> RequestOutcome:
        """Turn a received HTTP response into an outcome."""
        logger.debug("Response received - code: %d", response.status_code)

        if not response.is_success:
            logger.error("HTTP error: %d - %s", response.status_code, response.reason_phrase)
            return Failure(
                FailureKind.HTTP_ERROR,
                f"HTTP {response.status_code}: {response.reason_phrase}",
            )

        body = response.text
        if not body.strip():
            logger.error("Empty response body")
            return Failure(FailureKind.EMPTY_BODY, "empty response body")

        try:
            parsed = RedactionResponse.model_validate_json(body)
        except ValidationError as e:
            logger.error("Response body did not parse (%d bytes)", len(body))
            return Failure(FailureKind.PARSE_ERROR, str(e))

        redacted = parsed.redacted_text
        if redacted is None or not redacted.strip():
            logger.error("Null or empty redacted text in response")
            return Failure(FailureKind.INVALID_RESPONSE, "redacted text missing")

        return Success(redacted)

    def _finish(self, outcome: RequestOutcome, elapsed: Optional[float] = None) -> RequestOutcome:
        if outcome.ok:
            logger.info("Redaction succeeded (%d characters returned)", len(outcome.redacted_text))
        else:
            logger.info("Redaction failed: %s", outcome.kind.value)
        if self.settings.enable_metrics:
            metrics.record_outcome(outcome, elapsed)
        return outcome
