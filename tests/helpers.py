"""
Test doubles: a recording status view and stub redaction servers.
"""
import asyncio
import re
import socket
import threading
import time

import httpx
from fastapi import FastAPI, HTTPException

from rescriber import status
from rescriber.schemas import RedactionRequest

STUB_BASE_URL = "http://redactor.test"


class RecordingView:
    """StatusView that keeps every message it was asked to show."""

    def __init__(self):
        self.messages = []
        self.trigger_enabled = True
        self.trigger_label = status.TRIGGER_LABEL

    @property
    def message(self):
        return self.messages[-1] if self.messages else ""

    def show_status(self, message):
        self.messages.append(message)

    def set_trigger_enabled(self, enabled, label):
        self.trigger_enabled = enabled
        self.trigger_label = label


class StubRedactor:
    """
    MockTransport handler standing in for the redaction service.

    Records every request it receives. Either returns a canned response,
    raises ``error(request)``, or waits on ``gate`` before answering.
    """

    def __init__(self, status_code=200, json=None, content=None, error=None, gate=None):
        self.status_code = status_code
        self.json = json
        self.content = content
        self.error = error
        self.gate = gate
        self.requests = []

    def _respond(self, request):
        if self.error is not None:
            raise self.error(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    def __call__(self, request):
        self.requests.append(request)
        if self.gate is not None:
            return self._respond_after_gate(request)
        return self._respond(request)

    async def _respond_after_gate(self, request):
        await self.gate.wait()
        return self._respond(request)

    @property
    def transport(self):
        return httpx.MockTransport(self)


def timeout_error(request):
    return httpx.ReadTimeout("timed out", request=request)


def connect_error(request):
    return httpx.ConnectError("Connection refused", request=request)


EMAIL = re.compile(r"[\w.+-]+@[\w-]+\.[\w.]+")
PHONE = re.compile(r"\(?\b\d{3}\)?[-.\s]?\d{3}-\d{4}\b")
SSN = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")


def build_stub_app() -> FastAPI:
    """A tiny redaction service speaking the same wire protocol as the real one."""
    app = FastAPI()

    @app.post("/redact")
    async def redact(request: RedactionRequest):
        text = SSN.sub("[SSN]", request.text)
        text = PHONE.sub("[PHONE]", text)
        text = EMAIL.sub("[EMAIL]", text)
        return {"redacted": text}

    @app.post("/down/redact")
    async def down(request: RedactionRequest):
        raise HTTPException(status_code=503, detail="maintenance")

    @app.post("/blank/redact")
    async def blank(request: RedactionRequest):
        return {"redacted": "   "}

    @app.post("/slow/redact")
    async def slow(request: RedactionRequest):
        await asyncio.sleep(5)
        return {"redacted": request.text}

    return app


class TricklingServer:
    """
    Real local HTTP server that answers a single request one byte at a time.

    Every byte arrives well inside any per-read timeout, so only a
    deadline on the whole call can cut the response off.
    """

    def __init__(self, body=b'{"redacted": "X"}', delay=0.03):
        self.delay = delay
        self.response = (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: application/json\r\n"
            b"Content-Length: %d\r\n"
            b"Connection: close\r\n\r\n" % len(body)
        ) + body
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(1)
        self._thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def base_url(self):
        host, port = self._sock.getsockname()
        return f"http://{host}:{port}"

    def __enter__(self):
        self._thread.start()
        return self

    def __exit__(self, *exc_info):
        self._stop.set()
        self._sock.close()
        self._thread.join(timeout=2)

    def _serve(self):
        try:
            conn, _ = self._sock.accept()
        except OSError:
            return
        with conn:
            try:
                conn.recv(65536)
                for i in range(len(self.response)):
                    if self._stop.is_set():
                        return
                    conn.sendall(self.response[i:i + 1])
                    time.sleep(self.delay)
            except OSError:
                return
