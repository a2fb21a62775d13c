"""CLI for checking the redaction service from a terminal.

Usage:
    python -m rescriber.diagnostics config
    python -m rescriber.diagnostics check "Hello world test@example.com"
    python -m rescriber.diagnostics check-async "Phone: (555) 123-4567"
    python -m rescriber.diagnostics demo "SSN: 123-45-6789" --metrics
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rescriber import metrics, status
from rescriber.buffer import TextBuffer
from rescriber.client import RedactionClient
from rescriber.config import configure_logging, get_settings
from rescriber.outcomes import RequestOutcome
from rescriber.session import KeyboardSession
from rescriber.status import LoggingStatusView

logger = logging.getLogger(__name__)


def _report(text: str, outcome: RequestOutcome) -> int:
    print(f"Original: {text!r}")
    if outcome.ok:
        print(f"Redacted: {outcome.redacted_text!r}")
        return 0
    print(f"FAILED ({outcome.kind.value}): {outcome.message}", file=sys.stderr)
    return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Print the active configuration."""
    settings = get_settings()
    print(f"Endpoint:      {settings.redact_url}")
    print(f"Timeout:       {settings.timeout_seconds:g}s")
    print(f"Connect retry: {settings.retries_on_connect_failure}")
    print(f"User-Agent:    {settings.user_agent}")
    print(f"Lookback:      {settings.lookback_chars} characters")
    print(f"Metrics:       {'on' if settings.enable_metrics else 'off'}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Call the service through the blocking client."""
    outcome = RedactionClient().redact(args.text)
    return _report(args.text, outcome)


def cmd_check_async(args: argparse.Namespace) -> int:
    """Call the service through the async client."""
    outcome = asyncio.run(RedactionClient().redact_async(args.text))
    return _report(args.text, outcome)


async def _demo(text: str) -> int:
    view = LoggingStatusView(logger)
    session = KeyboardSession(view)
    buffer = TextBuffer()
    session.start_input(buffer)
    session.on_text(text)

    session.on_redact_pressed()
    await session.coordinator.wait_idle()

    print(f"Buffer: {buffer.text!r}")
    print(f"Status: {view.message}")
    return 0 if view.message == status.COMPLETE else 1


def cmd_demo(args: argparse.Namespace) -> int:
    """Type text into an in-memory field and press the redact button."""
    return asyncio.run(_demo(args.text))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rescriber.diagnostics",
        description="Rescriber keyboard diagnostics",
    )
    parser.add_argument("--log-level", default=None, help="Override RESCRIBER_LOG_LEVEL")
    parser.add_argument("--metrics", action="store_true", help="Print Prometheus metrics afterwards")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("config", help="Show configuration")

    p_check = sub.add_parser("check", help="Redact text with the blocking client")
    p_check.add_argument("text")

    p_async = sub.add_parser("check-async", help="Redact text with the async client")
    p_async.add_argument("text")

    p_demo = sub.add_parser("demo", help="Run a keyboard session against an in-memory field")
    p_demo.add_argument("text")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    commands = {
        "config": cmd_config,
        "check": cmd_check,
        "check-async": cmd_check_async,
        "demo": cmd_demo,
    }
    code = commands[args.command](args)

    if args.metrics:
        print(metrics.render_latest())
    return code


if __name__ == "__main__":
    sys.exit(main())
