"""
Prometheus metrics for redaction round trips.
"""
from typing import Optional

from prometheus_client import Counter, Histogram, generate_latest

from rescriber.outcomes import RequestOutcome

REDACTION_REQUESTS = Counter(
    "rescriber_redaction_requests_total",
    "Redaction round trips by outcome",
    ["outcome"],
)
REDACTION_LATENCY = Histogram(
    "rescriber_redaction_latency_seconds",
    "Wall time of redaction round trips that reached the network",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


def record_outcome(outcome: RequestOutcome, elapsed: Optional[float] = None):
    """
    Count an outcome and, when it reached the network, observe its latency.

    Args:
        outcome: Resolved request outcome
        elapsed: Seconds spent on the round trip, or None if no request was made
    """
    REDACTION_REQUESTS.labels(outcome=outcome.label).inc()
    if elapsed is not None:
        REDACTION_LATENCY.observe(elapsed)


def render_latest() -> str:
    """Metrics in the Prometheus text exposition format."""
    return generate_latest().decode("utf-8")
