"""Prometheus metrics for the Settlement Gateway service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- settlement_total: Settlements by outcome and currency
- settlement_rejections_total: Rejections by reason code
- settlement_amount_total: Settled amount per currency (smallest unit)
- settlement_daily_attempts: Attempts counted against today's quota

Technical Metrics (for Engineering/SRE):
- settlement_ledger_latency_seconds: Ledger call latency
- settlement_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

settlement_total = Counter(
    "settlement_total",
    "Total number of settlement attempts by outcome",
    ["outcome", "currency"],  # settled, rejected
)

settlement_rejections = Counter(
    "settlement_rejections_total",
    "Settlement rejections by reason code",
    ["reason"],
)

settlement_amount = Counter(
    "settlement_amount_total",
    "Settled amount in the currency's smallest unit",
    ["currency"],
)

daily_attempts_gauge = Gauge(
    "settlement_daily_attempts",
    "Authorization attempts counted against today's quota",
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

ledger_latency = Histogram(
    "settlement_ledger_latency_seconds",
    "Ledger call latency in seconds",
    ["currency"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

http_requests_total = Counter(
    "settlement_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "settlement_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_settlement(currency: str, amount: int) -> None:
    """Record a successful settlement."""
    settlement_total.labels(outcome="settled", currency=currency).inc()
    settlement_amount.labels(currency=currency).inc(amount)


def record_rejection(reason: str, currency: str = "unknown") -> None:
    """Record a rejected settlement attempt."""
    settlement_total.labels(outcome="rejected", currency=currency).inc()
    settlement_rejections.labels(reason=reason).inc()


def record_daily_attempts(count: int) -> None:
    """Publish the limiter's current daily count."""
    daily_attempts_gauge.set(count)


@contextmanager
def track_ledger_latency(currency: str) -> Generator[None, None, None]:
    """Context manager to track ledger call latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        ledger_latency.labels(currency=currency).observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
