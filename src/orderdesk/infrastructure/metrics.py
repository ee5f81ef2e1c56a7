"""Prometheus metrics for the application services."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "orderdesk_requests_total",
    "Number of requests received",
    ["method", "error"],
)

REQUEST_LATENCY = Histogram(
    "orderdesk_request_latency_seconds",
    "Time spent processing a request",
    ["method", "error"],
)
