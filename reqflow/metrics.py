"""
Prometheus Metrics for reqflow

Provides counters and histograms for request monitoring.
Host application should expose the prometheus_client registry.
"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger("reqflow.metrics")

OUTCOME_RESPONSE = "response"
OUTCOME_TIMEOUT = "timeout"
OUTCOME_VETOED = "vetoed"
OUTCOME_ERROR = "error"

# Total requests counter with method and outcome labels
REQUEST_COUNT = Counter(
    "reqflow_requests_total",
    "Total number of requests by outcome",
    ["method", "outcome"],
)

# Request latency histogram with method label
REQUEST_LATENCY = Histogram(
    "reqflow_request_latency_seconds",
    "Request latency in seconds",
    ["method"],
)


def metrics_request(method: str, outcome: str, latency: float) -> None:
    """
    Record metrics for one call.

    Args:
        method: HTTP method (e.g., 'GET')
        outcome: One of 'response', 'timeout', 'vetoed', 'error'
        latency: Call duration in seconds

    Example:
        >>> import time
        >>> start = time.monotonic()
        >>> # ... make request ...
        >>> metrics_request("GET", "response", time.monotonic() - start)
    """
    try:
        REQUEST_COUNT.labels(method=method, outcome=outcome).inc()
        REQUEST_LATENCY.labels(method=method).observe(latency)
    except Exception as e:
        # Metrics failures should not break requests
        logger.debug("Failed to record metrics: %s", e)
