"""
Prometheus metrics for the Golden Signals: traffic, errors, latency and
saturation. Instruments live in the default registry and are process-wide.
"""
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST, Counter, Gauge, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_ERRORS = Counter(
    "http_request_errors_total",
    "HTTP requests answered with a 4xx or 5xx status",
    ["endpoint", "status_class"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Request latency",
    ["endpoint"],
)
REQUESTS_IN_FLIGHT = Gauge(
    "http_requests_in_flight",
    "Requests currently being handled",
)
NAME_LENGTH = Histogram(
    "name_analyzer_name_length_chars",
    "Length of successfully analyzed names",
    buckets=[1, 2, 4, 8, 16, 32, 64, 128, 256],
)

UNMATCHED = "unmatched"


def status_class(status: int):
    """'4xx' or '5xx' for error statuses, None otherwise."""
    if 400 <= status < 600:
        return f"{status // 100}xx"
    return None


def track_request(method: str, endpoint: str, status: int, duration: float) -> None:
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
    klass = status_class(status)
    if klass:
        REQUEST_ERRORS.labels(endpoint=endpoint, status_class=klass).inc()


def metrics():
    """Prometheus-compatible metrics."""
    return generate_latest(), 200, {"Content-Type": CONTENT_TYPE_LATEST}
