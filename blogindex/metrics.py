from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "http_requests_total",
    "Number of get requests.",
    ["path"],
)

http_response_duration_seconds = Histogram(
    "http_response_duration_seconds",
    "Duration of HTTP responses.",
    ["path"],
)


def record_request(path: str, duration: float) -> None:
    http_requests_total.labels(path=path).inc()
    http_response_duration_seconds.labels(path=path).observe(duration)
