import logging
import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from blogindex.metrics import record_request

logger = logging.getLogger("blogindex.access")

# Probes and scrapes would drown out real traffic.
EXCLUDED_PATHS = frozenset({"/healthz", "/version", "/metrics", "/metrics/"})


def client_ip(request: Request) -> str:
    """Real client address behind Cloudflare or a proxy, falling back to the peer."""
    ip = request.headers.get("CF-Connecting-IP")
    if not ip:
        forwarded = request.headers.get("X-Forwarded-For", "")
        ip = forwarded.split(",")[0].strip()
    if not ip and request.client:
        ip = request.client.host
    # Headers are client controlled; an address never holds quotes or spaces.
    ip = sanitize_log_field(ip or "").replace('"', "").replace(" ", "")
    return ip or "-"


def sanitize_log_field(value: str) -> str:
    value = value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return "".join(ch for ch in value if ch >= " " and ch != "\x7f")


def format_access_line(request: Request, status_code: int, size: str, duration: float) -> str:
    timestamp = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z")
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return (
        f'{client_ip(request)} - - [{timestamp}] '
        f'"{request.method} {sanitize_log_field(target)} HTTP/{request.scope.get("http_version", "1.1")}" '
        f"{status_code} {size} "
        f'"{sanitize_log_field(request.headers.get("referer", ""))}" '
        f'"{sanitize_log_field(request.headers.get("user-agent", ""))}" '
        f"{duration:.3f}s"
    )


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one Nginx-style line per request and feed the request metrics."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        path = request.url.path
        if path not in EXCLUDED_PATHS:
            record_request(path, duration)
            size = response.headers.get("content-length", "-")
            logger.info(format_access_line(request, response.status_code, size, duration))
        return response
