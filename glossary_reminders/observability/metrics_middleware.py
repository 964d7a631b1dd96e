"""
FastAPI middleware for automatic Prometheus metrics collection.

Tracks per request:
- Request counts by endpoint, method, and status code
- Request latency histograms
- Requests in progress
"""

import logging
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from glossary_reminders.observability.metrics import (
    http_requests_total,
    http_request_duration_seconds,
    http_requests_in_progress,
)

logger = logging.getLogger(__name__)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collect Prometheus metrics for HTTP requests"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        endpoint = self._endpoint_label(request)

        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()
            http_requests_total.labels(
                method=method, endpoint=endpoint, status=status_code
            ).inc()
            http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(time.perf_counter() - start_time)

    @staticmethod
    def _endpoint_label(request: Request) -> str:
        """
        Label requests by the set of known routes only.

        Unknown paths share one label so scanners cannot blow up cardinality.
        """
        path = request.url.path
        for route in request.app.routes:
            if getattr(route, "path", None) == path:
                return path
        return "unmatched"


def setup_metrics_middleware(app) -> None:
    """Add Prometheus metrics middleware to the FastAPI application"""
    from glossary_reminders.config import ENABLE_METRICS

    if not ENABLE_METRICS:
        logger.info("Metrics collection is disabled (ENABLE_METRICS=false)")
        return

    app.add_middleware(PrometheusMiddleware)
    logger.info("Prometheus metrics middleware added to FastAPI")
