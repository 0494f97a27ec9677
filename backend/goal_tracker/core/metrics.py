"""
Prometheus metrics for the goals service.

One ``GoalsMetrics`` instance owns a registry holding:
  - goals_operations_total{operation, status}   CRUD outcomes
  - validation_errors_total{error_type}          rejected create requests
  - http_request_duration_ms{method, route, status_code}
plus the default process/platform/gc collectors.

Usage:
    from goal_tracker.core.metrics import get_metrics

    metrics = get_metrics()
    metrics.record_operation("create", "success")
    metrics.observe_request("POST", "/goals", 201, 12.5)
    body, content_type = metrics.render()
"""
import threading
from typing import Optional, Tuple

from fastapi import Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from goal_tracker.core.constants import REQUEST_DURATION_BUCKETS_MS


class GoalsMetrics:
    """Counters and the request-duration histogram on a private registry."""

    def __init__(self, registry: Optional[CollectorRegistry] = None, default_collectors: bool = True):
        self.registry = registry or CollectorRegistry()
        if default_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        self.request_duration = Histogram(
            "http_request_duration_ms",
            "Duration of HTTP requests in ms",
            ["method", "route", "status_code"],
            buckets=REQUEST_DURATION_BUCKETS_MS,
            registry=self.registry,
        )
        self.operations = Counter(
            "goals_operations_total",
            "Total number of goals operations",
            ["operation", "status"],
            registry=self.registry,
        )
        self.validation_errors = Counter(
            "validation_errors_total",
            "Total number of validation errors",
            ["error_type"],
            registry=self.registry,
        )

    def record_operation(self, operation: str, status: str) -> None:
        self.operations.labels(operation=operation, status=status).inc()

    def record_validation_error(self, error_type: str) -> None:
        self.validation_errors.labels(error_type=error_type).inc()

    def observe_request(self, method: str, route: str, status_code: int, duration_ms: float) -> None:
        self.request_duration.labels(
            method=method, route=route, status_code=str(status_code)
        ).observe(duration_ms)

    def render(self) -> Tuple[bytes, str]:
        """Exposition text for the whole registry and its content type."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


# Singleton instance
_metrics_instance: Optional[GoalsMetrics] = None
_metrics_lock = threading.Lock()


def get_metrics() -> GoalsMetrics:
    """Get the process-wide metrics instance."""
    global _metrics_instance
    if _metrics_instance is None:
        with _metrics_lock:
            if _metrics_instance is None:
                _metrics_instance = GoalsMetrics()
    return _metrics_instance


def request_metrics(request: Request) -> GoalsMetrics:
    """FastAPI dependency returning the metrics attached to the running app."""
    return request.app.state.metrics
