"""
Prometheus metrics for system monitoring.
"""

import asyncio
import time
from functools import wraps
from typing import Callable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()


BOOKINGS_CREATED = Counter(
    "bookings_created_total",
    "Total number of bookings created",
    ["booking_type", "job_type"],
    registry=registry,
)

BOOKING_STATUS_CHANGES = Counter(
    "booking_status_changes_total",
    "Total number of booking status transitions",
    ["from_status", "to_status"],
    registry=registry,
)

ACCEPT_CONFLICTS = Counter(
    "booking_accept_conflicts_total",
    "Total number of rejected accept attempts",
    ["reason"],
    registry=registry,
)

NOTIFICATIONS_SENT = Counter(
    "notifications_sent_total",
    "Total number of notification deliveries attempted",
    ["channel", "intent", "status"],
    registry=registry,
)

OUTBOX_EVENTS_PROCESSED = Counter(
    "outbox_events_processed_total",
    "Total number of outbox events processed",
    ["event_type", "status"],
    registry=registry,
)

USE_CASE_DURATION = Histogram(
    "use_case_duration_seconds",
    "Time spent executing booking operations",
    ["operation"],
    buckets=[0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=registry,
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
    registry=registry,
)


def track_duration(operation: str):
    """Decorator observing how long an async operation takes."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                record_error(type(e).__name__, operation)
                raise
            finally:
                USE_CASE_DURATION.labels(operation=operation).observe(
                    time.perf_counter() - start_time
                )

        if not asyncio.iscoroutinefunction(func):
            raise TypeError("track_duration only wraps coroutine functions")
        return async_wrapper

    return decorator


def record_booking_created(booking_type: str, job_type: str):
    """Record booking creation metric."""
    BOOKINGS_CREATED.labels(booking_type=booking_type, job_type=job_type).inc()


def record_status_change(from_status: str, to_status: str):
    """Record booking status transition metric."""
    BOOKING_STATUS_CHANGES.labels(from_status=from_status, to_status=to_status).inc()


def record_accept_conflict(reason: str):
    """Record a lost or refused accept."""
    ACCEPT_CONFLICTS.labels(reason=reason).inc()


def record_notification(channel: str, intent: str, status: str, count: int = 1):
    """Record notification delivery metric."""
    if count:
        NOTIFICATIONS_SENT.labels(channel=channel, intent=intent, status=status).inc(count)


def record_outbox_event_processing(event_type: str, status: str):
    """Record outbox event processing metric."""
    OUTBOX_EVENTS_PROCESSED.labels(event_type=event_type, status=status).inc()


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST
