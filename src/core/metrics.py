"""Prometheus metrics for the Fiado Ledger service.

Metrics are organized into two categories:

Business Metrics (for the shop owner / finance):
- fiado_credit_sales_created_total: Credit sales registered
- fiado_credit_sales_amount_cents_total: Total amount sold on credit
- fiado_installments_paid_total: Installment payments by payment method
- fiado_installments_paid_amount_cents_total: Amount received on installments

Technical Metrics (for Engineering/SRE):
- fiado_operation_latency_seconds: Ledger operation latency
- fiado_status_refresh_total: Overdue refresh runs
- fiado_status_refresh_updated_total: Rows changed by refresh runs
- fiado_payment_conflicts_total: Payments rejected as already paid
- fiado_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

credit_sales_created = Counter(
    "fiado_credit_sales_created_total",
    "Total number of credit sales registered",
)

credit_sales_amount = Counter(
    "fiado_credit_sales_amount_cents_total",
    "Total amount sold on credit, in cents",
)

installments_paid = Counter(
    "fiado_installments_paid_total",
    "Total number of installments paid",
    ["payment_method"],
)

installments_paid_amount = Counter(
    "fiado_installments_paid_amount_cents_total",
    "Total amount received on installments, in cents",
)


# =============================================================================
# Technical Metrics
# =============================================================================

operation_latency = Histogram(
    "fiado_operation_latency_seconds",
    "Ledger operation latency in seconds",
    ["operation"],  # create, pay, refresh
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

status_refresh_runs = Counter(
    "fiado_status_refresh_total",
    "Total number of overdue refresh runs",
)

status_refresh_updated = Counter(
    "fiado_status_refresh_updated_total",
    "Rows changed by overdue refresh runs",
    ["kind"],  # sale, installment
)

payment_conflicts = Counter(
    "fiado_payment_conflicts_total",
    "Total number of payments rejected because the installment was already paid",
)

http_requests_total = Counter(
    "fiado_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "fiado_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_credit_sale_created(total_cents: int) -> None:
    """Record a registered credit sale."""
    credit_sales_created.inc()
    credit_sales_amount.inc(total_cents)


def record_installment_paid(payment_method: str, amount_cents: int) -> None:
    """Record an installment payment."""
    installments_paid.labels(payment_method=payment_method.lower()).inc()
    installments_paid_amount.inc(amount_cents)


def record_payment_conflict() -> None:
    payment_conflicts.inc()


def record_status_refresh(sales_updated: int, installments_updated: int) -> None:
    """Record one overdue refresh run and what it changed."""
    status_refresh_runs.inc()
    status_refresh_updated.labels(kind="sale").inc(sales_updated)
    status_refresh_updated.labels(kind="installment").inc(installments_updated)


@contextmanager
def track_operation_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track the latency of a ledger operation."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        operation_latency.labels(operation=operation).observe(duration)


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
