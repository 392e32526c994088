"""Metrics facade.

Service code should ONLY call the semantic helpers here so the backend can be
swapped freely. Exposed at ``GET /metrics``.

Metrics:
- financial_report_loads_total          Successful report loads
- financial_report_fetch_failures_total Report loads that failed at the data boundary
- invoices_generated_total              Invoice PDFs produced
- invoice_generation_failures_total     Failed invoice generations by reason
- route_reports_generated_total         Route report PDFs produced
- document_render_seconds               Template render latency by template
- listing_partial_failures_total        Listings saved with failed dependent artifacts
"""

from __future__ import annotations

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("metrics")

_REPORT_LOADS = Counter("financial_report_loads_total", "Successful financial report loads")
_REPORT_FETCH_FAILURES = Counter(
    "financial_report_fetch_failures_total", "Financial report loads that failed to fetch data"
)
_INVOICES_GENERATED = Counter("invoices_generated_total", "Invoice PDFs generated", ["delivery"])
_INVOICE_FAILURES = Counter(
    "invoice_generation_failures_total", "Failed invoice generations", ["reason"]
)
_ROUTE_REPORTS = Counter("route_reports_generated_total", "Route report PDFs generated")
_RENDER_LATENCY = Histogram(
    "document_render_seconds",
    "Template render latency",
    ["template"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)
_LISTING_PARTIAL_FAILURES = Counter(
    "listing_partial_failures_total", "Listings saved with failed dependent artifacts"
)


def report_loaded(bookings: int) -> None:
    _REPORT_LOADS.inc()
    logger.debug("financial report loaded with %d bookings", bookings)


def report_fetch_failed() -> None:
    _REPORT_FETCH_FAILURES.inc()


def invoice_generated(shared: bool) -> None:
    _INVOICES_GENERATED.labels(delivery="shared" if shared else "saved").inc()


def invoice_generation_failed(reason: str) -> None:
    _INVOICE_FAILURES.labels(reason=reason).inc()


def route_report_generated() -> None:
    _ROUTE_REPORTS.inc()


def document_render_observe(template: str, seconds: float) -> None:
    _RENDER_LATENCY.labels(template=template).observe(seconds)


def listing_partial_failure() -> None:
    _LISTING_PARTIAL_FAILURES.inc()
