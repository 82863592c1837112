"""
Observability Infrastructure

OpenTelemetry tracing and Prometheus metrics for the marketplace service.
"""

from .metrics import (
    catalog_queries_total,
    catalog_query_results,
    catalog_unresolved_filters_total,
    shipping_fee_amount,
    shipping_quotes_total,
)
from .tracing import get_tracer, setup_tracing, tracer

__all__ = [
    "setup_tracing",
    "get_tracer",
    "tracer",
    "catalog_queries_total",
    "catalog_query_results",
    "catalog_unresolved_filters_total",
    "shipping_quotes_total",
    "shipping_fee_amount",
]
