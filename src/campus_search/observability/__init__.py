"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from campus_search.observability.context import get_trace_context, set_trace_context, trace_context
from campus_search.observability.logging import JsonFormatter, configure_logging
from campus_search.observability.metrics import (
    INDEX_DOC_COUNT,
    INDEX_TERM_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)
from campus_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_DOC_COUNT",
    "INDEX_TERM_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
