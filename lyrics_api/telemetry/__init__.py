"""Telemetry helpers for exposing Prometheus metrics and OpenTelemetry traces."""

from __future__ import annotations

import re
import time
from typing import Dict

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .. import __version__
from ..core.config import get_settings

REQUEST_COUNT = Counter(
    "lyrics_api_http_requests_total",
    "Catalog API requests by method, route template and status",
    labelnames=("method", "path", "status"),
)
REQUEST_LATENCY = Histogram(
    "lyrics_api_http_request_duration_seconds",
    "Catalog API response time by method and route template",
    labelnames=("method", "path"),
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

_slug_pattern = re.compile(r"^(/api/(?:song|view|artist|composer|copyright-owner))/.+$")
_numeric_pattern = re.compile(r"/\d+(?=/|$)")
_tracing_configured = False


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Count and time every request except scrapes of the metrics endpoint."""

    def __init__(self, app, metrics_path: str) -> None:
        super().__init__(app)
        self._metrics_path = metrics_path

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start
        if request.url.path == self._metrics_path:
            return response
        path = normalise_path(request.url.path)
        REQUEST_COUNT.labels(
            method=request.method, path=path, status=str(response.status_code)
        ).inc()
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(duration)
        return response


def setup_prometheus(app: FastAPI) -> None:
    metrics_path = get_settings().prometheus_metrics_path
    app.add_middleware(PrometheusMiddleware, metrics_path=metrics_path)

    @app.get(metrics_path, include_in_schema=False)
    async def prometheus_metrics() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def configure_tracing(app: FastAPI) -> None:
    """Configure OpenTelemetry exporters when enabled via settings."""

    global _tracing_configured
    settings = get_settings()
    if not settings.otel_exporter_otlp_endpoint:
        return
    if _tracing_configured:
        FastAPIInstrumentor.instrument_app(app)
        return

    headers = _parse_headers(settings.otel_exporter_otlp_headers)
    resource = Resource.create(
        {
            "service.name": settings.otel_service_name or settings.app_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(
        endpoint=settings.otel_exporter_otlp_endpoint,
        headers=headers,
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
    _tracing_configured = True


def normalise_path(path: str) -> str:
    """Collapse ids and slugs so each route maps to one label value."""

    path = _slug_pattern.sub(r"\1/{slug}", path)
    path = _numeric_pattern.sub("/{id}", path)
    if not path:
        return "/"
    return path


def _parse_headers(raw: str | None) -> Dict[str, str]:
    """Parse ``key=value,key2=value2`` OTLP exporter headers."""

    pairs = (part.split("=", 1) for part in (raw or "").split(",") if "=" in part)
    return {key.strip(): value.strip() for key, value in pairs}
