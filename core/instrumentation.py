"""
OpenTelemetry instrumentation setup.

Tracing is exported over OTLP gRPC; Prometheus metrics are served by
prometheus_client on a side port.
"""

import logging
import os
import socket

from django.conf import settings
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode  # noqa: F401
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)


def setup_opentelemetry():
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing exported via OTLP
    - Auto-instrumentation for Django, PostgreSQL and Redis
    - The Prometheus metrics HTTP server
    """
    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "macman-backend"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_exporter = OTLPSpanExporter(
        endpoint=os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://tempo:4317"),
        insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()
    RedisInstrumentor().instrument()

    start_metrics_server(settings.PROMETHEUS_PORT)

    logger.info("OpenTelemetry instrumentation configured")


def start_metrics_server(port: int) -> None:
    """Start the Prometheus exporter unless something already listens on the port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        in_use = sock.connect_ex(("127.0.0.1", port)) == 0
    finally:
        sock.close()

    if in_use:
        logger.info("Prometheus metrics server already running on port %s", port)
        return

    try:
        start_http_server(port, addr="0.0.0.0")
    except OSError as e:
        logger.warning("Could not start Prometheus metrics server: %s", e)
        return
    logger.info("Prometheus metrics server started on 0.0.0.0:%s", port)


def get_tracer(name: str):
    """
    Get a tracer for manual instrumentation.

    Without a configured provider OpenTelemetry hands out a no-op tracer.

    Args:
        name: Tracer name (usually the module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
