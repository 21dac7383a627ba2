import os
from fastapi import FastAPI
from opentelemetry import trace, metrics
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from loguru import logger

EXCLUDED_URLS = "/health"


def _console_resource() -> Resource:
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", "propconnect-admin"),
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )


def _export_traces(resource: Resource, endpoint: str, insecure: bool) -> None:
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=insecure))
    )
    trace.set_tracer_provider(provider)


def _export_metrics(resource: Resource, endpoint: str, insecure: bool) -> None:
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint, insecure=insecure)
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))


def _instrument_console(app: FastAPI) -> None:
    """Trace incoming page requests and outgoing PropConnect API calls, once per process."""
    if getattr(setup_telemetry, "_instrumented", False):
        return
    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)
    HTTPXClientInstrumentor().instrument()
    setup_telemetry._instrumented = True  # type: ignore


def setup_telemetry(app: FastAPI):
    """
    Ship console traces and metrics to the OTLP collector named by
    OTEL_EXPORTER_OTLP_ENDPOINT.

    Each console request and every call it makes to the PropConnect API becomes a span,
    tagged with OTEL_SERVICE_NAME and ENVIRONMENT. OTEL_EXPORTER_OTLP_INSECURE=true
    drops TLS towards the collector. Without an endpoint nothing is exported; a collector
    that cannot be set up is logged and the console keeps serving.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        logger.warning("No endpoint configured. Telemetry disabled.")
        return

    insecure = os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "false").lower() == "true"
    try:
        resource = _console_resource()
        _export_traces(resource, endpoint, insecure)
        _export_metrics(resource, endpoint, insecure)
        _instrument_console(app)
    except Exception as e:
        logger.error(f"Traces & Metrics Setup Failed: {e}")
        return

    logger.info(f"Exporting console traces and metrics to {endpoint}.")
