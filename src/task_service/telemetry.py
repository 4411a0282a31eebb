import atexit
import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from opentelemetry import _logs, metrics, trace
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


logger = logging.getLogger(__name__)

METRIC_EXPORT_INTERVAL_MS = 10000


def _service_version() -> str:
    try:
        return version("task-service")
    except PackageNotFoundError:
        return "unknown"


def _setup_traces(resource: Resource, otlp_endpoint: str) -> TracerProvider:
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces"))
    )
    trace.set_tracer_provider(provider)
    return provider


def _setup_metrics(resource: Resource, otlp_endpoint: str) -> MeterProvider:
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=f"{otlp_endpoint}/v1/metrics"),
        export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
    )
    provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(provider)
    return provider


def _setup_logs(resource: Resource, otlp_endpoint: str) -> LoggerProvider:
    provider = LoggerProvider(resource=resource)
    provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=f"{otlp_endpoint}/v1/logs"))
    )
    _logs.set_logger_provider(provider)
    logging.getLogger().addHandler(LoggingHandler(level=logging.INFO, logger_provider=provider))
    return provider


def setup_telemetry(
    service_name: str,
    otlp_endpoint: str,
    environment: str = "development",
    disabled: bool = False,
) -> tuple[trace.Tracer, metrics.Meter]:
    """Export traces, metrics and logs for the task service over OTLP/HTTP.

    Application log records carry trace_id/span_id through the logging
    instrumentation, so access-log and error lines can be joined with the
    request spans.

    Args:
        service_name: ``service.name`` resource attribute
        otlp_endpoint: Collector base URL, e.g. "http://otel-collector:4318"
        environment: ``deployment.environment`` resource attribute
        disabled: Skip provider setup and keep the no-op globals

    Returns:
        Tuple of (tracer, meter) for custom instrumentation
    """
    if disabled:
        logger.info("OpenTelemetry disabled")
        return trace.get_tracer(service_name), metrics.get_meter(service_name)

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": _service_version(),
            "deployment.environment": environment,
        }
    )
    providers = (
        _setup_traces(resource, otlp_endpoint),
        _setup_metrics(resource, otlp_endpoint),
        _setup_logs(resource, otlp_endpoint),
    )
    for provider in providers:
        atexit.register(provider.shutdown)

    LoggingInstrumentor().instrument(set_logging_format=True)
    logger.info(
        "OpenTelemetry initialized",
        extra={"service": service_name, "endpoint": otlp_endpoint},
    )
    return trace.get_tracer(service_name), metrics.get_meter(service_name)


def instrument_fastapi(app: Any) -> None:
    """Create a span for every HTTP request handled by ``app``."""
    from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

    FastAPIInstrumentor.instrument_app(app, exclude_spans=["receive", "send"])
