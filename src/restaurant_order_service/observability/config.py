"""Logging and OpenTelemetry configuration for the order service."""

import logging
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

from restaurant_order_service.config import ServiceConfig

logger = logging.getLogger(__name__)

METRIC_EXPORT_INTERVAL_MILLIS = 60000


def build_resource(config: ServiceConfig) -> Resource:
    """Describe this service for spans and metrics.

    Args:
        config: Service configuration supplying name and environment

    Returns:
        Resource with service name, environment and data directory attributes
    """
    return Resource.create(
        {
            "service.name": config.service_name,
            "deployment.environment": config.environment,
            "order_service.data_dir": str(config.data_dir),
        }
    )


def build_tracer_provider(config: ServiceConfig, resource: Resource) -> TracerProvider:
    """Create the tracer provider, exporting spans unless running under test.

    Args:
        config: Service configuration supplying the OTLP endpoint
        resource: Service resource for trace identification

    Returns:
        TracerProvider ready to be installed globally
    """
    provider = TracerProvider(resource=resource)

    if config.environment != "test":
        # Batch spans to the collector's traces endpoint
        exporter = OTLPSpanExporter(endpoint=f"{config.otlp_endpoint}/v1/traces")
        provider.add_span_processor(BatchSpanProcessor(exporter))

    return provider


def build_meter_provider(config: ServiceConfig, resource: Resource) -> MeterProvider:
    """Create the meter provider, exporting metrics unless running under test.

    Args:
        config: Service configuration supplying the OTLP endpoint
        resource: Service resource for metric identification

    Returns:
        MeterProvider ready to be installed globally
    """
    if config.environment == "test":
        # No readers: order and menu counters are recorded but never shipped
        return MeterProvider(resource=resource)

    exporter = OTLPMetricExporter(endpoint=f"{config.otlp_endpoint}/v1/metrics")
    reader = PeriodicExportingMetricReader(
        exporter, export_interval_millis=METRIC_EXPORT_INTERVAL_MILLIS
    )
    return MeterProvider(resource=resource, metric_readers=[reader])


def setup_observability(app: Any, config: ServiceConfig) -> None:
    """Install tracing and metrics providers and instrument the FastAPI app.

    Args:
        app: FastAPI application serving the menu, order and settings routes
        config: Service configuration
    """
    resource = build_resource(config)

    # Set as global providers so @traced spans and the metrics module pick them up
    trace.set_tracer_provider(build_tracer_provider(config, resource))
    metrics.set_meter_provider(build_meter_provider(config, resource))

    FastAPIInstrumentor.instrument_app(app)

    logger.info(
        f"OpenTelemetry configured for {config.service_name} "
        f"({config.environment}) with endpoint {config.otlp_endpoint}"
    )


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    Unknown level names fall back to INFO.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_str = log_level.upper()
    level = getattr(logging, level_str, logging.INFO)

    # Create JSON formatter
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add console handler with JSON formatting
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger.info(f"Structured JSON logging configured at {level_str} level")
