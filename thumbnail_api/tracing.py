import logging

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from thumbnail_api.config import OTEL_EXPORTER_OTLP_ENDPOINT, OTEL_SERVICE_NAME

logger = logging.getLogger(__name__)


def setup_tracing(app, engine):
    resource = Resource(
        attributes = {
            SERVICE_NAME: OTEL_SERVICE_NAME
        }
    )

    provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

    trace.set_tracer_provider(provider)

    otlp_exporter = OTLPSpanExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT)

    span_processor = BatchSpanProcessor(otlp_exporter)
    trace.get_tracer_provider().add_span_processor(span_processor)

    logger.info(
        "Tracing is configured",
        extra={"service_name": OTEL_SERVICE_NAME, "endpoint": OTEL_EXPORTER_OTLP_ENDPOINT},
    )

    FastAPIInstrumentor.instrument_app(app)

    SQLAlchemyInstrumentor().instrument(
        engine=engine,
        enable_commenter=True,
        commenter_options={},
    )

    # fills otelTraceID / otelSpanID on log records
    LoggingInstrumentor().instrument(set_logging_format=False)
