import os
import uuid
import logging
import structlog
from fastapi import FastAPI, Request
from prometheus_fastapi_instrumentator import Instrumentator

# OpenTelemetry
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

TRACING_ENABLED = os.getenv("TRACING_ENABLED", "true").lower() == "true"
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

REQUEST_ID_HEADER = "X-Request-ID"


def add_otel_ids(logger, log_method, event_dict):
    """Structlog processor: stamp the active trace/span ids on each event."""
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = trace.format_trace_id(ctx.trace_id)
        event_dict["span_id"] = trace.format_span_id(ctx.span_id)
    return event_dict


def configure_logging():
    # JSON lines on stdout; request-scoped fields come from contextvars
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_otel_ids,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(LOG_LEVEL)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_request_context(app: FastAPI):
    """Bind a request id (client supplied or generated) to every log line of a request."""

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def configure_tracing(app: FastAPI, service_name: str):
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    trace.set_tracer_provider(provider)

    # OTLP gRPC, e.g. a local Jaeger collector
    exporter = OTLPSpanExporter(endpoint=OTLP_ENDPOINT, insecure=True)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    FastAPIInstrumentor.instrument_app(app)


def configure_metrics(app: FastAPI):
    # HTTP latency and status codes at /metrics; business counters live in metrics.py
    Instrumentator().instrument(app).expose(app, include_in_schema=False)


def setup_observability(app: FastAPI, service_name: str):
    """
    Bootstraps logging, tracing and metrics for a FastAPI app.

    Call once per app, right after constructing it. Tracing is skipped when
    TRACING_ENABLED=false (tests, local runs without a collector).
    """
    configure_logging()
    configure_request_context(app)
    if TRACING_ENABLED:
        configure_tracing(app, service_name)
    configure_metrics(app)
