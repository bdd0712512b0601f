from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def setup_tracing(service_name: str) -> TracerProvider:
    """Configures and registers a global tracer provider.

    The OTLP exporter reads its endpoint from the standard
    ``OTEL_EXPORTER_OTLP_*`` environment variables.
    """

    if getattr(setup_tracing, "has_run", False):
        return setup_tracing.provider

    resource = Resource(attributes={SERVICE_NAME: service_name})

    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))

    trace.set_tracer_provider(provider)
    setup_tracing.provider = provider
    setup_tracing.has_run = True
    return provider


def instrument_app(app: FastAPI, service_name: str) -> TracerProvider:
    """Enable tracing and wrap every route of ``app`` in a server span."""
    provider = setup_tracing(service_name)
    FastAPIInstrumentor.instrument_app(
        app, tracer_provider=provider, excluded_urls="health"
    )
    return provider
