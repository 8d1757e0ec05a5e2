import os
from contextlib import contextmanager
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.botocore import BotocoreInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.sdk.resources import Resource
from otlp_stdout_span_exporter import OTLPStdoutSpanExporter

from .config import Settings


def get_lambda_resource(service_name: str) -> Resource:
    """Build a resource describing the current Lambda function."""
    attributes = {
        "service.name": service_name,
        "cloud.provider": "aws",
        "faas.runtime": "python",
    }
    env_attributes = {
        "cloud.region": os.environ.get("AWS_REGION"),
        "faas.name": os.environ.get("AWS_LAMBDA_FUNCTION_NAME"),
        "faas.version": os.environ.get("AWS_LAMBDA_FUNCTION_VERSION"),
        "faas.max_memory": os.environ.get("AWS_LAMBDA_FUNCTION_MEMORY_SIZE"),
    }
    attributes.update({k: v for k, v in env_attributes.items() if v})
    return Resource.create(attributes)


def create_exporter(settings: Settings):
    """
    Pick the span exporter for the manual profile.

    With a Honeycomb API key spans go straight to the OTLP/HTTP endpoint,
    otherwise they are written to stdout for a log forwarder to pick up.
    """
    if settings.honeycomb_api_key:
        return OTLPSpanExporter(
            endpoint=f"{settings.otlp_endpoint}/v1/traces",
            headers={"x-honeycomb-team": settings.honeycomb_api_key},
            timeout=5,  # 5 seconds timeout for Lambda environment
        )
    return OTLPStdoutSpanExporter()


def init_telemetry(settings: Settings) -> tuple[trace.Tracer, TracerProvider]:
    """
    Initialize OpenTelemetry for the manually instrumented handler.

    Args:
        settings: Handler settings, used for the service name and exporter

    Returns:
        tuple[trace.Tracer, TracerProvider]: Configured tracer and provider instances
    """
    provider = TracerProvider(resource=get_lambda_resource(settings.service_name))

    # Use BatchSpanProcessor with Lambda-optimized settings
    provider.add_span_processor(
        BatchSpanProcessor(
            create_exporter(settings),
            schedule_delay_millis=1000,
            max_export_batch_size=512,
            max_queue_size=2048,
        )
    )

    trace.set_tracer_provider(provider)
    return trace.get_tracer(settings.service_name), provider


def instrument_libraries() -> None:
    """Instrument outbound HTTP calls and AWS SDK calls."""
    RequestsInstrumentor().instrument()
    BotocoreInstrumentor().instrument()


@contextmanager
def force_flush(tracer_provider):
    """Ensure spans are exported before Lambda freezes."""
    try:
        yield
    finally:
        tracer_provider.force_flush()
