"""Entry point for the manual profile.

The SDK is set up here at import, before the shared clients are built, and
each invocation runs inside a SERVER span that is flushed on exit.
"""

from opentelemetry.trace import SpanKind

from otel_demo.config import Settings
from otel_demo.ingest import build_handler
from otel_demo.profiles import InstrumentationProfile
from otel_demo.telemetry import force_flush, init_telemetry, instrument_libraries

settings = Settings.from_env(InstrumentationProfile.MANUAL)

# Initialize telemetry once at module load time
tracer, tracer_provider = init_telemetry(settings)
instrument_libraries()

ingest = build_handler(settings)


def handler(event, context):
    """
    Lambda handler that stores a random upstream user under a fresh id.

    Args:
        event: API Gateway event (not used)
        context: Lambda context

    Returns:
        dict: Response with status code 200 and the stored record
    """
    with (
        force_flush(tracer_provider),
        tracer.start_as_current_span(
            "lambda-invocation",
            kind=SpanKind.SERVER,
            attributes={
                "faas.trigger": "http",
            },
        ),
    ):
        return ingest(event, context)
