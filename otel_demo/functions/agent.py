"""Entry point wrapped by the vendor auto-instrumentation layer.

The layer sets up tracing before this module is imported, so the handler only
uses the global tracer. This profile also fetches the comments list.
"""

from otel_demo.config import Settings
from otel_demo.ingest import build_handler
from otel_demo.profiles import InstrumentationProfile

ingest = build_handler(Settings.from_env(InstrumentationProfile.AGENT))


def handler(event, context):
    return ingest(event, context)
