"""Entry point for the collector-sidecar profile.

Auto-instrumentation exports to the collector extension, which forwards
according to OPENTELEMETRY_COLLECTOR_CONFIG_FILE.
"""

from otel_demo.config import Settings
from otel_demo.ingest import build_handler
from otel_demo.profiles import InstrumentationProfile

ingest = build_handler(Settings.from_env(InstrumentationProfile.COLLECTOR))


def handler(event, context):
    return ingest(event, context)
