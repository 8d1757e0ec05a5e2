"""Record-ingest Lambda handlers with three OpenTelemetry instrumentation profiles."""

from .config import ConfigurationError, Settings
from .ingest import (
    RecordIngestHandler,
    build_handler,
    merge_record,
    new_record_id,
    pick_user_id,
)
from .profiles import InstrumentationProfile

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "InstrumentationProfile",
    "RecordIngestHandler",
    "Settings",
    "build_handler",
    "merge_record",
    "new_record_id",
    "pick_user_id",
]
