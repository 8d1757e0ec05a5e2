"""Lambda entry points, one per instrumentation profile."""
