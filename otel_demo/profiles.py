"""Instrumentation profiles a handler can be deployed with.

The handler code is identical across profiles. A profile only decides which
environment the function is deployed with and whether the auxiliary fetch runs.
"""

from enum import Enum
from typing import Optional

COLLECTOR_CONFIG_FILE = "/var/task/collector.yaml"


class InstrumentationProfile(str, Enum):
    """How tracing is attached to a deployed handler."""

    AGENT = "agent"  # vendor auto-instrumentation layer wraps the handler
    COLLECTOR = "collector"  # collector extension layer + auto-instrumentation
    MANUAL = "manual"  # SDK bootstrapped by the package itself

    @property
    def handler(self) -> str:
        """Lambda handler path for this profile's entry module."""
        return f"otel_demo.functions.{self.value}.handler"

    @property
    def exec_wrapper(self) -> Optional[str]:
        # the Python layers wrap regular handlers with otel-instrument
        if self is InstrumentationProfile.MANUAL:
            return None
        return "/opt/otel-instrument"

    @property
    def auxiliary_fetch(self) -> bool:
        """Whether the comments fetch runs by default."""
        return self is InstrumentationProfile.AGENT

    def environment(
        self,
        table_name: str,
        service_name: str,
        honeycomb_api_key: Optional[str] = None,
    ) -> dict[str, str]:
        """Render the Lambda environment block for this profile.

        Args:
            table_name: Name of the DynamoDB table records are written to
            service_name: Value for OTEL_SERVICE_NAME
            honeycomb_api_key: Exporter API key, read by the collector config or the manual exporter

        Returns:
            dict[str, str]: Environment variables for the function
        """
        env = {
            "TABLE_NAME": table_name,
            "OTEL_SERVICE_NAME": service_name,
            "INSTRUMENTATION_PROFILE": self.value,
        }
        if self.exec_wrapper:
            env["AWS_LAMBDA_EXEC_WRAPPER"] = self.exec_wrapper
            env["OPENTELEMETRY_COLLECTOR_CONFIG_FILE"] = COLLECTOR_CONFIG_FILE
        if honeycomb_api_key:
            env["HONEYCOMB_API_KEY"] = honeycomb_api_key
        return env
