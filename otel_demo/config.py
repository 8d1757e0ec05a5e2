"""Environment-driven configuration for the record-ingest handlers."""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from .profiles import InstrumentationProfile

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "otel-demo-python"
DEFAULT_USERS_URL = "https://jsonplaceholder.typicode.com/users"
DEFAULT_COMMENTS_URL = "https://jsonplaceholder.typicode.com/comments"
DEFAULT_OTLP_ENDPOINT = "https://api.honeycomb.io"


class ConfigurationError(ValueError):
    """Raised when a required setting is missing at startup."""


def _read_env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_str_env(
    name: str, config_value: Optional[str] = None, default: Optional[str] = None
) -> Optional[str]:
    """Read a string setting.

    The environment variable wins, then the explicit config value, then the default.
    """
    value = _read_env(name)
    if value is not None:
        return value
    if config_value is not None:
        return config_value
    return default


def get_bool_env(
    name: str, config_value: Optional[bool] = None, default: bool = False
) -> bool:
    """Read a boolean setting ('true' or 'false', case-insensitive)."""
    value = _read_env(name)
    if value is not None:
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        logger.warning("Invalid boolean for %s: %r, must be 'true' or 'false'", name, value)
    if config_value is not None:
        return config_value
    return default


def get_int_env(name: str, config_value: Optional[int] = None, default: int = 0) -> int:
    """Read an integer setting."""
    value = _read_env(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer for %s: %r", name, value)
    if config_value is not None:
        return config_value
    return default


@dataclass(frozen=True)
class Settings:
    table_name: str
    service_name: str = DEFAULT_SERVICE_NAME
    profile: InstrumentationProfile = InstrumentationProfile.MANUAL
    auxiliary_fetch: bool = False
    users_url: str = DEFAULT_USERS_URL
    comments_url: str = DEFAULT_COMMENTS_URL
    otlp_endpoint: str = DEFAULT_OTLP_ENDPOINT
    honeycomb_api_key: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_env(
        cls, profile: Optional[InstrumentationProfile] = None
    ) -> "Settings":
        """Build settings from the Lambda environment.

        Args:
            profile: Profile of the calling entry point. It wins over
                INSTRUMENTATION_PROFILE, which is only read when no profile is given.

        Raises:
            ConfigurationError: TABLE_NAME is not set.
        """
        table_name = get_str_env("TABLE_NAME")
        if table_name is None:
            raise ConfigurationError("TABLE_NAME must be set")

        profile_name = get_str_env("INSTRUMENTATION_PROFILE")
        if profile is not None:
            if profile_name is not None and profile_name.lower() != profile.value:
                logger.warning(
                    "INSTRUMENTATION_PROFILE=%r ignored, entry point uses %s",
                    profile_name,
                    profile.value,
                )
            resolved = profile
        elif profile_name is None:
            resolved = InstrumentationProfile.MANUAL
        else:
            try:
                resolved = InstrumentationProfile(profile_name.lower())
            except ValueError:
                logger.warning(
                    "Unknown instrumentation profile %r, using %s",
                    profile_name,
                    InstrumentationProfile.MANUAL.value,
                )
                resolved = InstrumentationProfile.MANUAL

        return cls(
            table_name=table_name,
            service_name=get_str_env("OTEL_SERVICE_NAME", default=DEFAULT_SERVICE_NAME),
            profile=resolved,
            auxiliary_fetch=get_bool_env(
                "AUXILIARY_FETCH", default=resolved.auxiliary_fetch
            ),
            users_url=get_str_env("USERS_URL", default=DEFAULT_USERS_URL).rstrip("/"),
            comments_url=get_str_env("COMMENTS_URL", default=DEFAULT_COMMENTS_URL),
            otlp_endpoint=get_str_env(
                "OTEL_EXPORTER_OTLP_ENDPOINT", default=DEFAULT_OTLP_ENDPOINT
            ).rstrip("/"),
            honeycomb_api_key=get_str_env("HONEYCOMB_API_KEY"),
        )
