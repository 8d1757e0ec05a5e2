"""Record-ingest handler shared by every instrumentation profile."""

import json
import logging
import os
import random
import uuid
from decimal import Decimal
from typing import Any, Optional

import boto3
from opentelemetry import trace
from requests import Session

from .config import Settings

logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)

USER_ID_RANGE = 10

# OpenTelemetry log severity numbers
SEVERITY = {"TRACE": 1, "DEBUG": 5, "INFO": 9, "WARN": 13, "ERROR": 17}


def ingest_event(name: str, body: str, severity: str = "INFO", **attributes: Any) -> None:
    """Attach an ingest log line to the current span.

    Events below EVENTS_LOG_LEVEL (default INFO) are dropped.
    """
    threshold = SEVERITY.get(os.getenv("EVENTS_LOG_LEVEL", "INFO").upper(), SEVERITY["INFO"])
    if SEVERITY[severity] < threshold:
        return

    span = trace.get_current_span()
    if not span.is_recording():
        return

    span.add_event(
        f"demo.ingest.{name}",
        {
            "event.severity_text": severity,
            "event.severity_number": SEVERITY[severity],
            "event.body": body,
            **attributes,
        },
    )


def pick_user_id() -> int:
    """Pick the upstream user to fetch, uniformly from [0, 10)."""
    return random.randrange(USER_ID_RANGE)


def new_record_id() -> str:
    return str(uuid.uuid4())


def merge_record(payload: dict[str, Any], record_id: str) -> dict[str, Any]:
    """Copy every upstream field, then set `id` to the generated identifier."""
    return {**payload, "id": record_id}


def to_item(record: dict[str, Any]) -> dict[str, Any]:
    # the DynamoDB resource layer only accepts Decimal for numbers
    return json.loads(json.dumps(record), parse_float=Decimal)


class RecordIngestHandler:
    """Turns one invocation into one persisted record.

    The table and session are process-wide: build them once and reuse
    the handler across invocations.
    """

    def __init__(self, settings: Settings, table, session: Session):
        self.settings = settings
        self.table = table
        self.session = session

    def fetch_user(self, user_id: int) -> dict[str, Any]:
        """GET the user and decode its body.

        The status code is not checked: jsonplaceholder answers a missing
        user with 404 and `{}`, which becomes a record holding only `id`.
        """
        with tracer.start_as_current_span("fetch_user") as span:
            span.set_attribute("demo.user.id", user_id)
            response = self.session.get(f"{self.settings.users_url}/{user_id}")
            span.set_attribute("http.status_code", response.status_code)
            return response.json()

    def fetch_comments(self) -> Any:
        with tracer.start_as_current_span("fetch_comments") as span:
            response = self.session.get(self.settings.comments_url)
            span.set_attribute("http.status_code", response.status_code)
            return response.json()

    def put_record(self, record: dict[str, Any]) -> None:
        with tracer.start_as_current_span("put_record") as span:
            span.set_attribute("demo.record.id", record["id"])
            self.table.put_item(Item=to_item(record))

    def handle(self, event: Any, context: Any = None) -> dict[str, Any]:
        """Fetch a random user, store it under a fresh id and return it.

        The event is not inspected. Network, decode and write errors
        propagate to the caller and nothing is written after a failed fetch.

        Args:
            event: Lambda event (not used)
            context: Lambda context (not used)

        Returns:
            dict: Response with status code 200 and the stored record as body
        """
        try:
            user_id = pick_user_id()
            user = self.fetch_user(user_id)
            ingest_event(
                "fetched-user",
                f"Fetched user {user_id} from {self.settings.users_url}",
                "DEBUG",
                **{"demo.user.id": user_id},
            )

            if self.settings.auxiliary_fetch:
                # decoded but never stored
                self.fetch_comments()

            record = merge_record(user, new_record_id())
            self.put_record(record)
            ingest_event(
                "saved-record",
                f"Saved record {record['id']} to table {self.settings.table_name}",
                **{"demo.record.id": record["id"]},
            )
        except Exception as e:
            # the invocation span records the exception itself
            ingest_event("failed", f"Record ingest failed: {e}", "ERROR")
            logger.exception("Record ingest failed")
            raise

        return {
            "statusCode": 200,
            "body": json.dumps(record),
        }

    __call__ = handle


def build_handler(
    settings: Optional[Settings] = None,
    table=None,
    session: Optional[Session] = None,
) -> RecordIngestHandler:
    """Create the handler with its process-wide clients.

    Args:
        settings: Defaults to Settings.from_env()
        table: DynamoDB Table resource, defaults to the configured table
        session: HTTP session, defaults to a new requests Session
    """
    settings = settings or Settings.from_env()
    if table is None:
        table = boto3.resource("dynamodb").Table(settings.table_name)
    logger.info(
        "Record ingest handler ready (profile=%s, table=%s, auxiliary_fetch=%s)",
        settings.profile.value,
        settings.table_name,
        settings.auxiliary_fetch,
    )
    return RecordIngestHandler(settings, table, session or Session())
