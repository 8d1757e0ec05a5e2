"""Shared fixtures for the record-ingest tests."""

import json
from typing import Any
from unittest.mock import Mock

import pytest
from requests import Response, Session

from otel_demo.config import Settings
from otel_demo.ingest import RecordIngestHandler
from otel_demo.profiles import InstrumentationProfile

USER = {
    "id": 7,
    "name": "Leanne Graham",
    "username": "Bret",
    "email": "Sincere@april.biz",
    "address": {"city": "Gwenborough", "geo": {"lat": "-37.3159", "lng": "81.1496"}},
}

COMMENTS = [{"postId": 1, "id": 1, "name": "id labore ex et quam laborum", "body": "laudantium"}]


def json_response(payload: Any, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json.loads(json.dumps(payload))
    return response


def http_response(status_code: int, content: bytes) -> Response:
    """A real requests Response, as returned by jsonplaceholder."""
    response = Response()
    response.status_code = status_code
    response._content = content
    response.headers["Content-Type"] = "application/json; charset=utf-8"
    return response


@pytest.fixture
def settings() -> Settings:
    return Settings(table_name="records", profile=InstrumentationProfile.MANUAL)


@pytest.fixture
def agent_settings() -> Settings:
    return Settings(
        table_name="records", profile=InstrumentationProfile.AGENT, auxiliary_fetch=True
    )


@pytest.fixture
def mock_session() -> Mock:
    """Session serving the user on /users/{id} and comments on /comments."""
    session = Mock(spec=Session)

    def get(url: str, *args: Any, **kwargs: Any) -> Mock:
        if url.endswith("/comments"):
            return json_response(COMMENTS)
        return json_response(USER)

    session.get.side_effect = get
    return session


@pytest.fixture
def mock_table() -> Mock:
    table = Mock()
    table.put_item.return_value = {}
    return table


@pytest.fixture
def ingest(settings: Settings, mock_table: Mock, mock_session: Mock) -> RecordIngestHandler:
    return RecordIngestHandler(settings, mock_table, mock_session)
