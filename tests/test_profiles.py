"""Tests for the instrumentation profiles."""

import pytest

from otel_demo.profiles import COLLECTOR_CONFIG_FILE, InstrumentationProfile


@pytest.mark.parametrize(
    ("profile", "expected"),
    [
        (InstrumentationProfile.AGENT, True),
        (InstrumentationProfile.COLLECTOR, False),
        (InstrumentationProfile.MANUAL, False),
    ],
)
def test_auxiliary_fetch_only_for_agent(profile, expected):
    assert profile.auxiliary_fetch is expected


def test_handler_paths():
    assert InstrumentationProfile.AGENT.handler == "otel_demo.functions.agent.handler"
    assert InstrumentationProfile.MANUAL.handler == "otel_demo.functions.manual.handler"


def test_agent_environment():
    env = InstrumentationProfile.AGENT.environment("records", "otel-demo", "secret")
    assert env == {
        "TABLE_NAME": "records",
        "OTEL_SERVICE_NAME": "otel-demo",
        "INSTRUMENTATION_PROFILE": "agent",
        "AWS_LAMBDA_EXEC_WRAPPER": "/opt/otel-instrument",
        "OPENTELEMETRY_COLLECTOR_CONFIG_FILE": COLLECTOR_CONFIG_FILE,
        "HONEYCOMB_API_KEY": "secret",
    }


def test_wrapped_profiles_share_wrapper_and_collector_config():
    agent = InstrumentationProfile.AGENT.environment("records", "otel-demo", "secret")
    collector = InstrumentationProfile.COLLECTOR.environment("records", "otel-demo", "secret")
    assert {k: v for k, v in agent.items() if k != "INSTRUMENTATION_PROFILE"} == {
        k: v for k, v in collector.items() if k != "INSTRUMENTATION_PROFILE"
    }


def test_agent_environment_without_key():
    env = InstrumentationProfile.AGENT.environment("records", "otel-demo")
    assert "HONEYCOMB_API_KEY" not in env
    assert env["OPENTELEMETRY_COLLECTOR_CONFIG_FILE"] == COLLECTOR_CONFIG_FILE


def test_collector_environment():
    env = InstrumentationProfile.COLLECTOR.environment("records", "otel-demo", "secret")
    assert env["AWS_LAMBDA_EXEC_WRAPPER"] == "/opt/otel-instrument"
    assert env["OPENTELEMETRY_COLLECTOR_CONFIG_FILE"] == COLLECTOR_CONFIG_FILE
    assert env["HONEYCOMB_API_KEY"] == "secret"


def test_manual_environment_has_no_wrapper():
    env = InstrumentationProfile.MANUAL.environment("records", "otel-demo")
    assert "AWS_LAMBDA_EXEC_WRAPPER" not in env
    assert "HONEYCOMB_API_KEY" not in env
    assert env["INSTRUMENTATION_PROFILE"] == "manual"


def test_manual_environment_passes_key():
    env = InstrumentationProfile.MANUAL.environment("records", "otel-demo", "secret")
    assert env["HONEYCOMB_API_KEY"] == "secret"
    assert "OPENTELEMETRY_COLLECTOR_CONFIG_FILE" not in env
