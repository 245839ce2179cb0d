"""Unit tests for JSON logging and secret redaction."""

import json
import logging

from pydantic import SecretStr

from projecthub.core.request_context import normalize_request_id, request_id_context
from projecthub.core.structured_logging import REDACTED, log_json, redact


def test_redact_masks_secret_fields_recursively():
    value = {
        "project_id": "p1",
        "key": "plain-secret",
        "Authorization": "Bearer abc",
        "api_keys": [{"name": "Prod", "key": "nested-secret"}],
    }

    redacted = redact(value)

    assert redacted["project_id"] == "p1"
    assert redacted["key"] == REDACTED
    assert redacted["Authorization"] == REDACTED
    assert redacted["api_keys"] == [{"name": "Prod", "key": REDACTED}]
    assert value["key"] == "plain-secret"


def test_redact_masks_secret_str_values():
    assert redact({"value": SecretStr("hidden")}) == {"value": REDACTED}


def test_log_json_never_writes_secrets(caplog):
    logger = logging.getLogger("projecthub.test")

    with caplog.at_level(logging.INFO, logger="projecthub.test"):
        log_json(logger, logging.INFO, "api_key_created", name="Prod", key="s3cret")

    record = caplog.records[-1]
    payload = json.loads(record.getMessage())
    assert payload["event"] == "api_key_created"
    assert payload["name"] == "Prod"
    assert payload["key"] == REDACTED
    assert "s3cret" not in record.getMessage()


def test_log_json_includes_request_id(caplog):
    logger = logging.getLogger("projecthub.test")

    with caplog.at_level(logging.INFO, logger="projecthub.test"):
        with request_id_context("req-42"):
            log_json(logger, logging.INFO, "request")

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["request_id"] == "req-42"


def test_normalize_request_id_rejects_unsafe_values():
    assert normalize_request_id("  abc  ") == "abc"
    assert normalize_request_id("") is None
    assert normalize_request_id("a\nb") is None
    assert normalize_request_id("x" * 129) is None
