from __future__ import annotations

import json
import logging
import sys

from patient_service.core.logging import JsonFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="patient_service.patients",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Patient %s",
        args=("created",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_tolerates_missing_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record()))
    assert payload["message"] == "Patient created"
    assert payload["logger"] == "patient_service.patients"
    assert payload["level"] == "INFO"
    assert payload["request_id"] is None
    assert payload["patient_id"] is None
    assert "exception" not in payload


def test_formatter_maps_request_metadata_aliases() -> None:
    payload = json.loads(
        JsonFormatter().format(
            _record(
                request_id="req-1",
                http_method="PUT",
                request_path="/patients/{patient_id}",
                status_code=409,
                error="email_already_exists",
                patient_id="abc",
            )
        )
    )
    assert payload["method"] == "PUT"
    assert payload["path"] == "/patients/{patient_id}"
    assert payload["status_code"] == 409
    assert payload["error"] == "email_already_exists"
    assert payload["patient_id"] == "abc"


def test_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exception"]
