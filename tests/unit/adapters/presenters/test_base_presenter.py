from __future__ import annotations

import json

from pension_api.adapters.presenters.base_presenter import BasePresenter
from pension_api.adapters.schemas.http.envelopes import ErrorEnvelope


def test_present_error_builds_envelope_and_headers() -> None:
    p = BasePresenter()

    result = p.present_error(
        code="INVALID_TENANT_ID",
        http_status=400,
        message="bad tenant",
        trace_id="req-9",
        details={"tenant_id": "Acme"},
    )

    assert isinstance(result.body, ErrorEnvelope)
    assert result.status_code == 400
    assert result.headers == {"X-Request-ID": "req-9"}
    assert result.body.error.code == "INVALID_TENANT_ID"
    assert result.body.error.trace_id == "req-9"


def test_to_response_renders_status_headers_and_body() -> None:
    p = BasePresenter()
    result = p.present_error(code="EMPTY_MUTATIONS", http_status=400, message="empty")

    response = p.to_response(result)

    assert response.status_code == 400
    assert "x-request-id" not in response.headers
    assert json.loads(response.body) == {
        "error": {
            "code": "EMPTY_MUTATIONS",
            "http_status": 400,
            "message": "empty",
            "details": {},
            "trace_id": None,
        }
    }
