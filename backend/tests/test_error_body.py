from __future__ import annotations

import json

from gateway_api.domain_errors import (
    ClientError,
    GatewayError,
    InsufficientCredentialsError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from gateway_api.error_body import build_error_body, build_error_response


def test_error_body_contains_stable_code_status_and_message() -> None:
    body = build_error_body(
        ResourceNotFoundError(
            "No such connection: \"rdp-7\"",
            details={"connection": "rdp-7"},
        ),
        type_base_url="https://api.gateway.test/errors/",
    )

    assert body == {
        "type": "https://api.gateway.test/errors/not_found",
        "title": "Not Found",
        "status": 404,
        "code": "NOT_FOUND",
        "message": "No such connection: \"rdp-7\"",
        "details": {"connection": "rdp-7"},
    }


def test_error_body_omits_details_when_none() -> None:
    body = build_error_body(ClientError("bad protocol"))

    assert body["status"] == 400
    assert body["code"] == "BAD_REQUEST"
    assert "details" not in body
    assert "expected" not in body


def test_error_body_falls_back_to_generic_title_for_unknown_status() -> None:
    body = build_error_body(GatewayError("odd", http_status=599))

    assert body["title"] == "Gateway Error"
    assert body["status"] == 599


def test_error_body_lists_expected_credential_fields() -> None:
    body = build_error_body(
        InsufficientCredentialsError("TOTP required", expected_fields=["username", "totp"])
    )

    assert body["status"] == 403
    assert body["code"] == "INSUFFICIENT_CREDENTIALS"
    assert body["expected"] == ["username", "totp"]


def test_error_response_is_json_with_exception_status() -> None:
    response = build_error_response(UnauthorizedError("Permission Denied.", http_status=403))

    assert response.status_code == 403
    assert response.media_type == "application/json"
    assert response.headers["content-type"].startswith("application/json")
    payload = json.loads(response.body)
    assert payload["message"] == "Permission Denied."
    assert payload["status"] == 403
