import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from accounts_api.main import app
from accounts_api.core.errors import (
    STATUS_BY_CODE,
    ErrorCode,
    UserNotFound,
    format_validation_errors,
    register_exception_handlers,
)
from accounts_api.middleware import register_middleware


def test_health_endpoints():
    client = TestClient(app)

    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert "timestamp" in body and body["uptime"] >= 0

    assert client.get("/").status_code == 200
    assert client.get("/api").json() == {"message": "API is running"}


def test_every_error_code_has_a_status():
    assert set(STATUS_BY_CODE) == set(ErrorCode)


def test_format_validation_errors_strips_location_prefix():
    details = format_validation_errors(
        [
            {"loc": ("body", "email"), "msg": "value is not a valid email address"},
            {"loc": ("path", "user_id"), "msg": "Input should be greater than 0"},
        ]
    )
    assert details == [
        {"field": "email", "message": "value is not a valid email address"},
        {"field": "user_id", "message": "Input should be greater than 0"},
    ]


def test_whole_body_errors_are_reported_against_body():
    details = format_validation_errors(
        [
            {"loc": ("body",), "msg": "Value error, At least one field must be provided for update"},
            {"loc": ("body", 1), "type": "json_invalid", "msg": "JSON decode error"},
        ]
    )
    assert [d["field"] for d in details] == ["body", "body"]

    client = TestClient(app)
    r = client.post(
        "/api/auth/sign-in",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "body"


def test_domain_and_unhandled_errors_are_rendered_as_json():
    mini_app = FastAPI()
    register_exception_handlers(mini_app)

    @mini_app.get("/missing")
    def missing():
        raise UserNotFound()

    @mini_app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    client = TestClient(mini_app, raise_server_exceptions=False)

    r = client.get("/missing")
    assert r.status_code == 404
    assert r.json() == {
        "error": "User not found",
        "code": "user_not_found",
        "message": "User with the specified ID does not exist",
    }

    r2 = client.get("/boom")
    assert r2.status_code == 500
    assert r2.json() == {"error": "Internal server error"}
    assert "exploded" not in r2.text


def test_failed_requests_are_still_logged(caplog):
    mini_app = FastAPI()
    register_middleware(mini_app)
    register_exception_handlers(mini_app)

    @mini_app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    client = TestClient(mini_app, raise_server_exceptions=False)
    with caplog.at_level(logging.INFO, logger="accounts_api.middleware"):
        r = client.get("/boom")

    assert r.status_code == 500
    lines = [rec.getMessage() for rec in caplog.records if rec.name == "accounts_api.middleware"]
    assert len(lines) == 1
    assert lines[0].startswith("GET /boom 500 - ")
