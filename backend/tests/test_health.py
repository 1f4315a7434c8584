import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from utils.responses import setup_exception_handlers, setup_request_logging


def test_health_probe(client):
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"]["status"] == "OK"
    assert body["data"]["timestamp"].endswith("Z")


def test_unknown_route_uses_error_envelope(client):
    res = client.get("/api/does-not-exist")
    assert res.status_code == 404
    assert res.json()["success"] is False
    assert res.json()["code"] == "NotFound"


def test_every_request_is_logged_with_its_status(client, caplog):
    caplog.set_level(logging.INFO, logger="http")
    client.get("/health")
    assert any(r.name == "http" and "GET /health -> 200" in r.getMessage() for r in caplog.records)


def test_unhandled_error_is_logged_as_500(caplog):
    app = FastAPI()
    setup_request_logging(app)
    setup_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    caplog.set_level(logging.INFO, logger="http")
    res = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert res.status_code == 500
    assert res.json()["code"] == "Internal"
    assert any(r.name == "http" and "GET /boom -> 500" in r.getMessage() for r in caplog.records)
