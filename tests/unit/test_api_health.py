"""Tests for health check endpoints."""
import pytest
from flask import Flask

from dsync.api.health import bp as health_bp


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.data == b"ok"
    assert response.content_type.startswith("text/plain")


def test_readiness_check(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.data == b"ready"


@pytest.fixture()
def bare_client():
    app = Flask(__name__)
    app.register_blueprint(health_bp)
    with app.test_client() as client:
        yield client


def test_not_ready_without_extractor(bare_client):
    assert bare_client.get("/health").status_code == 200
    response = bare_client.get("/ready")
    assert response.status_code == 503
    assert response.data == b"not ready"
