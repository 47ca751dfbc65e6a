from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.server import app


def test_fastapi_app_instantiates():
    assert isinstance(app, FastAPI)


def test_health_check():
    with TestClient(app) as client:
        response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"message": "ok"}
