from fastapi import FastAPI
from fastapi.testclient import TestClient

from blogindex.routers import health
from blogindex.security import get_settings
from blogindex.settings import Settings


def make_app(current_settings: Settings) -> FastAPI:
    app = FastAPI()
    app.dependency_overrides[get_settings] = lambda: current_settings
    app.include_router(health.router)
    return app


def test_healthz_returns_ok():
    client = TestClient(make_app(Settings()))

    res = client.get("/healthz")

    assert res.status_code == 200
    assert res.text == "ok"


def test_version_reports_build_info():
    client = TestClient(
        make_app(Settings(VERSION="v1.2.3", GIT_COMMIT="abc123", BUILD_TIME="2024-01-01"))
    )

    res = client.get("/version")

    assert res.json() == {
        "version": "v1.2.3",
        "gitCommit": "abc123",
        "buildTime": "2024-01-01",
    }
