from fastapi import FastAPI
from fastapi.testclient import TestClient

from blogindex.routers import admin
from blogindex.schemas.index import ContentIndex
from blogindex.schemas.post import Diagnostic
from blogindex.security import get_settings
from blogindex.settings import Settings


def make_app(index: ContentIndex, current_settings: Settings) -> FastAPI:
    app = FastAPI()
    app.state.content_index = index
    app.dependency_overrides[get_settings] = lambda: current_settings
    app.include_router(admin.router)
    return app


def test_diagnostics_lists_index_problems():
    index = ContentIndex(
        diagnostics=(Diagnostic(path="a.md", kind="InvalidDate", message="invalid date 'x'"),)
    )
    client = TestClient(make_app(index, Settings()))

    res = client.get("/diagnostics")

    assert res.status_code == 200
    assert res.json() == [{"path": "a.md", "kind": "InvalidDate", "message": "invalid date 'x'"}]


def test_reload_swaps_in_fresh_index(content_dir):
    app = make_app(ContentIndex(), Settings(CONTENT_DIR=str(content_dir)))
    client = TestClient(app)

    res = client.post("/reload")

    assert res.status_code == 200
    assert res.json() == {"posts": 2, "diagnostics": 1}
    assert len(app.state.content_index.posts) == 2


def test_reload_returns_500_when_build_fails(monkeypatch):
    def boom(_settings):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(admin, "build_site_from_settings", boom)
    original = ContentIndex()
    app = make_app(original, Settings())
    client = TestClient(app)

    res = client.post("/reload")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to rebuild index"
    assert app.state.content_index is original
