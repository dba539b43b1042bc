from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from blogindex import dependencies as deps
from blogindex.routers import posts
from blogindex.schemas.blog import PostDetail, PostPage, PostSummary, TermDetail, TermSummary
from tests.conftest import FakePostsService


def make_app(fake_service: FakePostsService):
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: fake_service
    app.include_router(posts.router)
    return app


def make_summary(slug: str, title: str) -> PostSummary:
    return PostSummary(slug=slug, path=f"{slug}.md", title=title, permalink=f"/{slug}/")


def test_list_posts_returns_page():
    page = PostPage(
        items=[make_summary("second", "Second"), make_summary("first", "First")],
        page=1,
        pageSize=8,
        total=2,
        totalPages=1,
    )
    service = FakePostsService(list_posts_return=page)
    client = TestClient(make_app(service))

    res = client.get("/posts")

    assert res.status_code == 200
    body = res.json()
    assert [p["slug"] for p in body["items"]] == ["second", "first"]
    assert body["totalPages"] == 1
    assert service.calls == [("list_posts", 1)]


def test_list_posts_passes_page_param():
    service = FakePostsService(
        list_posts_return=PostPage(items=[], page=2, pageSize=8, total=9, totalPages=2)
    )
    client = TestClient(make_app(service))

    res = client.get("/posts", params={"page": 2})

    assert res.status_code == 200
    assert service.calls == [("list_posts", 2)]


def test_list_posts_rejects_invalid_page():
    client = TestClient(make_app(FakePostsService()))

    assert client.get("/posts", params={"page": 0}).status_code == 422


def test_list_posts_returns_404_past_last_page():
    client = TestClient(make_app(FakePostsService(list_posts_return=None)))

    res = client.get("/posts", params={"page": 5})

    assert res.status_code == 404
    assert res.json()["detail"] == "Page not found"


def test_get_post_success_with_nested_slug():
    detail = PostDetail(
        **make_summary("post/2024/hello", "Hello").model_dump(),
        content="hi",
        summaryHtml="<p>hi</p>",
        contentHtml="<p>hi</p>",
    )
    service = FakePostsService(get_post_return=detail)
    client = TestClient(make_app(service))

    res = client.get("/posts/post/2024/hello")

    assert res.status_code == 200
    assert res.json()["slug"] == "post/2024/hello"
    assert service.calls == [("get_post", "post/2024/hello")]


def test_get_post_returns_404_when_missing():
    client = TestClient(make_app(FakePostsService(get_post_return=None)))

    res = client.get("/posts/missing")

    assert res.status_code == 404


def test_list_posts_passes_through_http_exception():
    class BoomService(FakePostsService):
        def list_posts(self, page: int = 1):
            raise HTTPException(status_code=418, detail="teapot")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts")
    assert res.status_code == 418
    assert res.json()["detail"] == "teapot"


def test_list_posts_returns_500_on_unexpected_error():
    class BoomService(FakePostsService):
        def list_posts(self, page: int = 1):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve posts"


def test_get_post_returns_500_on_unexpected_error():
    class BoomService(FakePostsService):
        def get_post(self, slug: str):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts/any")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve post"


def test_tag_routes():
    tag = TermDetail(name="Linux", key="linux", count=1, posts=[make_summary("a", "A")])
    service = FakePostsService(
        tags=[TermSummary(name="Linux", key="linux", count=1)], tag_return=tag
    )
    client = TestClient(make_app(service))

    assert client.get("/tags").json() == [{"name": "Linux", "key": "linux", "count": 1}]
    res = client.get("/tags/LINUX")
    assert res.status_code == 200
    assert res.json()["posts"][0]["slug"] == "a"
    assert ("get_tag", "LINUX") in service.calls


def test_category_routes_return_404_when_missing():
    client = TestClient(make_app(FakePostsService(tag_return=None)))

    assert client.get("/categories").json() == []
    res = client.get("/categories/nothing")
    assert res.status_code == 404
    assert res.json()["detail"] == "Category not found"


def test_tag_route_returns_500_on_unexpected_error():
    class BoomService(FakePostsService):
        def get_tag(self, tag: str):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomService()))

    res = client.get("/tags/x")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve tag"
