"""HTTP-level tests: routing, status codes and domain error translation."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.interfaces import CategoryRepository, PostRepository, UserRepository
from app.application.services import CategoryService, ImageService, PostQueryService
from app.domain.entities import AuthSession, Author, Category, Post, PostStatus, UserRole
from app.domain.exceptions import StoreError
from app.infrastructure.dependencies import (
    get_category_service,
    get_image_service,
    get_optional_session,
    get_post_query_service,
)
from app.main import app

WRITER = AuthSession(user_id="writer-1", role=UserRole.WRITER)
PUBLISHED_AT = datetime(2024, 2, 1, tzinfo=timezone.utc)


class StubPostRepository(PostRepository):
    """Serves one public post; every call fails when ``fail`` is set."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.post = Post(
            id="p-1",
            title="Hello FastAPI",
            slug="hello-fastapi",
            content="Building APIs with FastAPI",
            author_id="writer-1",
            author=Author(id="writer-1", name="Wendy"),
            status=PostStatus.PUBLISHED,
            published=True,
            published_at=PUBLISHED_AT,
        )

    def _check(self):
        if self.fail:
            raise StoreError("stub", ConnectionError("down"))

    async def get_by_id(self, post_id):
        self._check()
        return self.post if post_id == self.post.id else None

    async def get_by_slug(self, slug):
        self._check()
        return self.post if slug == self.post.slug else None

    async def slug_exists(self, slug, exclude_id=None):
        return slug == self.post.slug

    async def count(self, predicate):
        self._check()
        return 1

    async def find_page(self, predicate, ordering, skip=0, take=10):
        self._check()
        return [self.post][skip : skip + take]

    async def create(self, post):
        return post

    async def update(self, post):
        return post

    async def delete(self, post_id):
        return True


class StubCategoryRepository(CategoryRepository):
    def __init__(self, post_count: int = 0):
        self.category = Category(name="Web", slug="web", id="cat-1")
        self._post_count = post_count

    async def get_by_id(self, category_id):
        return self.category if category_id == self.category.id else None

    async def find_conflict(self, name, slug, exclude_id=None):
        return None

    async def list_with_counts(self):
        return [self.category]

    async def count_posts(self, category_id):
        return self._post_count

    async def create(self, category):
        return category

    async def update(self, category):
        return category

    async def delete(self, category_id):
        return True


class StubUserRepository(UserRepository):
    async def get_by_id(self, user_id):
        return None

    async def get_by_email(self, email):
        return None

    async def create(self, user):
        return user

    async def list_public_authors(self):
        return []


def _query_service(repository: PostRepository) -> PostQueryService:
    @asynccontextmanager
    async def open_repository():
        yield repository

    return PostQueryService(open_repository, StubCategoryRepository(), StubUserRepository())


@asynccontextmanager
async def _client(session: AuthSession | None = None, repository: PostRepository | None = None):
    app.dependency_overrides[get_optional_session] = lambda: session
    app.dependency_overrides[get_post_query_service] = lambda: _query_service(
        repository or StubPostRepository()
    )
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_public_listing_and_single_post():
    async with _client() as client:
        listing = await client.get("/api/v1/blog/posts", params={"page": "abc"})
        single = await client.get("/api/v1/blog/posts/hello-fastapi")
        missing = await client.get("/api/v1/blog/posts/nope")

    assert listing.status_code == 200
    body = listing.json()
    assert body["pagination"]["page"] == 1
    assert body["items"][0]["slug"] == "hello-fastapi"
    assert body["degraded"] is False

    assert single.status_code == 200
    assert single.json()["post"]["title"] == "Hello FastAPI"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_public_listing_degrades_when_store_is_down():
    async with _client(repository=StubPostRepository(fail=True)) as client:
        response = await client.get("/api/v1/blog/posts", params={"category": "web"})

    assert response.status_code == 200
    body = response.json()
    assert body["items"] == []
    assert body["degraded"] is True
    assert body["filters"]["category"] == "web"


@pytest.mark.asyncio
async def test_invalid_date_is_a_bad_request():
    async with _client() as client:
        response = await client.get("/api/v1/search", params={"dateFrom": "yesterday"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_search_highlights_matches():
    async with _client() as client:
        response = await client.get("/api/v1/search", params={"q": "fastapi"})

    assert response.status_code == 200
    item = response.json()["items"][0]
    assert item["highlighted_title"] == "Hello <mark>FastAPI</mark>"
    assert "<mark>FastAPI</mark>" in item["snippet"]


@pytest.mark.asyncio
async def test_management_listing_requires_bearer_token():
    async with _client() as client:
        anonymous = await client.get("/api/v1/posts")
    async with _client(session=WRITER) as client:
        writer = await client.get("/api/v1/posts")
    async with _client(session=WRITER, repository=StubPostRepository(fail=True)) as client:
        failing = await client.get("/api/v1/posts")

    assert anonymous.status_code == 401
    assert anonymous.headers["www-authenticate"] == "Bearer"
    assert writer.status_code == 200
    assert writer.json()["pagination"]["total_count"] == 1
    assert failing.status_code == 500
    assert failing.json()["detail"] == "Internal server error"


@pytest.mark.asyncio
async def test_category_delete_conflict_and_forbidden():
    admin = AuthSession(user_id="admin-1", role=UserRole.ADMIN)
    async with _client(session=admin) as client:
        app.dependency_overrides[get_category_service] = lambda: CategoryService(
            StubCategoryRepository(post_count=3)
        )
        conflict = await client.delete("/api/v1/categories/cat-1")
    async with _client(session=WRITER) as client:
        app.dependency_overrides[get_category_service] = lambda: CategoryService(
            StubCategoryRepository()
        )
        forbidden = await client.delete("/api/v1/categories/cat-1")

    assert conflict.status_code == 409
    assert "3 post(s)" in conflict.json()["detail"]
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_upload_without_image_host_is_bad_gateway():
    async with _client(session=WRITER) as client:
        app.dependency_overrides[get_image_service] = lambda: ImageService(
            None, folder="blog", max_size_bytes=1024, allowed_types=["image/png"]
        )
        response = await client.post(
            "/api/v1/upload", files={"file": ("a.png", b"\x89PNG....", "image/png")}
        )
        missing_file = await client.post("/api/v1/upload")

    assert response.status_code == 502
    assert missing_file.status_code == 400
    assert missing_file.json()["detail"] == "No file provided"


@pytest.mark.asyncio
async def test_anonymous_upload_is_unauthorized():
    async with _client() as client:
        app.dependency_overrides[get_image_service] = lambda: ImageService(
            None, folder="blog", max_size_bytes=1024, allowed_types=["image/png"]
        )
        response = await client.post(
            "/api/v1/upload", files={"file": ("a.png", b"\x89PNG....", "image/png")}
        )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_category_seo_metadata():
    async with _client() as client:
        found = await client.get("/api/v1/seo/categories/web")
        missing = await client.get("/api/v1/seo/categories/nope")

    assert found.status_code == 200
    body = found.json()
    assert body["metadata"]["title"].startswith("Web Posts | ")
    assert body["metadata"]["open_graph"]["url"].endswith("/blog?category=web")
    crumbs = body["structured_data"][0]["itemListElement"]
    assert [c["name"] for c in crumbs] == ["Home", "Blog", "Web"]
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_robots_and_sitemap():
    async with _client() as client:
        robots = await client.get("/api/v1/seo/robots.txt")
        sitemap = await client.get("/api/v1/seo/sitemap.xml")

    assert robots.status_code == 200
    assert "Disallow: /api" in robots.text
    assert sitemap.status_code == 200
    assert sitemap.headers["content-type"].startswith("application/xml")
    assert "/blog/hello-fastapi</loc>" in sitemap.text
