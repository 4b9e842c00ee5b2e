"""Unit tests for the PostQueryService (read-side orchestration)."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

import pytest

from app.application.interfaces import CategoryRepository, PostRepository, UserRepository
from app.application.services import PostQueryService
from app.domain.entities import (
    Author,
    AuthorFacet,
    AuthSession,
    Category,
    FilterOperator,
    Post,
    PostField,
    PostFilter,
    PostOrdering,
    PostPredicate,
    PostSearchCriteria,
    PostStatus,
    UserRole,
)
from app.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    StoreError,
    UnauthenticatedError,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _value(post: Post, field: PostField):
    if field == PostField.CATEGORY_SLUG:
        return post.category.slug if post.category else None
    if field == PostField.AUTHOR_NAME:
        return post.author.name if post.author else None
    value = getattr(post, field.value)
    return value.value if hasattr(value, "value") else value


def _matches(post: Post, leaf: PostFilter) -> bool:
    actual = _value(post, leaf.field_name)
    expected = getattr(leaf.value, "value", leaf.value)
    if leaf.operator == FilterOperator.EQUALS:
        return actual == expected
    if leaf.operator == FilterOperator.NOT_EQUALS:
        return actual != expected
    if leaf.operator == FilterOperator.CONTAINS:
        return actual is not None and str(expected).lower() in str(actual).lower()
    if actual is None:
        return False
    if leaf.operator == FilterOperator.GTE:
        return actual >= expected
    return actual <= expected


class FakePostRepository(PostRepository):
    """In-memory fake that evaluates predicates the way the SQL repository does."""

    def __init__(self, posts: list[Post], fail: bool = False):
        self.posts = posts
        self.fail = fail
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self):
        if self.fail:
            raise StoreError("fake", ConnectionError("store down"))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        self.in_flight -= 1

    def _filter(self, predicate: PostPredicate) -> list[Post]:
        result = [p for p in self.posts if all(_matches(p, f) for f in predicate.filters)]
        if predicate.any_of:
            result = [p for p in result if any(_matches(p, f) for f in predicate.any_of)]
        return result

    async def get_by_id(self, post_id):
        await self._enter()
        return next((p for p in self.posts if p.id == post_id), None)

    async def get_by_slug(self, slug):
        await self._enter()
        return next((p for p in self.posts if p.slug == slug), None)

    async def slug_exists(self, slug, exclude_id=None):
        return any(p.slug == slug and p.id != exclude_id for p in self.posts)

    async def count(self, predicate):
        await self._enter()
        return len(self._filter(predicate))

    async def find_page(self, predicate, ordering, skip=0, take=10):
        await self._enter()
        rows = self._filter(predicate)
        if ordering == PostOrdering.PUBLISHED_DESC:
            rows.sort(key=lambda p: (p.published_at or datetime.min.replace(tzinfo=timezone.utc), p.created_at), reverse=True)
        else:
            rows.sort(key=lambda p: p.created_at, reverse=True)
        return rows[skip : skip + take]

    async def create(self, post):
        self.posts.append(post)
        return post

    async def update(self, post):
        return post

    async def delete(self, post_id):
        return False


class FakeCategoryRepository(CategoryRepository):
    def __init__(self, categories: list[Category], fail: bool = False):
        self._categories = categories
        self._fail = fail

    async def get_by_id(self, category_id):
        return next((c for c in self._categories if c.id == category_id), None)

    async def find_conflict(self, name, slug, exclude_id=None):
        return None

    async def list_with_counts(self):
        if self._fail:
            raise StoreError("category listing")
        return sorted(self._categories, key=lambda c: c.name)

    async def count_posts(self, category_id):
        return 0

    async def create(self, category):
        return category

    async def update(self, category):
        return category

    async def delete(self, category_id):
        return True


class FakeUserRepository(UserRepository):
    def __init__(self, authors: list[AuthorFacet]):
        self._authors = authors

    async def get_by_id(self, user_id):
        return None

    async def get_by_email(self, email):
        return None

    async def create(self, user):
        return user

    async def list_public_authors(self):
        return self._authors


def _factory(repository: FakePostRepository):
    @asynccontextmanager
    async def open_repository():
        yield repository

    return open_repository


WEB = Category(name="Web Development", slug="web-dev", id="cat-web")
ALICE = Author(id="u-alice", name="Alice Rodriguez")
BOB = Author(id="u-bob", name="Bob Kim")


def _post(index: int, *, public: bool = True, category: Category | None = None, author: Author = ALICE, **kwargs) -> Post:
    published_at = BASE_TIME + timedelta(days=index) if public else None
    return Post(
        id=f"p-{index}",
        title=kwargs.pop("title", f"Post {index}"),
        slug=f"post-{index}",
        content=kwargs.pop("content", f"Body of post {index}"),
        author_id=author.id,
        author=author,
        category=category,
        category_id=category.id if category else None,
        status=PostStatus.PUBLISHED if public else PostStatus.DRAFT,
        published=public,
        published_at=published_at,
        created_at=BASE_TIME + timedelta(days=index),
        **kwargs,
    )


@pytest.fixture
def posts() -> list[Post]:
    rows = [_post(i) for i in range(1, 8)]
    rows[0] = _post(1, title="Learning Next.js", category=WEB)
    rows[1] = _post(2, content="Deploying Next.js apps", author=BOB)
    rows.append(_post(20, public=False, title="Secret Next.js draft"))
    return rows


@pytest.fixture
def repository(posts) -> FakePostRepository:
    return FakePostRepository(posts)


@pytest.fixture
def service(repository) -> PostQueryService:
    return PostQueryService(
        _factory(repository),
        FakeCategoryRepository([WEB]),
        FakeUserRepository([AuthorFacet(id=ALICE.id, name=ALICE.name)]),
    )


@pytest.mark.asyncio
async def test_public_listing_excludes_drafts_and_uses_page_size_six(service: PostQueryService):
    page = await service.list_public_posts(PostSearchCriteria(), page=1)

    assert len(page.items) == 6
    assert page.pagination.total_count == 7
    assert page.pagination.total_pages == 2
    assert page.pagination.has_next is True
    assert all(p.is_public for p in page.items)
    assert page.items[0].slug == "post-7"  # newest first


@pytest.mark.asyncio
async def test_search_matches_title_or_content_case_insensitively(service: PostQueryService):
    page = await service.search_posts(PostSearchCriteria(query="next.JS"))

    assert {p.slug for p in page.items} == {"post-1", "post-2"}
    assert page.filters["query"] == "next.JS"
    assert page.pagination.limit == 10


@pytest.mark.asyncio
async def test_search_filters_by_category_slug_and_author(service: PostQueryService):
    by_category = await service.search_posts(PostSearchCriteria(category="web-dev"))
    by_author = await service.search_posts(PostSearchCriteria(author="bob"))

    assert [p.slug for p in by_category.items] == ["post-1"]
    assert [p.slug for p in by_author.items] == ["post-2"]


@pytest.mark.asyncio
async def test_search_date_range(service: PostQueryService):
    page = await service.search_posts(
        PostSearchCriteria(date_from="2024-01-03", date_to="2024-01-05")
    )
    assert sorted(p.slug for p in page.items) == ["post-2", "post-3", "post-4"]


@pytest.mark.asyncio
async def test_count_and_page_run_concurrently(service: PostQueryService, repository):
    await service.search_posts(PostSearchCriteria())
    assert repository.max_in_flight == 2


class FailingCountPostRepository(FakePostRepository):
    """Count fails once the page query is underway; the page query never finishes on its own."""

    def __init__(self, posts: list[Post]):
        super().__init__(posts)
        self.page_started = asyncio.Event()
        self.page_cancelled = False

    async def count(self, predicate):
        await self.page_started.wait()
        raise StoreError("count", ConnectionError("connection reset"))

    async def find_page(self, predicate, ordering, skip=0, take=10):
        self.page_started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.page_cancelled = True
            raise


@pytest.mark.asyncio
async def test_failed_count_cancels_the_page_query(posts):
    repository = FailingCountPostRepository(posts)
    service = PostQueryService(_factory(repository))

    page = await asyncio.wait_for(service.list_public_posts(PostSearchCriteria()), timeout=5)

    assert page.degraded is True
    assert page.items == []
    assert repository.page_cancelled is True


@pytest.mark.asyncio
async def test_public_listing_degrades_to_empty_page_when_store_fails(repository, service):
    repository.fail = True
    page = await service.list_public_posts(PostSearchCriteria(category="web-dev"), page="2")

    assert page.items == []
    assert page.degraded is True
    assert page.pagination.total_count == 0
    assert page.pagination.page == 2
    assert page.filters["category"] == "web-dev"


@pytest.mark.asyncio
async def test_management_listing_requires_writer_or_admin(service: PostQueryService):
    with pytest.raises(UnauthenticatedError):
        await service.list_posts(None, PostSearchCriteria())
    with pytest.raises(ForbiddenError):
        await service.list_posts(
            AuthSession(user_id="r", role=UserRole.USER), PostSearchCriteria()
        )


@pytest.mark.asyncio
async def test_management_listing_includes_drafts_and_propagates_store_errors(repository, service):
    admin = AuthSession(user_id="a", role=UserRole.ADMIN)
    page = await service.list_posts(admin, PostSearchCriteria(status="DRAFT"))
    assert [p.slug for p in page.items] == ["post-20"]

    repository.fail = True
    with pytest.raises(StoreError):
        await service.list_posts(admin, PostSearchCriteria())


@pytest.mark.asyncio
async def test_get_published_post_with_related(service: PostQueryService):
    post, related = await service.get_published_post("post-3")

    assert post.slug == "post-3"
    assert len(related) == 3
    assert "post-3" not in {p.slug for p in related}
    assert all(p.is_public for p in related)


@pytest.mark.asyncio
async def test_draft_post_is_not_found_publicly(service: PostQueryService):
    with pytest.raises(EntityNotFoundError):
        await service.get_published_post("post-20")
    with pytest.raises(EntityNotFoundError):
        await service.get_published_post("missing")


@pytest.mark.asyncio
async def test_store_failure_on_single_post_is_reported_as_not_found(repository, service):
    repository.fail = True
    with pytest.raises(EntityNotFoundError):
        await service.get_published_post("post-3")


@pytest.mark.asyncio
async def test_facets_and_counts(service: PostQueryService):
    categories, authors = await service.get_facets()
    assert [c.slug for c in categories] == ["web-dev"]
    assert [a.name for a in authors] == ["Alice Rodriguez"]
    assert await service.count_public_posts() == 7


@pytest.mark.asyncio
async def test_facets_degrade_to_empty(repository):
    service = PostQueryService(
        _factory(repository),
        FakeCategoryRepository([WEB], fail=True),
        FakeUserRepository([]),
    )
    assert await service.get_facets() == ([], [])


@pytest.mark.asyncio
async def test_sitemap_posts_are_public_only(service: PostQueryService, repository):
    posts = await service.list_sitemap_posts()
    assert len(posts) == 7

    repository.fail = True
    assert await service.list_sitemap_posts() == []
