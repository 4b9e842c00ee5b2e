"""Query orchestrator for posts: composes predicates and pagination into page envelopes.

This is the read path's only contact with the content store. Count and page
queries run concurrently, each on a repository bound to its own session, so
the reported total may be off by one if rows change between the two.
Public surfaces degrade to an empty envelope when the store is unreachable;
management surfaces propagate ``StoreError``.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from app.application.interfaces import (
    CategoryRepository,
    PostRepositoryFactory,
    UserRepository,
)
from app.application.services.filter_builder import (
    PUBLIC_FILTERS,
    build_post_predicate,
    related_posts_predicate,
)
from app.application.services.pagination import (
    normalize_limit,
    normalize_page,
    page_window,
    paginate,
)
from app.domain.authorization import Action, require
from app.domain.entities import (
    AuthorFacet,
    AuthSession,
    Category,
    Post,
    PostOrdering,
    PostPage,
    PostPredicate,
    PostSearchCriteria,
)
from app.domain.exceptions import EntityNotFoundError, StoreError

logger = logging.getLogger(__name__)


async def _run_together(*coros: Coroutine[Any, Any, Any]) -> list[Any]:
    """Await ``coros`` concurrently; the first failure cancels the rest and is re-raised."""
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except BaseExceptionGroup as errors:
        raise errors.exceptions[0] from None
    return [task.result() for task in tasks]


class PostQueryService:
    """Read-side use cases for posts: search, listings, single post, facets."""

    def __init__(
        self,
        repositories: PostRepositoryFactory,
        category_repository: CategoryRepository | None = None,
        user_repository: UserRepository | None = None,
        *,
        public_page_size: int = 6,
        management_page_size: int = 10,
        search_page_size: int = 10,
        max_page_size: int = 100,
        related_limit: int = 3,
    ):
        self._repositories = repositories
        self._categories = category_repository
        self._users = user_repository
        self._public_page_size = public_page_size
        self._management_page_size = management_page_size
        self._search_page_size = search_page_size
        self._max_page_size = max_page_size
        self._related_limit = related_limit

    # ── Public surfaces ──────────────────────────────────────────────

    async def search_posts(
        self,
        criteria: PostSearchCriteria,
        page: int | str | None = None,
        limit: int | str | None = None,
    ) -> PostPage:
        """Full-text-ish search over public posts.

        Raises:
            ValidationError: a date filter could not be parsed.
        """
        predicate = build_post_predicate(criteria, public=True)
        page_no = normalize_page(page)
        size = normalize_limit(limit, self._search_page_size, self._max_page_size)
        return await self._public_page(predicate, page_no, size, criteria.echo())

    async def list_public_posts(
        self,
        criteria: PostSearchCriteria,
        page: int | str | None = None,
    ) -> PostPage:
        """The public blog grid: fixed page size, same filters as search."""
        predicate = build_post_predicate(criteria, public=True)
        page_no = normalize_page(page)
        return await self._public_page(
            predicate, page_no, self._public_page_size, criteria.echo()
        )

    async def get_published_post(self, slug: str) -> tuple[Post, list[Post]]:
        """Return a public post by slug together with its related posts.

        A store outage is reported as not-found for this surface.
        """
        try:
            post, related = await _run_together(
                self._get_by_slug(slug),
                self._find(
                    related_posts_predicate(slug),
                    PostOrdering.PUBLISHED_DESC,
                    0,
                    self._related_limit,
                ),
            )
        except StoreError as exc:
            logger.warning("Post lookup for slug '%s' degraded: %s", slug, exc)
            raise EntityNotFoundError("Post", slug) from exc

        if post is None or not post.is_public:
            raise EntityNotFoundError("Post", slug)
        return post, related

    async def count_public_posts(self) -> int:
        """Total number of public posts; 0 when the store is unreachable."""
        try:
            return await self._count(PostPredicate(filters=PUBLIC_FILTERS))
        except StoreError as exc:
            logger.warning("Public post count degraded: %s", exc)
            return 0

    async def list_sitemap_posts(self, limit: int = 5000) -> list[Post]:
        """Newest public posts for sitemap generation; empty when the store is down."""
        try:
            return await self._find(
                PostPredicate(filters=PUBLIC_FILTERS), PostOrdering.PUBLISHED_DESC, 0, limit
            )
        except StoreError as exc:
            logger.warning("Sitemap post listing degraded: %s", exc)
            return []

    async def get_facets(self) -> tuple[list[Category], list[AuthorFacet]]:
        """Categories (with post counts) and authors to offer as search filters."""
        try:
            categories = await self._categories.list_with_counts() if self._categories else []
            authors = await self._users.list_public_authors() if self._users else []
        except StoreError as exc:
            logger.warning("Search facets degraded: %s", exc)
            return [], []
        return categories, authors

    # ── Management surfaces ──────────────────────────────────────────

    async def list_posts(
        self,
        session: AuthSession | None,
        criteria: PostSearchCriteria,
        page: int | str | None = None,
        limit: int | str | None = None,
    ) -> PostPage:
        """Dashboard listing across all statuses, newest first.

        Raises:
            UnauthenticatedError / ForbiddenError: the gate denies management reads.
            StoreError: the store failed; no fallback on this surface.
        """
        require(session, Action.READ_MANAGEMENT)
        predicate = build_post_predicate(criteria, public=False)
        page_no = normalize_page(page)
        size = normalize_limit(limit, self._management_page_size, self._max_page_size)
        return await self._run(
            predicate, PostOrdering.CREATED_DESC, page_no, size, criteria.echo()
        )

    # ── Internals ────────────────────────────────────────────────────

    async def _public_page(
        self,
        predicate: PostPredicate,
        page: int,
        limit: int,
        filters: dict[str, str],
    ) -> PostPage:
        try:
            return await self._run(
                predicate, PostOrdering.PUBLISHED_DESC, page, limit, filters
            )
        except StoreError as exc:
            logger.warning(
                "Public post listing degraded to empty result (page=%d, limit=%d): %s",
                page,
                limit,
                exc,
            )
            return PostPage(
                items=[],
                pagination=paginate(page, limit, 0),
                filters=filters,
                degraded=True,
            )

    async def _run(
        self,
        predicate: PostPredicate,
        ordering: PostOrdering,
        page: int,
        limit: int,
        filters: dict[str, str],
    ) -> PostPage:
        skip, take = page_window(page, limit)
        total, items = await _run_together(
            self._count(predicate),
            self._find(predicate, ordering, skip, take),
        )
        logger.debug(
            "Post page fetched: page=%d limit=%d total=%d items=%d",
            page,
            limit,
            total,
            len(items),
        )
        return PostPage(
            items=items,
            pagination=paginate(page, limit, total),
            filters=filters,
        )

    async def _count(self, predicate: PostPredicate) -> int:
        async with self._repositories() as repository:
            return await repository.count(predicate)

    async def _find(
        self,
        predicate: PostPredicate,
        ordering: PostOrdering,
        skip: int,
        take: int,
    ) -> list[Post]:
        async with self._repositories() as repository:
            return await repository.find_page(predicate, ordering, skip=skip, take=take)

    async def _get_by_slug(self, slug: str) -> Post | None:
        async with self._repositories() as repository:
            return await repository.get_by_slug(slug)
