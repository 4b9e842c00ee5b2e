"""Application service (use case) for Post write operations."""

import logging
from typing import Any

from app.application.interfaces import CategoryRepository, PostRepository, TagRepository
from app.application.schemas import PostCreate, PostUpdate
from app.application.services.content_text import slugify
from app.domain.authorization import Action, require
from app.domain.entities import AuthSession, Post, Tag
from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class PostService:
    """Orchestrates post create/update/delete. Depends on repository ports (DI).

    Every operation asks the authorization gate first; store errors from the
    repositories propagate unchanged.
    """

    def __init__(
        self,
        repository: PostRepository,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
    ):
        self._repository = repository
        self._categories = category_repository
        self._tags = tag_repository

    async def get_post(self, session: AuthSession | None, post_id: str) -> Post:
        require(session, Action.READ_MANAGEMENT)
        return await self._get_existing(post_id)

    async def create_post(self, session: AuthSession | None, data: PostCreate) -> Post:
        session = require(session, Action.CREATE_POST)

        slug = data.slug or slugify(data.title)
        if not slug:
            raise ValidationError("Could not derive a slug from the title", field="slug")
        if await self._repository.slug_exists(slug):
            raise DuplicateEntityError("Post", "slug", slug)

        await self._ensure_category(data.category_id)
        tags = await self._resolve_tags(data.tag_ids)

        post = Post(
            title=data.title,
            slug=slug,
            content=data.content,
            author_id=session.user_id,
            excerpt=data.excerpt,
            featured_image=str(data.featured_image) if data.featured_image else None,
            category_id=data.category_id,
            tags=tags,
        )
        post.apply_publication(published=data.published, status=data.status)

        created = await self._repository.create(post)
        logger.info(
            "Post created: id=%s slug=%s status=%s author=%s",
            created.id,
            created.slug,
            created.status.value,
            session.user_id,
        )
        return created

    async def update_post(
        self, session: AuthSession | None, post_id: str, data: PostUpdate
    ) -> Post:
        require(session, Action.READ_MANAGEMENT)
        post = await self._get_existing(post_id)
        require(session, Action.UPDATE_POST, owner_id=post.author_id)

        provided = data.model_fields_set

        if data.slug and data.slug != post.slug:
            if await self._repository.slug_exists(data.slug, exclude_id=post.id):
                raise DuplicateEntityError("Post", "slug", data.slug)

        # Nullable fields: an explicit null clears, omission leaves untouched.
        kwargs: dict[str, Any] = {}
        if "excerpt" in provided:
            kwargs["excerpt"] = data.excerpt
        if "featured_image" in provided:
            kwargs["featured_image"] = str(data.featured_image) if data.featured_image else None
        if "category_id" in provided:
            await self._ensure_category(data.category_id)
            kwargs["category_id"] = data.category_id

        if data.tag_ids is not None:
            post.tags = await self._resolve_tags(data.tag_ids)

        post.update(
            title=data.title,
            slug=data.slug,
            content=data.content,
            status=data.status,
            published=data.published,
            **kwargs,
        )
        updated = await self._repository.update(post)
        logger.info("Post updated: id=%s status=%s", updated.id, updated.status.value)
        return updated

    async def delete_post(self, session: AuthSession | None, post_id: str) -> bool:
        require(session, Action.READ_MANAGEMENT)
        post = await self._get_existing(post_id)
        require(session, Action.DELETE_POST, owner_id=post.author_id)

        deleted = await self._repository.delete(post_id)
        if not deleted:
            raise EntityNotFoundError("Post", post_id)
        logger.info("Post deleted: id=%s", post_id)
        return deleted

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_existing(self, post_id: str) -> Post:
        post = await self._repository.get_by_id(post_id)
        if post is None:
            raise EntityNotFoundError("Post", post_id)
        return post

    async def _ensure_category(self, category_id: str | None) -> None:
        if category_id is None:
            return
        if await self._categories.get_by_id(category_id) is None:
            raise ValidationError(f"Unknown category '{category_id}'", field="category_id")

    async def _resolve_tags(self, tag_ids: list[str]) -> list[Tag]:
        unique_ids = list(dict.fromkeys(tag_ids))
        if not unique_ids:
            return []
        tags = await self._tags.get_many(unique_ids)
        missing = set(unique_ids) - {tag.id for tag in tags}
        if missing:
            raise ValidationError(
                f"Unknown tag ids: {', '.join(sorted(missing))}", field="tag_ids"
            )
        return tags
