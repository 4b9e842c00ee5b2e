"""Application services (use cases) for categories and tags."""

import logging

from app.application.interfaces import CategoryRepository, TagRepository
from app.application.schemas import CategoryCreate, CategoryUpdate, TagCreate
from app.application.services.content_text import slugify
from app.domain.authorization import Action, require
from app.domain.entities import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_TAG_COLOR,
    AuthSession,
    Category,
    Tag,
)
from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _derive_slug(name: str, slug: str | None) -> str:
    result = slug or slugify(name)
    if not result:
        raise ValidationError("Could not derive a slug from the name", field="slug")
    return result


class CategoryService:
    """Category CRUD. Deletion is refused while posts still reference the category."""

    def __init__(self, repository: CategoryRepository):
        self._repository = repository

    async def list_categories(self) -> list[Category]:
        return await self._repository.list_with_counts()

    async def get_category(self, category_id: str) -> Category:
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

    async def create_category(
        self, session: AuthSession | None, data: CategoryCreate
    ) -> Category:
        require(session, Action.CREATE_CATEGORY)
        slug = _derive_slug(data.name, data.slug)
        await self._ensure_unique(data.name, slug)

        category = Category(
            name=data.name,
            slug=slug,
            description=data.description,
            color=data.color or DEFAULT_CATEGORY_COLOR,
        )
        created = await self._repository.create(category)
        logger.info("Category created: id=%s slug=%s", created.id, created.slug)
        return created

    async def update_category(
        self, session: AuthSession | None, category_id: str, data: CategoryUpdate
    ) -> Category:
        require(session, Action.UPDATE_CATEGORY)
        category = await self.get_category(category_id)

        name = data.name or category.name
        slug = data.slug or category.slug
        if name != category.name or slug != category.slug:
            await self._ensure_unique(name, slug, exclude_id=category.id)

        if "description" in data.model_fields_set:
            category.update(name=data.name, slug=data.slug, description=data.description, color=data.color)
        else:
            category.update(name=data.name, slug=data.slug, color=data.color)
        return await self._repository.update(category)

    async def delete_category(self, session: AuthSession | None, category_id: str) -> bool:
        require(session, Action.DELETE_CATEGORY)
        category = await self.get_category(category_id)

        referencing = await self._repository.count_posts(category_id)
        if referencing:
            raise DuplicateEntityError(
                "Category",
                "posts",
                str(referencing),
                message=(
                    f"Category '{category.slug}' is still used by {referencing} post(s); "
                    "reassign them before deleting"
                ),
            )

        deleted = await self._repository.delete(category_id)
        logger.info("Category deleted: id=%s", category_id)
        return deleted

    async def _ensure_unique(self, name: str, slug: str, exclude_id: str | None = None) -> None:
        conflict = await self._repository.find_conflict(name, slug, exclude_id=exclude_id)
        if conflict is None:
            return
        if conflict.name == name:
            raise DuplicateEntityError("Category", "name", name)
        raise DuplicateEntityError("Category", "slug", slug)


class TagService:
    """Tag listing, creation and deletion."""

    def __init__(self, repository: TagRepository):
        self._repository = repository

    async def list_tags(self) -> list[Tag]:
        return await self._repository.list_with_counts()

    async def create_tag(self, session: AuthSession | None, data: TagCreate) -> Tag:
        require(session, Action.CREATE_TAG)
        slug = _derive_slug(data.name, data.slug)

        conflict = await self._repository.find_conflict(data.name, slug)
        if conflict is not None:
            field = "name" if conflict.name == data.name else "slug"
            raise DuplicateEntityError("Tag", field, data.name if field == "name" else slug)

        tag = Tag(name=data.name, slug=slug, color=data.color or DEFAULT_TAG_COLOR)
        created = await self._repository.create(tag)
        logger.info("Tag created: id=%s slug=%s", created.id, created.slug)
        return created

    async def delete_tag(self, session: AuthSession | None, tag_id: str) -> bool:
        require(session, Action.DELETE_TAG)
        if await self._repository.get_by_id(tag_id) is None:
            raise EntityNotFoundError("Tag", tag_id)
        deleted = await self._repository.delete(tag_id)
        logger.info("Tag deleted: id=%s", tag_id)
        return deleted
