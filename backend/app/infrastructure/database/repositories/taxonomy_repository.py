"""SQLAlchemy implementations of the category and tag repositories."""

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import CategoryRepository, TagRepository
from app.domain.entities import Category, Tag
from app.infrastructure.database.models import CategoryModel, PostModel, TagModel, post_tags
from app.infrastructure.database.repositories.errors import store_operation
from app.infrastructure.database.repositories.mapping import category_to_entity, tag_to_entity


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Implements the CategoryRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @store_operation("category lookup", "Category")
    async def get_by_id(self, category_id: str) -> Category | None:
        model = await self._session.get(CategoryModel, category_id)
        return category_to_entity(model) if model else None

    @store_operation("category lookup", "Category")
    async def find_conflict(
        self, name: str, slug: str, exclude_id: str | None = None
    ) -> Category | None:
        stmt = select(CategoryModel).where(
            or_(CategoryModel.name == name, CategoryModel.slug == slug)
        )
        if exclude_id is not None:
            stmt = stmt.where(CategoryModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        model = result.scalar_one_or_none()
        return category_to_entity(model) if model else None

    @store_operation("category listing", "Category")
    async def list_with_counts(self) -> list[Category]:
        stmt = (
            select(CategoryModel, func.count(PostModel.id))
            .outerjoin(PostModel, PostModel.category_id == CategoryModel.id)
            .group_by(CategoryModel.id)
            .order_by(CategoryModel.name.asc())
        )
        result = await self._session.execute(stmt)
        return [category_to_entity(model, count) for model, count in result.all()]

    @store_operation("category post count", "Category")
    async def count_posts(self, category_id: str) -> int:
        stmt = select(func.count()).select_from(PostModel).where(PostModel.category_id == category_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    @store_operation("category create", "Category")
    async def create(self, category: Category) -> Category:
        model = CategoryModel(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description,
            color=category.color,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return category_to_entity(model)

    @store_operation("category update", "Category")
    async def update(self, category: Category) -> Category:
        model = await self._session.get(CategoryModel, category.id)
        if model is None:
            raise ValueError(f"Category {category.id} not found in database")
        model.name = category.name
        model.slug = category.slug
        model.description = category.description
        model.color = category.color
        model.updated_at = category.updated_at
        await self._session.flush()
        return category_to_entity(model, category.post_count)

    @store_operation("category delete", "Category")
    async def delete(self, category_id: str) -> bool:
        model = await self._session.get(CategoryModel, category_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyTagRepository(TagRepository):
    """Implements the TagRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @store_operation("tag lookup", "Tag")
    async def get_by_id(self, tag_id: str) -> Tag | None:
        model = await self._session.get(TagModel, tag_id)
        return tag_to_entity(model) if model else None

    @store_operation("tag lookup", "Tag")
    async def get_many(self, tag_ids: list[str]) -> list[Tag]:
        if not tag_ids:
            return []
        result = await self._session.execute(select(TagModel).where(TagModel.id.in_(tag_ids)))
        return [tag_to_entity(model) for model in result.scalars().all()]

    @store_operation("tag lookup", "Tag")
    async def find_conflict(self, name: str, slug: str) -> Tag | None:
        stmt = select(TagModel).where(or_(TagModel.name == name, TagModel.slug == slug)).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return tag_to_entity(model) if model else None

    @store_operation("tag listing", "Tag")
    async def list_with_counts(self) -> list[Tag]:
        stmt = (
            select(TagModel, func.count(post_tags.c.post_id))
            .outerjoin(post_tags, post_tags.c.tag_id == TagModel.id)
            .group_by(TagModel.id)
            .order_by(TagModel.name.asc())
        )
        result = await self._session.execute(stmt)
        return [tag_to_entity(model, count) for model, count in result.all()]

    @store_operation("tag create", "Tag")
    async def create(self, tag: Tag) -> Tag:
        model = TagModel(
            id=tag.id,
            name=tag.name,
            slug=tag.slug,
            color=tag.color,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return tag_to_entity(model)

    @store_operation("tag delete", "Tag")
    async def delete(self, tag_id: str) -> bool:
        model = await self._session.get(TagModel, tag_id)
        if model is None:
            return False
        # SQLite does not enforce ON DELETE CASCADE unless foreign keys are enabled.
        await self._session.execute(delete(post_tags).where(post_tags.c.tag_id == tag_id))
        await self._session.delete(model)
        await self._session.flush()
        return True
