"""SQLAlchemy implementation of the PostRepository port.

Predicates from the filter builder are translated into SQL here; relation
fields (``category.slug``, ``author.name``) become EXISTS sub-queries.
"""

from sqlalchemy import ColumnElement, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import PostRepository
from app.domain.entities import (
    FilterOperator,
    Post,
    PostField,
    PostFilter,
    PostOrdering,
    PostPredicate,
)
from app.infrastructure.database.models import CategoryModel, PostModel, TagModel, UserModel
from app.infrastructure.database.repositories.errors import store_operation
from app.infrastructure.database.repositories.mapping import post_to_entity

_COLUMNS = {
    PostField.TITLE: PostModel.title,
    PostField.SLUG: PostModel.slug,
    PostField.EXCERPT: PostModel.excerpt,
    PostField.CONTENT: PostModel.content,
    PostField.STATUS: PostModel.status,
    PostField.PUBLISHED: PostModel.published,
    PostField.PUBLISHED_AT: PostModel.published_at,
    PostField.CATEGORY_ID: PostModel.category_id,
    PostField.AUTHOR_ID: PostModel.author_id,
}


def _contains_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _compare(column, operator: FilterOperator, value) -> ColumnElement[bool]:
    if operator == FilterOperator.EQUALS:
        return column == value
    if operator == FilterOperator.NOT_EQUALS:
        return column != value
    if operator == FilterOperator.CONTAINS:
        return column.ilike(_contains_pattern(str(value)), escape="\\")
    if operator == FilterOperator.GTE:
        return column >= value
    if operator == FilterOperator.LTE:
        return column <= value
    raise ValueError(f"Unsupported operator: {operator}")


def _to_clause(leaf: PostFilter) -> ColumnElement[bool]:
    value = getattr(leaf.value, "value", leaf.value)  # enums are stored by value
    if leaf.field_name == PostField.CATEGORY_SLUG:
        return PostModel.category.has(_compare(CategoryModel.slug, leaf.operator, value))
    if leaf.field_name == PostField.AUTHOR_NAME:
        return PostModel.author.has(_compare(UserModel.name, leaf.operator, value))
    return _compare(_COLUMNS[leaf.field_name], leaf.operator, value)


def predicate_to_clause(predicate: PostPredicate) -> ColumnElement[bool] | None:
    clauses = [_to_clause(leaf) for leaf in predicate.filters]
    if predicate.any_of:
        clauses.append(or_(*(_to_clause(leaf) for leaf in predicate.any_of)))
    return and_(*clauses) if clauses else None


def _order_by(ordering: PostOrdering):
    if ordering == PostOrdering.PUBLISHED_DESC:
        return (
            PostModel.published_at.desc().nulls_last(),
            PostModel.created_at.desc(),
        )
    return (PostModel.created_at.desc(),)


class SQLAlchemyPostRepository(PostRepository):
    """Implements the PostRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @store_operation("post lookup", "Post")
    async def get_by_id(self, post_id: str) -> Post | None:
        model = await self._get_model(post_id)
        return post_to_entity(model) if model else None

    @store_operation("post lookup", "Post")
    async def get_by_slug(self, slug: str) -> Post | None:
        result = await self._session.execute(select(PostModel).where(PostModel.slug == slug))
        model = result.scalar_one_or_none()
        return post_to_entity(model) if model else None

    @store_operation("post slug check", "Post")
    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(PostModel.id).where(PostModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(PostModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.first() is not None

    @store_operation("post count", "Post")
    async def count(self, predicate: PostPredicate) -> int:
        stmt = select(func.count()).select_from(PostModel)
        clause = predicate_to_clause(predicate)
        if clause is not None:
            stmt = stmt.where(clause)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    @store_operation("post page", "Post")
    async def find_page(
        self,
        predicate: PostPredicate,
        ordering: PostOrdering,
        skip: int = 0,
        take: int = 10,
    ) -> list[Post]:
        stmt = select(PostModel)
        clause = predicate_to_clause(predicate)
        if clause is not None:
            stmt = stmt.where(clause)
        stmt = stmt.order_by(*_order_by(ordering)).offset(skip).limit(take)
        result = await self._session.execute(stmt)
        return [post_to_entity(model) for model in result.scalars().all()]

    @store_operation("post create", "Post")
    async def create(self, post: Post) -> Post:
        model = PostModel(
            id=post.id,
            title=post.title,
            slug=post.slug,
            excerpt=post.excerpt,
            content=post.content,
            featured_image=post.featured_image,
            status=post.status.value,
            published=post.published,
            published_at=post.published_at,
            author_id=post.author_id,
            category_id=post.category_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
        model.tags = await self._load_tags(post.tag_ids)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model, attribute_names=["author", "category", "tags"])
        return post_to_entity(model)

    @store_operation("post update", "Post")
    async def update(self, post: Post) -> Post:
        model = await self._get_model(post.id)
        if model is None:
            raise ValueError(f"Post {post.id} not found in database")

        model.title = post.title
        model.slug = post.slug
        model.excerpt = post.excerpt
        model.content = post.content
        model.featured_image = post.featured_image
        model.status = post.status.value
        model.published = post.published
        model.published_at = post.published_at
        model.category_id = post.category_id
        model.updated_at = post.updated_at
        model.tags = await self._load_tags(post.tag_ids)
        await self._session.flush()
        await self._session.refresh(model, attribute_names=["author", "category", "tags"])
        return post_to_entity(model)

    @store_operation("post delete", "Post")
    async def delete(self, post_id: str) -> bool:
        model = await self._get_model(post_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_model(self, post_id: str) -> PostModel | None:
        result = await self._session.execute(select(PostModel).where(PostModel.id == post_id))
        return result.scalar_one_or_none()

    async def _load_tags(self, tag_ids: list[str]) -> list[TagModel]:
        if not tag_ids:
            return []
        result = await self._session.execute(select(TagModel).where(TagModel.id.in_(tag_ids)))
        return list(result.scalars().all())
