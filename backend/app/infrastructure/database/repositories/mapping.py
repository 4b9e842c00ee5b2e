"""ORM model → domain entity mapping shared by the repositories."""

from datetime import datetime, timezone

from app.domain.entities import Author, Category, Post, PostStatus, Tag, User, UserRole
from app.infrastructure.database.models import CategoryModel, PostModel, TagModel, UserModel


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def category_to_entity(model: CategoryModel, post_count: int = 0) -> Category:
    return Category(
        id=model.id,
        name=model.name,
        slug=model.slug,
        description=model.description,
        color=model.color,
        post_count=post_count,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def tag_to_entity(model: TagModel, post_count: int = 0) -> Tag:
    return Tag(
        id=model.id,
        name=model.name,
        slug=model.slug,
        color=model.color,
        post_count=post_count,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def user_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        name=model.name,
        password_hash=model.password_hash,
        role=UserRole(model.role),
        email_verified=as_utc(model.email_verified),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def post_to_entity(model: PostModel) -> Post:
    return Post(
        id=model.id,
        title=model.title,
        slug=model.slug,
        excerpt=model.excerpt,
        content=model.content,
        featured_image=model.featured_image,
        status=PostStatus(model.status),
        published=model.published,
        published_at=as_utc(model.published_at),
        author_id=model.author_id,
        category_id=model.category_id,
        author=(
            Author(id=model.author.id, name=model.author.name, email=model.author.email)
            if model.author
            else None
        ),
        category=category_to_entity(model.category) if model.category else None,
        tags=sorted((tag_to_entity(tag) for tag in model.tags), key=lambda tag: tag.name),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )
