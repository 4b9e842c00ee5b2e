"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import PostRepository
from app.application.services import (
    AuthService,
    CategoryService,
    ImageService,
    PostQueryService,
    PostService,
    TagService,
)
from app.config import get_settings
from app.domain.entities import AuthSession, SiteProfile
from app.infrastructure.database.repositories import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyPostRepository,
    SQLAlchemyTagRepository,
    SQLAlchemyUserRepository,
)
from app.infrastructure.database.session import get_db_session, read_session
from app.infrastructure.image_hosting import CloudinaryClient
from app.infrastructure.security import Argon2PasswordHasher, JWTTokenCodec

_bearer = HTTPBearer(auto_error=False)


@asynccontextmanager
async def open_post_repository() -> AsyncIterator[PostRepository]:
    """A post repository on its own short-lived session (for concurrent reads)."""
    async with read_session() as session:
        yield SQLAlchemyPostRepository(session)


def get_site_profile() -> SiteProfile:
    settings = get_settings()
    return SiteProfile(
        name=settings.site_name,
        url=settings.site_url,
        description=settings.site_description,
        author=settings.site_author,
        default_image=settings.site_default_image,
        logo=settings.site_logo,
        twitter_handle=settings.site_twitter_handle,
        keywords=tuple(settings.site_keywords),
    )


def build_auth_service(session: AsyncSession) -> AuthService:
    settings = get_settings()
    return AuthService(
        repository=SQLAlchemyUserRepository(session),
        hasher=Argon2PasswordHasher(),
        tokens=JWTTokenCodec(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        ),
    )


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService with the user repository, hasher and JWT codec."""
    yield build_auth_service(session)


async def get_optional_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthSession | None:
    """Resolve the bearer token, if any. Anonymous callers get None."""
    if credentials is None:
        return None
    return await auth_service.resolve_session(credentials.credentials)


async def get_post_query_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PostQueryService, None]:
    """Provides the read-side PostQueryService.

    Post counts and pages use their own sessions; facets share the request session.
    """
    settings = get_settings()
    yield PostQueryService(
        open_post_repository,
        category_repository=SQLAlchemyCategoryRepository(session),
        user_repository=SQLAlchemyUserRepository(session),
        public_page_size=settings.public_page_size,
        management_page_size=settings.management_page_size,
        search_page_size=settings.search_page_size,
        max_page_size=settings.max_page_size,
        related_limit=settings.related_posts_limit,
    )


async def get_post_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PostService, None]:
    """Provides a PostService with its repositories wired up."""
    yield PostService(
        SQLAlchemyPostRepository(session),
        SQLAlchemyCategoryRepository(session),
        SQLAlchemyTagRepository(session),
    )


async def get_category_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CategoryService, None]:
    yield CategoryService(SQLAlchemyCategoryRepository(session))


async def get_tag_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TagService, None]:
    yield TagService(SQLAlchemyTagRepository(session))


def get_image_service() -> ImageService:
    """Provides an ImageService; the Cloudinary client is only built when configured."""
    settings = get_settings()
    host = None
    if settings.cloudinary_cloud_name.strip() and settings.cloudinary_api_key.strip():
        host = CloudinaryClient(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            base_url=settings.cloudinary_base_url,
        )
    return ImageService(
        host,
        folder=settings.cloudinary_folder,
        max_size_bytes=settings.max_upload_size_mb * 1024 * 1024,
        allowed_types=settings.allowed_image_types,
    )
