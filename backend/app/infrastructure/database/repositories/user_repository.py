"""SQLAlchemy implementation of the UserRepository port."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import UserRepository
from app.domain.entities import AuthorFacet, PostStatus, User
from app.infrastructure.database.models import PostModel, UserModel
from app.infrastructure.database.repositories.errors import store_operation
from app.infrastructure.database.repositories.mapping import user_to_entity


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @store_operation("user lookup", "User")
    async def get_by_id(self, user_id: str) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return user_to_entity(model) if model else None

    @store_operation("user lookup", "User")
    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(UserModel).where(UserModel.email == email))
        model = result.scalar_one_or_none()
        return user_to_entity(model) if model else None

    @store_operation("user create", "User")
    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            role=user.role.value,
            email_verified=user.email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return user_to_entity(model)

    @store_operation("author listing", "User")
    async def list_public_authors(self) -> list[AuthorFacet]:
        stmt = (
            select(UserModel.id, UserModel.name)
            .where(
                UserModel.id.in_(
                    select(PostModel.author_id).where(
                        PostModel.published.is_(True),
                        PostModel.status == PostStatus.PUBLISHED.value,
                    )
                )
            )
            .order_by(UserModel.name.asc())
        )
        result = await self._session.execute(stmt)
        return [AuthorFacet(id=row.id, name=row.name) for row in result.all()]
