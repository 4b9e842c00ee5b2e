from .post_repository import SQLAlchemyPostRepository
from .taxonomy_repository import SQLAlchemyCategoryRepository, SQLAlchemyTagRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyPostRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyTagRepository",
    "SQLAlchemyUserRepository",
]
