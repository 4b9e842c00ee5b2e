from .post_repository import PostRepository, PostRepositoryFactory
from .taxonomy_repository import CategoryRepository, TagRepository
from .user_repository import UserRepository
from .image_host import ImageHost, UploadedImage
from .security import PasswordHasher, TokenCodec

__all__ = [
    "PostRepository",
    "PostRepositoryFactory",
    "CategoryRepository",
    "TagRepository",
    "UserRepository",
    "ImageHost",
    "UploadedImage",
    "PasswordHasher",
    "TokenCodec",
]
