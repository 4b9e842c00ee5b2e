from .auth_service import AuthService
from .image_service import ImageService
from .post_query_service import PostQueryService
from .post_service import PostService
from .taxonomy_service import CategoryService, TagService

__all__ = [
    "AuthService",
    "ImageService",
    "PostQueryService",
    "PostService",
    "CategoryService",
    "TagService",
]
