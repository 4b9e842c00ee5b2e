from .user import UserModel
from .taxonomy import CategoryModel, TagModel, post_tags
from .post import PostModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "TagModel",
    "post_tags",
    "PostModel",
]
