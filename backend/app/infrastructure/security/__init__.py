from .passwords import Argon2PasswordHasher
from .tokens import JWTTokenCodec

__all__ = ["Argon2PasswordHasher", "JWTTokenCodec"]
