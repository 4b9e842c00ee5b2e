"""Translate driver and SQLAlchemy failures into domain exceptions."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.domain.exceptions import DuplicateEntityError, StoreError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def store_operation(
    operation: str, entity_type: str = "Record"
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorate a repository coroutine so it only ever raises domain errors.

    ``IntegrityError`` becomes ``DuplicateEntityError``; any other SQLAlchemy,
    socket or timeout failure becomes ``StoreError``.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except IntegrityError as exc:
                logger.info("Constraint violation during %s: %s", operation, exc.orig)
                raise DuplicateEntityError(
                    entity_type,
                    "constraint",
                    str(exc.orig),
                    message=f"{entity_type} conflicts with an existing record",
                ) from exc
            except (SQLAlchemyError, OSError, TimeoutError) as exc:
                logger.error("Store failure during %s: %s", operation, exc)
                raise StoreError(operation, exc) from exc

        return wrapper

    return decorator
